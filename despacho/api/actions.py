"""
ENDPOINTS DE ACTUACIONES.
"""
from __future__ import annotations

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session, joinedload

from despacho.api.errors import commit_or_raise, not_found, to_http_exception
from despacho.core.database import get_db
from despacho.core.exceptions import ValidationException
from despacho.core.logger import logger
from despacho.models import Action, Case
from despacho.models.action_summary import ActionSummary, CreateActionRequest, UpdateActionRequest


router = APIRouter(
    prefix="/actuaciones",
    tags=["actuaciones"],
)


def _build_action_summary(action: Action) -> ActionSummary:
    return ActionSummary(
        id=action.id,
        case_id=action.case_id,
        case_number=action.case.case_number if action.case is not None else None,
        action_date=action.action_date,
        action_type=action.action_type,
        description=action.description,
        outcome=action.outcome,
        responsible=action.responsible,
        notes=action.notes,
        created_at=action.created_at,
        modified_at=action.modified_at,
    )


def _actions_query(db: Session):
    return db.query(Action).options(joinedload(Action.case))


def _get_action_or_404(action_id: int, db: Session) -> Action:
    action = _actions_query(db).filter(Action.id == action_id).first()
    if action is None:
        raise not_found("Actuación", action_id)
    return action


def _ensure_case_exists(case_id: int, db: Session) -> None:
    if db.query(Case).filter(Case.id == case_id).first() is None:
        raise not_found("Expediente", case_id)


@router.get("", response_model=List[ActionSummary], summary="Listar actuaciones")
def list_actions(db: Session = Depends(get_db)) -> List[ActionSummary]:
    actions = _actions_query(db).order_by(Action.action_date.desc(), Action.id).all()
    return [_build_action_summary(a) for a in actions]


@router.get("/expediente/{case_id}", response_model=List[ActionSummary])
def list_actions_by_case(case_id: int, db: Session = Depends(get_db)) -> List[ActionSummary]:
    actions = (
        _actions_query(db)
        .filter(Action.case_id == case_id)
        .order_by(Action.action_date.desc(), Action.id)
        .all()
    )
    return [_build_action_summary(a) for a in actions]


@router.get("/rango-fechas", response_model=List[ActionSummary])
def list_actions_by_date_range(
    desde: datetime = Query(..., description="Inicio (incluido)"),
    hasta: datetime = Query(..., description="Fin (incluido)"),
    db: Session = Depends(get_db),
) -> List[ActionSummary]:
    if hasta < desde:
        raise to_http_exception(ValidationException("'hasta' no puede ser anterior a 'desde'", field="hasta"))

    actions = (
        _actions_query(db)
        .filter(Action.action_date >= desde, Action.action_date <= hasta)
        .order_by(Action.action_date.desc(), Action.id)
        .all()
    )
    return [_build_action_summary(a) for a in actions]


@router.get("/{action_id}", response_model=ActionSummary)
def get_action(action_id: int, db: Session = Depends(get_db)) -> ActionSummary:
    return _build_action_summary(_get_action_or_404(action_id, db))


@router.post("", response_model=ActionSummary, status_code=status.HTTP_201_CREATED)
def create_action(payload: CreateActionRequest, db: Session = Depends(get_db)) -> ActionSummary:
    _ensure_case_exists(payload.case_id, db)

    now = datetime.now()
    action = Action(
        **payload.model_dump(exclude={"action_date"}),
        action_date=payload.action_date or now,
        created_at=now,
    )
    db.add(action)
    commit_or_raise(db, "create_action", "Action")

    logger.info("Action created", entity="action", entity_id=action.id, action="action_created")
    return _build_action_summary(_get_action_or_404(action.id, db))


@router.put("/{action_id}", response_model=ActionSummary)
def update_action(action_id: int, payload: UpdateActionRequest, db: Session = Depends(get_db)) -> ActionSummary:
    action = _get_action_or_404(action_id, db)
    if payload.case_id != action.case_id:
        _ensure_case_exists(payload.case_id, db)

    for field, value in payload.model_dump(exclude={"action_date"}).items():
        setattr(action, field, value)
    if payload.action_date is not None:
        action.action_date = payload.action_date
    action.modified_at = datetime.now()
    commit_or_raise(db, "update_action", "Action")
    db.refresh(action)

    logger.info("Action updated", entity="action", entity_id=action_id, action="action_updated")
    return _build_action_summary(action)


@router.delete("/{action_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_action(action_id: int, db: Session = Depends(get_db)) -> None:
    action = _get_action_or_404(action_id, db)
    db.delete(action)
    commit_or_raise(db, "delete_action", "Action")
    logger.info("Action deleted", entity="action", entity_id=action_id, action="action_deleted")

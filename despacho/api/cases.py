"""
ENDPOINTS DE EXPEDIENTES.

Cualquier transición de estado es válida. Archivar o cerrar fija la
fecha de cierre.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload, selectinload

from despacho.api.errors import commit_or_raise, not_found, to_http_exception
from despacho.core.database import get_db
from despacho.core.exceptions import DuplicateEntityException
from despacho.core.logger import logger
from despacho.models import Case, CaseStatus, Client
from despacho.models.case_summary import (
    CaseOverview,
    CaseSummary,
    ChangeCaseStatusRequest,
    CreateCaseRequest,
    UpdateCaseRequest,
)
from despacho.reports.formatting import status_label


router = APIRouter(
    prefix="/expedientes",
    tags=["expedientes"],
)


def _build_case_summary(case: Case) -> CaseSummary:
    """
    Construye un CaseSummary con los totales de actuaciones y citas.
    """
    return CaseSummary(
        id=case.id,
        case_number=case.case_number,
        subject=case.subject,
        description=case.description,
        case_type=case.case_type,
        status=case.status,
        status_label=status_label(case.status),
        client_id=case.client_id,
        client_name=case.client.full_name,
        court=case.court,
        procedure_number=case.procedure_number,
        opened_at=case.opened_at,
        closed_at=case.closed_at,
        modified_at=case.modified_at,
        notes=case.notes,
        total_actions=len(case.actions),
        total_appointments=len(case.appointments),
    )


def _cases_query(db: Session):
    return db.query(Case).options(
        joinedload(Case.client),
        selectinload(Case.actions),
        selectinload(Case.appointments),
    )


def _get_case_or_404(case_id: int, db: Session) -> Case:
    case = _cases_query(db).filter(Case.id == case_id).first()
    if case is None:
        raise not_found("Expediente", case_id)
    return case


def _ensure_client_exists(client_id: int, db: Session) -> None:
    if db.query(Client).filter(Client.id == client_id).first() is None:
        raise not_found("Cliente", client_id)


def _ensure_unique_case_number(case_number: str, db: Session, exclude_id: Optional[int] = None) -> None:
    query = db.query(Case).filter(Case.case_number == case_number)
    if exclude_id is not None:
        query = query.filter(Case.id != exclude_id)
    if query.first() is not None:
        raise to_http_exception(DuplicateEntityException("expediente", "número", case_number))


@router.get("", response_model=List[CaseSummary], summary="Listar expedientes")
def list_cases(db: Session = Depends(get_db)) -> List[CaseSummary]:
    cases = _cases_query(db).order_by(Case.opened_at.desc(), Case.id).all()
    return [_build_case_summary(c) for c in cases]


@router.get("/resumen", response_model=List[CaseOverview], summary="Listado ligero")
def list_case_overviews(db: Session = Depends(get_db)) -> List[CaseOverview]:
    cases = (
        db.query(Case)
        .options(joinedload(Case.client))
        .order_by(Case.opened_at.desc(), Case.id)
        .all()
    )
    return [
        CaseOverview(
            id=c.id,
            case_number=c.case_number,
            subject=c.subject,
            case_type=c.case_type,
            status=c.status,
            status_label=status_label(c.status),
            client_name=c.client.full_name,
            opened_at=c.opened_at,
        )
        for c in cases
    ]


@router.get("/buscar", response_model=List[CaseSummary], summary="Buscar expedientes")
def search_cases(
    termino: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
) -> List[CaseSummary]:
    """Busca en número, asunto, tipo y número de procedimiento."""
    pattern = f"%{termino.lower()}%"
    cases = (
        _cases_query(db)
        .filter(
            or_(
                func.lower(Case.case_number).like(pattern),
                func.lower(Case.subject).like(pattern),
                func.lower(Case.case_type).like(pattern),
                func.lower(Case.procedure_number).like(pattern),
            )
        )
        .order_by(Case.opened_at.desc(), Case.id)
        .all()
    )
    return [_build_case_summary(c) for c in cases]


@router.get("/cliente/{client_id}", response_model=List[CaseSummary])
def list_cases_by_client(client_id: int, db: Session = Depends(get_db)) -> List[CaseSummary]:
    cases = (
        _cases_query(db)
        .filter(Case.client_id == client_id)
        .order_by(Case.opened_at.desc(), Case.id)
        .all()
    )
    return [_build_case_summary(c) for c in cases]


@router.get("/estado/{case_status}", response_model=List[CaseSummary])
def list_cases_by_status(case_status: CaseStatus, db: Session = Depends(get_db)) -> List[CaseSummary]:
    cases = (
        _cases_query(db)
        .filter(Case.status == case_status)
        .order_by(Case.opened_at.desc(), Case.id)
        .all()
    )
    return [_build_case_summary(c) for c in cases]


@router.get("/{case_id}", response_model=CaseSummary)
def get_case(case_id: int, db: Session = Depends(get_db)) -> CaseSummary:
    return _build_case_summary(_get_case_or_404(case_id, db))


@router.post("", response_model=CaseSummary, status_code=status.HTTP_201_CREATED)
def create_case(payload: CreateCaseRequest, db: Session = Depends(get_db)) -> CaseSummary:
    """Todo expediente nuevo empieza en estado Abierto."""
    _ensure_client_exists(payload.client_id, db)
    _ensure_unique_case_number(payload.case_number, db)

    case = Case(
        **payload.model_dump(exclude={"opened_at"}),
        status=CaseStatus.OPEN,
        opened_at=payload.opened_at or datetime.now(),
    )
    db.add(case)
    commit_or_raise(db, "create_case", "Case")

    logger.info("Case created", entity="case", entity_id=case.id, action="case_created")
    return _build_case_summary(_get_case_or_404(case.id, db))


@router.put("/{case_id}", response_model=CaseSummary)
def update_case(case_id: int, payload: UpdateCaseRequest, db: Session = Depends(get_db)) -> CaseSummary:
    case = _get_case_or_404(case_id, db)
    if payload.client_id != case.client_id:
        _ensure_client_exists(payload.client_id, db)
    _ensure_unique_case_number(payload.case_number, db, exclude_id=case_id)

    for field, value in payload.model_dump().items():
        setattr(case, field, value)
    case.modified_at = datetime.now()
    commit_or_raise(db, "update_case", "Case")
    db.refresh(case)

    logger.info("Case updated", entity="case", entity_id=case_id, action="case_updated")
    return _build_case_summary(case)


@router.patch("/{case_id}/estado", response_model=CaseSummary, summary="Cambiar estado")
def change_case_status(
    case_id: int,
    payload: ChangeCaseStatusRequest,
    db: Session = Depends(get_db),
) -> CaseSummary:
    case = _get_case_or_404(case_id, db)
    previous = case.status

    case.change_status(payload.status, payload.notes)
    commit_or_raise(db, "change_case_status", "Case")

    logger.info(
        "Case status changed",
        entity="case",
        entity_id=case_id,
        action="case_status_changed",
        previous=previous.name,
        current=payload.status.name,
    )
    return _build_case_summary(case)


@router.delete("/{case_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_case(case_id: int, db: Session = Depends(get_db)) -> None:
    """Borra el expediente con sus actuaciones y citas."""
    case = _get_case_or_404(case_id, db)
    db.delete(case)
    commit_or_raise(db, "delete_case", "Case")
    logger.info("Case deleted", entity="case", entity_id=case_id, action="case_deleted")

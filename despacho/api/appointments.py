"""
ENDPOINTS DE CITAS.
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
from despacho.models import Appointment, Case
from despacho.models.appointment_summary import (
    AppointmentSummary,
    CreateAppointmentRequest,
    MarkCompletedRequest,
    UpdateAppointmentRequest,
)


router = APIRouter(
    prefix="/citas",
    tags=["citas"],
)


def _build_appointment_summary(appointment: Appointment) -> AppointmentSummary:
    return AppointmentSummary(
        id=appointment.id,
        case_id=appointment.case_id,
        case_number=appointment.case.case_number if appointment.case is not None else None,
        title=appointment.title,
        description=appointment.description,
        starts_at=appointment.starts_at,
        ends_at=appointment.ends_at,
        location=appointment.location,
        appointment_type=appointment.appointment_type,
        participants=appointment.participants,
        completed=appointment.completed,
        notes=appointment.notes,
        created_at=appointment.created_at,
        modified_at=appointment.modified_at,
    )


def _appointments_query(db: Session):
    return db.query(Appointment).options(joinedload(Appointment.case))


def _get_appointment_or_404(appointment_id: int, db: Session) -> Appointment:
    appointment = _appointments_query(db).filter(Appointment.id == appointment_id).first()
    if appointment is None:
        raise not_found("Cita", appointment_id)
    return appointment


def _ensure_case_exists(case_id: int, db: Session) -> None:
    if db.query(Case).filter(Case.id == case_id).first() is None:
        raise not_found("Expediente", case_id)


@router.get("", response_model=List[AppointmentSummary], summary="Listar citas")
def list_appointments(db: Session = Depends(get_db)) -> List[AppointmentSummary]:
    appointments = _appointments_query(db).order_by(Appointment.starts_at, Appointment.id).all()
    return [_build_appointment_summary(a) for a in appointments]


@router.get("/pendientes", response_model=List[AppointmentSummary], summary="Citas pendientes")
def list_pending_appointments(db: Session = Depends(get_db)) -> List[AppointmentSummary]:
    """Citas no completadas que empiezan a partir de ahora."""
    appointments = (
        _appointments_query(db)
        .filter(Appointment.completed.is_(False), Appointment.starts_at >= datetime.now())
        .order_by(Appointment.starts_at, Appointment.id)
        .all()
    )
    return [_build_appointment_summary(a) for a in appointments]


@router.get("/expediente/{case_id}", response_model=List[AppointmentSummary])
def list_appointments_by_case(case_id: int, db: Session = Depends(get_db)) -> List[AppointmentSummary]:
    appointments = (
        _appointments_query(db)
        .filter(Appointment.case_id == case_id)
        .order_by(Appointment.starts_at, Appointment.id)
        .all()
    )
    return [_build_appointment_summary(a) for a in appointments]


@router.get("/rango-fechas", response_model=List[AppointmentSummary])
def list_appointments_by_date_range(
    desde: datetime = Query(...),
    hasta: datetime = Query(...),
    db: Session = Depends(get_db),
) -> List[AppointmentSummary]:
    if hasta < desde:
        raise to_http_exception(ValidationException("'hasta' no puede ser anterior a 'desde'", field="hasta"))

    appointments = (
        _appointments_query(db)
        .filter(Appointment.starts_at >= desde, Appointment.starts_at <= hasta)
        .order_by(Appointment.starts_at, Appointment.id)
        .all()
    )
    return [_build_appointment_summary(a) for a in appointments]


@router.get("/{appointment_id}", response_model=AppointmentSummary)
def get_appointment(appointment_id: int, db: Session = Depends(get_db)) -> AppointmentSummary:
    return _build_appointment_summary(_get_appointment_or_404(appointment_id, db))


@router.post("", response_model=AppointmentSummary, status_code=status.HTTP_201_CREATED)
def create_appointment(payload: CreateAppointmentRequest, db: Session = Depends(get_db)) -> AppointmentSummary:
    _ensure_case_exists(payload.case_id, db)

    appointment = Appointment(**payload.model_dump(), completed=False, created_at=datetime.now())
    db.add(appointment)
    commit_or_raise(db, "create_appointment", "Appointment")

    logger.info("Appointment created", entity="appointment", entity_id=appointment.id, action="appointment_created")
    return _build_appointment_summary(_get_appointment_or_404(appointment.id, db))


@router.put("/{appointment_id}", response_model=AppointmentSummary)
def update_appointment(
    appointment_id: int,
    payload: UpdateAppointmentRequest,
    db: Session = Depends(get_db),
) -> AppointmentSummary:
    appointment = _get_appointment_or_404(appointment_id, db)
    if payload.case_id != appointment.case_id:
        _ensure_case_exists(payload.case_id, db)

    for field, value in payload.model_dump().items():
        setattr(appointment, field, value)
    appointment.modified_at = datetime.now()
    commit_or_raise(db, "update_appointment", "Appointment")
    db.refresh(appointment)

    logger.info("Appointment updated", entity="appointment", entity_id=appointment_id, action="appointment_updated")
    return _build_appointment_summary(appointment)


@router.patch("/{appointment_id}/completada", response_model=AppointmentSummary)
def mark_appointment_completed(
    appointment_id: int,
    payload: MarkCompletedRequest,
    db: Session = Depends(get_db),
) -> AppointmentSummary:
    appointment = _get_appointment_or_404(appointment_id, db)
    appointment.completed = payload.completed
    appointment.modified_at = datetime.now()
    commit_or_raise(db, "complete_appointment", "Appointment")

    logger.info(
        "Appointment completion changed",
        entity="appointment",
        entity_id=appointment_id,
        action="appointment_completed",
        completed=payload.completed,
    )
    return _build_appointment_summary(appointment)


@router.delete("/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_appointment(appointment_id: int, db: Session = Depends(get_db)) -> None:
    appointment = _get_appointment_or_404(appointment_id, db)
    db.delete(appointment)
    commit_or_raise(db, "delete_appointment", "Appointment")
    logger.info("Appointment deleted", entity="appointment", entity_id=appointment_id, action="appointment_deleted")

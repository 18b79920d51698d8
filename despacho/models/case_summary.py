"""
CASE SUMMARY - Modelos de vista/entrada para la gestión de expedientes.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from despacho.models.case import CaseStatus


class CaseBase(BaseModel):
    case_number: str = Field(..., min_length=1, max_length=50, description="Número de expediente (único)")
    subject: str = Field(..., min_length=1, max_length=200, description="Asunto")
    description: Optional[str] = Field(None, max_length=1000)
    case_type: str = Field(..., min_length=1, max_length=100, description="Tipo de expediente")
    client_id: int = Field(..., gt=0)
    court: Optional[str] = Field(None, max_length=100, description="Juzgado / tribunal")
    procedure_number: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = Field(None, max_length=500)


class CreateCaseRequest(CaseBase):
    opened_at: Optional[datetime] = Field(None, description="Por defecto, ahora")


class UpdateCaseRequest(CaseBase):
    closed_at: Optional[datetime] = None


class ChangeCaseStatusRequest(BaseModel):
    status: CaseStatus
    notes: Optional[str] = Field(None, max_length=500)


class CaseSummary(BaseModel):
    """
    Expediente completo para la SPA, con totales de actuaciones y citas.
    """
    id: int
    case_number: str
    subject: str
    description: Optional[str] = None
    case_type: str
    status: CaseStatus
    status_label: str
    client_id: int
    client_name: str
    court: Optional[str] = None
    procedure_number: Optional[str] = None
    opened_at: datetime
    closed_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    notes: Optional[str] = None
    total_actions: int = Field(default=0, ge=0)
    total_appointments: int = Field(default=0, ge=0)


class CaseOverview(BaseModel):
    """Fila ligera para listados (GET /expedientes/resumen)."""
    id: int
    case_number: str
    subject: str
    case_type: str
    status: CaseStatus
    status_label: str
    client_name: str
    opened_at: datetime

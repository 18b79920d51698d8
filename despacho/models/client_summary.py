"""
CLIENT SUMMARY - Modelos de vista/entrada para la gestión de clientes.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ClientBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100, description="Nombre")
    last_name: str = Field(..., min_length=1, max_length=150, description="Apellidos")
    tax_id: str = Field(..., min_length=1, max_length=20, description="DNI / CIF (único)")
    phone: Optional[str] = Field(None, max_length=15)
    email: Optional[str] = Field(None, max_length=100, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    address: Optional[str] = Field(None, max_length=250)
    city: Optional[str] = Field(None, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=10)
    notes: Optional[str] = Field(None, max_length=500)


class CreateClientRequest(ClientBase):
    pass


class UpdateClientRequest(ClientBase):
    pass


class ClientSummary(ClientBase):
    """
    Cliente tal y como lo ve la SPA, con el número de expedientes asociados.
    """

    id: int
    email: Optional[str] = None
    created_at: datetime
    modified_at: Optional[datetime] = None
    total_cases: int = Field(default=0, ge=0, description="Expedientes asociados")

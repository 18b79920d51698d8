"""
DOCUMENT METADATA - Modelo de vista para documentos e informes generados.

Los informes generados por el sistema son documentos sin expediente
(case_id = None) y con `uploaded_by` = marca de sistema.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class DocumentBase(BaseModel):
    filename: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=500)
    document_type: str = Field(..., min_length=1, max_length=100)
    notes: Optional[str] = Field(None, max_length=500)


class CreateDocumentRequest(DocumentBase):
    case_id: Optional[int] = Field(None, description="Vacío o <= 0 = sin expediente")
    storage_path: str = Field(..., min_length=1, max_length=500)
    size_bytes: int = Field(default=0, ge=0)
    extension: Optional[str] = Field(None, max_length=10)
    uploaded_by: Optional[str] = Field(None, max_length=100)


class UpdateDocumentRequest(DocumentBase):
    pass


class DocumentMetadata(DocumentBase):
    """
    CONTRATO devuelto al generar un informe y en el CRUD de documentos.

    - case_number / case_subject solo existen si el documento pertenece
      a un expediente
    - size_formatted: tamaño legible (B, KB, MB, GB, TB)
    """
    id: int
    case_id: Optional[int] = None
    case_number: Optional[str] = None
    case_subject: Optional[str] = None
    storage_path: str
    size_bytes: int = Field(..., ge=0)
    size_formatted: str
    extension: Optional[str] = None
    uploaded_by: Optional[str] = None
    uploaded_at: datetime
    modified_at: Optional[datetime] = None

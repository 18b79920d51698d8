"""
ENDPOINTS DE DOCUMENTOS.

CRUD genérico de documentos. Los informes generados por el sistema
también son documentos (sin expediente) y se ven aquí.
"""
from __future__ import annotations

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from despacho.api.errors import commit_or_raise, not_found
from despacho.core.database import get_db
from despacho.core.logger import logger
from despacho.models import Case, Document
from despacho.models.document_summary import (
    CreateDocumentRequest,
    DocumentMetadata,
    UpdateDocumentRequest,
)
from despacho.reports.formatting import format_byte_size


router = APIRouter(
    prefix="/documentos",
    tags=["documentos"],
)


def build_document_metadata(document: Document) -> DocumentMetadata:
    """
    Construye el DTO de un documento.

    Los campos del expediente solo se rellenan si el documento tiene uno.
    """
    case_number = None
    case_subject = None
    if document.case_ref is not None and document.case is not None:
        case_number = document.case.case_number
        case_subject = document.case.subject

    return DocumentMetadata(
        id=document.id,
        case_id=document.case_id,
        case_number=case_number,
        case_subject=case_subject,
        filename=document.filename,
        description=document.description,
        document_type=document.document_type,
        storage_path=document.storage_path,
        size_bytes=document.size_bytes,
        size_formatted=format_byte_size(document.size_bytes),
        extension=document.extension,
        uploaded_by=document.uploaded_by,
        uploaded_at=document.uploaded_at,
        modified_at=document.modified_at,
        notes=document.notes,
    )


def _documents_query(db: Session):
    return db.query(Document).options(joinedload(Document.case))


def _get_document_or_404(document_id: int, db: Session) -> Document:
    document = _documents_query(db).filter(Document.id == document_id).first()
    if document is None:
        raise not_found("Documento", document_id)
    return document


@router.get("", response_model=List[DocumentMetadata], summary="Listar documentos")
def list_documents(db: Session = Depends(get_db)) -> List[DocumentMetadata]:
    documents = _documents_query(db).order_by(Document.uploaded_at.desc(), Document.id.desc()).all()
    return [build_document_metadata(d) for d in documents]


@router.get("/expediente/{case_id}", response_model=List[DocumentMetadata])
def list_documents_by_case(case_id: int, db: Session = Depends(get_db)) -> List[DocumentMetadata]:
    documents = (
        _documents_query(db)
        .filter(Document.case_id == case_id)
        .order_by(Document.uploaded_at.desc(), Document.id.desc())
        .all()
    )
    return [build_document_metadata(d) for d in documents]


@router.get("/tipo/{document_type}", response_model=List[DocumentMetadata])
def list_documents_by_type(document_type: str, db: Session = Depends(get_db)) -> List[DocumentMetadata]:
    """Filtra por tipo de documento sin distinguir mayúsculas."""
    documents = (
        _documents_query(db)
        .filter(func.lower(Document.document_type) == document_type.lower())
        .order_by(Document.uploaded_at.desc(), Document.id.desc())
        .all()
    )
    return [build_document_metadata(d) for d in documents]


@router.get("/{document_id}", response_model=DocumentMetadata)
def get_document(document_id: int, db: Session = Depends(get_db)) -> DocumentMetadata:
    return build_document_metadata(_get_document_or_404(document_id, db))


@router.post("", response_model=DocumentMetadata, status_code=status.HTTP_201_CREATED)
def create_document(payload: CreateDocumentRequest, db: Session = Depends(get_db)) -> DocumentMetadata:
    # Un id vacío o <= 0 equivale a "sin expediente"
    case_id = payload.case_id if payload.case_id and payload.case_id > 0 else None
    if case_id is not None and db.query(Case).filter(Case.id == case_id).first() is None:
        raise not_found("Expediente", case_id)

    document = Document(
        case_id=case_id,
        filename=payload.filename,
        description=payload.description,
        document_type=payload.document_type,
        storage_path=payload.storage_path,
        size_bytes=payload.size_bytes,
        extension=payload.extension,
        uploaded_by=payload.uploaded_by,
        uploaded_at=datetime.now(),
        notes=payload.notes,
    )
    db.add(document)
    commit_or_raise(db, "create_document", "Document")

    logger.info("Document created", entity="document", entity_id=document.id, action="document_created")
    return build_document_metadata(_get_document_or_404(document.id, db))


@router.put("/{document_id}", response_model=DocumentMetadata)
def update_document(
    document_id: int,
    payload: UpdateDocumentRequest,
    db: Session = Depends(get_db),
) -> DocumentMetadata:
    document = _get_document_or_404(document_id, db)

    document.filename = payload.filename
    document.description = payload.description
    document.document_type = payload.document_type
    document.notes = payload.notes
    document.modified_at = datetime.now()
    commit_or_raise(db, "update_document", "Document")

    logger.info("Document updated", entity="document", entity_id=document_id, action="document_updated")
    return build_document_metadata(document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_document(document_id: int, db: Session = Depends(get_db)) -> None:
    """Elimina el registro. El archivo en disco no se toca."""
    document = _get_document_or_404(document_id, db)
    db.delete(document)
    commit_or_raise(db, "delete_document", "Document")
    logger.info("Document deleted", entity="document", entity_id=document_id, action="document_deleted")

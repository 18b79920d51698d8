"""
Traducción de excepciones del dominio a respuestas HTTP.
"""
from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from despacho.core.exceptions import DataAccessException, DespachoException, EntityNotFoundException
from despacho.core.logger import logger

# Código de error -> status HTTP
STATUS_BY_CODE = {
    "VALIDATION_ERROR": 422,
    "ENTITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DOCUMENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "REPORT_FILE_MISSING": status.HTTP_404_NOT_FOUND,
    "DUPLICATE_ENTITY": status.HTTP_409_CONFLICT,
    "ENTITY_IN_USE": status.HTTP_409_CONFLICT,
    "DATA_ACCESS_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "STORAGE_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def to_http_exception(exc: DespachoException) -> HTTPException:
    status_code = STATUS_BY_CODE.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return HTTPException(status_code=status_code, detail=exc.to_dict())


def not_found(entity: str, entity_id) -> HTTPException:
    return to_http_exception(EntityNotFoundException(entity, entity_id))


def commit_or_raise(db: Session, operation: str, entity: str) -> None:
    """Commit de la sesión; ante error, rollback y 500 con DATA_ACCESS_ERROR."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Commit failed", entity=entity, action=operation, error=e)
        raise to_http_exception(DataAccessException(operation=operation, entity=entity, original_error=e))

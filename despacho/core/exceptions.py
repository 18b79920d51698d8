"""
Excepciones estandarizadas del despacho.

Todas heredan de DespachoException y llevan:
- Código de error único
- Mensaje descriptivo
- Detalles adicionales (dict)
- Severity level

Los routers traducen el código a un status HTTP; el core nunca se
recupera en silencio.
"""
from enum import Enum
from typing import Any, Dict, Optional


class ErrorSeverity(str, Enum):
    """Niveles de severidad para errores."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class DespachoException(Exception):
    """
    Excepción base del sistema.

    Todas las excepciones custom deben heredar de esta clase.
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        original_error: Optional[Exception] = None,
    ):
        """
        Args:
            code: Código único del error (ej: "REPORT_FILE_MISSING")
            message: Mensaje descriptivo para humanos
            details: Detalles adicionales (dict)
            severity: Nivel de severidad
            original_error: Excepción original si es un wrap
        """
        self.code = code
        self.message = message
        self.details = details or {}
        self.severity = severity
        self.original_error = original_error

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convierte la excepción a diccionario (para API/logging)."""
        result = {
            "error_code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "details": self.details,
        }

        if self.original_error:
            result["original_error"] = {
                "type": type(self.original_error).__name__,
                "message": str(self.original_error),
            }

        return result

    def __str__(self) -> str:
        base = f"[{self.code}] {self.message}"
        if self.details:
            base += f" | Details: {self.details}"
        return base


# =========================================================
# EXCEPCIONES DE VALIDACIÓN
# =========================================================

class ValidationException(DespachoException):
    """Entrada mal formada o fuera de rango."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        if field:
            details["field"] = field

        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            details=details,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )


# =========================================================
# EXCEPCIONES DE "NO ENCONTRADO"
# =========================================================

class NotFoundException(DespachoException):
    """Recurso solicitado inexistente."""

    def __init__(self, code: str, message: str, **kwargs):
        super().__init__(
            code=code,
            message=message,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )


class EntityNotFoundException(NotFoundException):
    """Entidad (cliente, expediente, ...) no encontrada."""

    def __init__(self, entity: str, entity_id: Any, **kwargs):
        super().__init__(
            code="ENTITY_NOT_FOUND",
            message=f"{entity} con ID {entity_id} no encontrado",
            details={"entity": entity, "entity_id": entity_id},
            **kwargs,
        )


class DocumentNotFoundException(NotFoundException):
    """El registro del documento no existe."""

    def __init__(self, document_id: int, **kwargs):
        super().__init__(
            code="DOCUMENT_NOT_FOUND",
            message="Documento no encontrado",
            details={"document_id": document_id},
            **kwargs,
        )


class ReportFileMissingException(NotFoundException):
    """El documento existe pero su archivo no está en el almacenamiento."""

    def __init__(self, document_id: int, path: str, **kwargs):
        super().__init__(
            code="REPORT_FILE_MISSING",
            message="El archivo PDF no existe en el servidor",
            details={"document_id": document_id, "path": path},
            **kwargs,
        )


# =========================================================
# EXCEPCIONES DE CONFLICTO
# =========================================================

class DuplicateEntityException(DespachoException):
    """Violación de unicidad (DNI/CIF, número de expediente)."""

    def __init__(self, entity: str, field: str, value: Any, **kwargs):
        super().__init__(
            code="DUPLICATE_ENTITY",
            message=f"Ya existe un {entity} con {field} '{value}'",
            details={"entity": entity, "field": field, "value": value},
            severity=ErrorSeverity.LOW,
            **kwargs,
        )


class EntityInUseException(DespachoException):
    """La entidad tiene dependientes que impiden borrarla."""

    def __init__(self, entity: str, entity_id: Any, reason: str, **kwargs):
        super().__init__(
            code="ENTITY_IN_USE",
            message=f"No se puede eliminar {entity} {entity_id}: {reason}",
            details={"entity": entity, "entity_id": entity_id, "reason": reason},
            severity=ErrorSeverity.LOW,
            **kwargs,
        )


# =========================================================
# EXCEPCIONES DE INFRAESTRUCTURA
# =========================================================

class DataAccessException(DespachoException):
    """Fallo leyendo o escribiendo en la base de datos."""

    def __init__(self, operation: str, entity: str, **kwargs):
        super().__init__(
            code="DATA_ACCESS_ERROR",
            message=f"Error de acceso a datos en '{operation}' sobre {entity}",
            details={"operation": operation, "entity": entity},
            severity=ErrorSeverity.HIGH,
            **kwargs,
        )


class StorageException(DespachoException):
    """Fallo creando directorios o escribiendo archivos."""

    def __init__(self, operation: str, path: str, **kwargs):
        super().__init__(
            code="STORAGE_ERROR",
            message=f"Error de almacenamiento en '{operation}': {path}",
            details={"operation": operation, "path": path},
            severity=ErrorSeverity.HIGH,
            **kwargs,
        )


# =========================================================
# HELPER FUNCTIONS
# =========================================================

def wrap_exception(
    original_error: Exception,
    exception_class: type,
    **kwargs,
) -> DespachoException:
    """
    Envuelve una excepción genérica en una DespachoException.

    Las DespachoException se devuelven tal cual.
    """
    if isinstance(original_error, DespachoException):
        return original_error

    return exception_class(original_error=original_error, **kwargs)

"""
Servicio base del despacho.

Proporciona funcionalidad común a todos los servicios:
- Logging estructurado
- Manejo de excepciones
- Acceso a base de datos
"""
from typing import Optional

from sqlalchemy.orm import Session

from despacho.core.exceptions import DespachoException
from despacho.core.logger import StructuredLogger, get_logger


class BaseService:
    """
    Clase base para los servicios.

    Los servicios orquestan operaciones entre la base de datos, el
    almacenamiento y la composición de documentos.
    """

    def __init__(self, db: Session, logger: Optional[StructuredLogger] = None):
        """
        Args:
            db: Sesión de base de datos
            logger: Logger estructurado (opcional)
        """
        self.db = db
        self.logger = logger or get_logger()

    def _log_info(self, message: str, **kwargs):
        self.logger.info(message, **kwargs)

    def _log_warning(self, message: str, **kwargs):
        self.logger.warning(message, **kwargs)

    def _log_error(self, message: str, error: Optional[Exception] = None, **kwargs):
        self.logger.error(message, error=error, **kwargs)

    def _handle_exception(self, error: Exception, context: str, **kwargs) -> DespachoException:
        """
        Registra la excepción y la devuelve como DespachoException.

        Las excepciones del dominio se devuelven tal cual; el resto se
        envuelve con código INTERNAL_ERROR.
        """
        if isinstance(error, DespachoException):
            self._log_error(f"Despacho exception in {context}", error=error, **kwargs)
            return error

        self._log_error(f"Unexpected error in {context}", error=error, **kwargs)
        return DespachoException(
            code="INTERNAL_ERROR",
            message=f"Error interno en {context}",
            details={"context": context},
            original_error=error,
        )

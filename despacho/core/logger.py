"""
Logging estructurado del despacho.

Formato JSON (una línea por evento) para poder seguir la generación de
informes, escrituras en disco y registros de documentos.
"""
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Optional


class StructuredLogger:
    """
    Logger estructurado con formato JSON.

    Cada log incluye:
    - timestamp ISO8601
    - level (INFO/WARNING/ERROR)
    - entity / entity_id (si aplica)
    - action (tipo de acción)
    - message
    - extra_data (opcional)
    """

    def __init__(self, name: str, log_file: Optional[Path] = None, level: str = "INFO"):
        """
        Args:
            name: Nombre del logger (ej: "despacho.reports")
            log_file: Ruta al archivo de log (opcional)
            level: Nivel mínimo de log
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level, logging.INFO))
        self.logger.handlers = []
        self.logger.propagate = False

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(JsonFormatter())
        self.logger.addHandler(console_handler)

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(JsonFormatter())
            self.logger.addHandler(file_handler)

    def debug(
        self,
        message: str,
        entity: Optional[str] = None,
        entity_id: Optional[Any] = None,
        action: Optional[str] = None,
        **extra,
    ):
        self._log(logging.DEBUG, message, entity, entity_id, action, extra)

    def info(
        self,
        message: str,
        entity: Optional[str] = None,
        entity_id: Optional[Any] = None,
        action: Optional[str] = None,
        **extra,
    ):
        """Log nivel INFO."""
        self._log(logging.INFO, message, entity, entity_id, action, extra)

    def warning(
        self,
        message: str,
        entity: Optional[str] = None,
        entity_id: Optional[Any] = None,
        action: Optional[str] = None,
        **extra,
    ):
        """Log nivel WARNING."""
        self._log(logging.WARNING, message, entity, entity_id, action, extra)

    def error(
        self,
        message: str,
        entity: Optional[str] = None,
        entity_id: Optional[Any] = None,
        action: Optional[str] = None,
        error: Optional[Exception] = None,
        **extra,
    ):
        """Log nivel ERROR."""
        if error:
            extra["error_type"] = type(error).__name__
            extra["error_message"] = str(error)
        self._log(logging.ERROR, message, entity, entity_id, action, extra)

    def _log(
        self,
        level: int,
        message: str,
        entity: Optional[str],
        entity_id: Optional[Any],
        action: Optional[str],
        extra: dict[str, Any],
    ):
        log_data = {"entity": entity, "entity_id": entity_id, "action": action, **extra}

        # Filtrar None values
        log_data = {k: v for k, v in log_data.items() if v is not None}

        self.logger.log(level, message, extra={"data": log_data})


class JsonFormatter(logging.Formatter):
    """Formatter que convierte logs a JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        if hasattr(record, "data"):
            log_obj.update(record.data)

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, ensure_ascii=False, default=str)


_default_logger: Optional[StructuredLogger] = None


def get_logger(name: str = "despacho", log_file: Optional[Path] = None) -> StructuredLogger:
    """
    Obtiene o crea el logger estructurado del proceso.

    Args:
        name: Nombre del logger
        log_file: Ruta al archivo de log

    Returns:
        Logger estructurado
    """
    global _default_logger

    if _default_logger is None:
        from despacho.core.config import settings

        if log_file is None:
            log_file = settings.logs_dir / "despacho.log"

        _default_logger = StructuredLogger(name, log_file, level=settings.log_level)

    return _default_logger


logger = get_logger()

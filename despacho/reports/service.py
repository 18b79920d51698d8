"""
Servicio de informes: agregar -> componer -> escribir -> registrar.

Orden obligatorio: el PDF se escribe completo en disco ANTES de insertar
el Document. Si la escritura falla no hay registro; si el registro falla
se elimina el archivo recién escrito.
"""
from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional, Tuple, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from despacho.core.config import get_settings
from despacho.core.exceptions import (
    DataAccessException,
    DocumentNotFoundException,
    ReportFileMissingException,
    StorageException,
    ValidationException,
)
from despacho.core.logger import StructuredLogger
from despacho.models import Document
from despacho.reports.aggregators import (
    load_actions_by_case,
    load_cases_by_status,
    load_client_directory,
)
from despacho.reports.pdf import (
    render_actions_by_case,
    render_cases_by_status,
    render_client_directory,
)
from despacho.services.base import BaseService

PDF_EXTENSION = ".pdf"


class ReportKind(str, Enum):
    CLIENTS = "clientes"
    CASES_BY_STATUS = "expedientes-por-estado"
    ACTIONS_BY_CASE = "actuaciones-por-expediente"


@dataclass(frozen=True)
class ReportDefinition:
    """Todo lo que distingue a un tipo de informe."""

    prefix: str
    document_type: str
    description: str
    load: Callable[[Session], Any]
    render: Callable[[Any, datetime], bytes]


REPORT_DEFINITIONS = {
    ReportKind.CLIENTS: ReportDefinition(
        prefix="InformeClientes",
        document_type="Informe de Clientes",
        description="Listado completo de clientes con información de contacto y expedientes asociados",
        load=load_client_directory,
        render=render_client_directory,
    ),
    ReportKind.CASES_BY_STATUS: ReportDefinition(
        prefix="InformeExpedientesPorEstado",
        document_type="Informe de Expedientes por Estado",
        description="Expedientes agrupados por estado con totalizaciones de actuaciones y citas",
        load=load_cases_by_status,
        render=render_cases_by_status,
    ),
    ReportKind.ACTIONS_BY_CASE: ReportDefinition(
        prefix="InformeActuacionesPorExpediente",
        document_type="Informe de Actuaciones por Expediente",
        description="Actuaciones agrupadas por expediente con subtotales por tipo y detalle cronológico",
        load=load_actions_by_case,
        render=render_actions_by_case,
    ),
}


def build_report_filename(prefix: str, generated_at: datetime) -> str:
    """<Prefijo>_<YYYYmmdd_HHMMSS>_<8 hex>.pdf"""
    timestamp = generated_at.strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{timestamp}_{secrets.token_hex(4)}{PDF_EXTENSION}"


class ReportService(BaseService):
    """Genera, persiste y sirve los informes PDF."""

    def __init__(
        self,
        db: Session,
        reports_dir: Optional[Path] = None,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            db: Sesión de base de datos
            reports_dir: Directorio base de informes (por defecto, settings.reports_dir)
            clock: Fuente de la fecha de generación (por defecto, datetime.now)
            logger: Logger estructurado (opcional)
        """
        super().__init__(db, logger)
        self.reports_dir = Path(reports_dir) if reports_dir is not None else get_settings().reports_dir
        self.clock = clock or datetime.now

    # =========================================================
    # GENERACIÓN
    # =========================================================

    def generate(self, kind: Union[ReportKind, str]) -> Document:
        """
        Genera el informe `kind` y lo registra como Document sin expediente.

        Raises:
            ValidationException: tipo de informe desconocido
            DataAccessException: fallo leyendo datos o insertando el registro
            StorageException: fallo creando el directorio o escribiendo el PDF
        """
        try:
            kind = ReportKind(kind)
        except ValueError as e:
            raise ValidationException(f"Tipo de informe desconocido: {kind}", field="kind", original_error=e)

        definition = REPORT_DEFINITIONS[kind]
        generated_at = self.clock()

        self._log_info("Generating report", entity="report", action="report_start", kind=kind.value)

        data = definition.load(self.db)
        pdf_bytes = definition.render(data, generated_at)

        filename = build_report_filename(definition.prefix, generated_at)
        path = self._write_artifact(filename, pdf_bytes)
        document = self._register_document(definition, filename, path, len(pdf_bytes), generated_at)

        self._log_info(
            "Report generated",
            entity="report",
            entity_id=document.id,
            action="report_generated",
            kind=kind.value,
            filename=filename,
            size_bytes=document.size_bytes,
        )
        return document

    def generate_client_directory(self) -> Document:
        return self.generate(ReportKind.CLIENTS)

    def generate_cases_by_status(self) -> Document:
        return self.generate(ReportKind.CASES_BY_STATUS)

    def generate_actions_by_case(self) -> Document:
        return self.generate(ReportKind.ACTIONS_BY_CASE)

    def _write_artifact(self, filename: str, pdf_bytes: bytes) -> Path:
        try:
            self.reports_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self._log_error("Cannot create reports directory", error=e, action="report_mkdir", path=str(self.reports_dir))
            raise StorageException(operation="mkdir", path=str(self.reports_dir), original_error=e)

        path = (self.reports_dir / filename).resolve()
        created = False
        try:
            # "xb": nunca se sobrescribe un informe existente
            with open(path, "xb") as f:
                created = True
                f.write(pdf_bytes)
        except OSError as e:
            if created:
                path.unlink(missing_ok=True)
            self._log_error("Cannot write report file", error=e, action="report_write", path=str(path))
            raise StorageException(operation="write", path=str(path), original_error=e)

        self._log_info("Report file written", entity="report", action="report_written", path=str(path))
        return path

    def _register_document(
        self,
        definition: ReportDefinition,
        filename: str,
        path: Path,
        size_bytes: int,
        generated_at: datetime,
    ) -> Document:
        document = Document(
            case_id=None,
            filename=filename,
            description=definition.description,
            document_type=definition.document_type,
            storage_path=str(path),
            size_bytes=size_bytes,
            extension=PDF_EXTENSION,
            uploaded_by=get_settings().report_uploader,
            uploaded_at=generated_at,
            notes=f"Generado automáticamente el {generated_at.strftime('%d/%m/%Y %H:%M:%S')}",
        )

        try:
            self.db.add(document)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            path.unlink(missing_ok=True)
            self._log_error("Cannot register report document", error=e, action="report_register", path=str(path))
            raise DataAccessException(operation="insert", entity="Document", original_error=e)

        self._log_info("Report document registered", entity="document", entity_id=document.id, action="document_created")
        return document

    # =========================================================
    # DESCARGA
    # =========================================================

    def download(self, document_id: int) -> Tuple[bytes, str]:
        """
        Devuelve (bytes, nombre de archivo) del documento `document_id`.

        Raises:
            DocumentNotFoundException: no existe el registro
            ReportFileMissingException: existe el registro pero no el archivo
        """
        try:
            document = self.db.query(Document).filter(Document.id == document_id).first()
        except SQLAlchemyError as e:
            self._log_error("Cannot load document", error=e, entity="document", entity_id=document_id)
            raise DataAccessException(operation="get", entity="Document", original_error=e)

        if document is None:
            self._log_warning("Document not found", entity="document", entity_id=document_id, action="report_download")
            raise DocumentNotFoundException(document_id)

        path = Path(document.storage_path)
        if not path.is_file():
            self._log_warning(
                "Report file missing",
                entity="document",
                entity_id=document_id,
                action="report_download",
                path=str(path),
            )
            raise ReportFileMissingException(document_id, str(path))

        try:
            content = path.read_bytes()
        except OSError as e:
            self._log_error("Cannot read report file", error=e, entity="document", entity_id=document_id)
            raise StorageException(operation="read", path=str(path), original_error=e)

        self._log_info(
            "Report downloaded",
            entity="document",
            entity_id=document_id,
            action="report_download",
            size_bytes=len(content),
        )
        return content, document.filename

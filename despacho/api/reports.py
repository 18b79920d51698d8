"""
ENDPOINTS DE INFORMES PDF.

GET /reportes/<tipo> genera el informe, lo guarda en disco y lo registra
como documento. GET /reportes/descargar/{id} devuelve el PDF guardado.
"""
from __future__ import annotations

from io import BytesIO

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from despacho.api.documents import build_document_metadata
from despacho.api.errors import to_http_exception
from despacho.core.database import get_db
from despacho.core.exceptions import DespachoException
from despacho.models.document_summary import DocumentMetadata
from despacho.reports.service import ReportKind, ReportService


router = APIRouter(
    prefix="/reportes",
    tags=["reportes"],
)


def get_report_service(db: Session = Depends(get_db)) -> ReportService:
    return ReportService(db)


def _generate(service: ReportService, kind: ReportKind) -> DocumentMetadata:
    try:
        document = service.generate(kind)
        return build_document_metadata(document)

    except Exception as e:
        raise to_http_exception(
            service._handle_exception(e, "report_generation", entity="report", action="report_failed", kind=kind.value)
        )


@router.get(
    "/clientes",
    response_model=DocumentMetadata,
    summary="Generar informe de clientes",
)
def generate_client_report(service: ReportService = Depends(get_report_service)) -> DocumentMetadata:
    return _generate(service, ReportKind.CLIENTS)


@router.get(
    "/expedientes-por-estado",
    response_model=DocumentMetadata,
    summary="Generar informe de expedientes por estado",
)
def generate_cases_by_status_report(service: ReportService = Depends(get_report_service)) -> DocumentMetadata:
    return _generate(service, ReportKind.CASES_BY_STATUS)


@router.get(
    "/actuaciones-por-expediente",
    response_model=DocumentMetadata,
    summary="Generar informe de actuaciones por expediente",
)
def generate_actions_by_case_report(service: ReportService = Depends(get_report_service)) -> DocumentMetadata:
    return _generate(service, ReportKind.ACTIONS_BY_CASE)


@router.get(
    "/descargar/{document_id}",
    summary="Descargar un informe generado",
    responses={
        200: {"content": {"application/pdf": {}}, "description": "PDF del informe"},
        404: {"description": "Documento inexistente o archivo ausente en el servidor"},
    },
)
def download_report(
    document_id: int,
    service: ReportService = Depends(get_report_service),
) -> StreamingResponse:
    """
    El 404 distingue con `error_code` entre DOCUMENT_NOT_FOUND (no hay
    registro) y REPORT_FILE_MISSING (registro sin archivo).
    """
    try:
        content, filename = service.download(document_id)
    except DespachoException as e:
        raise to_http_exception(e)

    return StreamingResponse(
        BytesIO(content),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

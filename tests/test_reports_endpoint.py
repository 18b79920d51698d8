"""
Tests de los endpoints de informes (/api/reportes).
"""
from datetime import datetime
from pathlib import Path

import pytest

from despacho.models import CaseStatus


@pytest.fixture
def seeded(make_client, make_case, make_action):
    client = make_client("Ana", "García")
    case = make_case(client, CaseStatus.OPEN)
    make_action(case, datetime(2024, 2, 1))


@pytest.mark.parametrize(
    "path, document_type",
    [
        ("/api/reportes/clientes", "Informe de Clientes"),
        ("/api/reportes/expedientes-por-estado", "Informe de Expedientes por Estado"),
        ("/api/reportes/actuaciones-por-expediente", "Informe de Actuaciones por Expediente"),
    ],
)
def test_generate_report_returns_metadata(api_client, seeded, path, document_type):
    response = api_client.get(path)

    assert response.status_code == 200
    data = response.json()
    assert data["document_type"] == document_type
    assert data["case_id"] is None
    assert data["case_number"] is None
    assert data["uploaded_by"] == "Sistema"
    assert data["extension"] == ".pdf"
    assert data["size_bytes"] > 0
    assert data["size_formatted"].endswith("KB") or data["size_formatted"].endswith(" B")


def test_download_generated_report(api_client, seeded):
    generated = api_client.get("/api/reportes/clientes").json()

    response = api_client.get(f"/api/reportes/descargar/{generated['id']}")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert generated["filename"] in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


def test_download_unknown_document_is_404(api_client):
    response = api_client.get("/api/reportes/descargar/424242")

    assert response.status_code == 404
    assert response.json()["detail"]["error_code"] == "DOCUMENT_NOT_FOUND"


def test_download_missing_file_is_404_with_distinct_code(api_client):
    generated = api_client.get("/api/reportes/clientes").json()
    Path(generated["storage_path"]).unlink()

    response = api_client.get(f"/api/reportes/descargar/{generated['id']}")

    assert response.status_code == 404
    detail = response.json()["detail"]
    assert detail["error_code"] == "REPORT_FILE_MISSING"
    assert detail["message"] == "El archivo PDF no existe en el servidor"


def test_generated_report_is_listed_as_document(api_client):
    generated = api_client.get("/api/reportes/clientes").json()

    listed = api_client.get("/api/documentos").json()

    assert [d["id"] for d in listed] == [generated["id"]]


def test_unexpected_generation_error_is_500_internal(api_client, monkeypatch):
    from despacho.reports.service import ReportService

    def broken_generate(self, kind):
        raise RuntimeError("renderer crashed")

    monkeypatch.setattr(ReportService, "generate", broken_generate)

    response = api_client.get("/api/reportes/clientes")

    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["error_code"] == "INTERNAL_ERROR"
    assert detail["details"] == {"context": "report_generation"}
    assert detail["original_error"]["type"] == "RuntimeError"


def test_domain_error_during_generation_keeps_its_status(api_client, monkeypatch):
    from despacho.core.exceptions import StorageException
    from despacho.reports.service import ReportService

    def broken_generate(self, kind):
        raise StorageException(operation="write", path="/tmp/x.pdf")

    monkeypatch.setattr(ReportService, "generate", broken_generate)

    response = api_client.get("/api/reportes/expedientes-por-estado")

    assert response.status_code == 500
    assert response.json()["detail"]["error_code"] == "STORAGE_ERROR"

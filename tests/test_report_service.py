"""
Tests del servicio de informes: generación, persistencia y descarga.
"""
import re
from datetime import datetime
from pathlib import Path

import pytest
from sqlalchemy.exc import OperationalError

from despacho.core.exceptions import (
    DataAccessException,
    DocumentNotFoundException,
    ReportFileMissingException,
    StorageException,
    ValidationException,
)
from despacho.models import CaseStatus, Document
from despacho.reports import service as service_module
from despacho.reports.service import REPORT_DEFINITIONS, ReportKind, ReportService

FIXED_NOW = datetime(2024, 6, 15, 10, 30, 45)


@pytest.fixture
def service(db_session, reports_dir):
    return ReportService(db_session, reports_dir=reports_dir, clock=lambda: FIXED_NOW)


@pytest.fixture
def seeded(make_client, make_case, make_action):
    client = make_client("Ana", "García")
    case = make_case(client, CaseStatus.IN_PROGRESS)
    make_action(case, datetime(2024, 2, 1))
    make_action(case, datetime(2024, 3, 1), action_type="Vista")
    return case


@pytest.mark.parametrize("kind", list(ReportKind))
def test_generate_registers_standalone_document(service, seeded, reports_dir, kind):
    document = service.generate(kind)

    definition = REPORT_DEFINITIONS[kind]
    assert document.id is not None
    assert document.case_id is None
    assert document.case_ref is None
    assert document.document_type == definition.document_type
    assert document.description == definition.description
    assert document.uploaded_by == "Sistema"
    assert document.extension == ".pdf"
    assert document.notes == "Generado automáticamente el 15/06/2024 10:30:45"
    assert re.fullmatch(rf"{definition.prefix}_20240615_103045_[0-9a-f]{{8}}\.pdf", document.filename)

    path = Path(document.storage_path)
    assert path.is_absolute()
    assert path.parent == reports_dir.resolve()
    assert path.stat().st_size == document.size_bytes > 0


def test_generate_accepts_kind_as_string(service, seeded):
    document = service.generate("expedientes-por-estado")

    assert document.document_type == "Informe de Expedientes por Estado"


def test_generate_rejects_unknown_kind(service, db_session):
    with pytest.raises(ValidationException):
        service.generate("facturas")

    assert db_session.query(Document).count() == 0


def test_generate_creates_missing_directory(service, reports_dir):
    assert not reports_dir.exists()

    service.generate_client_directory()

    assert reports_dir.is_dir()


def test_generate_with_empty_database(service):
    document = service.generate_actions_by_case()

    assert Path(document.storage_path).read_bytes().startswith(b"%PDF")


def test_round_trip_download(service, seeded):
    document = service.generate_cases_by_status()

    content, filename = service.download(document.id)

    assert content.startswith(b"%PDF")
    assert len(content) == document.size_bytes
    assert filename == document.filename


def test_download_unknown_id(service):
    with pytest.raises(DocumentNotFoundException) as exc_info:
        service.download(9999)

    assert exc_info.value.code == "DOCUMENT_NOT_FOUND"
    assert exc_info.value.message == "Documento no encontrado"


def test_download_missing_file_is_distinct_error(service):
    document = service.generate_client_directory()
    Path(document.storage_path).unlink()

    with pytest.raises(ReportFileMissingException) as exc_info:
        service.download(document.id)

    assert exc_info.value.code == "REPORT_FILE_MISSING"
    assert exc_info.value.message == "El archivo PDF no existe en el servidor"


def test_two_generations_never_overwrite(service, db_session):
    first = service.generate_client_directory()
    second = service.generate_client_directory()

    assert first.id != second.id
    assert first.storage_path != second.storage_path
    assert Path(first.storage_path).exists()
    assert Path(second.storage_path).exists()
    assert db_session.query(Document).count() == 2


def test_directory_failure_leaves_no_record(db_session, tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x")
    service = ReportService(db_session, reports_dir=blocker / "reportes")

    with pytest.raises(StorageException) as exc_info:
        service.generate_client_directory()

    assert exc_info.value.details["operation"] == "mkdir"
    assert db_session.query(Document).count() == 0


def test_write_failure_leaves_no_file_and_no_record(service, db_session, reports_dir, monkeypatch):
    class FailingFile:
        def __init__(self, path):
            self.path = path

        def __enter__(self):
            Path(self.path).write_bytes(b"%PDF-partial")
            return self

        def __exit__(self, *exc):
            return False

        def write(self, data):
            raise OSError("No space left on device")

    monkeypatch.setattr(service_module, "open", lambda path, mode: FailingFile(path), raising=False)

    with pytest.raises(StorageException) as exc_info:
        service.generate_client_directory()

    assert exc_info.value.details["operation"] == "write"
    assert list(reports_dir.iterdir()) == []
    assert db_session.query(Document).count() == 0


def test_register_failure_removes_written_file(service, db_session, reports_dir, monkeypatch):
    def broken_commit():
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db_session, "commit", broken_commit)

    with pytest.raises(DataAccessException) as exc_info:
        service.generate_client_directory()

    assert exc_info.value.details == {"operation": "insert", "entity": "Document"}
    assert list(reports_dir.iterdir()) == []

    monkeypatch.undo()
    assert db_session.query(Document).count() == 0


def test_refresh_failure_after_commit_keeps_file_and_record(service, db_session, monkeypatch):
    def broken_refresh(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "refresh", broken_refresh)

    document = service.generate_client_directory()

    monkeypatch.undo()
    stored = db_session.query(Document).all()
    assert [d.id for d in stored] == [document.id]
    assert Path(stored[0].storage_path).exists()

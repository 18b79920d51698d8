"""
Tests de la jerarquía de excepciones y su traducción a HTTP.
"""
from sqlalchemy.exc import OperationalError

from despacho.api.errors import to_http_exception
from despacho.core.exceptions import (
    DataAccessException,
    DespachoException,
    DocumentNotFoundException,
    NotFoundException,
    ReportFileMissingException,
    StorageException,
    ValidationException,
    wrap_exception,
)


def test_not_found_variants_share_base_but_not_code():
    missing_record = DocumentNotFoundException(1)
    missing_file = ReportFileMissingException(1, "/tmp/x.pdf")

    assert isinstance(missing_record, NotFoundException)
    assert isinstance(missing_file, NotFoundException)
    assert missing_record.code != missing_file.code


def test_to_dict_includes_original_error():
    original = OSError("read-only file system")
    exc = StorageException(operation="write", path="/tmp/x.pdf", original_error=original)

    data = exc.to_dict()

    assert data["error_code"] == "STORAGE_ERROR"
    assert data["details"] == {"operation": "write", "path": "/tmp/x.pdf"}
    assert data["original_error"]["type"] == "OSError"


def test_wrap_exception_passes_domain_errors_through():
    domain = ValidationException("bad", field="x")

    assert wrap_exception(domain, DataAccessException, operation="get", entity="Client") is domain


def test_wrap_exception_wraps_foreign_errors():
    foreign = OperationalError("SELECT", {}, Exception("locked"))

    wrapped = wrap_exception(foreign, DataAccessException, operation="get", entity="Client")

    assert isinstance(wrapped, DataAccessException)
    assert wrapped.original_error is foreign


def test_http_status_mapping():
    assert to_http_exception(ValidationException("bad")).status_code == 422
    assert to_http_exception(DocumentNotFoundException(1)).status_code == 404
    assert to_http_exception(DataAccessException("get", "Client")).status_code == 500
    assert to_http_exception(DespachoException("SOMETHING_ELSE", "x")).status_code == 500

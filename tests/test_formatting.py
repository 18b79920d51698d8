"""
Tests de los helpers de formato: estados, tamaños, truncado y medias.
"""
from datetime import date, datetime

import pytest

from despacho.core.exceptions import ValidationException
from despacho.models import CaseStatus
from despacho.reports.formatting import (
    NEUTRAL_BACKGROUND,
    NEUTRAL_COLOR,
    format_average,
    format_byte_size,
    format_date,
    format_datetime,
    status_background_color,
    status_color,
    status_label,
    truncate_text,
)


# =========================================================
# ESTADOS
# =========================================================

def test_status_labels_are_spanish():
    assert [status_label(s) for s in CaseStatus] == [
        "Abierto",
        "En Trámite",
        "Suspendido",
        "Archivado",
        "Cerrado",
    ]


def test_status_label_accepts_raw_int():
    assert status_label(2) == "En Trámite"


def test_status_colors_are_distinct_per_status():
    colors = [status_color(s) for s in CaseStatus]
    backgrounds = [status_background_color(s) for s in CaseStatus]

    assert all(c.startswith("#") for c in colors + backgrounds)
    assert len(set(colors)) == len(CaseStatus)
    assert len(set(backgrounds)) == len(CaseStatus)


def test_unknown_status_falls_back():
    assert status_label(99) == "99"
    assert status_color(99) == NEUTRAL_COLOR
    assert status_background_color(99) == NEUTRAL_BACKGROUND


# =========================================================
# TAMAÑOS
# =========================================================

@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "0 B"),
        (512, "512 B"),
        (1023, "1023 B"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1048576, "1 MB"),
        (1099511627776, "1 TB"),
        (1024 ** 5, "1024 TB"),
    ],
)
def test_format_byte_size(size, expected):
    assert format_byte_size(size) == expected


def test_format_byte_size_keeps_two_decimals_at_most():
    # 1234567 / 1024**2 = 1.1773...
    assert format_byte_size(1234567) == "1.18 MB"


def test_format_byte_size_rejects_negative():
    with pytest.raises(ValidationException) as exc_info:
        format_byte_size(-1)

    assert exc_info.value.code == "VALIDATION_ERROR"
    assert exc_info.value.details["field"] == "size_bytes"


def test_format_byte_size_rejects_non_integer():
    with pytest.raises(ValidationException):
        format_byte_size(1.5)


# =========================================================
# TRUNCADO
# =========================================================

def test_truncate_keeps_short_text():
    assert truncate_text("Reclamación de cantidad", 45) == "Reclamación de cantidad"


def test_truncate_keeps_text_of_exact_budget():
    text = "x" * 45
    assert truncate_text(text, 45) == text


def test_truncate_long_text():
    text = "Demanda de juicio ordinario por incumplimiento contractual grave"
    result = truncate_text(text, 45)

    assert len(result) == 45
    assert result.endswith("...")
    assert result[:42] == text[:42]


def test_truncate_none_is_empty():
    assert truncate_text(None, 10) == ""


def test_truncate_rejects_budget_below_ellipsis():
    with pytest.raises(ValidationException):
        truncate_text("abcdef", 2)


# =========================================================
# MEDIAS Y FECHAS
# =========================================================

def test_format_average_one_decimal():
    assert format_average(7, 3) == "2.3"
    assert format_average(2, 2) == "1.0"


def test_format_average_zero_denominator():
    assert format_average(0, 0) == "0"


def test_format_dates():
    assert format_date(date(2024, 3, 5)) == "05/03/2024"
    assert format_datetime(datetime(2024, 3, 5, 9, 7)) == "05/03/2024 09:07"
    assert format_date(None) == "-"

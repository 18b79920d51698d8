"""
Helpers de formato para informes y DTOs.

Funciones puras: etiquetas y colores de estado, tamaños en bytes,
truncado de textos y medias.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from despacho.core.exceptions import ValidationException
from despacho.models.case import CaseStatus

ELLIPSIS = "..."

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")

# Color neutro para valores de estado desconocidos
NEUTRAL_COLOR = "#8B7355"
NEUTRAL_BACKGROUND = "#F5F1E8"

STATUS_LABELS = {
    CaseStatus.OPEN: "Abierto",
    CaseStatus.IN_PROGRESS: "En Trámite",
    CaseStatus.SUSPENDED: "Suspendido",
    CaseStatus.ARCHIVED: "Archivado",
    CaseStatus.CLOSED: "Cerrado",
}

STATUS_COLORS = {
    CaseStatus.OPEN: "#2563EB",
    CaseStatus.IN_PROGRESS: "#16A34A",
    CaseStatus.SUSPENDED: "#D4AF37",
    CaseStatus.ARCHIVED: "#8B7355",
    CaseStatus.CLOSED: "#DC2626",
}

STATUS_BACKGROUND_COLORS = {
    CaseStatus.OPEN: "#DBEAFE",
    CaseStatus.IN_PROGRESS: "#DCFCE7",
    CaseStatus.SUSPENDED: "#FEF9C3",
    CaseStatus.ARCHIVED: "#F3F4F6",
    CaseStatus.CLOSED: "#FEE2E2",
}


def _coerce_status(status: Any) -> Optional[CaseStatus]:
    # El valor almacenado puede ser cualquier entero o nombre
    if isinstance(status, CaseStatus):
        return status
    try:
        return CaseStatus(status)
    except (TypeError, ValueError):
        pass
    if isinstance(status, str) and status in CaseStatus.__members__:
        return CaseStatus[status]
    return None


def status_label(status: Any) -> str:
    """Etiqueta legible de un estado; valor crudo si no se reconoce."""
    known = _coerce_status(status)
    if known is None:
        return getattr(status, "name", str(status))
    return STATUS_LABELS[known]


def status_color(status: Any) -> str:
    known = _coerce_status(status)
    return STATUS_COLORS.get(known, NEUTRAL_COLOR)


def status_background_color(status: Any) -> str:
    known = _coerce_status(status)
    return STATUS_BACKGROUND_COLORS.get(known, NEUTRAL_BACKGROUND)


def format_byte_size(num_bytes: int) -> str:
    """
    Convierte bytes a texto legible en pasos de 1024.

    Máximo dos decimales, sin ceros finales: 0 -> "0 B", 1536 -> "1.5 KB".

    Raises:
        ValidationException: si el valor es negativo o no es entero
    """
    if isinstance(num_bytes, bool) or not isinstance(num_bytes, int):
        raise ValidationException(
            f"El tamaño debe ser un entero, no {type(num_bytes).__name__}",
            field="size_bytes",
        )
    if num_bytes < 0:
        raise ValidationException(
            f"El tamaño no puede ser negativo: {num_bytes}",
            field="size_bytes",
        )

    size = float(num_bytes)
    order = 0
    while size >= 1024 and order < len(BYTE_UNITS) - 1:
        size /= 1024
        order += 1

    text = f"{size:.2f}".rstrip("0").rstrip(".")
    return f"{text} {BYTE_UNITS[order]}"


def truncate_text(text: Optional[str], budget: int) -> str:
    """
    Si el texto supera `budget` caracteres, conserva los primeros
    `budget - 3` y añade "...". Si no, lo devuelve intacto.
    """
    if budget < len(ELLIPSIS):
        raise ValidationException(
            f"El límite de truncado debe ser >= {len(ELLIPSIS)}: {budget}",
            field="budget",
        )
    text = text or ""
    if len(text) > budget:
        return text[: budget - len(ELLIPSIS)] + ELLIPSIS
    return text


def format_average(total: int, count: int) -> str:
    """Media con un decimal ("2.3"); "0" si no hay denominador."""
    if count == 0:
        return "0"
    return f"{total / count:.1f}"


def format_date(value: Optional[date]) -> str:
    if value is None:
        return "-"
    return value.strftime("%d/%m/%Y")


def format_datetime(value: Optional[datetime]) -> str:
    if value is None:
        return "-"
    return value.strftime("%d/%m/%Y %H:%M")

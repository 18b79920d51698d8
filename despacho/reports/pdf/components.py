"""
Bloques reutilizables de los informes (flowables de Platypus).

Todos devuelven flowables listos para añadir al story; ninguno conoce
el almacenamiento ni la base de datos.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib.colors import Color, HexColor
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.platypus import Flowable, HRFlowable, Paragraph, Spacer, Table, TableStyle

from despacho.core.config import get_settings
from despacho.reports.formatting import status_background_color, status_color, status_label

from .styles import (
    COLOR_BG_ALT,
    COLOR_BORDER,
    COLOR_GOLD,
    COLOR_PRIMARY,
    COLOR_WHITE,
    GOLD_HEX,
    build_paragraph_styles,
    create_professional_table_style,
)

PAGE_MARGIN = 1.5 * cm
CONTENT_WIDTH = A4[0] - 2 * PAGE_MARGIN

STYLES = build_paragraph_styles()


def _safe(value: Any) -> str:
    return escape("" if value is None else str(value))


@dataclass
class StatTile:
    """Tarjeta del resumen: valor grande y etiqueta en mayúsculas."""

    label: str
    value: str
    color: Optional[Color] = None
    background: Optional[Color] = None


# =========================
# CABECERA
# =========================

def header_block(title: str, subtitle: str, generated_at: datetime) -> List[Flowable]:
    brand = [
        Paragraph(_safe(get_settings().firm_name), STYLES["brand"]),
        Paragraph(_safe(get_settings().firm_tagline), STYLES["tagline"]),
    ]
    stamp = Paragraph(
        f"{generated_at.strftime('%d/%m/%Y')}<br/>{generated_at.strftime('%H:%M')} hrs",
        STYLES["meta"],
    )

    top = Table([[brand, stamp]], colWidths=[CONTENT_WIDTH * 0.7, CONTENT_WIDTH * 0.3])
    top.setStyle(
        TableStyle(
            [
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("LEFTPADDING", (0, 0), (-1, -1), 0),
                ("RIGHTPADDING", (0, 0), (-1, -1), 0),
            ]
        )
    )

    return [
        top,
        HRFlowable(width="100%", thickness=2, color=COLOR_GOLD, spaceBefore=6, spaceAfter=10),
        Paragraph(_safe(title), STYLES["title"]),
        Paragraph(_safe(subtitle), STYLES["subtitle"]),
        Spacer(1, 0.5 * cm),
    ]


# =========================
# RESUMEN
# =========================

def stat_tiles(tiles: Sequence[StatTile]) -> Table:
    """Fila de tarjetas de igual ancho, cada una con su propio borde."""
    if not tiles:
        raise ValueError("stat_tiles requiere al menos una tarjeta")

    gap = 0.2 * cm
    tile_width = (CONTENT_WIDTH - gap * (len(tiles) - 1)) / len(tiles)

    values = []
    labels = []
    widths = []
    commands = [
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING", (0, 0), (-1, 0), 8),
        ("BOTTOMPADDING", (0, 1), (-1, 1), 8),
    ]

    for i, tile in enumerate(tiles):
        col = i * 2
        value_style = STYLES["tile_value"]
        if tile.color is not None:
            value_style = value_style.clone(f"TileValue{i}", textColor=tile.color)
        values.append(Paragraph(_safe(tile.value), value_style))
        labels.append(Paragraph(_safe(tile.label), STYLES["tile_label"]))
        widths.append(tile_width)
        commands.append(("BACKGROUND", (col, 0), (col, 1), tile.background or COLOR_WHITE))
        commands.append(("BOX", (col, 0), (col, 1), 0.75, tile.color or COLOR_BORDER))

        if i < len(tiles) - 1:
            values.append("")
            labels.append("")
            widths.append(gap)

    table = Table([values, labels], colWidths=widths)
    table.setStyle(TableStyle(commands))
    return table


def status_tile(status: Any, count: int) -> StatTile:
    return StatTile(
        label=status_label(status).upper(),
        value=str(count),
        color=HexColor(status_color(status)),
        background=HexColor(status_background_color(status)),
    )


# =========================
# SECCIONES Y BANDAS
# =========================

def section_heading(text: str) -> List[Flowable]:
    return [
        Paragraph(_safe(text), STYLES["section"]),
        HRFlowable(width="100%", thickness=0.75, color=COLOR_BORDER, spaceAfter=6),
    ]


def _band(cells: list, widths: list, background: Color) -> Table:
    band = Table([cells], colWidths=widths)
    band.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, -1), background),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("LEFTPADDING", (0, 0), (-1, -1), 8),
                ("RIGHTPADDING", (0, 0), (-1, -1), 8),
                ("TOPPADDING", (0, 0), (-1, -1), 5),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
            ]
        )
    )
    return band


def status_band(status: Any, count: int) -> Table:
    """Banda de grupo: "<estado> (<n> expedientes)" sobre el color del estado."""
    text = f"{status_label(status)} ({count} expedientes)"
    return _band(
        [Paragraph(_safe(text), STYLES["band"])],
        [CONTENT_WIDTH],
        HexColor(status_color(status)),
    )


def case_band(case_number: str, subject: str, action_count: int) -> Table:
    number = Paragraph(
        f'<font color="{GOLD_HEX}">{_safe(case_number)}</font>',
        STYLES["band"],
    )
    title = Paragraph(_safe(subject), STYLES["band"])
    total = Paragraph(
        f"{action_count} actuaciones",
        STYLES["band"].clone("BandRight", alignment=TA_RIGHT, fontName="Helvetica", fontSize=9),
    )
    return _band(
        [number, title, total],
        [CONTENT_WIDTH * 0.22, CONTENT_WIDTH * 0.58, CONTENT_WIDTH * 0.20],
        COLOR_PRIMARY,
    )


def case_info_row(client_name: Optional[str], status: Any) -> Table:
    """Fila bajo la banda del expediente: cliente y etiqueta de estado."""
    client_text = f"Cliente: {client_name}" if client_name else "Sin cliente"
    chip_style = STYLES["cell"].clone(
        "StatusChip",
        fontName="Helvetica-Bold",
        alignment=TA_CENTER,
        textColor=HexColor(status_color(status)),
    )

    row = Table(
        [[Paragraph(_safe(client_text), STYLES["cell"]), Paragraph(_safe(status_label(status)), chip_style)]],
        colWidths=[CONTENT_WIDTH * 0.78, CONTENT_WIDTH * 0.22],
    )
    row.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (0, 0), COLOR_BG_ALT),
                ("BACKGROUND", (1, 0), (1, 0), HexColor(status_background_color(status))),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("LEFTPADDING", (0, 0), (-1, -1), 8),
                ("TOPPADDING", (0, 0), (-1, -1), 4),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
            ]
        )
    )
    return row


# =========================
# TABLAS Y NOTAS
# =========================

def data_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    col_widths: Sequence[float],
    header_color: Color = COLOR_PRIMARY,
) -> Table:
    """
    Tabla con cabecera fija (se repite en cada página) y filas alternadas
    según la paridad del índice de fila dentro de la tabla.
    """
    data: list = [list(headers)]
    for row in rows:
        data.append([Paragraph(_safe(value), STYLES["cell"]) for value in row])

    table = Table(data, colWidths=list(col_widths), repeatRows=1)
    table.setStyle(create_professional_table_style(header_color))
    return table


def note_band(text: str) -> Table:
    note = Table([[Paragraph(_safe(text), STYLES["note"])]], colWidths=[CONTENT_WIDTH])
    note.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, -1), COLOR_BG_ALT),
                ("LINEBEFORE", (0, 0), (0, -1), 3, COLOR_GOLD),
                ("LEFTPADDING", (0, 0), (-1, -1), 10),
                ("TOPPADDING", (0, 0), (-1, -1), 8),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
            ]
        )
    )
    return note


def empty_message(text: str) -> Paragraph:
    return Paragraph(_safe(text), STYLES["subtitle"])


def spacer(height_cm: float = 0.4) -> Spacer:
    return Spacer(1, height_cm * cm)


__all__ = [
    "CONTENT_WIDTH",
    "PAGE_MARGIN",
    "StatTile",
    "case_band",
    "case_info_row",
    "data_table",
    "empty_message",
    "header_block",
    "note_band",
    "section_heading",
    "spacer",
    "stat_tiles",
    "status_band",
    "status_tile",
]

from __future__ import annotations

from datetime import datetime

from reportlab.lib.colors import HexColor
from reportlab.lib.units import cm

from despacho.reports.aggregators import CasesByStatusData
from despacho.reports.formatting import format_date, format_datetime, status_color, truncate_text

from .components import (
    data_table,
    empty_message,
    header_block,
    note_band,
    spacer,
    stat_tiles,
    status_band,
    status_tile,
)
from .document import build_pdf

TITLE = "Informe de Expedientes por Estado"

SUBJECT_BUDGET = 45

HEADERS = ["NUMERO", "ASUNTO", "CLIENTE", "F. INICIO", "ACT."]
COL_WIDTHS = [3.0 * cm, 7.0 * cm, 4.4 * cm, 2.2 * cm, 1.4 * cm]


def render_cases_by_status(data: CasesByStatusData, generated_at: datetime) -> bytes:
    """
    Resumen por estado: una tarjeta por cada uno de los cinco estados
    (también los vacíos) y una tabla por estado con expedientes.
    """
    story = []
    story.extend(
        header_block(
            TITLE,
            f"Resumen ejecutivo - {data.total_cases} expedientes en {len(data.groups)} estados",
            generated_at,
        )
    )

    story.append(stat_tiles([status_tile(status, count) for status, count in data.status_counts.items()]))
    story.append(spacer(0.6))

    if not data.groups:
        story.append(empty_message("No hay expedientes registrados."))

    for group in data.groups:
        story.append(status_band(group.status, group.count))
        rows = [
            [
                case.case_number,
                truncate_text(case.subject, SUBJECT_BUDGET),
                case.client_name or "-",
                format_date(case.opened_at),
                case.total_actions,
            ]
            for case in group.cases
        ]
        story.append(data_table(HEADERS, rows, COL_WIDTHS, header_color=HexColor(status_color(group.status))))
        story.append(spacer(0.5))

    story.append(
        note_band(
            f"Este informe muestra {data.total_cases} expedientes distribuidos en "
            f"{len(data.groups)} estados diferentes. "
            f"Datos actualizados al {format_datetime(generated_at)}."
        )
    )

    return build_pdf(story, generated_at, title=TITLE)

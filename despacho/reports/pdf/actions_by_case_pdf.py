from __future__ import annotations

from datetime import datetime

from reportlab.lib.units import cm

from despacho.reports.aggregators import ActionsByCaseData
from despacho.reports.formatting import format_average, format_date, format_datetime, truncate_text

from .components import (
    StatTile,
    case_band,
    case_info_row,
    data_table,
    empty_message,
    header_block,
    note_band,
    spacer,
    stat_tiles,
)
from .document import build_pdf

TITLE = "Informe de Actuaciones por Expediente"

DESCRIPTION_BUDGET = 70

HEADERS = ["#", "FECHA", "TIPO", "DESCRIPCION"]
COL_WIDTHS = [0.8 * cm, 2.4 * cm, 3.6 * cm, 11.2 * cm]


def render_actions_by_case(data: ActionsByCaseData, generated_at: datetime) -> bytes:
    story = []
    story.extend(
        header_block(
            TITLE,
            f"Registro de actividad - {data.total_actions} actuaciones en {data.total_cases} expedientes",
            generated_at,
        )
    )

    story.append(
        stat_tiles(
            [
                StatTile("EXPEDIENTES ACTIVOS", str(data.total_cases)),
                StatTile("TOTAL ACTUACIONES", str(data.total_actions)),
                StatTile("TIPOS DE ACTUACION", str(data.distinct_action_types)),
                StatTile("MEDIA ACT/EXP", format_average(data.total_actions, data.total_cases)),
            ]
        )
    )
    story.append(spacer(0.6))

    if not data.cases:
        story.append(empty_message("No hay actuaciones registradas."))

    for case in data.cases:
        story.append(case_band(case.case_number, case.subject, case.count))
        story.append(case_info_row(case.client_name, case.status))
        rows = [
            [
                index,
                format_date(action.action_date),
                action.action_type,
                truncate_text(action.description, DESCRIPTION_BUDGET),
            ]
            for index, action in enumerate(case.actions, start=1)
        ]
        story.append(data_table(HEADERS, rows, COL_WIDTHS))
        story.append(spacer(0.5))

    story.append(
        note_band(
            f"Este informe detalla {data.total_actions} actuaciones distribuidas en "
            f"{data.total_cases} expedientes activos. "
            f"Datos actualizados al {format_datetime(generated_at)}."
        )
    )

    return build_pdf(story, generated_at, title=TITLE)

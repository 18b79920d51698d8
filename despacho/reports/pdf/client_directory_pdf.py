from __future__ import annotations

from datetime import datetime

from reportlab.lib.units import cm

from despacho.reports.aggregators import ClientDirectoryData
from despacho.reports.formatting import format_average, format_datetime

from .components import (
    StatTile,
    data_table,
    empty_message,
    header_block,
    note_band,
    section_heading,
    spacer,
    stat_tiles,
)
from .document import build_pdf

TITLE = "Informe de Clientes"

HEADERS = ["#", "NOMBRE COMPLETO", "DNI / CIF", "TELEFONO", "EMAIL", "CIUDAD", "EXP."]
COL_WIDTHS = [0.8 * cm, 4.2 * cm, 2.4 * cm, 2.4 * cm, 4.4 * cm, 2.6 * cm, 1.2 * cm]


def _or_dash(value) -> str:
    return value if value else "-"


def render_client_directory(data: ClientDirectoryData, generated_at: datetime) -> bytes:
    """Directorio de clientes con contacto y número de expedientes."""
    story = []
    story.extend(
        header_block(
            TITLE,
            f"Directorio completo - {data.total_clients} clientes registrados",
            generated_at,
        )
    )

    story.append(
        stat_tiles(
            [
                StatTile("TOTAL CLIENTES", str(data.total_clients)),
                StatTile("EXPEDIENTES", str(data.total_cases)),
                StatTile("CIUDADES", str(data.distinct_cities)),
                StatTile("MEDIA EXP/CLIENTE", format_average(data.total_cases, data.total_clients)),
            ]
        )
    )
    story.append(spacer(0.6))

    story.extend(section_heading("Directorio de Clientes"))
    if data.rows:
        rows = [
            [
                index,
                row.full_name,
                row.tax_id,
                _or_dash(row.phone),
                _or_dash(row.email),
                _or_dash(row.city),
                row.total_cases,
            ]
            for index, row in enumerate(data.rows, start=1)
        ]
        story.append(data_table(HEADERS, rows, COL_WIDTHS))
    else:
        story.append(empty_message("No hay clientes registrados."))

    story.append(spacer(0.6))
    story.append(
        note_band(
            f"Este informe contiene {data.total_clients} clientes registrados con un total de "
            f"{data.total_cases} expedientes asociados. "
            f"Datos actualizados al {format_datetime(generated_at)}."
        )
    )

    return build_pdf(story, generated_at, title=TITLE)

from __future__ import annotations

from datetime import datetime
from functools import partial
from io import BytesIO
from typing import List

from reportlab.lib.pagesizes import A4
from reportlab.platypus import Flowable, SimpleDocTemplate

from .canvas import NumberedCanvas
from .components import PAGE_MARGIN
from .styles import COLOR_BG


def _paint_background(canvas, doc) -> None:
    canvas.saveState()
    canvas.setFillColor(COLOR_BG)
    canvas.rect(0, 0, doc.pagesize[0], doc.pagesize[1], stroke=0, fill=1)
    canvas.restoreState()


def build_pdf(story: List[Flowable], generated_at: datetime, title: str = "") -> bytes:
    """
    Serializa un story de Platypus a bytes PDF (A4, márgenes 1,5 cm).

    El pie con "Página X de Y" lo dibuja NumberedCanvas en la segunda pasada.
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=PAGE_MARGIN,
        leftMargin=PAGE_MARGIN,
        topMargin=PAGE_MARGIN,
        bottomMargin=PAGE_MARGIN + 0.5 * PAGE_MARGIN,
        title=title,
    )

    doc.build(
        story,
        onFirstPage=_paint_background,
        onLaterPages=_paint_background,
        canvasmaker=partial(NumberedCanvas, generated_at=generated_at),
    )

    pdf_bytes = buffer.getvalue()
    buffer.close()
    return pdf_bytes

from datetime import datetime
from typing import Optional

from reportlab.lib.units import cm
from reportlab.pdfgen import canvas

from despacho.core.config import get_settings
from despacho.reports.formatting import format_datetime

from .styles import COLOR_BORDER, COLOR_MUTED


class NumberedCanvas(canvas.Canvas):
    """
    Canvas con doble pasada para numeración correcta.

    CRÍTICO: ReportLab requiere dos pasadas:
    1. Primera: guardar estados de cada página
    2. Segunda: dibujar el pie con el total de páginas conocido

    Se instancia con functools.partial para inyectar la fecha de generación.
    """

    def __init__(self, *args, generated_at: Optional[datetime] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states = []
        self._generated_at = generated_at or datetime.now()

    def showPage(self):
        """Primera pasada: guardar estado sin dibujar el pie."""
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        """Segunda pasada: pie en TODAS las páginas con el total correcto."""
        num_pages = len(self._saved_page_states)

        for state in self._saved_page_states:
            self.__dict__.update(state)
            self.draw_footer(num_pages)
            super().showPage()

        super().save()

    def draw_footer(self, page_count: int) -> None:
        width, _ = self._pagesize
        left = 1.5 * cm
        right = width - 1.5 * cm
        baseline = 1.0 * cm

        self.saveState()
        self.setStrokeColor(COLOR_BORDER)
        self.setLineWidth(0.5)
        self.line(left, baseline + 0.45 * cm, right, baseline + 0.45 * cm)

        self.setFont("Helvetica", 7)
        self.setFillColor(COLOR_MUTED)
        self.drawString(left, baseline, get_settings().confidentiality_notice)
        self.drawCentredString(width / 2, baseline, f"Página {self._pageNumber} de {page_count}")
        self.drawRightString(right, baseline, f"Generado: {format_datetime(self._generated_at)}")
        self.restoreState()

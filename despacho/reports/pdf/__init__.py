"""
Paquete PDF del despacho.

Un módulo por informe (render_*) sobre bloques comunes: estilos, canvas
numerado, componentes y serialización a bytes.
"""

from .actions_by_case_pdf import render_actions_by_case
from .canvas import NumberedCanvas
from .cases_by_status_pdf import render_cases_by_status
from .client_directory_pdf import render_client_directory
from .document import build_pdf

__all__ = [
    "NumberedCanvas",
    "build_pdf",
    "render_actions_by_case",
    "render_cases_by_status",
    "render_client_directory",
]

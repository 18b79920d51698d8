"""
Tests del compositor PDF (ReportLab).

No se inspecciona el contenido visual: se comprueba que los bytes son un
PDF válido, el número de páginas y la numeración "Página X de Y".
"""
import re
from datetime import datetime
from io import BytesIO

from reportlab.lib.pagesizes import A4

from despacho.models import CaseStatus
from despacho.reports.aggregators import (
    ActionRow,
    ActionsByCaseData,
    CaseActions,
    CaseRow,
    CasesByStatusData,
    ClientDirectoryData,
    ClientRow,
    StatusGroup,
)
from despacho.reports.pdf import (
    NumberedCanvas,
    render_actions_by_case,
    render_cases_by_status,
    render_client_directory,
)
from despacho.reports.pdf.styles import COLOR_BG_ALT, COLOR_WHITE, ZEBRA_COLORS

GENERATED_AT = datetime(2024, 6, 15, 10, 30, 45)


def _page_count(pdf_bytes: bytes) -> int:
    return len(re.findall(rb"/Type\s*/Page(?!s)", pdf_bytes))


def _client_rows(n):
    return [
        ClientRow(
            id=i,
            full_name=f"Cliente {i} <&>",
            tax_id=f"{i:08d}X",
            phone=None,
            email=f"cliente{i}@example.com",
            city="Madrid" if i % 2 else None,
            total_cases=i % 3,
        )
        for i in range(1, n + 1)
    ]


def test_client_directory_pdf_is_valid():
    data = ClientDirectoryData(rows=_client_rows(3), total_cases=3, distinct_cities=1)

    pdf = render_client_directory(data, GENERATED_AT)

    assert pdf.startswith(b"%PDF")
    assert pdf.rstrip().endswith(b"%%EOF")
    assert _page_count(pdf) == 1


def test_client_directory_pdf_with_no_clients():
    pdf = render_client_directory(ClientDirectoryData(), GENERATED_AT)

    assert pdf.startswith(b"%PDF")


def test_long_table_spans_several_pages():
    data = ClientDirectoryData(rows=_client_rows(150), total_cases=150, distinct_cities=1)

    pdf = render_client_directory(data, GENERATED_AT)

    assert _page_count(pdf) > 1


def test_cases_by_status_pdf():
    row = CaseRow(
        id=1,
        case_number="EXP-2024-001",
        subject="Reclamación de cantidad por impago de facturas de suministro eléctrico",
        client_name=None,
        opened_at=datetime(2024, 1, 10),
        status=CaseStatus.OPEN,
        total_actions=2,
        total_appointments=1,
    )
    counts = {status: 0 for status in CaseStatus}
    counts[CaseStatus.OPEN] = 1
    data = CasesByStatusData(groups=[StatusGroup(CaseStatus.OPEN, [row])], status_counts=counts)

    pdf = render_cases_by_status(data, GENERATED_AT)

    assert pdf.startswith(b"%PDF")


def test_cases_by_status_pdf_without_cases():
    data = CasesByStatusData(groups=[], status_counts={status: 0 for status in CaseStatus})

    assert render_cases_by_status(data, GENERATED_AT).startswith(b"%PDF")


def test_default_cases_by_status_data_renders_five_zero_tiles():
    data = CasesByStatusData()

    assert data.status_counts == {status: 0 for status in CaseStatus}
    assert render_cases_by_status(data, GENERATED_AT).startswith(b"%PDF")


def test_actions_by_case_pdf():
    case = CaseActions(
        case_id=1,
        case_number="EXP-2024-001",
        subject="Divorcio contencioso",
        client_name="Ana García",
        status=CaseStatus.SUSPENDED,
        actions=[
            ActionRow(id=i, action_date=datetime(2024, 3, i), action_type="Escrito", description="x" * 120)
            for i in range(1, 4)
        ],
    )
    data = ActionsByCaseData(cases=[case], distinct_action_types=1)

    pdf = render_actions_by_case(data, GENERATED_AT)

    assert pdf.startswith(b"%PDF")
    assert _page_count(pdf) == 1


def test_zebra_rows_alternate_white_and_secondary_background():
    assert ZEBRA_COLORS == [COLOR_WHITE, COLOR_BG_ALT]


def test_numbered_canvas_knows_total_pages(monkeypatch):
    drawn = []
    monkeypatch.setattr(
        NumberedCanvas,
        "draw_footer",
        lambda self, page_count: drawn.append((self._pageNumber, page_count)),
    )

    canvas = NumberedCanvas(BytesIO(), pagesize=A4, generated_at=GENERATED_AT)
    for _ in range(3):
        canvas.drawString(100, 100, "contenido")
        canvas.showPage()
    canvas.save()

    assert drawn == [(1, 3), (2, 3), (3, 3)]


def test_numbered_canvas_draws_footer_without_errors():
    buffer = BytesIO()
    canvas = NumberedCanvas(buffer, pagesize=A4, generated_at=GENERATED_AT)
    canvas.showPage()
    canvas.save()

    assert buffer.getvalue().startswith(b"%PDF")

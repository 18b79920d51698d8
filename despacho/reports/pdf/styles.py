from reportlab.lib import colors
from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import TableStyle

# Paleta corporativa (marrones y dorados)
COLOR_PRIMARY = HexColor("#5D4E37")
COLOR_SECONDARY = HexColor("#8B7355")
GOLD_HEX = "#D4AF37"
COLOR_GOLD = HexColor(GOLD_HEX)
COLOR_TEXT = HexColor("#3E2723")
COLOR_MUTED = HexColor("#8B7355")
COLOR_BG = HexColor("#FAF8F3")
COLOR_BG_ALT = HexColor("#F5F1E8")
COLOR_BORDER = HexColor("#D4C5B0")
COLOR_WHITE = colors.white

# Filas pares en blanco, impares en el fondo secundario
ZEBRA_COLORS = [COLOR_WHITE, COLOR_BG_ALT]


def create_professional_table_style(header_color=COLOR_PRIMARY) -> TableStyle:
    """Estilo de tabla con cabecera de color y filas alternadas."""
    return TableStyle(
        [
            # Header
            ("BACKGROUND", (0, 0), (-1, 0), header_color),
            ("TEXTCOLOR", (0, 0), (-1, 0), COLOR_WHITE),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, 0), 8),
            ("TOPPADDING", (0, 0), (-1, 0), 6),
            ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
            # Filas alternadas
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), ZEBRA_COLORS),
            # Bordes
            ("BOX", (0, 0), (-1, -1), 0.75, COLOR_BORDER),
            ("LINEBELOW", (0, 0), (-1, -2), 0.25, COLOR_BORDER),
            # Alineación y padding
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("LEFTPADDING", (0, 0), (-1, -1), 5),
            ("RIGHTPADDING", (0, 0), (-1, -1), 5),
            ("TOPPADDING", (0, 1), (-1, -1), 4),
            ("BOTTOMPADDING", (0, 1), (-1, -1), 4),
            # Fuente de datos
            ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
            ("FONTSIZE", (0, 1), (-1, -1), 8),
            ("TEXTCOLOR", (0, 1), (-1, -1), COLOR_TEXT),
        ]
    )


def build_paragraph_styles() -> dict:
    """Estilos de párrafo compartidos por los tres informes."""
    base = getSampleStyleSheet()
    return {
        "brand": ParagraphStyle(
            "DespachoBrand",
            parent=base["Normal"],
            fontName="Helvetica-Bold",
            fontSize=16,
            leading=19,
            textColor=COLOR_GOLD,
        ),
        "tagline": ParagraphStyle(
            "DespachoTagline",
            parent=base["Normal"],
            fontSize=8,
            textColor=COLOR_MUTED,
        ),
        "meta": ParagraphStyle(
            "DespachoMeta",
            parent=base["Normal"],
            fontSize=9,
            leading=12,
            textColor=COLOR_MUTED,
            alignment=TA_RIGHT,
        ),
        "title": ParagraphStyle(
            "DespachoTitle",
            parent=base["Heading1"],
            fontSize=18,
            leading=22,
            textColor=COLOR_PRIMARY,
            spaceBefore=0,
            spaceAfter=2,
        ),
        "subtitle": ParagraphStyle(
            "DespachoSubtitle",
            parent=base["Normal"],
            fontSize=10,
            textColor=COLOR_SECONDARY,
        ),
        "section": ParagraphStyle(
            "DespachoSection",
            parent=base["Heading2"],
            fontSize=12,
            textColor=COLOR_PRIMARY,
            spaceBefore=4,
            spaceAfter=4,
        ),
        "tile_value": ParagraphStyle(
            "DespachoTileValue",
            parent=base["Normal"],
            fontName="Helvetica-Bold",
            fontSize=18,
            leading=22,
            textColor=COLOR_PRIMARY,
            alignment=TA_CENTER,
        ),
        "tile_label": ParagraphStyle(
            "DespachoTileLabel",
            parent=base["Normal"],
            fontSize=7,
            leading=9,
            textColor=COLOR_MUTED,
            alignment=TA_CENTER,
        ),
        "band": ParagraphStyle(
            "DespachoBand",
            parent=base["Normal"],
            fontName="Helvetica-Bold",
            fontSize=10,
            textColor=COLOR_WHITE,
        ),
        "cell": ParagraphStyle(
            "DespachoCell",
            parent=base["Normal"],
            fontSize=8,
            leading=10,
            textColor=COLOR_TEXT,
        ),
        "note": ParagraphStyle(
            "DespachoNote",
            parent=base["Normal"],
            fontSize=8,
            leading=11,
            textColor=COLOR_TEXT,
        ),
    }

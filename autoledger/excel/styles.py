"""
Workbook palette, fonts, fills and number formats for ledger reports.
"""
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

NAVY = "1F4E79"
INK = "17375E"
GRAY = "666666"
RULE = "CCCCCC"
STRIPE = "F5F5F5"
ROSE = "FCE4E4"
CREAM = "FFF2CC"


def _solid(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _box(color: str, bottom: str = "thin") -> Border:
    side = Side(style="thin", color=color)
    return Border(left=side, right=side, top=side, bottom=Side(style=bottom, color=color))


# Fonts
TITLE_FONT = Font(name="Calibri", size=20, bold=True, color=INK)
SUBTITLE_FONT = Font(name="Calibri", size=11, italic=True, color=GRAY)
SECTION_FONT = Font(name="Calibri", size=14, bold=True, color=INK)
HEADER_FONT = Font(name="Calibri", size=11, bold=True, color="FFFFFF")
CELL_FONT = Font(name="Calibri", size=10, color="000000")
KPI_VALUE_FONT = Font(name="Calibri", size=24, bold=True, color=NAVY)
KPI_LABEL_FONT = Font(name="Calibri", size=10, color=GRAY)

# Fills / borders
HEADER_FILL = _solid(NAVY)
STRIPE_FILL = _solid(STRIPE)
HEADER_BORDER = _box(INK, bottom="medium")
CELL_BORDER = _box(RULE)

# Row fill per payment-status bucket; "current" rows keep the zebra stripe
STATUS_FILLS = {
    "late": _solid(ROSE),
    "no_payments": _solid(CREAM),
}

CENTER = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")

# Column / KPI kinds that carry a number format; everything else is text
NUMBER_FORMATS = {
    "currency": '"$"#,##0.00',
    "number": "#,##0",
}

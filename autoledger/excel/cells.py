"""
Cell-level writers: header rows, table cells, KPI cards, column fitting.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, NamedTuple, Optional

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from autoledger.excel.styles import (
    CELL_BORDER, CELL_FONT, CENTER, HEADER_BORDER, HEADER_FILL, HEADER_FONT,
    KPI_LABEL_FONT, KPI_VALUE_FONT, LEFT, NUMBER_FORMATS, RIGHT, STATUS_FILLS,
    STRIPE_FILL,
)


class Kpi(NamedTuple):
    value: Any
    label: str
    kind: str = "number"


def _plain(value):
    # openpyxl cannot store Decimal
    return float(value) if isinstance(value, Decimal) else value


def write_header(ws: Worksheet, row: int, labels: list[str]) -> None:
    for col, label in enumerate(labels, 1):
        cell = ws.cell(row=row, column=col, value=label)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = CENTER
        cell.border = HEADER_BORDER


def write_cell(
    ws: Worksheet,
    row: int,
    col: int,
    value,
    kind: str = "text",
    status: Optional[str] = None,
) -> None:
    """One table cell; ``status`` picks a bucket fill, otherwise even rows are striped."""
    cell = ws.cell(row=row, column=col, value=_plain(value))
    cell.font = CELL_FONT
    cell.border = CELL_BORDER
    if kind in NUMBER_FORMATS:
        cell.number_format = NUMBER_FORMATS[kind]
        cell.alignment = RIGHT
    else:
        cell.alignment = LEFT

    fill = STATUS_FILLS.get(status) if status else None
    if fill is not None:
        cell.fill = fill
    elif row % 2 == 0:
        cell.fill = STRIPE_FILL


def write_kpi(ws: Worksheet, row: int, col: int, kpi: Kpi) -> None:
    """Large value with a small caption underneath."""
    value = ws.cell(row=row, column=col, value=_plain(kpi.value))
    value.font = KPI_VALUE_FONT
    value.alignment = CENTER
    if kpi.kind in NUMBER_FORMATS:
        value.number_format = NUMBER_FORMATS[kpi.kind]

    caption = ws.cell(row=row + 1, column=col, value=kpi.label)
    caption.font = KPI_LABEL_FONT
    caption.alignment = CENTER


def fit_columns(ws: Worksheet, narrowest: int = 10, widest: int = 45) -> None:
    for column in ws.columns:
        longest = max((len(str(c.value)) for c in column if c.value is not None), default=0)
        letter = get_column_letter(column[0].column)
        ws.column_dimensions[letter].width = min(max(longest + 2, narrowest), widest)

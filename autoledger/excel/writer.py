"""
LedgerWorkbook — builds the styled sheets of a customer ledger report.
"""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Sequence

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from autoledger.excel.cells import Kpi, fit_columns, write_cell, write_header, write_kpi
from autoledger.excel.styles import SECTION_FONT, SUBTITLE_FONT, TITLE_FONT

ColSpec = tuple[str, str, str]  # (key, kind, label)
StatusFn = Callable[[dict], Optional[str]]

KPI_SPACING = 2


class LedgerWorkbook:
    """Sheets are appended in call order; the workbook's default sheet is reused first."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._sheets = 0

    def sheet(self, title: str) -> Worksheet:
        if self._sheets == 0:
            ws = self.wb.active
            ws.title = title
        else:
            ws = self.wb.create_sheet(title=title)
        self._sheets += 1
        return ws

    # ------------------------------------------------------------------
    # Summary blocks
    # ------------------------------------------------------------------

    def title(self, ws: Worksheet, title: str, subtitle: str, span: int = 8) -> int:
        """Merged title and subtitle rows. Returns the first free row."""
        for row, text, font in ((1, title, TITLE_FONT), (2, subtitle, SUBTITLE_FONT)):
            ws.cell(row=row, column=1, value=text).font = font
            ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=span)
        return 4

    def section(self, ws: Worksheet, row: int, heading: str, *kpi_rows: Sequence[Kpi]) -> int:
        """Heading followed by rows of KPI cards. Returns the first free row."""
        ws.cell(row=row, column=1, value=heading).font = SECTION_FONT
        row += 2
        for kpis in kpi_rows:
            for i, kpi in enumerate(kpis):
                write_kpi(ws, row, 1 + i * KPI_SPACING, kpi)
            row += 3
        return row

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def table(
        self,
        ws: Worksheet,
        columns: Sequence[ColSpec],
        rows: Sequence[dict],
        status_of: StatusFn | None = None,
        start_row: int = 1,
    ) -> int:
        """Header plus one row per dict, frozen below the header.

        ``status_of(row)`` names a payment-status bucket used to tint the row.
        Returns the row after the last one written.
        """
        write_header(ws, start_row, [label for _, _, label in columns])

        row = start_row + 1
        for data in rows:
            status = status_of(data) if status_of else None
            for col, (key, kind, _) in enumerate(columns, 1):
                write_cell(ws, row, col, data.get(key), kind, status)
            row += 1

        fit_columns(ws)
        ws.freeze_panes = f"A{start_row + 1}"
        return row

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path

"""Styled openpyxl workbooks for ledger reports."""
from .cells import Kpi
from .writer import LedgerWorkbook

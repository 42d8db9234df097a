"""
AutoLedger — Configuration: paths, constants, field groups.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths — override with AUTOLEDGER_DATA_DIR env var for deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("AUTOLEDGER_DATA_DIR", str(Path.home() / "AutoLedger")))
DATA_FOLDER = _data_dir / "data"
REPORTS_FOLDER = _data_dir / "reports"

DEFAULT_DATA_FILE = "data.json"

# Record files picked up by discovery (matched case-insensitively on suffix)
RECORD_SUFFIXES = (".json", ".csv")

# ---------------------------------------------------------------------------
# Payment rules
# ---------------------------------------------------------------------------
LATE_PAYMENT_DAYS = 30

# Relative-time rendering uses a flat 30-day month, not calendar months
DAYS_PER_MONTH = 30

# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------
# Fixed English month names so date rendering ignores the process locale
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

CURRENCY_SYMBOL = "$"

# ---------------------------------------------------------------------------
# Record columns, in the order they appear in exports and CSV files
# ---------------------------------------------------------------------------
RECORD_COLUMNS = [
    "id",
    "first_name",
    "last_name",
    "purchased",
    "lastpayment",
    "phone",
    "make",
    "model",
    "city",
    "payment_amount",
]

REQUIRED_COLUMNS = RECORD_COLUMNS[:-1]

# (key, col_type, label) triples used by the Excel customer sheet
CUSTOMER_EXPORT_COLUMNS = [
    ("id", "number", "ID"),
    ("name", "text", "Customer"),
    ("vehicle", "text", "Vehicle"),
    ("city", "text", "City"),
    ("phone", "text", "Phone"),
    ("purchased", "text", "Purchased"),
    ("lastpayment", "text", "Last Payment"),
    ("payment_amount", "currency", "Payment Amount"),
    ("status", "text", "Status"),
]

"""
Record-file discovery and loading (JSON arrays and CSV exports).
"""
from __future__ import annotations

import json
from pathlib import Path

import pandas as pd

from autoledger.config import DATA_FOLDER, RECORD_SUFFIXES
from autoledger.data.normalize import clean_record, missing_columns
from autoledger.data.schemas import Customer


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

def discover_record_files(folder: Path = DATA_FOLDER) -> list[Path]:
    """Recursively find JSON/CSV record files, most recently modified first."""
    matches: list[Path] = []
    if not folder.exists():
        return matches

    for path in folder.rglob("*"):
        if path.is_file() and path.suffix.lower() in RECORD_SUFFIXES:
            matches.append(path)

    matches.sort(key=lambda p: p.stat().st_mtime, reverse=True)
    return matches


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def load_json_records(path: Path) -> list[Customer]:
    """Load a JSON array of customer objects."""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"{path.name}: expected a JSON array of customer records")
    return [Customer.from_record(clean_record(r)) for r in raw]


def load_csv_records(path: Path) -> list[Customer]:
    """Load a CSV export; blank payment_amount cells read as absent.

    Only payment_amount has an NA marker, so text such as "NA" or "null"
    in a name, model or city is kept as written.
    """
    df = pd.read_csv(
        path,
        dtype={"phone": str},
        keep_default_na=False,
        na_values={"payment_amount": [""]},
    )
    missing = missing_columns(df.columns)
    if missing:
        raise ValueError(f"{path.name}: missing columns {', '.join(missing)}")
    return [Customer.from_record(clean_record(r)) for r in df.to_dict("records")]


def load_records(path: Path) -> list[Customer]:
    """Load one record file, dispatching on its suffix."""
    suffix = path.suffix.lower()
    if suffix == ".json":
        customers = load_json_records(path)
    elif suffix == ".csv":
        customers = load_csv_records(path)
    else:
        raise ValueError(f"Unsupported record file: {path.name}")
    print(f"  {path.name}: {len(customers):,} customers")
    return customers


def load_folder(folder: Path = DATA_FOLDER) -> list[Customer]:
    """Load every discovered record file, concatenated most recent first."""
    print(f"Loading customer records from {folder}...")
    files = discover_record_files(folder)
    if not files:
        print("  No record files found — starting with empty store")
        return []

    customers: list[Customer] = []
    for path in files:
        customers.extend(load_records(path))
    print(f"  Loaded {len(customers):,} customers from {len(files)} file(s)")
    return customers

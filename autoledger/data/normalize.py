"""
Timestamp parsing, text folding, and record → frame normalization.
"""
from __future__ import annotations

import datetime as dt
from typing import Any, Iterable, Mapping, Union

import pandas as pd

from autoledger.config import RECORD_COLUMNS, REQUIRED_COLUMNS
from autoledger.data.schemas import Customer, CustomerField, FieldKind

DateLike = Union[str, dt.date, dt.datetime, pd.Timestamp]

TEXT_FIELDS = [f.value for f in CustomerField if f.kind is FieldKind.TEXT]


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------

def to_timestamp(value: DateLike) -> pd.Timestamp:
    """Parse one date-like value into a UTC timestamp.

    Naive values (including date-only ISO strings) are read as UTC.
    Unparseable strings raise ValueError.
    """
    if isinstance(value, dt.date) and not isinstance(value, dt.datetime):
        value = dt.datetime.combine(value, dt.time())
    ts = pd.Timestamp(value)
    if ts is pd.NaT:
        raise ValueError(f"Not a date: {value!r}")
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


def parse_timestamps(values: pd.Series) -> pd.Series:
    """Vectorised ISO-8601 parse to UTC; mixed offsets and date-only strings allowed."""
    return pd.to_datetime(values, utc=True, format="ISO8601")


def utc_now() -> pd.Timestamp:
    return pd.Timestamp.now(tz="UTC")


def fold(text: str) -> str:
    """Case-folded comparison key."""
    return text.lower()


# ---------------------------------------------------------------------------
# Raw record cleanup (CSV rows, JSON objects)
# ---------------------------------------------------------------------------

def clean_record(raw: Mapping[str, Any]) -> dict:
    """Drop pandas NaN markers so optional fields read as absent."""
    record = {}
    for key, value in raw.items():
        if value is None:
            continue
        if not isinstance(value, str) and pd.isna(value):
            continue
        record[key] = value
    return record


def missing_columns(columns: Iterable[str]) -> list[str]:
    present = set(columns)
    return [c for c in REQUIRED_COLUMNS if c not in present]


def to_customers(records: Iterable[Customer | Mapping[str, Any]]) -> tuple[Customer, ...]:
    """Accept Customer objects or plain mappings; return an immutable tuple."""
    return tuple(
        r if isinstance(r, Customer) else Customer.from_record(clean_record(r))
        for r in records
    )


# ---------------------------------------------------------------------------
# Helper frame
# ---------------------------------------------------------------------------

def build_frame(customers: tuple[Customer, ...]) -> pd.DataFrame:
    """Parsed helper columns, positionally aligned with ``customers``.

    Adds ``<date>_ts`` UTC timestamps, ``<text>_key`` folded strings and a
    nullable ``payment_cents`` column.
    """
    df = pd.DataFrame([c.to_record() for c in customers], columns=RECORD_COLUMNS)
    df = df.reset_index(drop=True)

    df["purchased_ts"] = parse_timestamps(df["purchased"])
    df["lastpayment_ts"] = parse_timestamps(df["lastpayment"])

    for col in TEXT_FIELDS:
        df[f"{col}_key"] = df[col].astype(str).str.lower()

    df["payment_cents"] = pd.array([c.payment_cents for c in customers], dtype="Int64")
    return df

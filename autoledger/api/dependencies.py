"""
FastAPI dependencies — CustomerStore singleton, date and period parsing.
"""
from __future__ import annotations

import datetime as dt
from typing import Optional

import pandas as pd
from fastapi import HTTPException, Query

from autoledger.data.normalize import to_timestamp
from autoledger.data.schemas import PeriodFilter, PeriodType
from autoledger.data.store import CustomerStore

# ---------------------------------------------------------------------------
# Global store singleton (set during startup, replaced on reload)
# ---------------------------------------------------------------------------
_store: CustomerStore | None = None


def set_store(store: CustomerStore) -> None:
    global _store
    _store = store


def get_store() -> CustomerStore:
    if _store is None:
        raise HTTPException(503, "Customer data not loaded yet")
    return _store


# ---------------------------------------------------------------------------
# Query-param parsing
# ---------------------------------------------------------------------------

def parse_date(value: str, name: str) -> pd.Timestamp:
    """ISO date/time string → UTC timestamp, 400 on bad input."""
    try:
        return to_timestamp(value)
    except ValueError:
        raise HTTPException(400, f"Invalid {name}: {value}")


def parse_now(
    now: Optional[str] = Query(None, description="Reference instant (ISO-8601); defaults to the current time"),
) -> pd.Timestamp | None:
    if now is None:
        return None
    return parse_date(now, "now")


def parse_period(
    period_type: Optional[str] = Query(None, description="month|quarter|year|custom|all"),
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None),
    quarter: Optional[int] = Query(None),
    start_date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    end_date: Optional[str] = Query(None, description="YYYY-MM-DD"),
) -> PeriodFilter | None:
    """Parse period query parameters into a PeriodFilter."""
    if period_type is None:
        return None

    try:
        pt = PeriodType(period_type)
    except ValueError:
        raise HTTPException(400, f"Invalid period_type: {period_type}")

    try:
        sd = dt.date.fromisoformat(start_date) if start_date else None
        ed = dt.date.fromisoformat(end_date) if end_date else None
    except ValueError:
        raise HTTPException(400, "start_date and end_date must be YYYY-MM-DD")

    return PeriodFilter(
        period_type=pt,
        year=year,
        month=month,
        quarter=quarter,
        start_date=sd,
        end_date=ed,
    )

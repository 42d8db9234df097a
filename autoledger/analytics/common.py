"""
Mask, cents and day-count helpers shared by the analytics modules.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

import numpy as np
import pandas as pd

from autoledger.data.errors import EmptyStoreError

ONE_DAY = pd.Timedelta(days=1)


def positions(mask: pd.Series) -> np.ndarray:
    """Row positions where a boolean mask is True (NA counts as False)."""
    return np.flatnonzero(mask.fillna(False).to_numpy(dtype=bool))


def paid_cents(cents: pd.Series) -> pd.Series:
    """Nullable cents column with absent amounts read as 0."""
    return cents.fillna(0).astype("int64")


def round_cents(total_cents: int, count: int) -> int:
    """Mean of integer cents, rounded half-up to a whole cent."""
    if count == 0:
        return 0
    return int((Decimal(total_cents) / count).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def sanitize_for_json(obj):
    """Recursively convert Decimal/numpy/pandas values to native JSON types."""
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, Decimal):
        return float(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, pd.Timestamp):
        return obj.isoformat()
    return obj


def whole_days_since(now: pd.Timestamp, timestamps: pd.Series) -> pd.Series:
    """Floored whole days between each timestamp and ``now``."""
    return (now - timestamps) // ONE_DAY


def average_days_since(now: pd.Timestamp, timestamps: pd.Series, metric: str) -> int:
    """Floor of the mean of per-row floored day counts.

    Raises EmptyStoreError when there are no rows to average.
    """
    if len(timestamps) == 0:
        raise EmptyStoreError(metric)
    total = int(whole_days_since(now, timestamps).sum())
    return total // len(timestamps)

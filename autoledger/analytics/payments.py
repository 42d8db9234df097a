"""
Payment analytics — statistics, period totals, late payers, status buckets.
"""
from __future__ import annotations

from typing import Sequence

import pandas as pd

from autoledger.analytics.common import paid_cents, positions, round_cents
from autoledger.config import LATE_PAYMENT_DAYS
from autoledger.data.schemas import Customer, PaymentStatistics, PaymentStatus

LATE_AFTER = pd.Timedelta(days=LATE_PAYMENT_DAYS)


def payment_statistics(cents: pd.Series) -> PaymentStatistics:
    """Sum / mean / max / min over positive amounts; all zero when none."""
    paid = paid_cents(cents)
    positive = paid[paid > 0]
    if positive.empty:
        return PaymentStatistics()

    total = int(positive.sum())
    return PaymentStatistics(
        total_cents=total,
        average_cents=round_cents(total, len(positive)),
        highest_cents=int(positive.max()),
        lowest_cents=int(positive.min()),
    )


def in_period_mask(df: pd.DataFrame, start: pd.Timestamp, end: pd.Timestamp) -> pd.Series:
    """Rows whose last payment falls in [start, end], both ends inclusive."""
    ts = df["lastpayment_ts"]
    return (ts >= start) & (ts <= end)


def total_in_period(df: pd.DataFrame, start: pd.Timestamp, end: pd.Timestamp) -> int:
    """Total cents paid in [start, end]; absent amounts count as 0."""
    mask = in_period_mask(df, start, end)
    return int(paid_cents(df["payment_cents"])[mask].sum())


def overdue_mask(df: pd.DataFrame, now: pd.Timestamp) -> pd.Series:
    """Last payment more than LATE_PAYMENT_DAYS before now."""
    return df["lastpayment_ts"] < (now - LATE_AFTER)


def late_mask(df: pd.DataFrame, now: pd.Timestamp) -> pd.Series:
    """Overdue AND a positive payment on record."""
    return overdue_mask(df, now) & (paid_cents(df["payment_cents"]) > 0)


def payment_status(
    customers: Sequence[Customer],
    df: pd.DataFrame,
    now: pd.Timestamp,
) -> PaymentStatus:
    """Partition every record into exactly one bucket.

    Priority: no_payments, then late, then current.
    """
    no_payment = paid_cents(df["payment_cents"]) == 0
    late = ~no_payment & overdue_mask(df, now)
    current = ~no_payment & ~late

    return PaymentStatus(
        current=[customers[i] for i in positions(current)],
        late=[customers[i] for i in positions(late)],
        no_payments=[customers[i] for i in positions(no_payment)],
    )

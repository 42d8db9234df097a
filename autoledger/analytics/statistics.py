"""
Store-wide statistics — distinct counts, distributions, day averages.
"""
from __future__ import annotations

import pandas as pd

from autoledger.analytics.common import average_days_since
from autoledger.analytics.payments import payment_statistics
from autoledger.data.schemas import Statistics


def distribution(keys: pd.Series) -> dict[str, int]:
    """Folded value → record count, in first-seen order."""
    if keys.empty:
        return {}
    counts = keys.groupby(keys, sort=False).size()
    return {str(k): int(v) for k, v in counts.items()}


def make_distribution(df: pd.DataFrame) -> dict[str, int]:
    return distribution(df["make_key"])


def city_distribution(df: pd.DataFrame) -> dict[str, int]:
    return distribution(df["city_key"])


def average_days_since_purchase(df: pd.DataFrame, now: pd.Timestamp) -> int:
    return average_days_since(now, df["purchased_ts"], "average days since purchase")


def average_days_since_last_payment(df: pd.DataFrame, now: pd.Timestamp) -> int:
    return average_days_since(now, df["lastpayment_ts"], "average days since last payment")


def store_statistics(df: pd.DataFrame, now: pd.Timestamp) -> Statistics:
    """Compute the full Statistics aggregate.

    The day averages raise EmptyStoreError on an empty frame, so this does too.
    """
    return Statistics(
        total_customers=len(df),
        unique_makes=int(df["make_key"].nunique()),
        unique_models=int(df["model_key"].nunique()),
        unique_cities=int(df["city_key"].nunique()),
        make_distribution=make_distribution(df),
        city_distribution=city_distribution(df),
        average_days_since_purchase=average_days_since_purchase(df, now),
        average_days_since_last_payment=average_days_since_last_payment(df, now),
        average_payment_amount=payment_statistics(df["payment_cents"]).average_payment,
    )

"""Store-wide statistics and distributions."""

from __future__ import annotations

from decimal import Decimal

import pandas as pd
import pytest

from autoledger.data.errors import EmptyStoreError
from autoledger.data.store import CustomerStore

from conftest import CUSTOMER_RECORDS, NOW


def test_counts(store: CustomerStore):
    stats = store.get_statistics()
    assert stats.total_customers == 3
    assert stats.unique_makes == 2
    assert stats.unique_models == 3
    assert stats.unique_cities == 2


def test_distinct_counts_fold_case():
    records = [
        {**CUSTOMER_RECORDS[0], "make": "Toyota"},
        {**CUSTOMER_RECORDS[1], "make": "TOYOTA"},
    ]
    stats = CustomerStore(records).get_statistics(now=NOW)
    assert stats.unique_makes == 1
    assert stats.make_distribution == {"toyota": 2}


def test_make_distribution(store: CustomerStore):
    assert store.get_make_distribution() == {"toyota": 2, "honda": 1}


def test_city_distribution(store: CustomerStore):
    distribution = store.get_city_distribution()
    assert distribution["new york"] == 2
    assert distribution["los angeles"] == 1
    assert list(distribution) == ["new york", "los angeles"]


def test_average_days_are_floored():
    now = pd.Timestamp("2020-01-11T12:00:00Z")
    records = [
        {**CUSTOMER_RECORDS[0], "purchased": "2020-01-01T00:00:00Z", "lastpayment": "2020-01-10T00:00:00Z"},
        {**CUSTOMER_RECORDS[1], "purchased": "2020-01-02T00:00:00Z", "lastpayment": "2020-01-11T00:00:00Z"},
    ]
    stats = CustomerStore(records).get_statistics(now=now)
    # purchase: 10 + 9 = 19 → 9; last payment: 1 + 0 = 1 → 0
    assert stats.average_days_since_purchase == 9
    assert stats.average_days_since_last_payment == 0


def test_average_days_match_individual_operations(store: CustomerStore):
    stats = store.get_statistics(now=NOW)
    assert stats.average_days_since_purchase == store.get_average_days_since_purchase(NOW)
    assert stats.average_days_since_last_payment == store.get_average_days_since_last_payment(NOW)


def test_average_payment_amount(payment_store: CustomerStore):
    assert payment_store.get_statistics().average_payment_amount == Decimal("400.00")


def test_empty_store_raises(empty_store: CustomerStore):
    with pytest.raises(EmptyStoreError):
        empty_store.get_statistics()


def test_empty_store_error_is_division_error(empty_store: CustomerStore):
    with pytest.raises(ZeroDivisionError):
        empty_store.get_average_days_since_last_payment()


def test_empty_store_distributions(empty_store: CustomerStore):
    assert empty_store.get_make_distribution() == {}
    assert empty_store.get_city_distribution() == {}

"""Shared fixtures: sample records, a fixed reference instant, stores."""

from __future__ import annotations

import pandas as pd
import pytest

from autoledger.data.store import CustomerStore

NOW = pd.Timestamp("2026-06-15T12:00:00Z")


def _iso(ts: pd.Timestamp) -> str:
    return ts.strftime("%Y-%m-%dT%H:%M:%S.000Z")


THIRTY_ONE_DAYS_AGO = _iso(NOW - pd.Timedelta(days=31))
TWENTY_NINE_DAYS_AGO = _iso(NOW - pd.Timedelta(days=29))


CUSTOMER_RECORDS = [
    {
        "id": 1,
        "first_name": "John",
        "last_name": "Doe",
        "purchased": "2019-01-01T00:00:00Z",
        "lastpayment": "2020-01-01T00:00:00Z",
        "phone": "1234567890",
        "make": "toyota",
        "model": "camry",
        "city": "new york",
    },
    {
        "id": 2,
        "first_name": "Jane",
        "last_name": "Smith",
        "purchased": "2018-01-01T00:00:00Z",
        "lastpayment": "2019-12-31T00:00:00Z",
        "phone": "0987654321",
        "make": "honda",
        "model": "civic",
        "city": "los angeles",
    },
    {
        "id": 3,
        "first_name": "Bob",
        "last_name": "Johnson",
        "purchased": "2020-01-01T00:00:00Z",
        "lastpayment": "2021-01-01T00:00:00Z",
        "phone": "5555555555",
        "make": "toyota",
        "model": "corolla",
        "city": "new york",
    },
]


PAYMENT_RECORDS = [
    {**CUSTOMER_RECORDS[0], "lastpayment": THIRTY_ONE_DAYS_AGO, "payment_amount": 500},
    {**CUSTOMER_RECORDS[1], "lastpayment": THIRTY_ONE_DAYS_AGO, "payment_amount": 300},
    {**CUSTOMER_RECORDS[2], "lastpayment": TWENTY_NINE_DAYS_AGO, "payment_amount": 400},
]


@pytest.fixture()
def store() -> CustomerStore:
    """Three customers without payment amounts."""
    return CustomerStore(CUSTOMER_RECORDS, clock=lambda: NOW)


@pytest.fixture()
def payment_store() -> CustomerStore:
    """Two late payers and one current payer relative to NOW."""
    return CustomerStore(PAYMENT_RECORDS, clock=lambda: NOW)


@pytest.fixture()
def empty_store() -> CustomerStore:
    return CustomerStore([], clock=lambda: NOW)

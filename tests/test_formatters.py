"""Display formatting: names, dates, relative time, phone, currency, cards."""

from __future__ import annotations

from decimal import Decimal

import pandas as pd
import pytest

from autoledger.data.schemas import Customer
from autoledger.data.store import CustomerStore
from autoledger.display.formatters import (
    format_currency,
    format_customer,
    format_customer_with_payments,
    format_date,
    format_name,
    format_phone_number,
    format_relative_time,
)

from conftest import NOW, PAYMENT_RECORDS


@pytest.mark.parametrize("phone, expected", [
    ("1234567890", "(123) 456-7890"),
    ("9876543210", "(987) 654-3210"),
    ("(123) 456-7890", "(123) 456-7890"),
    ("123.456.7890", "(123) 456-7890"),
    ("123-456-7890", "(123) 456-7890"),
])
def test_phone_numbers_are_formatted(phone, expected):
    assert format_phone_number(phone) == expected


@pytest.mark.parametrize("phone", ["123", "12345", "12345678901", "abc", "", "12-34"])
def test_invalid_phone_numbers_are_unchanged(phone):
    assert format_phone_number(phone) == phone


def test_phone_formatter_on_store():
    assert CustomerStore.format_phone_number("1234567890") == "(123) 456-7890"
    assert CustomerStore([]).format_phone_number("123") == "123"


@pytest.mark.parametrize("amount, expected", [
    (1234.5, "$1,234.50"),
    (500, "$500.00"),
    (0, "$0.00"),
    (Decimal("1234567.891"), "$1,234,567.89"),
    (-5, "-$5.00"),
])
def test_currency(amount, expected):
    assert format_currency(amount) == expected


def test_name_capitalisation():
    assert format_name("neel", "mclarty") == "Neel Mclarty"
    assert format_name("JOHN", "doe") == "John Doe"
    assert format_name("mary ann", "VAN DYKE") == "Mary Ann Van Dyke"


def test_date_format():
    assert format_date("2018-04-03T05:12:00Z") == "April 3, 2018"
    assert format_date("2020-12-31") == "December 31, 2020"


def test_relative_time_uses_thirty_day_months():
    now = pd.Timestamp("2020-12-31T00:00:00Z")
    assert format_relative_time("2020-01-01T00:00:00Z", now) == "12 months ago"
    assert format_relative_time(now - pd.Timedelta(days=59), now) == "1 months ago"
    assert format_relative_time(now - pd.Timedelta(days=60), now) == "2 months ago"
    assert format_relative_time(now, now) == "0 months ago"


CARD_RECORD = {
    "id": 7,
    "first_name": "neel",
    "last_name": "mclarty",
    "purchased": "2018-04-03T08:00:00Z",
    "lastpayment": "2026-02-15T12:00:00Z",
    "phone": "153-158-9353",
    "make": "saturn",
    "model": "s-series",
    "city": "sikeshu",
}


def test_customer_card_layout():
    customer = Customer.from_record(CARD_RECORD)
    assert format_customer(customer, NOW) == (
        "Neel Mclarty\n"
        "\n"
        "Saturn S-series\n"
        "\n"
        "Purchased: April 3, 2018\n"
        "\n"
        "Last Payment: 4 months ago\n"
        "\n"
        "Phone: (153) 158-9353\n"
        "\n"
        "City: Sikeshu"
    )


def test_card_does_not_mutate_record():
    customer = Customer.from_record(CARD_RECORD)
    format_customer_with_payments(customer, NOW)
    assert customer == Customer.from_record(CARD_RECORD)


def test_card_with_payment_amount(payment_store: CustomerStore):
    customer = payment_store.get_all_customers()[0]
    card = payment_store.format_customer_with_payments(customer)
    assert card.endswith("\nLast Payment Amount: $500.00")
    assert card.startswith(payment_store.format_customer(customer))


@pytest.mark.parametrize("amount", [0, None])
def test_card_without_payment_amount_matches_plain_card(amount):
    customer = Customer.from_record({**PAYMENT_RECORDS[0], "payment_amount": amount})
    assert format_customer_with_payments(customer, NOW) == format_customer(customer, NOW)
    assert "Last Payment Amount" not in format_customer_with_payments(customer, NOW)


@pytest.mark.parametrize("amount, expected", [
    (0.125, "$0.13"),
    (Decimal("2.675"), "$2.68"),
    (-0.125, "-$0.13"),
])
def test_currency_half_cents_round_away_from_zero(amount, expected):
    assert format_currency(amount) == expected


def test_card_amount_matches_payment_totals():
    customer = Customer.from_record({**PAYMENT_RECORDS[0], "payment_amount": 0.125})
    store = CustomerStore([customer])
    total = store.get_payment_statistics().total_payments
    assert format_currency(total) == "$0.13"
    assert format_customer_with_payments(customer, NOW).endswith("Last Payment Amount: $0.13")

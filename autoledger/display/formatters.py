"""
Display-string formatting for customer records (fixed en-US rendering).
"""
from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import pandas as pd

from autoledger.config import CURRENCY_SYMBOL, DAYS_PER_MONTH, MONTH_NAMES
from autoledger.data.normalize import DateLike, to_timestamp, utc_now
from autoledger.data.schemas import Amount, Customer

_NON_DIGIT_RE = re.compile(r"\D")
_TOKEN_RE = re.compile(r"\S+")

MONTH = pd.Timedelta(days=DAYS_PER_MONTH)
_CENT = Decimal("0.01")


def capitalize_first(text: str) -> str:
    """Upper-case the first character, leave the rest untouched."""
    return text[:1].upper() + text[1:]


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------

def format_name(first_name: str, last_name: str) -> str:
    """'jOHN o'neil' → 'John O'neil': each token capitalised, rest lower-cased."""
    full = f"{first_name} {last_name}"
    return _TOKEN_RE.sub(lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), full)


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def format_date(value: DateLike) -> str:
    """Render as 'April 3, 2018' (UTC calendar day)."""
    ts = to_timestamp(value)
    return f"{MONTH_NAMES[ts.month - 1]} {ts.day}, {ts.year}"


def months_since(value: DateLike, now: Optional[pd.Timestamp] = None) -> int:
    """Whole 30-day months between value and now, floored."""
    now = utc_now() if now is None else to_timestamp(now)
    return int((now - to_timestamp(value)) // MONTH)


def format_relative_time(value: DateLike, now: Optional[pd.Timestamp] = None) -> str:
    return f"{months_since(value, now)} months ago"


# ---------------------------------------------------------------------------
# Phone / currency
# ---------------------------------------------------------------------------

def format_phone_number(phone: str) -> str:
    """(xxx) xxx-xxxx for exactly ten digits; otherwise the input unchanged."""
    digits = _NON_DIGIT_RE.sub("", phone)
    if len(digits) != 10:
        return phone
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"


def format_currency(amount: Amount) -> str:
    """1234.5 → '$1,234.50'. Half cents round away from zero, as in the cent totals."""
    value = Decimal(str(amount)).quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(value):,.2f}"


# ---------------------------------------------------------------------------
# Customer cards
# ---------------------------------------------------------------------------

def format_customer(customer: Customer, now: Optional[pd.Timestamp] = None) -> str:
    """Multi-line card: name, vehicle, purchase date, last payment, phone, city."""
    make = capitalize_first(customer.make)
    model = capitalize_first(customer.model)
    lines = [
        format_name(customer.first_name, customer.last_name),
        f"{make} {model}",
        f"Purchased: {format_date(customer.purchased)}",
        f"Last Payment: {format_relative_time(customer.lastpayment, now)}",
        f"Phone: {format_phone_number(customer.phone)}",
        f"City: {capitalize_first(customer.city)}",
    ]
    return "\n\n".join(lines)


def format_customer_with_payments(customer: Customer, now: Optional[pd.Timestamp] = None) -> str:
    """Card plus a payment-amount line when a nonzero amount is recorded."""
    card = format_customer(customer, now)
    if customer.payment_amount:
        card += f"\nLast Payment Amount: {format_currency(customer.payment_amount)}"
    return card

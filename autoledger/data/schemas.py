"""
Customer record, field accessors, result types and period filters.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import asdict, dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from operator import attrgetter
from typing import Any, Callable, Mapping, Optional, Union

Amount = Union[int, float, Decimal]

_CENT = Decimal("0.01")


def to_cents(amount: Amount | None) -> int | None:
    """Convert a dollar amount to integer cents (half-up). None stays None."""
    if amount is None:
        return None
    return int(Decimal(str(amount)).quantize(_CENT, rounding=ROUND_HALF_UP) * 100)


def from_cents(cents: int) -> Decimal:
    """Integer cents back to a two-place Decimal dollar amount."""
    return (Decimal(cents) / 100).quantize(_CENT)


# ---------------------------------------------------------------------------
# Customer record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Customer:
    """One customer-and-vehicle entry."""
    id: int
    first_name: str
    last_name: str
    purchased: str                       # ISO-8601
    lastpayment: str                     # ISO-8601
    phone: str
    make: str
    model: str
    city: str
    payment_amount: Optional[Amount] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Customer":
        """Build from a decoded JSON object. Extra keys are ignored."""
        return cls(
            id=int(record["id"]),
            first_name=record["first_name"],
            last_name=record["last_name"],
            purchased=record["purchased"],
            lastpayment=record["lastpayment"],
            phone=str(record["phone"]),
            make=record["make"],
            model=record["model"],
            city=record["city"],
            payment_amount=record.get("payment_amount"),
        )

    @property
    def payment_cents(self) -> int | None:
        return to_cents(self.payment_amount)

    def to_record(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Field accessors (filterable / sortable fields)
# ---------------------------------------------------------------------------

class FieldKind(str, Enum):
    DATE = "date"
    TEXT = "text"
    NUMBER = "number"


class CustomerField(str, Enum):
    ID = "id"
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    PURCHASED = "purchased"
    LASTPAYMENT = "lastpayment"
    PHONE = "phone"
    MAKE = "make"
    MODEL = "model"
    CITY = "city"
    PAYMENT_AMOUNT = "payment_amount"

    @classmethod
    def lookup(cls, name: str) -> "CustomerField | None":
        """Field for a name, or None if the name is not a customer field."""
        try:
            return cls(name)
        except ValueError:
            return None

    @property
    def kind(self) -> FieldKind:
        return _FIELD_KINDS[self]

    @property
    def accessor(self) -> Callable[[Customer], Any]:
        return attrgetter(self.value)


_FIELD_KINDS = {
    CustomerField.ID: FieldKind.NUMBER,
    CustomerField.FIRST_NAME: FieldKind.TEXT,
    CustomerField.LAST_NAME: FieldKind.TEXT,
    CustomerField.PURCHASED: FieldKind.DATE,
    CustomerField.LASTPAYMENT: FieldKind.DATE,
    CustomerField.PHONE: FieldKind.TEXT,
    CustomerField.MAKE: FieldKind.TEXT,
    CustomerField.MODEL: FieldKind.TEXT,
    CustomerField.CITY: FieldKind.TEXT,
    CustomerField.PAYMENT_AMOUNT: FieldKind.NUMBER,
}


# ---------------------------------------------------------------------------
# Query results
# ---------------------------------------------------------------------------

@dataclass
class Statistics:
    """Store-wide counts, distributions and day averages."""
    total_customers: int
    unique_makes: int
    unique_models: int
    unique_cities: int
    make_distribution: dict[str, int]
    city_distribution: dict[str, int]
    average_days_since_purchase: int
    average_days_since_last_payment: int
    average_payment_amount: Decimal = Decimal("0.00")


@dataclass(frozen=True)
class PaymentStatistics:
    """Aggregates over positive payment amounts, held in cents."""
    total_cents: int = 0
    average_cents: int = 0
    highest_cents: int = 0
    lowest_cents: int = 0

    @property
    def total_payments(self) -> Decimal:
        return from_cents(self.total_cents)

    @property
    def average_payment(self) -> Decimal:
        return from_cents(self.average_cents)

    @property
    def highest_payment(self) -> Decimal:
        return from_cents(self.highest_cents)

    @property
    def lowest_payment(self) -> Decimal:
        return from_cents(self.lowest_cents)

    def as_dict(self) -> dict[str, Decimal]:
        return {
            "total_payments": self.total_payments,
            "average_payment": self.average_payment,
            "highest_payment": self.highest_payment,
            "lowest_payment": self.lowest_payment,
        }


@dataclass
class PaymentStatus:
    """Disjoint payment-status buckets, each in stored order."""
    current: list[Customer] = field(default_factory=list)
    late: list[Customer] = field(default_factory=list)
    no_payments: list[Customer] = field(default_factory=list)

    def counts(self) -> dict[str, int]:
        return {
            "current": len(self.current),
            "late": len(self.late),
            "no_payments": len(self.no_payments),
        }

    def labels(self) -> dict[int, str]:
        """Bucket name keyed by record identity (``id(customer)``)."""
        return {
            id(c): name
            for name in ("current", "late", "no_payments")
            for c in getattr(self, name)
        }


# ---------------------------------------------------------------------------
# Period filters
# ---------------------------------------------------------------------------

class PeriodType(str, Enum):
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    CUSTOM = "custom"
    ALL = "all"


def _month_end(year: int, month: int) -> dt.date:
    if month == 12:
        return dt.date(year + 1, 1, 1) - dt.timedelta(days=1)
    return dt.date(year, month + 1, 1) - dt.timedelta(days=1)


@dataclass
class PeriodFilter:
    """Defines an inclusive date range for payment totals."""
    period_type: PeriodType = PeriodType.ALL
    year: Optional[int] = None
    month: Optional[int] = None          # 1-12
    quarter: Optional[int] = None        # 1-4
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None

    def resolve(self) -> tuple[Optional[dt.date], Optional[dt.date]]:
        """Return (start_date, end_date) based on period_type."""
        if self.period_type == PeriodType.ALL:
            return None, None

        if self.period_type == PeriodType.CUSTOM:
            return self.start_date, self.end_date

        if self.year is None:
            return None, None

        if self.period_type == PeriodType.MONTH:
            if self.month is None:
                return None, None
            return dt.date(self.year, self.month, 1), _month_end(self.year, self.month)

        if self.period_type == PeriodType.QUARTER:
            if self.quarter is None:
                return None, None
            start_month = (self.quarter - 1) * 3 + 1
            return dt.date(self.year, start_month, 1), _month_end(self.year, start_month + 2)

        if self.period_type == PeriodType.YEAR:
            return dt.date(self.year, 1, 1), dt.date(self.year, 12, 31)

        return None, None

    @property
    def label(self) -> str:
        """Human-readable label for the period."""
        if self.period_type == PeriodType.ALL:
            return "All Time"
        if self.period_type == PeriodType.MONTH and self.year and self.month:
            return f"{dt.date(self.year, self.month, 1):%Y-%m}"
        if self.period_type == PeriodType.QUARTER and self.year and self.quarter:
            return f"Q{self.quarter} {self.year}"
        if self.period_type == PeriodType.YEAR and self.year:
            return str(self.year)
        if self.period_type == PeriodType.CUSTOM:
            s = self.start_date.isoformat() if self.start_date else "?"
            e = self.end_date.isoformat() if self.end_date else "?"
            return f"{s} to {e}"
        return "Unknown"

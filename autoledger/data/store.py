"""
CustomerStore — In-memory query engine over customer-and-vehicle records.

Built once from a fully materialised record sequence, then only read.
Every query returns a new list (or a scalar/dataclass); neither the stored
tuple nor the helper frame is ever modified.
"""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Optional

import pandas as pd

from autoledger.analytics import payments, statistics
from autoledger.analytics.common import positions
from autoledger.config import DATA_FOLDER
from autoledger.data.errors import UnknownFieldError
from autoledger.data.normalize import DateLike, build_frame, fold, to_customers, to_timestamp, utc_now
from autoledger.data.schemas import (
    Customer,
    CustomerField,
    FieldKind,
    PaymentStatistics,
    PaymentStatus,
    PeriodFilter,
    Statistics,
    from_cents,
    to_cents,
)
from autoledger.display import formatters

Clock = Callable[[], pd.Timestamp]


class CustomerStore:
    """Read-only customer records with filter, sort, aggregate and format helpers."""

    def __init__(
        self,
        customers: Iterable[Customer | Mapping[str, Any]] = (),
        clock: Clock = utc_now,
    ) -> None:
        self._customers: tuple[Customer, ...] = to_customers(customers)
        self.df: pd.DataFrame = build_frame(self._customers)
        self._clock = clock

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path | None = None, folder: Path = DATA_FOLDER) -> "CustomerStore":
        """Load one record file, or every record file discovered in ``folder``."""
        from autoledger.data.loader import load_folder, load_records

        if path is not None:
            return cls(load_records(Path(path)))
        return cls(load_folder(folder))

    def __len__(self) -> int:
        return len(self._customers)

    @property
    def is_empty(self) -> bool:
        return not self._customers

    def _now(self, now: Optional[DateLike]) -> pd.Timestamp:
        return self._clock() if now is None else to_timestamp(now)

    def _select(self, mask: pd.Series) -> list[Customer]:
        return [self._customers[i] for i in positions(mask)]

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_all_customers(self) -> list[Customer]:
        return list(self._customers)

    def get_customer(self, customer_id: int) -> Customer | None:
        """First record with this id, or None."""
        return next((c for c in self._customers if c.id == customer_id), None)

    def find_by_make(self, make: str) -> list[Customer]:
        return self._select(self.df["make_key"] == fold(make))

    def find_by_model(self, model: str) -> list[Customer]:
        return self._select(self.df["model_key"] == fold(model))

    def find_by_city(self, city: str) -> list[Customer]:
        return self._select(self.df["city_key"] == fold(city))

    def get_customers_after_date(self, date: DateLike) -> list[Customer]:
        """Customers who purchased strictly after ``date``."""
        return self._select(self.df["purchased_ts"] > to_timestamp(date))

    def get_customers_with_last_payment_before(self, date: DateLike) -> list[Customer]:
        """Customers whose last payment is strictly before ``date``."""
        return self._select(self.df["lastpayment_ts"] < to_timestamp(date))

    # ------------------------------------------------------------------
    # Filtering & sorting
    # ------------------------------------------------------------------

    def _criterion_mask(self, field: CustomerField, value: Any) -> pd.Series:
        if field.kind is FieldKind.DATE:
            return self.df[f"{field.value}_ts"] >= to_timestamp(value)
        if field.kind is FieldKind.TEXT:
            needle = fold(str(value))
            return self.df[f"{field.value}_key"].str.contains(needle, regex=False)
        if field is CustomerField.PAYMENT_AMOUNT:
            column, parse = "payment_cents", to_cents
        else:
            column, parse = field.value, int
        try:
            target = parse(value)
        except (ValueError, TypeError, InvalidOperation):
            target = None
        # An unparseable number matches nothing
        if target is None:
            return pd.Series(False, index=self.df.index)
        return self.df[column] == target

    def filter_by(self, criteria: Mapping[str, Any]) -> list[Customer]:
        """Records matching every criterion.

        Date fields are inclusive lower bounds, text fields are
        case-insensitive substrings, numeric fields must be equal. An
        unparseable number, or a criterion naming an unknown field,
        matches nothing.
        """
        mask = pd.Series(True, index=self.df.index)
        for name, value in criteria.items():
            field = CustomerField.lookup(name)
            if field is None:
                return []
            mask &= self._criterion_mask(field, value).fillna(False).astype(bool)
        return self._select(mask)

    def _sort_keys(self, field: CustomerField) -> list:
        if field.kind is FieldKind.DATE:
            return list(self.df[f"{field.value}_ts"])
        if field.kind is FieldKind.TEXT:
            return list(self.df[f"{field.value}_key"])
        if field is CustomerField.PAYMENT_AMOUNT:
            return [c.payment_cents for c in self._customers]
        return [field.accessor(c) for c in self._customers]

    def sort_by(self, field: str, ascending: bool = True) -> list[Customer]:
        """Stable sort on one field. Absent values sort last either way."""
        resolved = CustomerField.lookup(field)
        if resolved is None:
            raise UnknownFieldError(field)

        keys = self._sort_keys(resolved)
        present = [i for i, k in enumerate(keys) if k is not None]
        absent = [i for i, k in enumerate(keys) if k is None]
        present.sort(key=keys.__getitem__, reverse=not ascending)
        return [self._customers[i] for i in present + absent]

    # ------------------------------------------------------------------
    # Payment status
    # ------------------------------------------------------------------

    def get_late_payers(self, now: Optional[DateLike] = None) -> list[Customer]:
        """Positive-amount customers whose last payment is over 30 days old."""
        return self._select(payments.late_mask(self.df, self._now(now)))

    def get_customers_by_payment_status(self, now: Optional[DateLike] = None) -> PaymentStatus:
        return payments.payment_status(self._customers, self.df, self._now(now))

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def get_make_distribution(self) -> dict[str, int]:
        return statistics.make_distribution(self.df)

    def get_city_distribution(self) -> dict[str, int]:
        return statistics.city_distribution(self.df)

    def get_average_days_since_purchase(self, now: Optional[DateLike] = None) -> int:
        return statistics.average_days_since_purchase(self.df, self._now(now))

    def get_average_days_since_last_payment(self, now: Optional[DateLike] = None) -> int:
        return statistics.average_days_since_last_payment(self.df, self._now(now))

    def get_statistics(self, now: Optional[DateLike] = None) -> Statistics:
        """Counts, distributions and day averages. Raises EmptyStoreError if empty."""
        return statistics.store_statistics(self.df, self._now(now))

    def get_payment_statistics(self) -> PaymentStatistics:
        """Aggregates over positive payments; all zeros when there are none."""
        return payments.payment_statistics(self.df["payment_cents"])

    def get_total_payments_in_period(self, start: DateLike, end: DateLike) -> Decimal:
        """Sum of payment amounts with last payment in [start, end]."""
        cents = payments.total_in_period(self.df, to_timestamp(start), to_timestamp(end))
        return from_cents(cents)

    def get_total_payments_for_period(self, period: PeriodFilter) -> Decimal:
        """Period variant; the end date covers its whole calendar day."""
        start, end = period.resolve()
        start_ts = to_timestamp(start) if start else pd.Timestamp.min.tz_localize("UTC")
        if end:
            end_ts = to_timestamp(end) + pd.Timedelta(days=1) - pd.Timedelta(1, unit="ns")
        else:
            end_ts = pd.Timestamp.max.tz_localize("UTC")
        cents = payments.total_in_period(self.df, start_ts, end_ts)
        return from_cents(cents)

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    format_phone_number = staticmethod(formatters.format_phone_number)
    format_currency = staticmethod(formatters.format_currency)

    def format_customer(self, customer: Customer, now: Optional[DateLike] = None) -> str:
        return formatters.format_customer(customer, self._now(now))

    def format_customer_with_payments(self, customer: Customer, now: Optional[DateLike] = None) -> str:
        return formatters.format_customer_with_payments(customer, self._now(now))

"""
Customer Ledger Report — statistics, payment status and the customer roster.
"""
from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Optional

import pandas as pd

from autoledger.analytics.common import sanitize_for_json
from autoledger.config import CUSTOMER_EXPORT_COLUMNS
from autoledger.data.normalize import DateLike, to_timestamp, utc_now
from autoledger.data.schemas import Customer, from_cents
from autoledger.data.store import CustomerStore
from autoledger.display.formatters import (
    capitalize_first,
    format_date,
    format_name,
    format_phone_number,
    format_relative_time,
)
from autoledger.excel import Kpi, LedgerWorkbook

DISTRIBUTION_COLS = [
    ("key", "text", "Value"),
    ("customers", "number", "Customers"),
]

STATUS_LABELS = {"current": "Current", "late": "Late", "no_payments": "No Payments"}


def _customer_row(customer: Customer, status: str, now: pd.Timestamp) -> dict:
    return {
        "id": customer.id,
        "name": format_name(customer.first_name, customer.last_name),
        "vehicle": f"{capitalize_first(customer.make)} {capitalize_first(customer.model)}",
        "city": capitalize_first(customer.city),
        "phone": format_phone_number(customer.phone),
        "purchased": format_date(customer.purchased),
        "lastpayment": format_relative_time(customer.lastpayment, now),
        "payment_amount": from_cents(customer.payment_cents or 0),
        "status": status,
    }


def generate_json(store: CustomerStore, now: Optional[DateLike] = None) -> dict:
    """Report payload. Raises EmptyStoreError for an empty store."""
    now = utc_now() if now is None else to_timestamp(now)
    stats = store.get_statistics(now)
    pay = store.get_payment_statistics()
    status = store.get_customers_by_payment_status(now)
    labels = status.labels()

    customers = [_customer_row(c, labels[id(c)], now) for c in store.get_all_customers()]

    return sanitize_for_json({
        "generated_at": now,
        "statistics": asdict(stats),
        "payments": pay.as_dict(),
        "status_counts": status.counts(),
        "customers": customers,
    })


def _distribution_rows(dist: dict[str, int]) -> list[dict]:
    rows = [{"key": capitalize_first(k), "customers": v} for k, v in dist.items()]
    return sorted(rows, key=lambda r: r["customers"], reverse=True)


def generate_excel(
    store: CustomerStore,
    output_path: str | Path,
    now: Optional[DateLike] = None,
) -> Path:
    """Summary, Customers, Makes and Cities sheets. Raises EmptyStoreError for an empty store."""
    data = generate_json(store, now)
    s = data["statistics"]
    p = data["payments"]
    counts = data["status_counts"]

    book = LedgerWorkbook()

    ws = book.sheet("Summary")
    generated = format_date(data["generated_at"])
    row = book.title(ws, "CUSTOMER LEDGER", f"Customer & Vehicle Report  |  Generated {generated}")
    row = book.section(
        ws, row, "CUSTOMERS",
        [
            Kpi(s["total_customers"], "CUSTOMERS"),
            Kpi(s["unique_makes"], "MAKES"),
            Kpi(s["unique_models"], "MODELS"),
            Kpi(s["unique_cities"], "CITIES"),
        ],
        [
            Kpi(s["average_days_since_purchase"], "AVG DAYS SINCE PURCHASE"),
            Kpi(s["average_days_since_last_payment"], "AVG DAYS SINCE LAST PAYMENT"),
        ],
    )
    book.section(
        ws, row, "PAYMENTS",
        [
            Kpi(p["total_payments"], "TOTAL PAYMENTS", "currency"),
            Kpi(p["average_payment"], "AVERAGE PAYMENT", "currency"),
            Kpi(p["highest_payment"], "HIGHEST PAYMENT", "currency"),
            Kpi(p["lowest_payment"], "LOWEST PAYMENT", "currency"),
        ],
        [Kpi(counts[key], label.upper()) for key, label in STATUS_LABELS.items()],
    )

    rows = [{**r, "bucket": r["status"], "status": STATUS_LABELS[r["status"]]} for r in data["customers"]]
    book.table(book.sheet("Customers"), CUSTOMER_EXPORT_COLUMNS, rows, status_of=lambda r: r["bucket"])
    book.table(book.sheet("Makes"), DISTRIBUTION_COLS, _distribution_rows(s["make_distribution"]))
    book.table(book.sheet("Cities"), DISTRIBUTION_COLS, _distribution_rows(s["city_distribution"]))

    return book.save(output_path)

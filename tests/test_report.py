"""Customer ledger report: JSON payload and Excel workbook."""

from __future__ import annotations

import pytest
from openpyxl import load_workbook

from autoledger.data.errors import EmptyStoreError
from autoledger.data.store import CustomerStore
from autoledger.reports.customer_report import generate_excel, generate_json

from conftest import NOW


def test_json_payload(payment_store: CustomerStore):
    data = generate_json(payment_store, NOW)
    assert data["generated_at"] == NOW.isoformat()
    assert data["statistics"]["total_customers"] == 3
    assert data["payments"]["total_payments"] == 1200.0
    assert data["status_counts"] == {"current": 1, "late": 2, "no_payments": 0}


def test_json_customer_rows(payment_store: CustomerStore):
    rows = generate_json(payment_store, NOW)["customers"]
    assert [r["status"] for r in rows] == ["late", "late", "current"]
    assert rows[0]["name"] == "John Doe"
    assert rows[0]["vehicle"] == "Toyota Camry"
    assert rows[0]["phone"] == "(123) 456-7890"
    assert rows[0]["lastpayment"] == "1 months ago"
    assert rows[0]["payment_amount"] == 500.0


def test_rows_without_amounts_report_no_payments(store: CustomerStore):
    rows = generate_json(store, NOW)["customers"]
    assert {r["status"] for r in rows} == {"no_payments"}
    assert all(r["payment_amount"] == 0 for r in rows)


def test_empty_store_cannot_report(empty_store: CustomerStore, tmp_path):
    with pytest.raises(EmptyStoreError):
        generate_json(empty_store, NOW)
    with pytest.raises(EmptyStoreError):
        generate_excel(empty_store, tmp_path / "report.xlsx", NOW)


def test_excel_workbook(payment_store: CustomerStore, tmp_path):
    path = generate_excel(payment_store, tmp_path / "out" / "report.xlsx", NOW)
    assert path.exists()

    wb = load_workbook(path)
    assert wb.sheetnames == ["Summary", "Customers", "Makes", "Cities"]

    customers = wb["Customers"]
    assert customers.cell(row=1, column=1).value == "ID"
    assert customers.max_row == 4
    statuses = [customers.cell(row=r, column=customers.max_column).value for r in range(2, 5)]
    assert statuses == ["Late", "Late", "Current"]

    makes = wb["Makes"]
    assert makes.cell(row=2, column=1).value == "Toyota"
    assert makes.cell(row=2, column=2).value == 2

"""Record-file discovery and loading."""

from __future__ import annotations

import json
import os

import pandas as pd
import pytest

from autoledger.data.loader import discover_record_files, load_folder, load_records
from autoledger.data.store import CustomerStore

from conftest import CUSTOMER_RECORDS, PAYMENT_RECORDS


def write_json(path, records):
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def test_load_json(tmp_path):
    path = write_json(tmp_path / "data.json", PAYMENT_RECORDS)
    customers = load_records(path)
    assert [c.id for c in customers] == [1, 2, 3]
    assert customers[0].payment_amount == 500


def test_json_must_be_an_array(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"customers": CUSTOMER_RECORDS}), encoding="utf-8")
    with pytest.raises(ValueError, match="JSON array"):
        load_records(path)


def test_load_csv_keeps_phone_digits_and_blank_amounts(tmp_path):
    records = [dict(CUSTOMER_RECORDS[1]), {**CUSTOMER_RECORDS[0], "payment_amount": 250.5}]
    path = tmp_path / "export.csv"
    pd.DataFrame(records).to_csv(path, index=False)

    customers = load_records(path)
    assert customers[0].phone == "0987654321"
    assert customers[0].payment_amount is None
    assert customers[1].payment_amount == 250.5
    assert customers[1].id == 1


def test_csv_missing_columns(tmp_path):
    path = tmp_path / "broken.csv"
    pd.DataFrame([{"id": 1, "first_name": "John"}]).to_csv(path, index=False)
    with pytest.raises(ValueError, match="missing columns"):
        load_records(path)


def test_unsupported_suffix(tmp_path):
    path = tmp_path / "data.txt"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported"):
        load_records(path)


def test_discovery_is_recursive_and_newest_first(tmp_path):
    older = write_json(tmp_path / "older.json", CUSTOMER_RECORDS[:1])
    nested = tmp_path / "2026" / "newer.json"
    nested.parent.mkdir()
    write_json(nested, CUSTOMER_RECORDS[1:])
    (tmp_path / "notes.txt").write_text("ignore me", encoding="utf-8")
    os.utime(older, (1_000_000, 1_000_000))

    assert discover_record_files(tmp_path) == [nested, older]
    assert [c.id for c in load_folder(tmp_path)] == [2, 3, 1]


def test_missing_folder_loads_nothing(tmp_path):
    assert discover_record_files(tmp_path / "absent") == []
    assert load_folder(tmp_path / "absent") == []


def test_store_load_from_file_and_folder(tmp_path):
    path = write_json(tmp_path / "data.json", CUSTOMER_RECORDS)
    assert len(CustomerStore.load(path)) == 3
    assert len(CustomerStore.load(folder=tmp_path)) == 3


def test_json_and_csv_exports_load_the_same_customers(tmp_path):
    records = [CUSTOMER_RECORDS[0], {**CUSTOMER_RECORDS[1], "payment_amount": 300}]
    json_path = write_json(tmp_path / "data.json", records)
    csv_path = tmp_path / "data.csv"
    pd.DataFrame(records).to_csv(csv_path, index=False)

    from_json = CustomerStore.load(json_path).get_all_customers()
    from_csv = CustomerStore.load(csv_path).get_all_customers()
    assert from_csv == from_json


def test_csv_text_that_looks_like_na_is_kept(tmp_path):
    records = [
        {**CUSTOMER_RECORDS[0], "last_name": "NA", "model": "null", "city": "None"},
        {**CUSTOMER_RECORDS[1], "payment_amount": 120},
    ]
    path = tmp_path / "export.csv"
    pd.DataFrame(records).to_csv(path, index=False)

    first, second = load_records(path)
    assert (first.last_name, first.model, first.city) == ("NA", "null", "None")
    assert first.payment_amount is None
    assert second.payment_amount == 120

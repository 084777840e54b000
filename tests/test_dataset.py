from __future__ import annotations

import inspect
from io import BytesIO

import pandas as pd
import pytest

from pagination_flow.api.dataset import bulk_product_import
from pagination_flow.dataset import (
    CATEGORIES,
    PRODUCT_COLUMNS,
    frame_to_csv,
    frame_to_excel,
    frame_to_products,
    generate_product_data,
    read_product_frame,
)
from pagination_flow.errors import (
    DatasetValidationError,
    UnreadableFileError,
    UnsupportedFileError,
)


def test_generate_product_data_shape() -> None:
    df = generate_product_data(20)

    assert list(df.columns) == PRODUCT_COLUMNS
    assert len(df) == 20
    assert set(df["category"]) <= set(CATEGORIES)
    assert df["price"].between(10.99, 499.99).all()
    assert df["stock_quantity"].between(0, 500).all()


def test_generated_rows_validate_as_products() -> None:
    products = frame_to_products(generate_product_data(5))

    assert len(products) == 5
    assert all(p.product_id is not None for p in products)


def test_read_product_frame_csv_and_excel() -> None:
    df = generate_product_data(3)

    from_csv = read_product_frame("products.CSV", BytesIO(frame_to_csv(df).encode("utf-8")))
    from_excel = read_product_frame("products.xlsx", BytesIO(frame_to_excel(df)))

    assert list(from_csv["name"]) == list(df["name"])
    assert list(from_excel["name"]) == list(df["name"])


def test_read_product_frame_rejects_other_files() -> None:
    with pytest.raises(UnsupportedFileError):
        read_product_frame("products.json", BytesIO(b"{}"))


def test_frame_to_products_reports_bad_row() -> None:
    df = pd.DataFrame(
        [
            {"name": "Pink Shirt", "people": "Girl", "category": "Shirt", "price": 15.0,
             "stock_quantity": 1, "manufacturer": "Nike", "description": "ok"},
            {"name": "Pink Shirt", "people": "Girl", "category": "Shirt", "price": -1.0,
             "stock_quantity": 1, "manufacturer": "Nike", "description": "bad"},
        ]
    )

    with pytest.raises(DatasetValidationError) as exc_info:
        frame_to_products(df)

    assert exc_info.value.row == 2


def test_generate_dataset_endpoint_csv(client) -> None:
    resp = client.get("/generate-dummy-product-dataset", params={"rows": 4})

    assert resp.status_code == 200
    assert resp.headers["content-disposition"] == "attachment; filename=dummy_products_4.csv"
    assert len(resp.text.strip().splitlines()) == 5


def test_generate_dataset_endpoint_rejects_bad_rows(client) -> None:
    resp = client.get("/generate-dummy-product-dataset", params={"rows": 0})

    assert resp.status_code == 400


def test_bulk_import_then_paginate(client) -> None:
    csv_text = frame_to_csv(generate_product_data(13))

    resp = client.post(
        "/bulk-product-import",
        files={"file": ("products.csv", csv_text.encode("utf-8"), "text/csv")},
    )

    assert resp.status_code == 200
    assert resp.json()["imported_count"] == 13
    page = client.get("/products", params={"page": 2}).json()
    assert page["total_items"] == 13
    assert len(page["items"]) == 3


def test_bulk_import_rejects_unsupported_file(client) -> None:
    resp = client.post(
        "/bulk-product-import",
        files={"file": ("products.txt", b"hello", "text/plain")},
    )

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "invalid_dataset"


@pytest.mark.parametrize(
    ("filename", "content"),
    [("products.csv", b""), ("products.xlsx", b"not a workbook"), ("products.xlsx", b"PK\x03\x04broken")],
)
def test_read_product_frame_wraps_parse_failures(filename, content) -> None:
    with pytest.raises(UnreadableFileError) as exc_info:
        read_product_frame(filename, BytesIO(content))

    assert exc_info.value.filename == filename


@pytest.mark.parametrize(
    ("filename", "content"),
    [("products.csv", b""), ("products.xlsx", b"not a workbook")],
)
def test_bulk_import_of_unreadable_file_is_a_client_error(client, filename, content) -> None:
    resp = client.post("/bulk-product-import", files={"file": (filename, content)})

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "invalid_dataset"
    assert client.get("/products").json()["total_items"] == 0


def test_bulk_import_route_runs_in_threadpool() -> None:
    assert not inspect.iscoroutinefunction(bulk_product_import)


def test_bulk_import_excel_upload(client) -> None:
    workbook = frame_to_excel(generate_product_data(4))

    resp = client.post("/bulk-product-import", files={"file": ("products.xlsx", workbook)})

    assert resp.status_code == 200
    assert resp.json()["imported_count"] == 4

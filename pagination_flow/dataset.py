import random
import uuid
from io import BytesIO, StringIO
from typing import BinaryIO
from zipfile import BadZipFile

import pandas as pd
from faker import Faker
from pydantic import ValidationError

from pagination_flow.errors import (
    DatasetValidationError,
    UnreadableFileError,
    UnsupportedFileError,
)
from pagination_flow.models import ProductCreate

fake = Faker()

CATEGORIES = ["Shirt", "Jeans", "Footwear"]
PEOPLE = ["Men", "Women", "Boy", "Girl"]
COLOURS = ["Pink", "Blue", "Red", "Green"]
COMPANIES = ["Nike", "Adidas", "Puma", "Reebok"]

PRODUCT_COLUMNS = [
    "product_id",
    "name",
    "people",
    "category",
    "price",
    "stock_quantity",
    "manufacturer",
    "description",
]


def generate_product_data(num_rows: int) -> pd.DataFrame:
    """Generates a Pandas DataFrame with dummy fashion/clothing product data."""
    data = []

    for _ in range(num_rows):
        cur_category = random.choice(CATEGORIES)
        data.append(
            {
                "product_id": str(uuid.uuid4()),
                "name": random.choice(COLOURS) + " " + cur_category,
                "people": random.choice(PEOPLE),
                "category": cur_category,
                "price": round(random.uniform(10.99, 499.99), 2),
                "stock_quantity": random.randint(0, 500),
                "manufacturer": random.choice(COMPANIES),
                "description": fake.sentence(nb_words=3),
            }
        )

    return pd.DataFrame(data, columns=PRODUCT_COLUMNS)


def frame_to_csv(df: pd.DataFrame) -> str:
    stream = StringIO()
    df.to_csv(stream, index=False, encoding="utf-8")
    return stream.getvalue()


def frame_to_excel(df: pd.DataFrame) -> bytes:
    stream = BytesIO()
    df.to_excel(stream, index=False, sheet_name="Products", engine="openpyxl")
    return stream.getvalue()


def read_product_frame(filename: str | None, stream: BinaryIO) -> pd.DataFrame:
    name = (filename or "").lower()
    if name.endswith((".xls", ".xlsx")):
        reader = pd.read_excel
    elif name.endswith(".csv"):
        reader = pd.read_csv
    else:
        raise UnsupportedFileError(filename)

    try:
        return reader(stream)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, ValueError, BadZipFile) as exc:
        raise UnreadableFileError(filename, str(exc) or type(exc).__name__) from exc


def frame_to_products(df: pd.DataFrame) -> list[ProductCreate]:
    """Validate each row of ``df`` as a product.

    Row numbers in errors are 1-based and exclude the header line.
    """
    # NaN would slip through as a float; treat blanks as missing.
    records = df.astype(object).where(pd.notna(df), None).to_dict(orient="records")
    products = []
    for row_number, record in enumerate(records, start=1):
        try:
            products.append(ProductCreate.model_validate(record))
        except ValidationError as exc:
            raise DatasetValidationError(row_number, exc.errors(include_url=False)) from exc
    return products

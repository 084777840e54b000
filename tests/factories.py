import uuid
from datetime import datetime, timedelta, timezone

from pagination_flow.models import Product

CREATED_BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_product(index: int, **overrides) -> Product:
    fields = {
        "product_id": uuid.UUID(int=index + 1),
        "name": f"Blue Shirt {index}",
        "people": "Men",
        "category": "Shirt",
        "price": 19.99 + index,
        "stock_quantity": index,
        "manufacturer": "Nike",
        "description": f"Product number {index}",
        "created_at": CREATED_BASE + timedelta(seconds=index),
    }
    fields.update(overrides)
    return Product(**fields)

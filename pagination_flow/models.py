import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProductBase(SQLModel):
    name: str = Field(index=False, nullable=False)
    people: str = Field(index=True)
    category: str = Field(index=False, nullable=False)
    price: float = Field(gt=0, nullable=False)
    stock_quantity: int = Field(ge=0, default=0)
    manufacturer: str
    description: str


class Product(ProductBase, table=True):
    product_id: uuid.UUID = Field(
        default_factory=uuid.uuid4, index=True, primary_key=True
    )
    # Insertion order; listings sort on it.
    created_at: datetime = Field(
        default_factory=_utcnow, nullable=False, index=True, sa_type=DateTime(timezone=True)
    )


class ProductCreate(ProductBase):
    """Validated input for a new product. Imports may carry their own id."""

    product_id: Optional[uuid.UUID] = None


class ProductRead(ProductBase):
    product_id: uuid.UUID


class ProductUpdate(SQLModel):
    name: Optional[str] = None
    people: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(default=None, gt=0)
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    manufacturer: Optional[str] = None
    description: Optional[str] = None

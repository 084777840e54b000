from __future__ import annotations

import uuid
from typing import Iterable

from pagination_flow.logging import get_logger
from pagination_flow.models import Product, ProductCreate, ProductUpdate
from pagination_flow.pagination import PagedResult
from pagination_flow.repository import Repository

logger = get_logger(__name__)


class ProductService:
    """Product-facing façade over ``Repository[Product]``."""

    def __init__(self, repository: Repository[Product]):
        self._repository = repository

    def get_paged_products(self, page: int, page_size: int) -> PagedResult[Product]:
        return self._repository.get_paged(page, page_size)

    def get_all_products(self) -> list[Product]:
        return self._repository.get_all()

    def get_product(self, product_id: uuid.UUID) -> Product | None:
        return self._repository.get_by_id(product_id)

    def create_product(self, data: ProductCreate) -> Product:
        product = _to_product(data)
        self._repository.add(product)
        self._repository.save()
        return product

    def update_product(self, product_id: uuid.UUID, data: ProductUpdate) -> Product | None:
        product = self._repository.get_by_id(product_id)
        if product is None:
            return None
        product.sqlmodel_update(data.model_dump(exclude_unset=True))
        self._repository.update(product)
        self._repository.save()
        return product

    def delete_product(self, product_id: uuid.UUID) -> bool:
        product = self._repository.get_by_id(product_id)
        if product is None:
            return False
        self._repository.delete(product)
        self._repository.save()
        return True

    def import_products(self, records: Iterable[ProductCreate]) -> int:
        """Stage every record and commit them as one batch."""
        for record in records:
            self._repository.add(_to_product(record))
        imported = self._repository.save()
        logger.info("products_imported", imported_count=imported)
        return imported


def _to_product(data: ProductCreate) -> Product:
    fields = data.model_dump(exclude_none=True)
    return Product.model_validate(fields)

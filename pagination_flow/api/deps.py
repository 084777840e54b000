from __future__ import annotations

from fastapi import Depends
from sqlmodel import Session

from pagination_flow.db import get_session
from pagination_flow.models import Product
from pagination_flow.repository import Repository
from pagination_flow.services.product_service import ProductService
from pagination_flow.settings import Settings, get_settings


def get_product_repository(session: Session = Depends(get_session)) -> Repository[Product]:
    return Repository(session, Product, order_by=(Product.created_at, Product.product_id))


def get_product_service(
    repository: Repository[Product] = Depends(get_product_repository),
) -> ProductService:
    return ProductService(repository)


def get_page_size(settings: Settings = Depends(get_settings)) -> int:
    return settings.page_size

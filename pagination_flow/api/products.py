from __future__ import annotations

import uuid
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from pagination_flow.api.deps import get_page_size, get_product_service
from pagination_flow.logging import get_logger
from pagination_flow.models import ProductCreate, ProductRead, ProductUpdate
from pagination_flow.pagination import PagedResult
from pagination_flow.schemas import ErrorResponse
from pagination_flow.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))
logger = get_logger(__name__)

INVALID_PAGE = {400: {"model": ErrorResponse, "description": "Page number below 1"}}
NOT_FOUND = {404: {"model": ErrorResponse, "description": "Product not found"}}


@router.get(
    "",
    response_model=PagedResult[ProductRead],
    summary="Get a paginated list of products",
    responses=INVALID_PAGE,
)
def list_products(
    page: int = 1,
    page_size: int = Depends(get_page_size),
    service: ProductService = Depends(get_product_service),
):
    products = service.get_paged_products(page, page_size)
    logger.info(
        "products_page_served",
        page=page,
        page_size=page_size,
        returned=len(products.items),
        total_items=products.total_items,
    )
    return products


@router.get(
    "/view",
    response_class=HTMLResponse,
    summary="Render a page of products",
    responses=INVALID_PAGE,
)
def view_products(
    request: Request,
    page: int = 1,
    page_size: int = Depends(get_page_size),
    service: ProductService = Depends(get_product_service),
):
    products = service.get_paged_products(page, page_size)
    return templates.TemplateResponse(request, "products/index.html", {"products": products})


@router.get("/all", response_model=list[ProductRead], summary="Get every product")
def list_all_products(service: ProductService = Depends(get_product_service)):
    return service.get_all_products()


@router.get("/{product_id}", response_model=ProductRead, responses=NOT_FOUND)
def get_product(product_id: uuid.UUID, service: ProductService = Depends(get_product_service)):
    product = service.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product '{product_id}' not found.")
    return product


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product(data: ProductCreate, service: ProductService = Depends(get_product_service)):
    return service.create_product(data)


@router.patch("/{product_id}", response_model=ProductRead, responses=NOT_FOUND)
def update_product(
    product_id: uuid.UUID,
    data: ProductUpdate,
    service: ProductService = Depends(get_product_service),
):
    product = service.update_product(product_id, data)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product '{product_id}' not found.")
    return product


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
def delete_product(product_id: uuid.UUID, service: ProductService = Depends(get_product_service)):
    if not service.delete_product(product_id):
        raise HTTPException(status_code=404, detail=f"Product '{product_id}' not found.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

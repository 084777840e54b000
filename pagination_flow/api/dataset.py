import time
from io import BytesIO
from typing import Literal

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import Response, StreamingResponse

from pagination_flow.api.deps import get_product_service
from pagination_flow.dataset import (
    frame_to_csv,
    frame_to_excel,
    frame_to_products,
    generate_product_data,
    read_product_frame,
)
from pagination_flow.logging import get_logger
from pagination_flow.schemas import ErrorResponse, ImportResult
from pagination_flow.services.product_service import ProductService
from pagination_flow.settings import Settings, get_settings

router = APIRouter(tags=["dataset"])
logger = get_logger(__name__)


@router.get(
    "/generate-dummy-product-dataset",
    summary="Generate and download a dummy product dataset",
    response_description="A file download (CSV or Excel) containing the product data.",
    responses={400: {"model": ErrorResponse}},
)
def generate_dataset(
    rows: int = 100,
    format: Literal["csv", "excel"] = "csv",
    settings: Settings = Depends(get_settings),
):
    if rows <= 0 or rows > settings.dataset_max_rows:
        raise HTTPException(
            status_code=400,
            detail=f"The 'rows' parameter must be a positive integer, max {settings.dataset_max_rows}.",
        )

    df = generate_product_data(rows)
    filename = f"dummy_products_{rows}"
    logger.info("dataset_generated", rows=rows, format=format)

    if format == "csv":
        return StreamingResponse(
            iter([frame_to_csv(df)]),
            media_type="text/csv",
            headers={
                "Content-Disposition": f"attachment; filename={filename}.csv",
                "Content-Type": "text/csv; charset=utf-8",
            },
        )

    return Response(
        content=frame_to_excel(df),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={filename}.xlsx"},
    )


@router.post(
    "/bulk-product-import",
    response_model=ImportResult,
    summary="Bulk upload products from CSV or Excel",
    responses={400: {"model": ErrorResponse}},
)
def bulk_product_import(
    file: UploadFile = File(...),
    service: ProductService = Depends(get_product_service),
):
    start = time.perf_counter()

    df = read_product_frame(file.filename, BytesIO(file.file.read()))
    products = frame_to_products(df)
    imported_count = service.import_products(products)

    end = time.perf_counter()
    return ImportResult(
        status="success",
        imported_count=imported_count,
        timeTaken_ms=round((end - start) * 1000, 2),
    )

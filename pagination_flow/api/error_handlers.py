from __future__ import annotations

from typing import Any

from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pagination_flow.errors import (
    DatasetError,
    DatasetValidationError,
    EntityNotFoundError,
    InvalidPageError,
)
from pagination_flow.logging import get_logger
from pagination_flow.schemas import ErrorBody, ErrorResponse

logger = get_logger(__name__)


def _build_error_payload(
    *,
    code: str,
    message: str,
    request: Request,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return ErrorResponse(
        error=ErrorBody(
            code=code,
            message=message,
            details=jsonable_encoder(details),
            request_id=getattr(request.state, "request_id", None),
        )
    ).model_dump()


def _error_response(*, status_code: int, payload: dict[str, Any], request: Request) -> JSONResponse:
    response = JSONResponse(status_code=status_code, content=payload)
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers["x-request-id"] = request_id
    return response


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    details = exc.detail if isinstance(exc.detail, dict) else {"detail": exc.detail}
    return _error_response(
        status_code=exc.status_code,
        payload=_build_error_payload(
            code="http_error",
            message="Request failed.",
            request=request,
            details=details,
        ),
        request=request,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    return _error_response(
        status_code=422,
        payload=_build_error_payload(
            code="validation_error",
            message="Invalid request payload or query parameters.",
            request=request,
            details={"errors": exc.errors()},
        ),
        request=request,
    )


async def invalid_page_handler(request: Request, exc: InvalidPageError) -> JSONResponse:
    return _error_response(
        status_code=400,
        payload=_build_error_payload(
            code="invalid_page",
            message=str(exc),
            request=request,
            details={"page_number": exc.page_number, "page_size": exc.page_size},
        ),
        request=request,
    )


async def entity_not_found_handler(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return _error_response(
        status_code=404,
        payload=_build_error_payload(
            code="not_found",
            message=str(exc),
            request=request,
            details={"model": exc.model_name, "key": exc.key},
        ),
        request=request,
    )


async def dataset_error_handler(request: Request, exc: DatasetError) -> JSONResponse:
    details = None
    if isinstance(exc, DatasetValidationError):
        details = {"row": exc.row, "errors": exc.errors}
    return _error_response(
        status_code=400,
        payload=_build_error_payload(
            code="invalid_dataset",
            message=str(exc),
            request=request,
            details=details,
        ),
        request=request,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_exception", path=request.url.path, exc_info=exc)
    return _error_response(
        status_code=500,
        payload=_build_error_payload(
            code="internal_error",
            message="Unexpected server error.",
            request=request,
            details={"detail": str(exc)},
        ),
        request=request,
    )

from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError

from pagination_flow.api import dataset, products
from pagination_flow.api.error_handlers import (
    dataset_error_handler,
    entity_not_found_handler,
    http_exception_handler,
    invalid_page_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from pagination_flow.db import create_tables, get_engine, healthcheck
from pagination_flow.errors import DatasetError, EntityNotFoundError, InvalidPageError
from pagination_flow.logging import configure_logging, get_logger
from pagination_flow.settings import get_settings

settings = get_settings()
configure_logging(
    settings.log_level,
    app_name=settings.app_name,
    app_env=settings.app_env,
    sql_echo=settings.database_echo,
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("application_started", app_env=settings.app_env)
    create_tables(get_engine())
    yield
    logger.info("application_stopping")


# Init
app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.include_router(products.router)
app.include_router(dataset.router)

app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(InvalidPageError, invalid_page_handler)
app.add_exception_handler(EntityNotFoundError, entity_not_found_handler)
app.add_exception_handler(DatasetError, dataset_error_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id", str(uuid4()))
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["x-request-id"] = request_id
    return response


@app.get("/")
def root():
    return {"message": "Hello FastAPI"}


@app.get("/health")
def get_health() -> dict:
    return {"status": "ok", "db": healthcheck()}

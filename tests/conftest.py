from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from pagination_flow.api.deps import get_product_repository
from pagination_flow.db import get_session
from pagination_flow.main import app
from pagination_flow.models import Product
from pagination_flow.repository import Repository
from tests.factories import make_product


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture()
def repository(session: Session) -> Repository[Product]:
    return get_product_repository(session)


@pytest.fixture()
def seed_products(engine: Engine):
    def _seed(count: int) -> list[Product]:
        products = [make_product(i) for i in range(count)]
        with Session(engine, expire_on_commit=False) as session:
            session.add_all(products)
            session.commit()
        return products

    return _seed


@pytest.fixture()
def client(engine: Engine) -> Iterator[TestClient]:
    def _override_session() -> Iterator[Session]:
        with Session(engine, expire_on_commit=False) as session:
            yield session

    app.dependency_overrides[get_session] = _override_session
    yield TestClient(app)
    app.dependency_overrides.clear()

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import func, inspect as sa_inspect
from sqlmodel import Session, SQLModel, select

from pagination_flow.errors import EntityNotFoundError, InvalidPageError
from pagination_flow.logging import get_logger
from pagination_flow.pagination import PagedResult

ModelT = TypeVar("ModelT", bound=SQLModel)

logger = get_logger(__name__)


class Operation(str, enum.Enum):
    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class PendingOperation:
    operation: Operation
    entity: Any

    def apply(self, session: Session) -> None:
        if self.operation is Operation.ADD:
            session.add(self.entity)
            return

        if self.entity not in session:
            self._ensure_stored(session)
        if self.operation is Operation.UPDATE:
            session.merge(self.entity)
        else:
            target = self.entity if self.entity in session else session.merge(self.entity)
            session.delete(target)

    def _ensure_stored(self, session: Session) -> None:
        model = type(self.entity)
        key = sa_inspect(model).primary_key_from_instance(self.entity)
        identity = key[0] if len(key) == 1 else tuple(key)
        if session.get(model, identity) is None:
            raise EntityNotFoundError(model.__name__, identity)


class Repository(Generic[ModelT]):
    """Generic data access for one SQLModel table.

    Reads go straight to the database and hand back detached snapshots.
    Writes are only staged: ``add``/``update``/``delete`` append to a pending
    list that ``save`` applies in a single transaction. Updating or deleting
    a row that is not stored fails the whole batch with
    ``EntityNotFoundError``.

    Rows are ordered by ``order_by`` (the primary key when omitted), so page
    boundaries are stable and walking every page reproduces ``get_all()``.
    Pass an insertion key such as a creation timestamp to list rows in
    insertion order; a random primary key gives a stable but arbitrary order.

    ``get_all`` and ``get_paged`` expunge what they load from the session.
    That includes an instance handed out earlier by ``get_by_id`` for the
    same row: it becomes detached too, and later changes to it only reach
    the store through ``update``.
    """

    def __init__(
        self,
        session: Session,
        model: type[ModelT],
        order_by: Sequence[Any] | None = None,
    ):
        self._session = session
        self.model = model
        self._order_by = tuple(order_by) if order_by else tuple(sa_inspect(model).primary_key)
        self._pending: list[PendingOperation] = []

    # ---------- reads ----------
    def get_all(self) -> list[ModelT]:
        with self._session.no_autoflush:
            rows = self._session.exec(select(self.model).order_by(*self._order_by)).all()
        return self._detach(rows)

    def get_paged(self, page_number: int, page_size: int) -> PagedResult[ModelT]:
        if page_number < 1 or page_size < 1:
            raise InvalidPageError(page_number, page_size)

        offset = (page_number - 1) * page_size
        with self._session.no_autoflush:
            total_items = self._session.exec(
                select(func.count()).select_from(self.model)
            ).one()
            rows = self._session.exec(
                select(self.model)
                .order_by(*self._order_by)
                .offset(offset)
                .limit(page_size)
            ).all()

        return PagedResult[self.model](
            items=self._detach(rows),
            total_items=total_items,
            page_number=page_number,
            page_size=page_size,
        )

    def get_by_id(self, id: Any) -> ModelT | None:
        with self._session.no_autoflush:
            return self._session.get(self.model, id)

    # ---------- unit of work ----------
    def add(self, entity: ModelT) -> None:
        self._stage(Operation.ADD, entity)

    def update(self, entity: ModelT) -> None:
        self._stage(Operation.UPDATE, entity)

    def delete(self, entity: ModelT) -> None:
        self._stage(Operation.DELETE, entity)

    @property
    def pending(self) -> tuple[PendingOperation, ...]:
        return tuple(self._pending)

    def discard(self) -> None:
        self._pending.clear()

    def save(self) -> int:
        """Apply every staged operation in one transaction.

        The batch is consumed whether or not the commit succeeds. On failure
        the transaction is rolled back and the store's error is re-raised.
        """
        batch, self._pending = self._pending, []
        if not batch:
            return 0
        try:
            for pending in batch:
                pending.apply(self._session)
            self._session.commit()
        except Exception:
            self._session.rollback()
            logger.warning(
                "unit_of_work_failed",
                model=self.model.__name__,
                operations=len(batch),
                exc_info=True,
            )
            raise
        logger.info(
            "unit_of_work_committed",
            model=self.model.__name__,
            operations=len(batch),
        )
        return len(batch)

    def _stage(self, operation: Operation, entity: ModelT) -> None:
        if not isinstance(entity, self.model):
            raise TypeError(
                f"{type(self).__name__} for {self.model.__name__} cannot stage "
                f"{type(entity).__name__}"
            )
        self._pending.append(PendingOperation(operation, entity))

    def _detach(self, rows: Sequence[ModelT]) -> list[ModelT]:
        for row in rows:
            self._session.expunge(row)
        return list(rows)

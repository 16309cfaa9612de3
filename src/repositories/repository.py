"""Generic SQLAlchemy repository shared by every Portfi entity."""

import logging
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

from sqlalchemy import inspect, select
from sqlalchemy.orm import Query, Session
from sqlalchemy.orm.attributes import flag_modified
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K")


class Repository(Generic[T, K]):
    """
    CRUD access to one mapped class through a request-scoped session.

    Lookups return ``None`` when nothing matches; deciding whether that is an
    error is left to the calling service. ``update`` and ``delete`` report
    failure as ``False`` instead of raising.
    """

    def __init__(self, session: Session, model: type[T]):
        self.session = session
        self.model = model

    def get_by_id(self, id: K) -> T | None:
        """Point lookup by primary key. Relations are not loaded."""
        return self.session.get(self.model, id)

    async def get_by_id_async(self, id: K) -> T | None:
        return await run_in_threadpool(self.get_by_id, id)

    def first_or_default(self, predicate: Callable[[T], bool]) -> T | None:
        """
        First entity matching a Python predicate.

        The predicate runs in memory, so every row is loaded. Prefer
        ``first_or_default_where`` on anything but small tables.
        """
        return next((entity for entity in self.session.query(self.model) if predicate(entity)), None)

    async def first_or_default_async(self, predicate: Callable[[T], bool]) -> T | None:
        return await run_in_threadpool(self.first_or_default, predicate)

    def first_or_default_where(self, *criteria: Any) -> T | None:
        """First entity matching SQL criteria, filtered by the database."""
        stmt = select(self.model).where(*criteria).limit(1)
        return self.session.execute(stmt).scalars().first()

    async def first_or_default_where_async(self, *criteria: Any) -> T | None:
        return await run_in_threadpool(self.first_or_default_where, *criteria)

    def get_all(self) -> list[T]:
        return list(self.session.execute(select(self.model)).scalars().all())

    async def get_all_async(self) -> list[T]:
        return await run_in_threadpool(self.get_all)

    def get_all_attached(self) -> Query:
        """Lazy query bound to the session; add options/filters before executing."""
        return self.session.query(self.model)

    def add(self, item: T) -> None:
        try:
            self.session.add(item)
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            logger.error(f"Error adding {self.model.__name__}: {e}")
            raise

    async def add_async(self, item: T) -> None:
        await run_in_threadpool(self.add, item)

    def add_range(self, items: Iterable[T]) -> None:
        try:
            self.session.add_all(list(items))
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            logger.error(f"Error adding {self.model.__name__} range: {e}")
            raise

    async def add_range_async(self, items: Iterable[T]) -> None:
        await run_in_threadpool(self.add_range, items)

    def delete(self, entity: T) -> bool:
        """Delete and commit. Returns True when a row was removed."""
        try:
            self.session.delete(entity)
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            logger.error(f"Error deleting {self.model.__name__}: {e}")
            return False
        return inspect(entity).was_deleted

    async def delete_async(self, entity: T) -> bool:
        return await run_in_threadpool(self.delete, entity)

    def update(self, item: T) -> bool:
        """Attach ``item``, mark every loaded column modified and commit."""
        try:
            self.session.add(item)
            state = inspect(item)
            for attr in state.mapper.column_attrs:
                if attr.key in state.dict and not any(column.primary_key for column in attr.columns):
                    flag_modified(item, attr.key)
            self.session.commit()
            return True
        except Exception as e:
            self.session.rollback()
            logger.error(f"Error updating {self.model.__name__}: {e}")
            return False

    async def update_async(self, item: T) -> bool:
        return await run_in_threadpool(self.update, item)

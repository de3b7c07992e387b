"""Narrow record-store interface over an async SQLAlchemy session."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_portal.errors import StoreFailure, StoreIntegrityError
from payroll_portal.models import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class RecordStore(Generic[ModelT]):
    """Per-entity store exposing insert/get/count_where/delete.

    Services never build queries beyond simple criteria; everything the
    store raises is a StoreFailure (StoreIntegrityError for constraint
    violations) so callers see one error family regardless of backend.
    """

    def __init__(self, session: AsyncSession, model: type[ModelT]):
        self.session = session
        self.model = model

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    async def insert(self, record: ModelT) -> ModelT:
        """Persist a new record and return it with defaults populated."""
        try:
            self.session.add(record)
            await self.session.flush()
        except IntegrityError as exc:
            await self._discard(record)
            raise StoreIntegrityError(f"{self.entity_name} violates a store constraint") from exc
        except SQLAlchemyError as exc:
            logger.exception("insert into %s failed", self.model.__tablename__)
            raise StoreFailure(f"Could not save {self.entity_name.lower()}") from exc
        return record

    async def get(self, record_id: UUID) -> ModelT | None:
        """Load a record by primary key, None when missing."""
        try:
            return await self.session.get(self.model, record_id)
        except SQLAlchemyError as exc:
            logger.exception("get from %s failed", self.model.__tablename__)
            raise StoreFailure(f"Could not load {self.entity_name.lower()}") from exc

    async def count_where(self, *criteria: ColumnElement[bool]) -> int:
        """Count records matching all criteria."""
        query = select(func.count()).select_from(self.model).where(*criteria)
        try:
            return await self.session.scalar(query) or 0
        except SQLAlchemyError as exc:
            logger.exception("count on %s failed", self.model.__tablename__)
            raise StoreFailure(f"Could not count {self.entity_name.lower()} records") from exc

    async def delete(self, record_id: UUID) -> bool:
        """Delete by primary key. Returns False when nothing was deleted."""
        pk = self.model.__mapper__.primary_key[0]
        try:
            await self.session.flush()
            result = await self.session.execute(delete(self.model).where(pk == record_id))
        except IntegrityError as exc:
            await self.session.rollback()
            raise StoreIntegrityError(
                f"{self.entity_name} is still referenced by other records"
            ) from exc
        except SQLAlchemyError as exc:
            logger.exception("delete from %s failed", self.model.__tablename__)
            raise StoreFailure(f"Could not delete {self.entity_name.lower()}") from exc

        return result.rowcount > 0

    async def first_where(self, *criteria: ColumnElement[bool]) -> ModelT | None:
        """First record matching all criteria, or None."""
        try:
            result = await self.session.execute(select(self.model).where(*criteria).limit(1))
            return result.scalars().first()
        except SQLAlchemyError as exc:
            logger.exception("lookup on %s failed", self.model.__tablename__)
            raise StoreFailure(f"Could not load {self.entity_name.lower()}") from exc

    async def list_where(
        self,
        *criteria: ColumnElement[bool],
        order_by: Sequence[Any] = (),
    ) -> list[ModelT]:
        """All records matching the criteria, in the given order."""
        query = select(self.model).where(*criteria).order_by(*order_by)
        try:
            result = await self.session.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as exc:
            logger.exception("list on %s failed", self.model.__tablename__)
            raise StoreFailure(f"Could not load {self.entity_name.lower()} records") from exc

    async def _discard(self, record: ModelT) -> None:
        await self.session.rollback()
        if record in self.session:
            self.session.expunge(record)

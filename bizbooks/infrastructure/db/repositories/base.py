"""
Shared data-access plumbing for the record tables.

Every record store write goes through ``_commit``: on a database error the
session is rolled back and ``StorageError`` is raised, so the attempted change
never half-applies.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, Iterable, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger("record_store")

ModelT = TypeVar("ModelT")


class StorageError(RuntimeError):
    """The record store could not apply a change."""


class RecordRepository(Generic[ModelT]):
    model: type[ModelT]

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ---------- small helpers ----------

    async def _commit(self, action: str, record: Any | None = None) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.error("%s %s failed: %s", self.model.__tablename__, action, exc)
            raise StorageError(f"Could not {action} {self.model.__tablename__} record") from exc
        if record is not None and action != "delete":
            await self.db.refresh(record)

    @staticmethod
    def _apply(record: Any, fields: dict[str, Any]) -> None:
        for key, value in fields.items():
            setattr(record, key, value)

    # ---------- reads ----------

    async def get_by_id(self, record_id: str) -> ModelT | None:
        stmt = select(self.model).where(self.model.id == str(record_id))
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self, ids: Iterable[str] | None = None) -> list[ModelT]:
        """All records, newest first; optionally only the given ids."""
        stmt = select(self.model)
        if ids is not None:
            stmt = stmt.where(self.model.id.in_([str(i) for i in ids]))
        stmt = stmt.order_by(self.model.created_at.desc())
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def count(self) -> int:
        stmt = select(func.count()).select_from(self.model)
        return (await self.db.execute(stmt)).scalar() or 0

    # ---------- writes ----------

    async def create(self, **fields: Any) -> ModelT:
        record = self.model(**fields)
        self.db.add(record)
        await self._commit("create", record)
        logger.info("Created %s %s", self.model.__tablename__, record.id)
        return record

    async def update(self, record: ModelT, **fields: Any) -> ModelT:
        self._apply(record, fields)
        await self._commit("update", record)
        return record

    async def delete(self, record: ModelT) -> None:
        await self.db.delete(record)
        await self._commit("delete")
        logger.info("Deleted %s %s", self.model.__tablename__, record.id)

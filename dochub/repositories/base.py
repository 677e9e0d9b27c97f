"""Generic async repository with soft-delete, pagination and restore."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from dochub.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Generic CRUD repository.

    Soft-deletes: for models carrying ``deleted_at``, standard reads exclude
    rows where it is set. Pass ``trashed=True`` to read only those rows, or
    ``trashed=None`` to ignore the marker entirely.
    """

    model: type[ModelT]
    # Columns that must never drive ordering (secrets)
    unsortable_columns: frozenset[str] = frozenset()

    def __init__(self, session: AsyncSession):
        self._session = session

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _base_query(self, *, trashed: Optional[bool] = False):
        """Return a SELECT honouring the soft-delete marker."""
        q = select(self.model)
        if hasattr(self.model, "deleted_at") and trashed is not None:
            if trashed:
                q = q.where(self.model.deleted_at.is_not(None))
            else:
                q = q.where(self.model.deleted_at.is_(None))
        return q

    def _sort_column(self, name: str):
        # Only real, non-secret columns are sortable; anything else falls back to created_at
        columns = self.model.__table__.columns
        if name in columns and name not in self.unsortable_columns:
            return columns.get(name)
        return columns.get("created_at")

    async def _paginate(
        self,
        q,
        *,
        offset: int = 0,
        limit: int = 20,
        order_by: str = "created_at",
        order: str = "desc",
    ) -> tuple[list[Any], int]:
        """Count *q*, then apply ordering and a page window to it."""
        count_q = select(func.count()).select_from(q.subquery())
        total = (await self._session.execute(count_q)).scalar_one()

        col = self._sort_column(order_by)
        if col is not None:
            q = q.order_by(col.desc() if order == "desc" else col.asc())
        q = q.order_by(self.model.id)
        q = q.offset(offset).limit(limit)

        items = (await self._session.execute(q)).scalars().all()
        return list(items), total

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: str, *, trashed: Optional[bool] = False) -> ModelT | None:
        result = await self._session.execute(
            self._base_query(trashed=trashed).where(self.model.id == entity_id)
        )
        return result.scalars().first()

    async def list(
        self,
        *,
        offset: int = 0,
        limit: int = 20,
        order_by: str = "created_at",
        order: str = "desc",
        filters: dict[str, Any] | None = None,
        trashed: Optional[bool] = False,
    ) -> tuple[list[ModelT], int]:
        """Return (items, total_count) with pagination and optional column filters."""
        q = self._base_query(trashed=trashed)

        # Apply simple equality filters
        if filters:
            for col_name, value in filters.items():
                if value is not None and hasattr(self.model, col_name):
                    q = q.where(getattr(self.model, col_name) == value)

        return await self._paginate(q, offset=offset, limit=limit, order_by=order_by, order=order)

    async def exists(self, **filters: Any) -> bool:
        q = select(self.model.id)
        for col_name, value in filters.items():
            q = q.where(getattr(self.model, col_name) == value)
        result = await self._session.execute(q.limit(1))
        return result.first() is not None

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, **kwargs: Any) -> ModelT:
        instance = self.model(**kwargs)
        self._session.add(instance)
        await self._session.flush()  # populate id
        await self._session.refresh(instance)
        return instance

    async def update(self, entity_id: str, **kwargs: Any) -> ModelT | None:
        kwargs.pop("id", None)
        if "updated_at" not in kwargs and hasattr(self.model, "updated_at"):
            kwargs["updated_at"] = datetime.now(timezone.utc)

        await self._session.execute(
            update(self.model).where(self.model.id == entity_id).values(**kwargs)
        )
        await self._session.flush()
        return await self.get_by_id(entity_id, trashed=None)

    async def soft_delete(self, entity_id: str) -> bool:
        result = await self._session.execute(
            update(self.model)
            .where(self.model.id == entity_id)
            .where(self.model.deleted_at.is_(None))
            .values(deleted_at=datetime.now(timezone.utc))
        )
        await self._session.flush()
        return result.rowcount > 0

    async def restore(self, entity_id: str) -> bool:
        result = await self._session.execute(
            update(self.model)
            .where(self.model.id == entity_id)
            .where(self.model.deleted_at.is_not(None))
            .values(deleted_at=None)
        )
        await self._session.flush()
        return result.rowcount > 0

    async def hard_delete(self, entity_id: str) -> bool:
        """Permanently remove a row. Dependent rows must already be gone."""
        result = await self._session.execute(
            delete(self.model).where(self.model.id == entity_id)
        )
        await self._session.flush()
        return result.rowcount > 0

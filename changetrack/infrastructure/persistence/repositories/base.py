"""Base repository: generic lookups, create and flush-backed update."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from changetrack.domain.exceptions import ResourceNotFoundException
from changetrack.infrastructure.persistence.database import Base


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user text matches literally; pair with a backslash escape."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, get_or_raise, create and save.

    Subclasses add the queries their aggregate needs and map ORM rows to
    application DTOs; nothing above the repository sees ORM instances.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get(self, entity_id: str) -> ModelType | None:
        """Return a single ORM row by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def _get_or_raise(self, entity_id: str) -> ModelType:
        row = await self._get(entity_id)
        if row is None:
            raise ResourceNotFoundException(self.model.__name__, entity_id)
        return row

    async def _add(self, obj: ModelType) -> ModelType:
        """Persist a new row and refresh server defaults."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _save(self, obj: ModelType) -> ModelType:
        """Flush pending changes on an attached row."""
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

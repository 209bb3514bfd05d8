"""
Owner-scoped repository: every read, write and delete is filtered by ``owner_id``.

Records that exist but belong to another owner are reported exactly like
records that do not exist (``None`` / ``False`` / ``[]``), so callers cannot
probe for other tenants' ids.
"""

from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type
from sqlalchemy import delete
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from .base import BaseRepository, T


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Patch(SQLModel):
    """Partial update payload; only fields the caller explicitly set are applied.

    Patch models never declare ``id`` or ``owner_id``, so those cannot be
    overwritten through an update.
    """

    # Columns that reject NULL; an explicit null for them is dropped
    non_nullable: ClassVar[Tuple[str, ...]] = ()

    def changes(self) -> Dict[str, Any]:
        data = self.model_dump(exclude_unset=True)
        return {
            key: value
            for key, value in data.items()
            if not (value is None and key in self.non_nullable)
        }


class OwnedRepository(BaseRepository[T]):
    """Generic CRUD where ``owner_id`` is part of every lookup."""

    # Fields a caller can never set through a create or update payload
    protected_fields: ClassVar[Tuple[str, ...]] = ("id", "owner_id", "created_at", "updated_at")

    def __init__(self, session: AsyncSession, model: Type[T]):
        super().__init__(session, model)

    async def list_for_owner(self, owner_id: str, *order_by: Any, **filters) -> List[T]:
        """All entities of one owner, optionally narrowed by extra column filters."""
        return await self.find_all(*order_by, owner_id=owner_id, **filters)

    async def get_for_owner(self, id: str, owner_id: str) -> Optional[T]:
        """Entity iff it exists and belongs to ``owner_id``."""
        entity = await self.get_by_id(id)
        if entity is None or entity.owner_id != owner_id:
            return None
        return entity

    async def create_for_owner(self, data: SQLModel, owner_id: str, **extra) -> T:
        """Build a new entity from a create payload and stamp it with ``owner_id``."""
        values = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if key not in self.protected_fields and value is not None
        }
        values.update(extra)
        entity = self.model(**values, owner_id=owner_id)
        return await self.create(entity)

    async def update_for_owner(self, id: str, patch: Patch, owner_id: str) -> Optional[T]:
        """Apply ``patch`` field by field; ``None`` when absent or foreign."""
        entity = await self.get_for_owner(id, owner_id)
        if entity is None:
            return None
        for key, value in patch.changes().items():
            if key in self.protected_fields:
                continue
            setattr(entity, key, value)
        if hasattr(entity, "updated_at"):
            entity.updated_at = utcnow()
        return await self.update(entity)

    async def delete_for_owner(self, id: str, owner_id: str) -> bool:
        entity = await self.get_for_owner(id, owner_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        return True

    async def delete_children(self, parent_field: str, parent_id: str, owner_id: str) -> int:
        """Remove every entity pointing at ``parent_id`` for the same owner."""
        parent_column = getattr(self.model, parent_field)
        statement = delete(self.model).where(
            parent_column == parent_id,
            self.model.owner_id == owner_id,
        )
        result = await self.session.execute(statement)
        return result.rowcount

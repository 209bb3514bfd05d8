"""
Repository abstract base class and generic implementation.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional, List, Type, Any
from sqlmodel import SQLModel, select, func
from sqlmodel.ext.asyncio.session import AsyncSession

T = TypeVar("T", bound=SQLModel)


class IRepository(ABC, Generic[T]):
    """Repository interface; defines standard data access API."""

    @abstractmethod
    async def get_by_id(self, id: str) -> Optional[T]:
        """Get entity by ID."""
        pass

    @abstractmethod
    async def get_all(self) -> List[T]:
        """Get all entities."""
        pass

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Create entity."""
        pass

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Update entity."""
        pass

    @abstractmethod
    async def delete(self, id: str) -> bool:
        """Delete entity."""
        pass


class BaseRepository(IRepository[T]):
    """Generic repository implementation with SQLModel CRUD; subclasses can add custom queries."""

    def __init__(self, session: AsyncSession, model: Type[T]):
        """Initialize repository with session and model."""
        self.session = session
        self.model = model

    def _filtered(self, statement, filters: dict):
        for key, value in filters.items():
            if not hasattr(self.model, key):
                raise AttributeError(f"{self.model.__name__} has no column '{key}'")
            statement = statement.where(getattr(self.model, key) == value)
        return statement

    async def get_by_id(self, id: str) -> Optional[T]:
        """Get entity by ID."""
        return await self.session.get(self.model, id)

    async def get_all(self) -> List[T]:
        """Get all entities."""
        result = await self.session.exec(select(self.model))
        return list(result.all())

    async def create(self, entity: T) -> T:
        """Create entity."""
        self.session.add(entity)
        return entity

    async def update(self, entity: T) -> T:
        """Update entity (SQLModel tracks changes)."""
        self.session.add(entity)
        return entity

    async def delete(self, id: str) -> bool:
        """Delete entity."""
        entity = await self.get_by_id(id)
        if entity:
            await self.session.delete(entity)
            return True
        return False

    async def find_one(self, **filters) -> Optional[T]:
        """Find one entity by filters (e.g. username='admin')."""
        statement = self._filtered(select(self.model), filters)
        result = await self.session.exec(statement)
        return result.first()

    async def find_all(self, *order_by: Any, **filters) -> List[T]:
        """Find entities by filters, optionally ordered."""
        statement = self._filtered(select(self.model), filters)
        if order_by:
            statement = statement.order_by(*order_by)
        result = await self.session.exec(statement)
        return list(result.all())

    async def count(self, **filters) -> int:
        """Count entities matching filters."""
        statement = self._filtered(select(func.count()).select_from(self.model), filters)
        result = await self.session.exec(statement)
        return result.one()

"""Orders module repository implementations."""

from typing import List
from framework.repository.owned import OwnedRepository
from .models import Note, Order


class OrderRepository(OwnedRepository[Order]):
    """Order repository."""

    def __init__(self, session):
        super().__init__(session, Order)

    async def list_newest_first(self, owner_id: str) -> List[Order]:
        """Owner's orders, most recently updated first."""
        return await self.list_for_owner(
            owner_id, Order.updated_at.desc(), Order.created_at.desc()
        )


class NoteRepository(OwnedRepository[Note]):
    """Order note repository."""

    def __init__(self, session):
        super().__init__(session, Note)

    async def list_by_order(self, order_id: str, owner_id: str) -> List[Note]:
        return await self.list_for_owner(owner_id, Note.created_at.asc(), order_id=order_id)

    async def delete_by_order(self, order_id: str, owner_id: str) -> int:
        return await self.delete_children("order_id", order_id, owner_id)

from typing import List, Optional
from loguru import logger
from framework.exceptions.handler import ParentNotFoundError
from framework.repository.unit_of_work import UnitOfWork
from .models import Note, NoteCreate, NoteUpdate, Order, OrderCreate, OrderUpdate
from .repository import NoteRepository, OrderRepository

class OrderService:
    """Orders and their notes, scoped to one owner per call.

    Reads return ``None``/``[]`` and deletes return ``False`` both when a record
    does not exist and when it belongs to another owner.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @property
    def orders(self) -> OrderRepository:
        return self.uow.get_repository(OrderRepository)

    @property
    def notes(self) -> NoteRepository:
        return self.uow.get_repository(NoteRepository)

    # --- Orders ---

    async def get_all_orders(self, owner_id: str) -> List[Order]:
        return await self.orders.list_newest_first(owner_id)

    async def get_order(self, order_id: str, owner_id: str) -> Optional[Order]:
        return await self.orders.get_for_owner(order_id, owner_id)

    async def create_order(self, data: OrderCreate, owner_id: str) -> Order:
        async with self.uow.transaction():
            order = await self.orders.create_for_owner(data, owner_id)
        logger.info(f"Order {order.id} created for owner {owner_id}")
        return order

    async def update_order(self, order_id: str, data: OrderUpdate, owner_id: str) -> Optional[Order]:
        async with self.uow.transaction():
            order = await self.orders.update_for_owner(order_id, data, owner_id)
        return order

    async def delete_order(self, order_id: str, owner_id: str) -> bool:
        """Delete an order and, in the same transaction, all of its notes."""
        async with self.uow.transaction():
            order = await self.orders.get_for_owner(order_id, owner_id)
            if order is None:
                return False
            removed_notes = await self.notes.delete_by_order(order_id, owner_id)
            await self.orders.delete_for_owner(order_id, owner_id)
        logger.info(f"Order {order_id} deleted with {removed_notes} note(s)")
        return True

    # --- Notes ---

    async def get_notes_by_order_id(self, order_id: str, owner_id: str) -> List[Note]:
        return await self.notes.list_by_order(order_id, owner_id)

    async def get_note(self, note_id: str, owner_id: str) -> Optional[Note]:
        return await self.notes.get_for_owner(note_id, owner_id)

    async def create_note(self, data: NoteCreate, owner_id: str) -> Note:
        """Raises ParentNotFoundError unless the order exists for this owner."""
        if await self.get_order(data.order_id, owner_id) is None:
            logger.warning(f"Note rejected: order {data.order_id} not available to owner {owner_id}")
            raise ParentNotFoundError("Order not found or access denied")
        async with self.uow.transaction():
            note = await self.notes.create_for_owner(data, owner_id)
        return note

    async def update_note(self, note_id: str, data: NoteUpdate, owner_id: str) -> Optional[Note]:
        async with self.uow.transaction():
            note = await self.notes.update_for_owner(note_id, data, owner_id)
        return note

    async def delete_note(self, note_id: str, owner_id: str) -> bool:
        async with self.uow.transaction():
            deleted = await self.notes.delete_for_owner(note_id, owner_id)
        return deleted

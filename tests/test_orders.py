"""Order and note store tests."""
import pytest
from framework.exceptions.handler import BusinessException, ParentNotFoundError
from apps.orders.models import NoteCreate, NoteUpdate, OrderCreate, OrderUpdate
from apps.orders.service import OrderService


class TestOrderCrud:
    """Create, read, update and delete within one owner."""

    async def test_create_then_get_returns_input_plus_generated_fields(self, orders: OrderService, owner_a):
        order = await orders.create_order(
            OrderCreate(order_number="251024435", part_number="87-2"), owner_a.id
        )

        fetched = await orders.get_order(order.id, owner_a.id)
        assert fetched is not None
        assert fetched.id == order.id
        assert fetched.owner_id == owner_a.id
        assert fetched.order_number == "251024435"
        assert fetched.part_number == "87-2"
        assert fetched.last_inquiry is None
        assert fetched.status == "under review"
        assert fetched.created_at is not None
        assert fetched.updated_at is not None

    async def test_explicit_status_is_kept(self, orders: OrderService, owner_a):
        order = await orders.create_order(OrderCreate(order_number="1", status="shipped"), owner_a.id)
        assert order.status == "shipped"

    async def test_get_all_orders_newest_first(self, orders: OrderService, owner_a):
        first = await orders.create_order(OrderCreate(order_number="1"), owner_a.id)
        second = await orders.create_order(OrderCreate(order_number="2"), owner_a.id)
        third = await orders.create_order(OrderCreate(order_number="3"), owner_a.id)
        # Touching the oldest order moves it to the front
        await orders.update_order(first.id, OrderUpdate(last_inquiry="called supplier"), owner_a.id)

        listed = await orders.get_all_orders(owner_a.id)
        assert [o.id for o in listed][0] == first.id
        assert {o.id for o in listed} == {first.id, second.id, third.id}

    async def test_get_all_orders_for_unknown_owner_is_empty(self, orders: OrderService):
        assert await orders.get_all_orders("nobody") == []

    async def test_update_merges_only_given_fields(self, orders: OrderService, owner_a):
        order = await orders.create_order(
            OrderCreate(order_number="100", part_number="P-1", last_inquiry="monday"), owner_a.id
        )

        updated = await orders.update_order(order.id, OrderUpdate(status="done"), owner_a.id)
        assert updated.status == "done"
        assert updated.part_number == "P-1"
        assert updated.last_inquiry == "monday"

    async def test_update_with_empty_patch_only_touches_updated_at(self, orders: OrderService, owner_a):
        order = await orders.create_order(OrderCreate(order_number="100", part_number="P-1"), owner_a.id)
        before = order.model_dump()

        updated = await orders.update_order(order.id, OrderUpdate(), owner_a.id)
        after = updated.model_dump()

        assert after["updated_at"] >= before["updated_at"]
        before.pop("updated_at")
        after.pop("updated_at")
        assert after == before

    async def test_explicit_null_for_required_field_is_ignored(self, orders: OrderService, owner_a):
        order = await orders.create_order(OrderCreate(order_number="100", part_number="P-1"), owner_a.id)

        updated = await orders.update_order(
            order.id, OrderUpdate(order_number=None, part_number=None), owner_a.id
        )
        assert updated.order_number == "100"
        assert updated.part_number is None

    async def test_patch_cannot_carry_owner_or_id(self, orders: OrderService, owner_a, owner_b):
        order = await orders.create_order(OrderCreate(order_number="100"), owner_a.id)

        patch = OrderUpdate.model_validate({"owner_id": owner_b.id, "id": "forged", "status": "x"})
        updated = await orders.update_order(order.id, patch, owner_a.id)

        assert updated.id == order.id
        assert updated.owner_id == owner_a.id
        assert await orders.get_order(order.id, owner_b.id) is None


class TestOwnershipScoping:
    """Another owner's records look exactly like missing records."""

    async def test_foreign_order_is_invisible(self, orders: OrderService, owner_a, owner_b):
        order = await orders.create_order(OrderCreate(order_number="A-1"), owner_a.id)

        assert await orders.get_order(order.id, owner_b.id) is None
        assert await orders.get_order("missing-id", owner_b.id) is None
        assert await orders.get_all_orders(owner_b.id) == []

    async def test_foreign_update_and_delete_are_noops(self, orders: OrderService, owner_a, owner_b):
        order = await orders.create_order(OrderCreate(order_number="A-1"), owner_a.id)

        assert await orders.update_order(order.id, OrderUpdate(status="hijacked"), owner_b.id) is None
        assert await orders.delete_order(order.id, owner_b.id) is False

        still_there = await orders.get_order(order.id, owner_a.id)
        assert still_there.status == "under review"

    async def test_foreign_note_is_invisible(self, orders: OrderService, owner_a, owner_b):
        order = await orders.create_order(OrderCreate(order_number="A-1"), owner_a.id)
        note = await orders.create_note(NoteCreate(order_id=order.id, content="private"), owner_a.id)

        assert await orders.get_note(note.id, owner_b.id) is None
        assert await orders.update_note(note.id, NoteUpdate(content="x"), owner_b.id) is None
        assert await orders.delete_note(note.id, owner_b.id) is False
        assert await orders.get_notes_by_order_id(order.id, owner_b.id) == []


class TestNotes:
    """Notes require a parent order of the same owner."""

    async def test_note_round_trip(self, orders: OrderService, owner_a):
        order = await orders.create_order(OrderCreate(order_number="A-1"), owner_a.id)
        note = await orders.create_note(NoteCreate(order_id=order.id, content="Call back Tuesday"), owner_a.id)

        notes = await orders.get_notes_by_order_id(order.id, owner_a.id)
        assert [n.id for n in notes] == [note.id]
        assert notes[0].content == "Call back Tuesday"
        assert notes[0].owner_id == owner_a.id

        updated = await orders.update_note(note.id, NoteUpdate(content="Called"), owner_a.id)
        assert updated.content == "Called"
        assert updated.order_id == order.id

        assert await orders.delete_note(note.id, owner_a.id) is True
        assert await orders.get_note(note.id, owner_a.id) is None

    async def test_note_on_foreign_order_raises_and_writes_nothing(self, orders: OrderService, owner_a, owner_b):
        order = await orders.create_order(OrderCreate(order_number="A-1"), owner_a.id)

        with pytest.raises(ParentNotFoundError):
            await orders.create_note(NoteCreate(order_id=order.id, content="sneaky"), owner_b.id)

        assert await orders.get_notes_by_order_id(order.id, owner_a.id) == []
        assert await orders.get_notes_by_order_id(order.id, owner_b.id) == []

    async def test_note_on_missing_order_raises_business_error(self, orders: OrderService, owner_a):
        with pytest.raises(BusinessException) as exc_info:
            await orders.create_note(NoteCreate(order_id="missing", content="orphan"), owner_a.id)
        assert exc_info.value.code == 400


class TestCascadeDelete:
    """Deleting an order removes its notes, scoped to the same owner."""

    async def test_delete_order_removes_its_notes(self, orders: OrderService, owner_a):
        order = await orders.create_order(OrderCreate(order_number="A-1"), owner_a.id)
        other = await orders.create_order(OrderCreate(order_number="A-2"), owner_a.id)
        n1 = await orders.create_note(NoteCreate(order_id=order.id, content="one"), owner_a.id)
        n2 = await orders.create_note(NoteCreate(order_id=order.id, content="two"), owner_a.id)
        kept = await orders.create_note(NoteCreate(order_id=other.id, content="other order"), owner_a.id)

        assert await orders.delete_order(order.id, owner_a.id) is True

        assert await orders.get_order(order.id, owner_a.id) is None
        assert await orders.get_notes_by_order_id(order.id, owner_a.id) == []
        assert await orders.get_note(n1.id, owner_a.id) is None
        assert await orders.get_note(n2.id, owner_a.id) is None
        assert (await orders.get_note(kept.id, owner_a.id)).content == "other order"

    async def test_cascade_leaves_other_owners_notes_with_same_order_id(
        self, orders: OrderService, async_session, owner_a, owner_b
    ):
        from apps.orders.models import Note

        order = await orders.create_order(OrderCreate(order_number="A-1"), owner_a.id)
        await orders.create_note(NoteCreate(order_id=order.id, content="mine"), owner_a.id)
        # A row of another owner pointing at the same order id, written below the store
        foreign = Note(owner_id=owner_b.id, order_id=order.id, content="theirs")
        async_session.add(foreign)
        await async_session.commit()

        assert await orders.delete_order(order.id, owner_a.id) is True

        assert await orders.get_notes_by_order_id(order.id, owner_a.id) == []
        survivors = await orders.get_notes_by_order_id(order.id, owner_b.id)
        assert [n.id for n in survivors] == [foreign.id]

    async def test_delete_missing_order_returns_false(self, orders: OrderService, owner_a):
        assert await orders.delete_order("missing", owner_a.id) is False

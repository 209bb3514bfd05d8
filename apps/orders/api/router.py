from fastapi import APIRouter, Depends
from framework.dependencies import get_uow
from framework.exceptions.handler import RecordNotFoundError
from framework.repository.unit_of_work import UnitOfWork
from framework.response import ResponseModel
from framework.security import CurrentUser
from apps.identity.dependencies import require_auth, require_write
from ..models import NoteCreate, NoteUpdate, OrderCreate, OrderUpdate
from ..service import OrderService

router = APIRouter()

def get_order_service(uow: UnitOfWork = Depends(get_uow)) -> OrderService:
    """Dependency: create OrderService."""
    return OrderService(uow)

# --- Orders ---

@router.get("/orders")
async def list_orders(
    caller: CurrentUser = Depends(require_auth),
    service: OrderService = Depends(get_order_service),
):
    """Caller's orders, most recently updated first."""
    return ResponseModel.success(data=await service.get_all_orders(caller.id))

@router.post("/orders")
async def create_order(
    payload: OrderCreate,
    caller: CurrentUser = Depends(require_write),
    service: OrderService = Depends(get_order_service),
):
    order = await service.create_order(payload, caller.id)
    return ResponseModel.created(data=order)

@router.put("/orders/{order_id}")
async def update_order(
    order_id: str,
    payload: OrderUpdate,
    caller: CurrentUser = Depends(require_write),
    service: OrderService = Depends(get_order_service),
):
    order = await service.update_order(order_id, payload, caller.id)
    if order is None:
        raise RecordNotFoundError("Order")
    return ResponseModel.success(data=order)

@router.delete("/orders/{order_id}")
async def delete_order(
    order_id: str,
    caller: CurrentUser = Depends(require_write),
    service: OrderService = Depends(get_order_service),
):
    if not await service.delete_order(order_id, caller.id):
        raise RecordNotFoundError("Order")
    return ResponseModel.success(data={"success": True})

# --- Notes ---

@router.get("/orders/{order_id}/notes")
async def list_order_notes(
    order_id: str,
    caller: CurrentUser = Depends(require_auth),
    service: OrderService = Depends(get_order_service),
):
    return ResponseModel.success(data=await service.get_notes_by_order_id(order_id, caller.id))

@router.post("/notes")
async def create_note(
    payload: NoteCreate,
    caller: CurrentUser = Depends(require_write),
    service: OrderService = Depends(get_order_service),
):
    note = await service.create_note(payload, caller.id)
    return ResponseModel.created(data=note)

@router.put("/notes/{note_id}")
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    caller: CurrentUser = Depends(require_write),
    service: OrderService = Depends(get_order_service),
):
    note = await service.update_note(note_id, payload, caller.id)
    if note is None:
        raise RecordNotFoundError("Note")
    return ResponseModel.success(data=note)

@router.delete("/notes/{note_id}")
async def delete_note(
    note_id: str,
    caller: CurrentUser = Depends(require_write),
    service: OrderService = Depends(get_order_service),
):
    if not await service.delete_note(note_id, caller.id):
        raise RecordNotFoundError("Note")
    return ResponseModel.success(data={"success": True})

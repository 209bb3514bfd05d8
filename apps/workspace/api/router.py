import time
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from framework.dependencies import get_uow
from framework.exceptions.handler import BusinessException, RecordNotFoundError
from framework.repository.unit_of_work import UnitOfWork
from framework.response import ResponseModel
from framework.security import CurrentUser
from apps.identity.dependencies import require_auth, require_write
from ..models import SectionCreate, SectionUpdate, SettingsPayload, SettingsRead, SettingsUpdate
from ..service import WorkspaceService

router = APIRouter()

class PinSchema(BaseModel):
    pin: str = Field(min_length=4, max_length=4)

def get_workspace_service(uow: UnitOfWork = Depends(get_uow)) -> WorkspaceService:
    """Dependency: create WorkspaceService."""
    return WorkspaceService(uow)

# --- Settings ---

@router.get("/settings")
async def get_settings(
    caller: CurrentUser = Depends(require_auth),
    service: WorkspaceService = Depends(get_workspace_service),
):
    """Caller's settings, or null before the first save."""
    row = await service.get_settings(caller.id)
    return ResponseModel.success(data=SettingsRead.from_settings(row) if row else None)

@router.put("/settings")
async def update_settings(
    payload: SettingsPayload,
    caller: CurrentUser = Depends(require_auth),
    service: WorkspaceService = Depends(get_workspace_service),
):
    patch = SettingsUpdate(**payload.changes())
    row = await service.update_settings(patch, caller.id)
    return ResponseModel.success(data=SettingsRead.from_settings(row))

# --- PIN ---

@router.post("/pin/verify")
async def verify_pin(
    payload: PinSchema,
    caller: CurrentUser = Depends(require_auth),
    service: WorkspaceService = Depends(get_workspace_service),
):
    if not await service.verify_pin(payload.pin, caller.id):
        raise BusinessException("Incorrect PIN", code=401)
    return ResponseModel.success(data={"success": True, "timestamp": int(time.time() * 1000)})

@router.post("/pin/set")
async def set_pin(
    payload: PinSchema,
    caller: CurrentUser = Depends(require_auth),
    service: WorkspaceService = Depends(get_workspace_service),
):
    await service.set_pin(payload.pin, caller.id)
    return ResponseModel.success(data={"success": True})

# --- Sections ---

@router.get("/sections")
async def list_sections(
    caller: CurrentUser = Depends(require_auth),
    service: WorkspaceService = Depends(get_workspace_service),
):
    return ResponseModel.success(data=await service.get_all_sections(caller.id))

@router.post("/sections")
async def create_section(
    payload: SectionCreate,
    caller: CurrentUser = Depends(require_write),
    service: WorkspaceService = Depends(get_workspace_service),
):
    section = await service.create_section(payload, caller.id)
    return ResponseModel.created(data=section)

@router.put("/sections/{section_id}")
async def update_section(
    section_id: str,
    payload: SectionUpdate,
    caller: CurrentUser = Depends(require_write),
    service: WorkspaceService = Depends(get_workspace_service),
):
    section = await service.update_section(section_id, payload, caller.id)
    if section is None:
        raise RecordNotFoundError("Section")
    return ResponseModel.success(data=section)

@router.delete("/sections/{section_id}")
async def delete_section(
    section_id: str,
    caller: CurrentUser = Depends(require_write),
    service: WorkspaceService = Depends(get_workspace_service),
):
    if not await service.delete_section(section_id, caller.id):
        raise RecordNotFoundError("Section")
    return ResponseModel.success(data={"success": True})

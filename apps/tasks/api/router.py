from fastapi import APIRouter, Depends
from framework.dependencies import get_uow
from framework.exceptions.handler import RecordNotFoundError
from framework.repository.unit_of_work import UnitOfWork
from framework.response import ResponseModel
from framework.security import CurrentUser
from apps.identity.dependencies import require_auth, require_write
from ..models import AttachmentCreate, TaskCreate, TaskNoteCreate, TaskNoteUpdate, TaskUpdate
from ..service import TaskService
from ..uploads import validate_image_upload

router = APIRouter()

def get_task_service(uow: UnitOfWork = Depends(get_uow)) -> TaskService:
    """Dependency: create TaskService."""
    return TaskService(uow)

# --- Tasks ---

@router.get("/tasks")
async def list_tasks(
    caller: CurrentUser = Depends(require_auth),
    service: TaskService = Depends(get_task_service),
):
    """Caller's tasks, most recently updated first."""
    return ResponseModel.success(data=await service.get_all_tasks(caller.id))

@router.post("/tasks")
async def create_task(
    payload: TaskCreate,
    caller: CurrentUser = Depends(require_write),
    service: TaskService = Depends(get_task_service),
):
    task = await service.create_task(payload, caller.id)
    return ResponseModel.created(data=task)

@router.put("/tasks/{task_id}")
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    caller: CurrentUser = Depends(require_write),
    service: TaskService = Depends(get_task_service),
):
    task = await service.update_task(task_id, payload, caller.id)
    if task is None:
        raise RecordNotFoundError("Task")
    return ResponseModel.success(data=task)

@router.delete("/tasks/{task_id}")
async def delete_task(
    task_id: str,
    caller: CurrentUser = Depends(require_write),
    service: TaskService = Depends(get_task_service),
):
    if not await service.delete_task(task_id, caller.id):
        raise RecordNotFoundError("Task")
    return ResponseModel.success(data={"success": True})

# --- Task notes ---

@router.get("/tasks/{task_id}/notes")
async def list_task_notes(
    task_id: str,
    caller: CurrentUser = Depends(require_auth),
    service: TaskService = Depends(get_task_service),
):
    return ResponseModel.success(data=await service.get_task_notes_by_task_id(task_id, caller.id))

@router.post("/task-notes")
async def create_task_note(
    payload: TaskNoteCreate,
    caller: CurrentUser = Depends(require_write),
    service: TaskService = Depends(get_task_service),
):
    note = await service.create_task_note(payload, caller.id)
    return ResponseModel.created(data=note)

@router.put("/task-notes/{note_id}")
async def update_task_note(
    note_id: str,
    payload: TaskNoteUpdate,
    caller: CurrentUser = Depends(require_write),
    service: TaskService = Depends(get_task_service),
):
    note = await service.update_task_note(note_id, payload, caller.id)
    if note is None:
        raise RecordNotFoundError("Task note")
    return ResponseModel.success(data=note)

@router.delete("/task-notes/{note_id}")
async def delete_task_note(
    note_id: str,
    caller: CurrentUser = Depends(require_write),
    service: TaskService = Depends(get_task_service),
):
    if not await service.delete_task_note(note_id, caller.id):
        raise RecordNotFoundError("Task note")
    return ResponseModel.success(data={"success": True})

# --- Attachments ---

@router.get("/tasks/{task_id}/attachments")
async def list_attachments(
    task_id: str,
    caller: CurrentUser = Depends(require_auth),
    service: TaskService = Depends(get_task_service),
):
    return ResponseModel.success(data=await service.get_attachments_by_task_id(task_id, caller.id))

@router.post("/attachments")
async def upload_attachment(
    payload: AttachmentCreate,
    caller: CurrentUser = Depends(require_write),
    service: TaskService = Depends(get_task_service),
):
    """Upload an image; the stored size is always the decoded payload size."""
    existing = await service.count_attachments(payload.task_id, caller.id)
    validate_image_upload(payload.data_base64, existing)
    attachment = await service.create_attachment(payload, caller.id)
    return ResponseModel.created(data=attachment)

@router.delete("/attachments/{attachment_id}")
async def delete_attachment(
    attachment_id: str,
    caller: CurrentUser = Depends(require_write),
    service: TaskService = Depends(get_task_service),
):
    if not await service.delete_attachment(attachment_id, caller.id):
        raise RecordNotFoundError("Attachment")
    return ResponseModel.success(data={"success": True})

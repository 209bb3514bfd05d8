from typing import List, Optional
from loguru import logger
from framework.exceptions.handler import ParentNotFoundError
from framework.repository.unit_of_work import UnitOfWork
from .models import (
    Attachment,
    AttachmentCreate,
    Task,
    TaskCreate,
    TaskNote,
    TaskNoteCreate,
    TaskNoteUpdate,
    TaskUpdate,
)
from .repository import AttachmentRepository, TaskNoteRepository, TaskRepository
from .uploads import decoded_size, image_mime_type

class TaskService:
    """Tasks with their notes and attachments, scoped to one owner per call."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @property
    def tasks(self) -> TaskRepository:
        return self.uow.get_repository(TaskRepository)

    @property
    def task_notes(self) -> TaskNoteRepository:
        return self.uow.get_repository(TaskNoteRepository)

    @property
    def attachments(self) -> AttachmentRepository:
        return self.uow.get_repository(AttachmentRepository)

    async def _require_task(self, task_id: str, owner_id: str) -> Task:
        task = await self.get_task(task_id, owner_id)
        if task is None:
            logger.warning(f"Child record rejected: task {task_id} not available to owner {owner_id}")
            raise ParentNotFoundError("Task not found or access denied")
        return task

    # --- Tasks ---

    async def get_all_tasks(self, owner_id: str) -> List[Task]:
        return await self.tasks.list_newest_first(owner_id)

    async def get_task(self, task_id: str, owner_id: str) -> Optional[Task]:
        return await self.tasks.get_for_owner(task_id, owner_id)

    async def create_task(self, data: TaskCreate, owner_id: str) -> Task:
        async with self.uow.transaction():
            task = await self.tasks.create_for_owner(data, owner_id)
        logger.info(f"Task {task.id} created for owner {owner_id}")
        return task

    async def update_task(self, task_id: str, data: TaskUpdate, owner_id: str) -> Optional[Task]:
        async with self.uow.transaction():
            task = await self.tasks.update_for_owner(task_id, data, owner_id)
        return task

    async def delete_task(self, task_id: str, owner_id: str) -> bool:
        """Delete a task together with its notes and attachments."""
        async with self.uow.transaction():
            task = await self.tasks.get_for_owner(task_id, owner_id)
            if task is None:
                return False
            removed_notes = await self.task_notes.delete_by_task(task_id, owner_id)
            removed_files = await self.attachments.delete_by_task(task_id, owner_id)
            await self.tasks.delete_for_owner(task_id, owner_id)
        logger.info(
            f"Task {task_id} deleted with {removed_notes} note(s) and {removed_files} attachment(s)"
        )
        return True

    # --- Task notes ---

    async def get_task_notes_by_task_id(self, task_id: str, owner_id: str) -> List[TaskNote]:
        return await self.task_notes.list_by_task(task_id, owner_id)

    async def get_task_note(self, note_id: str, owner_id: str) -> Optional[TaskNote]:
        return await self.task_notes.get_for_owner(note_id, owner_id)

    async def create_task_note(self, data: TaskNoteCreate, owner_id: str) -> TaskNote:
        await self._require_task(data.task_id, owner_id)
        async with self.uow.transaction():
            note = await self.task_notes.create_for_owner(data, owner_id)
        return note

    async def update_task_note(self, note_id: str, data: TaskNoteUpdate, owner_id: str) -> Optional[TaskNote]:
        async with self.uow.transaction():
            note = await self.task_notes.update_for_owner(note_id, data, owner_id)
        return note

    async def delete_task_note(self, note_id: str, owner_id: str) -> bool:
        async with self.uow.transaction():
            deleted = await self.task_notes.delete_for_owner(note_id, owner_id)
        return deleted

    # --- Attachments ---

    async def get_attachments_by_task_id(self, task_id: str, owner_id: str) -> List[Attachment]:
        return await self.attachments.list_by_task(task_id, owner_id)

    async def count_attachments(self, task_id: str, owner_id: str) -> int:
        return await self.attachments.count_by_task(task_id, owner_id)

    async def get_attachment(self, attachment_id: str, owner_id: str) -> Optional[Attachment]:
        return await self.attachments.get_for_owner(attachment_id, owner_id)

    async def create_attachment(self, data: AttachmentCreate, owner_id: str) -> Attachment:
        """Store an attachment.

        ``size`` is always the payload's decoded size, and an image data URL
        decides ``mime_type`` over whatever the caller declared.
        """
        await self._require_task(data.task_id, owner_id)
        size = decoded_size(data.data_base64)
        mime_type = image_mime_type(data.data_base64) or data.mime_type
        async with self.uow.transaction():
            attachment = await self.attachments.create_for_owner(
                data, owner_id, size=size, mime_type=mime_type
            )
        logger.info(f"Attachment {attachment.id} ({size} bytes) added to task {data.task_id}")
        return attachment

    async def delete_attachment(self, attachment_id: str, owner_id: str) -> bool:
        async with self.uow.transaction():
            deleted = await self.attachments.delete_for_owner(attachment_id, owner_id)
        return deleted

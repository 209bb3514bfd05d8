"""Task module repository implementations."""

from typing import List
from framework.repository.owned import OwnedRepository
from .models import Attachment, Task, TaskNote


class TaskRepository(OwnedRepository[Task]):
    """Task repository."""

    def __init__(self, session):
        super().__init__(session, Task)

    async def list_newest_first(self, owner_id: str) -> List[Task]:
        """Owner's tasks, most recently updated first."""
        return await self.list_for_owner(
            owner_id, Task.updated_at.desc(), Task.created_at.desc()
        )


class TaskNoteRepository(OwnedRepository[TaskNote]):
    """Task note repository."""

    def __init__(self, session):
        super().__init__(session, TaskNote)

    async def list_by_task(self, task_id: str, owner_id: str) -> List[TaskNote]:
        return await self.list_for_owner(owner_id, TaskNote.created_at.asc(), task_id=task_id)

    async def delete_by_task(self, task_id: str, owner_id: str) -> int:
        return await self.delete_children("task_id", task_id, owner_id)


class AttachmentRepository(OwnedRepository[Attachment]):
    """Attachment repository."""

    def __init__(self, session):
        super().__init__(session, Attachment)

    async def list_by_task(self, task_id: str, owner_id: str) -> List[Attachment]:
        return await self.list_for_owner(owner_id, Attachment.created_at.asc(), task_id=task_id)

    async def count_by_task(self, task_id: str, owner_id: str) -> int:
        return await self.count(task_id=task_id, owner_id=owner_id)

    async def delete_by_task(self, task_id: str, owner_id: str) -> int:
        return await self.delete_children("task_id", task_id, owner_id)

from sqlmodel import SQLModel, Field
from typing import ClassVar, Optional, Tuple
from datetime import datetime, timezone
from framework.repository.owned import Patch
import uuid

DEFAULT_TASK_STATUS = "in progress"

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class Task(SQLModel, table=True):
    """Tracked task. Deleting it removes its notes and attachments."""
    __tablename__ = "tasks"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    owner_id: str = Field(index=True)
    task_name: str
    task_type: Optional[str] = None
    last_inquiry: Optional[str] = None
    task_status: str = Field(default=DEFAULT_TASK_STATUS)
    due_date: Optional[str] = Field(default=None, description="Calendar date, e.g. 2025-09-20")
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow, index=True)

class TaskCreate(SQLModel):
    task_name: str = Field(min_length=1)
    task_type: Optional[str] = None
    last_inquiry: Optional[str] = None
    task_status: Optional[str] = None
    due_date: Optional[str] = None

class TaskUpdate(Patch):
    non_nullable: ClassVar[Tuple[str, ...]] = ("task_name", "task_status")

    task_name: Optional[str] = Field(default=None, min_length=1)
    task_type: Optional[str] = None
    last_inquiry: Optional[str] = None
    task_status: Optional[str] = None
    due_date: Optional[str] = None

class TaskNote(SQLModel, table=True):
    __tablename__ = "task_notes"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    owner_id: str = Field(index=True)
    task_id: str = Field(index=True)
    content: str
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

class TaskNoteCreate(SQLModel):
    task_id: str
    content: str = Field(min_length=1)

class TaskNoteUpdate(Patch):
    non_nullable: ClassVar[Tuple[str, ...]] = ("content",)

    content: Optional[str] = Field(default=None, min_length=1)

class Attachment(SQLModel, table=True):
    """Image stored inline as a base64 data URL."""
    __tablename__ = "attachments"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    owner_id: str = Field(index=True)
    task_id: str = Field(index=True)
    filename: str
    mime_type: str
    data_base64: str
    size: int = Field(description="Decoded payload size in bytes")
    created_at: datetime = Field(default_factory=_utcnow)

class AttachmentCreate(SQLModel):
    task_id: str
    filename: str = Field(min_length=1)
    # Taken from the data URL when it names an image type
    mime_type: str
    data_base64: str

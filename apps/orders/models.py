from sqlmodel import SQLModel, Field
from typing import ClassVar, Optional, Tuple
from datetime import datetime, timezone
from framework.repository.owned import Patch
import uuid

DEFAULT_ORDER_STATUS = "under review"

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class Order(SQLModel, table=True):
    """Tracked order. Deleting it removes its notes."""
    __tablename__ = "orders"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    owner_id: str = Field(index=True)
    order_number: str
    part_number: Optional[str] = None
    last_inquiry: Optional[str] = None
    status: str = Field(default=DEFAULT_ORDER_STATUS)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow, index=True)

class OrderCreate(SQLModel):
    order_number: str = Field(min_length=1)
    part_number: Optional[str] = None
    last_inquiry: Optional[str] = None
    status: Optional[str] = None

class OrderUpdate(Patch):
    non_nullable: ClassVar[Tuple[str, ...]] = ("order_number", "status")

    order_number: Optional[str] = Field(default=None, min_length=1)
    part_number: Optional[str] = None
    last_inquiry: Optional[str] = None
    status: Optional[str] = None

class Note(SQLModel, table=True):
    """Free-text note attached to an order of the same owner."""
    __tablename__ = "notes"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    owner_id: str = Field(index=True)
    order_id: str = Field(index=True)
    content: str
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

class NoteCreate(SQLModel):
    order_id: str
    content: str = Field(min_length=1)

class NoteUpdate(Patch):
    """Only the text can change; a note never moves to another order."""
    non_nullable: ClassVar[Tuple[str, ...]] = ("content",)

    content: Optional[str] = Field(default=None, min_length=1)

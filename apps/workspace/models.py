from sqlmodel import SQLModel, Field, Column, JSON
from typing import ClassVar, Dict, Optional, Tuple
from datetime import datetime, timezone
from enum import Enum
from pydantic import ConfigDict
from framework.repository.owned import Patch
import uuid

DEFAULT_ORDERS_SECTION_NAME = "Electrical Orders"
DEFAULT_TASKS_SECTION_NAME = "Task Management"
DEFAULT_BACKGROUND_COLOR = "#ffffff"
DEFAULT_SECTION_COLOR = "#3b82f6"

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class SectionType(str, Enum):
    ORDERS = "orders"
    TASKS = "tasks"

class WorkspaceSettings(SQLModel, table=True):
    """Per-owner display settings and PIN; at most one row per owner."""
    __tablename__ = "settings"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    owner_id: str = Field(unique=True, index=True)
    orders_section_name: str = Field(default=DEFAULT_ORDERS_SECTION_NAME)
    tasks_section_name: str = Field(default=DEFAULT_TASKS_SECTION_NAME)
    background_color: str = Field(default=DEFAULT_BACKGROUND_COLOR)
    pin_hash: Optional[str] = None
    allow_guest: bool = Field(default=True)
    company_logo: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

class SettingsUpdate(Patch):
    non_nullable: ClassVar[Tuple[str, ...]] = (
        "orders_section_name",
        "tasks_section_name",
        "background_color",
        "allow_guest",
    )

    orders_section_name: Optional[str] = None
    tasks_section_name: Optional[str] = None
    background_color: Optional[str] = None
    pin_hash: Optional[str] = None
    allow_guest: Optional[bool] = None
    company_logo: Optional[str] = None

class SettingsPayload(Patch):
    """Settings fields a client may send; the PIN goes through its own endpoint."""
    non_nullable: ClassVar[Tuple[str, ...]] = SettingsUpdate.non_nullable

    orders_section_name: Optional[str] = None
    tasks_section_name: Optional[str] = None
    background_color: Optional[str] = None
    allow_guest: Optional[bool] = None
    company_logo: Optional[str] = None

class SettingsRead(SQLModel):
    id: str
    orders_section_name: str
    tasks_section_name: str
    background_color: str
    allow_guest: bool
    company_logo: Optional[str] = None
    has_pin: bool = False
    updated_at: Optional[datetime] = None

    @classmethod
    def from_settings(cls, row: WorkspaceSettings) -> "SettingsRead":
        return cls(
            id=row.id,
            orders_section_name=row.orders_section_name,
            tasks_section_name=row.tasks_section_name,
            background_color=row.background_color,
            allow_guest=row.allow_guest,
            company_logo=row.company_logo,
            has_pin=bool(row.pin_hash),
            updated_at=row.updated_at,
        )

class Section(SQLModel, table=True):
    """User-defined grouping shown on the dashboard, ordered by ``order_index``."""
    __tablename__ = "sections"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    owner_id: str = Field(index=True)
    name: str
    base_type: str
    color: str = Field(default=DEFAULT_SECTION_COLOR)
    order_index: int = Field(default=0)
    # Display overrides, e.g. {"order_number": "PO #"}
    column_labels: Optional[Dict] = Field(default=None, sa_column=Column(JSON))
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

class SectionCreate(SQLModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(min_length=1)
    base_type: SectionType
    color: Optional[str] = None
    order_index: Optional[int] = None
    column_labels: Optional[Dict[str, str]] = None
    is_active: Optional[bool] = None

class SectionUpdate(Patch):
    model_config = ConfigDict(use_enum_values=True)
    non_nullable: ClassVar[Tuple[str, ...]] = ("name", "base_type", "color", "order_index", "is_active")

    name: Optional[str] = Field(default=None, min_length=1)
    base_type: Optional[SectionType] = None
    color: Optional[str] = None
    order_index: Optional[int] = None
    column_labels: Optional[Dict[str, str]] = None
    is_active: Optional[bool] = None

from sqlmodel import SQLModel, Field
from typing import ClassVar, Optional, Tuple
from datetime import datetime, timezone
from enum import Enum
from framework.repository.owned import Patch
import uuid

class Role(str, Enum):
    """Caller roles. Guests are never stored as users."""
    ADMIN = "admin"
    EMPLOYEE = "employee"
    VIEWER = "viewer"
    GUEST = "guest"

WRITE_ROLES = {Role.ADMIN.value, Role.EMPLOYEE.value}

class User(SQLModel, table=True):
    """Tenant root: every other record is owned by a user id."""
    __tablename__ = "users"
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    username: str = Field(unique=True, index=True)
    password: str = Field(description="bcrypt hash, never the plain password")
    role: str = Field(default=Role.ADMIN.value)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

class UserCreate(SQLModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    role: Optional[Role] = None

class UserUpdate(Patch):
    non_nullable: ClassVar[Tuple[str, ...]] = ("username", "password", "role")

    username: Optional[str] = Field(default=None, min_length=1)
    password: Optional[str] = Field(default=None, min_length=1)
    role: Optional[Role] = None

class UserRead(SQLModel):
    """Outward shape of a user; the password hash is never included."""
    id: str
    username: str
    role: Optional[str] = None
    created_at: Optional[datetime] = None

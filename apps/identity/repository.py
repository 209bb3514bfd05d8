"""Identity module repository implementations."""

from typing import List, Optional
from framework.repository.base import BaseRepository
from .models import User


class UserRepository(BaseRepository[User]):
    """User repository. Users are the tenant root, so lookups are global."""

    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_username(self, username: str) -> Optional[User]:
        """Find user by username."""
        return await self.find_one(username=username)

    async def list_by_creation(self) -> List[User]:
        """All users, oldest first."""
        return await self.find_all(User.created_at.asc())

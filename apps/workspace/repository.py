"""Workspace module repository implementations."""

from typing import List, Optional
from framework.repository.owned import OwnedRepository
from .models import Section, WorkspaceSettings


class SettingsRepository(OwnedRepository[WorkspaceSettings]):
    """Settings repository; one row per owner."""

    def __init__(self, session):
        super().__init__(session, WorkspaceSettings)

    async def get_by_owner(self, owner_id: str) -> Optional[WorkspaceSettings]:
        return await self.find_one(owner_id=owner_id)


class SectionRepository(OwnedRepository[Section]):
    """Section repository."""

    def __init__(self, session):
        super().__init__(session, Section)

    async def list_ordered(self, owner_id: str) -> List[Section]:
        """Owner's sections by ascending ``order_index``."""
        return await self.list_for_owner(owner_id, Section.order_index.asc(), Section.created_at.asc())

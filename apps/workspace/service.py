from typing import List, Optional
from loguru import logger
from framework.repository.owned import utcnow
from framework.repository.unit_of_work import UnitOfWork
from framework.security import get_password_hash, verify_password
from .models import (
    DEFAULT_ORDERS_SECTION_NAME,
    DEFAULT_TASKS_SECTION_NAME,
    Section,
    SectionCreate,
    SectionType,
    SectionUpdate,
    SettingsUpdate,
    WorkspaceSettings,
)
from .repository import SectionRepository, SettingsRepository

# Seeded for every new owner by init_user_defaults
DEFAULT_SECTIONS = (
    SectionCreate(name=DEFAULT_ORDERS_SECTION_NAME, base_type=SectionType.ORDERS, color="#3b82f6", order_index=0),
    SectionCreate(name=DEFAULT_TASKS_SECTION_NAME, base_type=SectionType.TASKS, color="#10b981", order_index=1),
)

class WorkspaceService:
    """Per-owner settings, PIN and dashboard sections."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @property
    def settings(self) -> SettingsRepository:
        return self.uow.get_repository(SettingsRepository)

    @property
    def sections(self) -> SectionRepository:
        return self.uow.get_repository(SectionRepository)

    # --- Settings ---

    async def get_settings(self, owner_id: str) -> Optional[WorkspaceSettings]:
        return await self.settings.get_by_owner(owner_id)

    async def update_settings(self, data: SettingsUpdate, owner_id: str) -> WorkspaceSettings:
        """Upsert: the first call creates the row with defaults, later calls only merge.

        Defaults are applied once, at creation, so fields set earlier survive any
        later partial update that does not mention them.
        """
        async with self.uow.transaction():
            current = await self.settings.get_by_owner(owner_id)
            if current is None:
                current = WorkspaceSettings(owner_id=owner_id)
                await self.settings.create(current)
                logger.info(f"Settings created with defaults for owner {owner_id}")
            for key, value in data.changes().items():
                setattr(current, key, value)
            current.updated_at = utcnow()
            await self.settings.update(current)
        return current

    # --- PIN ---

    async def set_pin(self, pin: str, owner_id: str) -> WorkspaceSettings:
        row = await self.update_settings(SettingsUpdate(pin_hash=get_password_hash(pin)), owner_id)
        logger.info(f"PIN updated for owner {owner_id}")
        return row

    async def verify_pin(self, candidate: str, owner_id: str) -> bool:
        """True only if this owner has a PIN and ``candidate`` matches it."""
        row = await self.settings.get_by_owner(owner_id)
        if row is None or not row.pin_hash:
            return False
        valid = verify_password(candidate, row.pin_hash)
        if not valid:
            logger.warning(f"PIN verification failed for owner {owner_id}")
        return valid

    # --- Sections ---

    async def get_all_sections(self, owner_id: str) -> List[Section]:
        return await self.sections.list_ordered(owner_id)

    async def get_section(self, section_id: str, owner_id: str) -> Optional[Section]:
        return await self.sections.get_for_owner(section_id, owner_id)

    async def create_section(self, data: SectionCreate, owner_id: str) -> Section:
        async with self.uow.transaction():
            section = await self.sections.create_for_owner(data, owner_id)
        return section

    async def update_section(self, section_id: str, data: SectionUpdate, owner_id: str) -> Optional[Section]:
        async with self.uow.transaction():
            section = await self.sections.update_for_owner(section_id, data, owner_id)
        return section

    async def delete_section(self, section_id: str, owner_id: str) -> bool:
        async with self.uow.transaction():
            deleted = await self.sections.delete_for_owner(section_id, owner_id)
        return deleted

    async def init_user_defaults(self, user_id: str) -> List[Section]:
        """Seed the default sections for a new owner.

        Not idempotent: each call adds another copy of the defaults, so call it
        exactly once per new user.
        """
        async with self.uow.transaction():
            created = [
                await self.sections.create_for_owner(template, user_id)
                for template in DEFAULT_SECTIONS
            ]
        logger.info(f"Default sections created for user {user_id}")
        return created

from typing import List, Optional
from loguru import logger
from sqlalchemy.exc import IntegrityError
from framework.security import get_password_hash, verify_password
from framework.exceptions.handler import BusinessException
from framework.repository.owned import utcnow
from framework.repository.unit_of_work import UnitOfWork
from .models import Role, User, UserCreate, UserUpdate
from .repository import UserRepository

class IdentityService:
    """User management. Admin-scoped: users are not owned by anyone."""

    def __init__(self, uow: UnitOfWork):
        """Initialize Identity Service with UnitOfWork."""
        self.uow = uow

    @property
    def users(self) -> UserRepository:
        return self.uow.get_repository(UserRepository)

    async def get_user(self, user_id: str) -> Optional[User]:
        return await self.users.get_by_id(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return await self.users.get_by_username(username)

    async def get_all_users(self) -> List[User]:
        return await self.users.list_by_creation()

    async def create_user(self, data: UserCreate) -> User:
        """Create a user; the password is hashed before it is stored."""
        if await self.users.get_by_username(data.username):
            raise BusinessException("Username already exists", code=409)

        role = data.role or Role.ADMIN
        user = User(
            username=data.username,
            password=get_password_hash(data.password),
            role=Role(role).value,
            created_at=utcnow(),
        )
        try:
            async with self.uow.transaction():
                await self.users.create(user)
                await self.uow.flush()
        except IntegrityError:
            logger.warning(f"Username {data.username} already exists")
            raise BusinessException("Username already exists", code=409)

        logger.info(f"User {user.id} created with role {user.role}")
        return user

    async def update_user(self, user_id: str, data: UserUpdate) -> Optional[User]:
        """Partial update; the password is rehashed only when one is supplied."""
        user = await self.users.get_by_id(user_id)
        if user is None:
            return None

        changes = data.changes()
        if "username" in changes and changes["username"] != user.username:
            if await self.users.get_by_username(changes["username"]):
                raise BusinessException("Username already exists", code=409)
        if "password" in changes:
            changes["password"] = get_password_hash(changes["password"])
        if "role" in changes:
            changes["role"] = Role(changes["role"]).value

        async with self.uow.transaction():
            for key, value in changes.items():
                setattr(user, key, value)
            await self.users.update(user)

        logger.info(f"User {user_id} updated: {sorted(k for k in changes if k != 'password')}")
        return user

    async def delete_user(self, user_id: str) -> bool:
        async with self.uow.transaction():
            deleted = await self.users.delete(user_id)
        if deleted:
            logger.info(f"User {user_id} deleted")
        return deleted

    async def authenticate_user(self, username: str, password: str) -> Optional[User]:
        """Return the user for a matching username/password pair, else None."""
        user = await self.users.get_by_username(username)
        if not user or not verify_password(password, user.password):
            logger.warning(f"Failed login attempt for {username}")
            return None

        logger.info(f"User {username} authenticated successfully")
        return user

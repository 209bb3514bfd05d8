"""Caller resolution and role gates used by every router."""

from fastapi import Depends, HTTPException, status
from loguru import logger
from framework.exceptions.handler import AccessDeniedError
from framework.dependencies import get_uow
from framework.repository.unit_of_work import UnitOfWork
from framework.security import CurrentUser, get_current_user
from .models import Role, WRITE_ROLES
from .service import IdentityService

def get_identity_service(uow: UnitOfWork = Depends(get_uow)) -> IdentityService:
    """Dependency: create IdentityService."""
    return IdentityService(uow)

async def require_auth(
    caller: CurrentUser = Depends(get_current_user),
    identity: IdentityService = Depends(get_identity_service),
) -> CurrentUser:
    """Any authenticated caller. Stored users are re-read so a role change applies at once."""
    if caller.is_guest:
        return CurrentUser(id=caller.id, username=caller.username, role=Role.GUEST.value)

    user = await identity.get_user(caller.id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authorized")
    return CurrentUser(id=user.id, username=user.username, role=user.role or Role.VIEWER.value)

def _deny(caller: CurrentUser, message: str):
    logger.warning(f"Access denied for {caller.id} with role {caller.role}")
    raise AccessDeniedError(message)

async def require_write(caller: CurrentUser = Depends(require_auth)) -> CurrentUser:
    """Admins and employees may modify records; viewers and guests are read-only."""
    if caller.role not in WRITE_ROLES:
        _deny(caller, "Read-only access: you are not allowed to modify records")
    return caller

async def require_admin(caller: CurrentUser = Depends(require_auth)) -> CurrentUser:
    if caller.role != Role.ADMIN.value:
        _deny(caller, "Admin role required")
    return caller

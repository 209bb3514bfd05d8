from fastapi import APIRouter, Depends, Response
from framework.config import settings
from framework.dependencies import get_uow
from framework.exceptions.handler import AccessDeniedError, BusinessException, RecordNotFoundError
from framework.repository.unit_of_work import UnitOfWork
from framework.response import ResponseModel
from framework.security import CurrentUser, create_identity_token, new_guest_id
from apps.workspace.service import WorkspaceService
from ..dependencies import get_identity_service, require_admin, require_auth
from ..models import Role, User, UserCreate, UserRead, UserUpdate
from ..service import IdentityService
from pydantic import BaseModel, Field
from datetime import timedelta

router = APIRouter()
users_router = APIRouter()

class LoginSchema(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)

def _public(user: User) -> dict:
    return UserRead.model_validate(user, from_attributes=True).model_dump()

def _issue_session(response: Response, user_id: str, username: str, role: str) -> str:
    """Create the identity token and set it as an httpOnly cookie."""
    expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_identity_token(user_id, username, role, expires_delta=expires_delta)
    response.set_cookie(
        key=settings.ACCESS_TOKEN_COOKIE_NAME,
        value=access_token,
        max_age=int(expires_delta.total_seconds()),
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE
    )
    return access_token

# --- Auth ---

@router.post("/login")
async def login(
    data: LoginSchema,
    response: Response,
    service: IdentityService = Depends(get_identity_service)
):
    """Login: return token and set session cookie."""
    user = await service.authenticate_user(data.username, data.password)
    if user is None:
        raise BusinessException("Invalid username or password", code=401)

    access_token = _issue_session(response, user.id, user.username, user.role)
    return ResponseModel.success(
        data={
            "access_token": access_token,
            "token_type": "bearer",
            "user": {"id": user.id, "username": user.username, "role": user.role}
        }
    )

@router.post("/guest")
async def guest_login(
    response: Response,
    uow: UnitOfWork = Depends(get_uow),
):
    """Start a read-only guest session if the admin's settings allow it."""
    admin = await IdentityService(uow).get_user_by_username(settings.ADMIN_USERNAME)
    if admin is None:
        raise BusinessException("System error", code=500)

    admin_settings = await WorkspaceService(uow).get_settings(admin.id)
    if admin_settings is None or not admin_settings.allow_guest:
        raise AccessDeniedError("Guest access is currently disabled")

    guest_id = new_guest_id()
    access_token = _issue_session(response, guest_id, settings.GUEST_USERNAME, Role.GUEST.value)
    return ResponseModel.success(
        data={
            "access_token": access_token,
            "token_type": "bearer",
            "user": {"id": guest_id, "username": settings.GUEST_USERNAME, "role": Role.GUEST.value}
        }
    )

@router.post("/logout")
async def logout(response: Response):
    """Logout: clear session cookie."""
    response.delete_cookie(
        key=settings.ACCESS_TOKEN_COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE
    )
    return ResponseModel.success(data={"success": True})

@router.get("/me")
async def me(caller: CurrentUser = Depends(require_auth)):
    return ResponseModel.success(data=caller.model_dump())

# --- User management (admin only) ---

@users_router.get("")
async def list_users(
    _: CurrentUser = Depends(require_admin),
    service: IdentityService = Depends(get_identity_service),
):
    users = await service.get_all_users()
    return ResponseModel.success(data=[_public(user) for user in users])

@users_router.post("")
async def create_user(
    payload: UserCreate,
    _: CurrentUser = Depends(require_admin),
    uow: UnitOfWork = Depends(get_uow),
):
    """Create a user and seed their default sections."""
    user = await IdentityService(uow).create_user(payload)
    await WorkspaceService(uow).init_user_defaults(user.id)
    return ResponseModel.created(data=_public(user))

@users_router.put("/{user_id}")
async def update_user(
    user_id: str,
    payload: UserUpdate,
    _: CurrentUser = Depends(require_admin),
    service: IdentityService = Depends(get_identity_service),
):
    user = await service.update_user(user_id, payload)
    if user is None:
        raise RecordNotFoundError("User")
    return ResponseModel.success(data=_public(user))

@users_router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    _: CurrentUser = Depends(require_admin),
    service: IdentityService = Depends(get_identity_service),
):
    if not await service.delete_user(user_id):
        raise RecordNotFoundError("User")
    return ResponseModel.success(data={"success": True})

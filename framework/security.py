from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel
from framework.config import settings

# 1. Password and PIN hashing (BCrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# 2. Bearer header as a fallback to the session cookie
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_AUTH_PREFIX}/login", auto_error=False)

ALGORITHM = "HS256"

# --- Core models ---

class CurrentUser(BaseModel):
    """Resolved caller identity; ``id`` is the owner id for every scoped store call."""
    id: str
    username: str
    role: str

    @property
    def is_guest(self) -> bool:
        return self.id.startswith(settings.GUEST_ID_PREFIX)

# --- Helpers ---

def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Not a hash this context recognises
        return False

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def new_guest_id() -> str:
    millis = int(datetime.now(timezone.utc).timestamp() * 1000)
    return f"{settings.GUEST_ID_PREFIX}{millis}"

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT token"""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)

def create_identity_token(user_id: str, username: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    return create_access_token(
        data={"sub": username, "user_id": user_id, "role": role},
        expires_delta=expires_delta,
    )

# --- FastAPI dependencies ---

def get_token_from_request(
    request: Request,
    token_from_header: Optional[str] = Depends(oauth2_scheme)
) -> Optional[str]:
    """
    Get token from request: prefer cookie, then Authorization header.
    """
    token = request.cookies.get(settings.ACCESS_TOKEN_COOKIE_NAME)

    if not token and token_from_header:
        token = token_from_header

    return token

def get_current_user(
    token: Optional[str] = Depends(get_token_from_request)
) -> CurrentUser:
    """
    Dependency: validate token and extract the caller identity.
    Role freshness for stored users is checked by apps.identity.dependencies.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authorized",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not token:
        raise credentials_exception

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise credentials_exception

    username = payload.get("sub")
    user_id = payload.get("user_id")
    role = payload.get("role") or "viewer"
    if username is None or user_id is None:
        raise credentials_exception

    return CurrentUser(id=str(user_id), username=username, role=role)

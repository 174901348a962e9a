# homehelp/modules/auth/security.py

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from jose import jwt, JWTError

from homehelp.core.config import settings
from homehelp.core.database import get_db
from homehelp.shared.models.user_models import User
from homehelp.modules.auth.schemas import TokenPayload

# extracts "Authorization: Bearer <token>"; auto_error is off so a
# missing header yields our own 401 body
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login", auto_error=False)

JWT_SECRET_KEY = settings.SECRET_KEY
ALGORITHM = "HS256"

# --- standard errors ---

CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Unauthorized",
    headers={"WWW-Authenticate": "Bearer"},
)

FORBIDDEN_EXCEPTION = HTTPException(
    status_code=status.HTTP_403_FORBIDDEN,
    detail="Forbidden",
)

# --- dependency 1: the logged-in user, any role ---

async def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Decode the JWT and load its user.
    Raises 401 when the token is missing or invalid, or the user is gone or disabled.
    """
    if not token:
        raise CREDENTIALS_EXCEPTION
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[ALGORITHM])
        user_uid: str | None = payload.get("sub")

        if user_uid is None:
            raise CREDENTIALS_EXCEPTION

        token_data = TokenPayload(sub=user_uid)

    except JWTError:
        raise CREDENTIALS_EXCEPTION

    query = select(User).where(User.uid == token_data.sub)
    result = await db.execute(query)
    user = result.scalars().first()

    if user is None or not user.is_active:
        raise CREDENTIALS_EXCEPTION

    return user

# --- dependency 2: admins only ---

async def get_current_admin_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Require an authenticated user whose role is 'admin', else 403.
    """
    if current_user.role != "admin":
        raise FORBIDDEN_EXCEPTION

    return current_user

# --- dependency 3: any of the given roles ---

def require_roles(*roles: str):
    """
    Build a dependency that only lets the listed roles through.
    """
    async def _checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise FORBIDDEN_EXCEPTION
        return current_user

    return _checker

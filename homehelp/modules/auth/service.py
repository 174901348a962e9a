# homehelp/modules/auth/service.py

import logging
from datetime import datetime, timedelta, timezone
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import IntegrityError
from jose import jwt

from passlib.context import CryptContext

from homehelp.core.config import settings
from homehelp.shared.models.user_models import User
from .schemas import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


class RegistrationError(ValueError):
    """Raised when a username or email is already taken."""


# --- JWT ---
JWT_SECRET_KEY = settings.SECRET_KEY
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

def create_access_token(subject: str, expires_minutes: int | None = None) -> str:
    minutes = ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    to_encode = {
        "exp": expire,
        "sub": str(subject),
    }
    encoded_jwt = jwt.encode(to_encode, JWT_SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against its hash"""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Hash a password for storage"""
    return pwd_context.hash(password)


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalars().first()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalars().first()


async def register_user(db: AsyncSession, data: RegisterRequest) -> User:
    """
    Create a new customer or provider account.
    Provider accounts still need a provider profile before they are listed.
    """
    if await get_user_by_username(db, data.username):
        raise RegistrationError("Username already exists")
    if await get_user_by_email(db, data.email):
        raise RegistrationError("Email already registered")

    user = User(
        username=data.username,
        password_hash=get_password_hash(data.password),
        email=data.email,
        name=data.name,
        role=data.role,
        city=data.city,
        phone=data.phone,
        bio=data.bio,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # two concurrent sign-ups with the same username/email
        await db.rollback()
        raise RegistrationError("Username or email already registered")

    logger.info("Registered %s account %s", user.role, user.username)
    return user


async def authenticate_user(db: AsyncSession, login_data: LoginRequest) -> User | None:
    """
    Return the user for valid credentials, None otherwise.
    Inactive accounts cannot log in.
    """
    user = await get_user_by_username(db, login_data.username)

    if not user or not user.is_active:
        return None

    if not verify_password(login_data.password, user.password_hash):
        return None

    return user

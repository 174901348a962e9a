# homehelp/modules/auth/schemas.py

from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Literal, Optional


class LoginRequest(BaseModel):
    """
    Username + password login body
    """
    username: str
    password: str


class RegisterRequest(BaseModel):
    """
    Self-service sign-up. Admin accounts cannot be created here.
    """
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=128)
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=100)
    role: Literal["customer", "provider"] = "customer"
    city: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None


class TokenPayload(BaseModel):
    """
    Data carried inside the JWT
    """
    sub: str  # subject: user uid


class UserPublic(BaseModel):
    """
    A user as returned by the API. Never carries the password hash.
    """
    uid: str
    username: str
    email: str
    role: str
    name: str
    city: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    profile_image: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """
    Returned by login and register
    """
    access_token: str
    token_type: str = "bearer"
    user: UserPublic


class MessageResponse(BaseModel):
    message: str

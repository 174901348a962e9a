# homehelp/modules/users/schemas.py

from pydantic import BaseModel, EmailStr, Field
from typing import Literal, Optional

from homehelp.modules.auth.schemas import UserPublic
from homehelp.modules.providers.schemas import ProviderProfilePublic


class ProfileUpdate(BaseModel):
    """
    Fields a user may change on their own account
    """
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    city: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    bio: Optional[str] = None
    profile_image: Optional[str] = Field(None, max_length=255)


class UserUpdate(ProfileUpdate):
    """
    'PATCH /api/users/{uid}'. Only admins may send role.
    """
    role: Optional[Literal["customer", "provider", "admin"]] = None


class ProfileResponse(BaseModel):
    user: UserPublic
    provider_profile: Optional[ProviderProfilePublic] = None
    bookings_count: int = 0

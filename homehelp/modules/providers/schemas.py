# homehelp/modules/providers/schemas.py

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from homehelp.shared.models.service_models import ServiceCategory
from homehelp.modules.auth.schemas import UserPublic
from homehelp.modules.services.schemas import ServicePublic


class ProviderSort(str, Enum):
    rating = "rating"
    price_asc = "price_asc"
    price_desc = "price_desc"
    experience = "experience"


class ProviderProfileCreate(BaseModel):
    """
    Body of 'POST /api/providers': the caller becomes a provider
    """
    hourly_rate: float = Field(..., gt=0)
    category: ServiceCategory
    service_uids: List[str] = Field(default_factory=list)
    years_of_experience: Optional[int] = Field(None, ge=0)
    work_images: List[str] = Field(default_factory=list)


class ProviderProfileUpdate(BaseModel):
    """
    Partial update; is_verified is reserved for admins
    """
    hourly_rate: Optional[float] = Field(None, gt=0)
    category: Optional[ServiceCategory] = None
    service_uids: Optional[List[str]] = None
    years_of_experience: Optional[int] = Field(None, ge=0)
    work_images: Optional[List[str]] = None


class CredentialPublic(BaseModel):
    uid: str
    provider_id: str
    document_name: str
    document_url: str
    is_verified: bool
    submitted_at: Optional[datetime] = None
    verified_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class ReviewPublic(BaseModel):
    uid: str
    booking_id: str
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class ProviderProfilePublic(BaseModel):
    """
    A provider profile without the joined user
    """
    uid: str
    user_id: str
    hourly_rate: float
    is_verified: bool
    category: ServiceCategory
    work_images: List[str] = Field(default_factory=list)
    years_of_experience: Optional[int] = None
    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_profile(cls, profile):
        return cls(
            uid=profile.uid,
            user_id=profile.user_id,
            hourly_rate=profile.hourly_rate,
            is_verified=profile.is_verified,
            category=profile.category,
            work_images=profile.work_images or [],
            years_of_experience=profile.years_of_experience,
        )


class ProviderPublic(ProviderProfilePublic):
    """
    Listing entry: profile + user + services + rating summary
    """
    user: UserPublic
    services: List[ServicePublic] = Field(default_factory=list)
    average_rating: Optional[float] = None
    review_count: int = 0

    @classmethod
    def from_listing(cls, profile, average_rating: Optional[float], review_count: int):
        base = ProviderProfilePublic.from_profile(profile).model_dump()
        return cls(
            **base,
            user=UserPublic.model_validate(profile.user),
            services=[ServicePublic.model_validate(s) for s in profile.services],
            average_rating=round(float(average_rating), 2) if average_rating is not None else None,
            review_count=review_count or 0,
        )


class ProviderDetail(ProviderPublic):
    credentials: List[CredentialPublic] = Field(default_factory=list)
    reviews: List[ReviewPublic] = Field(default_factory=list)

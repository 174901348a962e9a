# homehelp/modules/bookings/schemas.py

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from homehelp.modules.auth.schemas import UserPublic
from homehelp.modules.services.schemas import ServicePublic
from homehelp.modules.providers.schemas import ReviewPublic, ProviderProfilePublic


class BookingCreate(BaseModel):
    """
    Body of 'POST /api/bookings' (customer facing)
    """
    provider_id: str = Field(..., description="UID of the provider's user account")
    service_id: str
    # a full ISO datetime, e.g. "2026-11-02T09:00:00+00:00"
    scheduled_date: datetime
    description: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    duration_hours: float = Field(1.0, gt=0, le=24)


class BookingStatusUpdate(BaseModel):
    # plain str so unknown values get our own 400 message
    status: str


class PaymentPublic(BaseModel):
    uid: str
    booking_id: str
    amount: float
    status: str
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class BookingPublic(BaseModel):
    uid: str
    customer_id: str
    provider_id: str
    service_id: str
    status: str
    scheduled_date: datetime
    description: str
    address: str
    city: str
    duration_hours: float
    total_amount: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class BookingDetail(BookingPublic):
    """
    Booking with every related record the booking pages show
    """
    customer: UserPublic
    provider: UserPublic
    provider_profile: Optional[ProviderProfilePublic] = None
    service: ServicePublic
    payment: Optional[PaymentPublic] = None
    review: Optional[ReviewPublic] = None

    @classmethod
    def from_booking(cls, booking):
        profile = booking.provider.provider_profile
        return cls(
            **BookingPublic.model_validate(booking).model_dump(),
            customer=UserPublic.model_validate(booking.customer),
            provider=UserPublic.model_validate(booking.provider),
            provider_profile=ProviderProfilePublic.from_profile(profile) if profile else None,
            service=ServicePublic.model_validate(booking.service),
            payment=PaymentPublic.model_validate(booking.payment) if booking.payment else None,
            review=ReviewPublic.model_validate(booking.review) if booking.review else None,
        )

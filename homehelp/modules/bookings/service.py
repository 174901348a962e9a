# homehelp/modules/bookings/service.py

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import joinedload, selectinload

from homehelp.core.database import utc_now
from homehelp.shared.models.user_models import User, UserRole
from homehelp.shared.models.service_models import Service
from homehelp.shared.models.provider_models import ProviderProfile
from homehelp.shared.models.booking_models import Booking, BookingStatus
from homehelp.modules.providers import service as provider_service
from .schemas import BookingCreate
from . import business_rules

logger = logging.getLogger(__name__)


class BookingError(ValueError):
    """Invalid booking request (maps to 400)."""


class BookingNotFoundError(LookupError):
    """A referenced record does not exist (maps to 404)."""


def ensure_timezone(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def booking_detail_options():
    return (
        joinedload(Booking.customer),
        joinedload(Booking.provider).selectinload(User.provider_profile),
        joinedload(Booking.service),
        selectinload(Booking.payment),
        selectinload(Booking.review),
    )


async def get_booking(db: AsyncSession, booking_uid: str) -> Booking | None:
    query = (
        select(Booking)
        .where(Booking.uid == booking_uid)
        .options(*booking_detail_options())
        .execution_options(populate_existing=True)
    )
    return (await db.execute(query)).scalars().first()


async def list_bookings(
    db: AsyncSession,
    customer_uid: Optional[str] = None,
    provider_uid: Optional[str] = None,
    status: Optional[BookingStatus] = None,
) -> list[Booking]:
    query = select(Booking).options(*booking_detail_options())
    if customer_uid:
        query = query.where(Booking.customer_id == customer_uid)
    if provider_uid:
        query = query.where(Booking.provider_id == provider_uid)
    if status:
        query = query.where(Booking.status == status.value)
    query = query.order_by(Booking.scheduled_date.desc(), Booking.created_at.desc())
    return list((await db.execute(query)).scalars().unique().all())


def is_participant(user: User, booking: Booking) -> bool:
    return user.uid in (booking.customer_id, booking.provider_id)


def can_view(user: User, booking: Booking) -> bool:
    return user.role == UserRole.admin.value or is_participant(user, booking)


def actor_for(user: User, booking: Booking) -> business_rules.Actor:
    return business_rules.Actor(
        is_admin=user.role == UserRole.admin.value,
        is_customer=user.uid == booking.customer_id,
        is_provider=user.uid == booking.provider_id,
    )


def compute_total_amount(hourly_rate: float, duration_hours: float) -> float:
    return round(hourly_rate * duration_hours, 2)


async def create_booking(db: AsyncSession, customer: User, data: BookingCreate) -> Booking:
    """
    Request a provider for a service.

    The provider must be an active provider offering the service; the price
    is fixed at request time from the provider's hourly rate.
    """
    if data.provider_id == customer.uid:
        raise BookingError("You cannot book yourself")

    scheduled = ensure_timezone(data.scheduled_date)
    if scheduled <= datetime.now(timezone.utc):
        raise BookingError("Scheduled date must be in the future")

    profile: ProviderProfile | None = await provider_service.get_profile_by_user(db, data.provider_id)
    if not profile or profile.user.role != UserRole.provider.value or not profile.user.is_active:
        raise BookingNotFoundError("Provider not found")

    db_service = (await db.execute(
        select(Service).where(Service.uid == data.service_id)
    )).scalars().first()
    if not db_service:
        raise BookingNotFoundError("Service not found")

    if db_service.uid not in {s.uid for s in profile.services}:
        raise BookingError("Provider does not offer this service")

    booking = Booking(
        customer_id=customer.uid,
        provider_id=profile.user_id,
        service_id=db_service.uid,
        status=BookingStatus.requested.value,
        scheduled_date=scheduled,
        description=data.description,
        address=data.address,
        city=data.city,
        duration_hours=data.duration_hours,
        total_amount=compute_total_amount(profile.hourly_rate, data.duration_hours),
    )
    db.add(booking)
    await db.commit()

    logger.info("Booking %s requested by %s for provider %s", booking.uid, customer.uid, profile.user_id)
    return await get_booking(db, booking.uid)


async def update_status(db: AsyncSession, booking: Booking, target: str, user: User) -> Booking:
    """
    Move a booking along its lifecycle; see ``business_rules.TRANSITIONS``.
    """
    new_status = business_rules.check_transition(booking.status, target, actor_for(user, booking))
    previous = booking.status

    booking.status = new_status.value
    booking.updated_at = utc_now()
    db.add(booking)
    await db.commit()

    logger.info("Booking %s: %s -> %s by %s", booking.uid, previous, new_status.value, user.uid)
    return await get_booking(db, booking.uid)

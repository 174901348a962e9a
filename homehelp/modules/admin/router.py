# homehelp/modules/admin/router.py

import logging
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import joinedload, selectinload
from typing import List, Optional

from homehelp.core.database import get_db, utc_now
from homehelp.shared import cache
from homehelp.shared.models.user_models import User, UserRole
from homehelp.shared.models.provider_models import ProviderProfile, Credential
from homehelp.shared.models.booking_models import Booking, BookingStatus, Payment, PaymentStatus
from homehelp.modules.auth.schemas import UserPublic
from homehelp.modules.auth.security import get_current_admin_user
from homehelp.modules.bookings import service as booking_service
from homehelp.modules.bookings.schemas import BookingDetail
from homehelp.modules.providers import service as provider_service
from homehelp.modules.providers.schemas import CredentialPublic, ProviderPublic
from . import schemas

logger = logging.getLogger(__name__)

# mounted under /api/admin in main.py; every route is admin only
router = APIRouter(
    tags=["Admin"],
    responses={
        404: {"description": "Not found"},
        403: {"description": "Operation not permitted"},
    }
)


async def _get_user_or_404(db: AsyncSession, user_uid: str) -> User:
    user = (await db.execute(select(User).where(User.uid == user_uid))).scalars().first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


async def _count(db: AsyncSession, column, *criteria) -> int:
    query = select(func.count(column))
    if criteria:
        query = query.where(*criteria)
    return (await db.execute(query)).scalar_one()


# --- Dashboard ---

@router.get(
    "/dashboard",
    response_model=schemas.DashboardResponse,
    summary="Platform statistics"
)
async def get_dashboard(
    db: AsyncSession = Depends(get_db),
    admin_user: User = Depends(get_current_admin_user)
):
    """
    (Admin Only) Counters plus the credentials waiting for review.
    """
    revenue = (await db.execute(
        select(func.coalesce(func.sum(Payment.amount), 0.0))
        .where(Payment.status == PaymentStatus.completed.value)
    )).scalar_one()

    pending = (await db.execute(
        select(Credential)
        .where(Credential.is_verified.is_(False))
        .order_by(Credential.submitted_at)
    )).scalars().all()

    stats = schemas.DashboardStats(
        total_users=await _count(db, User.uid),
        total_customers=await _count(db, User.uid, User.role == UserRole.customer.value),
        total_providers=await _count(db, User.uid, User.role == UserRole.provider.value),
        total_bookings=await _count(db, Booking.uid),
        requested_bookings=await _count(db, Booking.uid, Booking.status == BookingStatus.requested.value),
        completed_bookings=await _count(db, Booking.uid, Booking.status == BookingStatus.completed.value),
        total_revenue=round(float(revenue or 0), 2),
        pending_verifications=len(pending),
    )
    return schemas.DashboardResponse(
        stats=stats,
        pending_credentials=[CredentialPublic.model_validate(c) for c in pending],
    )


# --- Users ---

@router.get(
    "/users",
    response_model=List[UserPublic],
    summary="List users"
)
async def get_all_users(
    role: Optional[UserRole] = Query(None, description="Only this role"),
    db: AsyncSession = Depends(get_db),
    admin_user: User = Depends(get_current_admin_user)
):
    query = select(User).order_by(User.created_at.desc(), User.username)
    if role:
        query = query.where(User.role == role.value)
    return (await db.execute(query)).scalars().all()


@router.put(
    "/users/{user_uid}/role",
    response_model=UserPublic,
    summary="Change a user's role"
)
async def update_user_role(
    user_uid: str,
    role_data: schemas.RoleUpdate,
    db: AsyncSession = Depends(get_db),
    admin_user: User = Depends(get_current_admin_user)
):
    db_user = await _get_user_or_404(db, user_uid)

    previous = db_user.role
    db_user.role = role_data.role.value
    db_user.updated_at = utc_now()
    db.add(db_user)
    await db.commit()
    cache.clear_cache(cache.CITIES_PREFIX)

    logger.info("User %s role %s -> %s by %s", db_user.uid, previous, db_user.role, admin_user.uid)
    return db_user


@router.patch(
    "/users/{user_uid}/active",
    response_model=UserPublic,
    summary="Activate or deactivate an account"
)
async def update_user_active(
    user_uid: str,
    active_data: schemas.ActiveUpdate,
    db: AsyncSession = Depends(get_db),
    admin_user: User = Depends(get_current_admin_user)
):
    """
    (Admin Only) Deactivated users cannot log in and drop out of the directory.
    """
    if user_uid == admin_user.uid and not active_data.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot deactivate yourself")

    db_user = await _get_user_or_404(db, user_uid)
    db_user.is_active = active_data.is_active
    db_user.updated_at = utc_now()
    db.add(db_user)
    await db.commit()
    cache.clear_cache(cache.CITIES_PREFIX)

    return db_user


# --- Providers ---

@router.get(
    "/providers",
    response_model=List[ProviderPublic],
    summary="List every provider profile"
)
async def get_all_providers(
    db: AsyncSession = Depends(get_db),
    admin_user: User = Depends(get_current_admin_user)
):
    """
    (Admin Only) Unlike the public directory, inactive and unverified
    providers are included.
    """
    query = (
        select(ProviderProfile)
        .options(joinedload(ProviderProfile.user), selectinload(ProviderProfile.services))
        .order_by(ProviderProfile.created_at.desc())
    )
    profiles = (await db.execute(query)).scalars().unique().all()

    results = []
    for profile in profiles:
        average_rating, review_count = await provider_service.get_rating_summary(db, profile.user_id)
        results.append(ProviderPublic.from_listing(profile, average_rating, review_count))
    return results


@router.patch(
    "/providers/{profile_uid}/verify",
    response_model=ProviderPublic,
    summary="Verify or un-verify a provider"
)
async def verify_provider(
    profile_uid: str,
    verify_data: schemas.VerifyUpdate,
    db: AsyncSession = Depends(get_db),
    admin_user: User = Depends(get_current_admin_user)
):
    profile = await provider_service.get_provider_profile(db, profile_uid)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Provider not found")

    profile = await provider_service.set_verified(db, profile, verify_data.is_verified)
    average_rating, review_count = await provider_service.get_rating_summary(db, profile.user_id)
    return ProviderPublic.from_listing(profile, average_rating, review_count)


# --- Bookings ---

@router.get(
    "/bookings",
    response_model=List[BookingDetail],
    summary="List every booking"
)
async def get_all_bookings(
    booking_status: Optional[BookingStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
    admin_user: User = Depends(get_current_admin_user)
):
    bookings = await booking_service.list_bookings(db, status=booking_status)
    return [BookingDetail.from_booking(b) for b in bookings]

# homehelp/modules/users/router.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from homehelp.core.database import get_db, utc_now
from homehelp.modules.auth.schemas import UserPublic
from homehelp.modules.auth.security import get_current_user
from homehelp.modules.auth.service import get_user_by_email
from homehelp.modules.providers import service as provider_service
from homehelp.shared import cache
from homehelp.shared.models.user_models import User, UserRole
from homehelp.shared.models.booking_models import Booking
from . import schemas

router = APIRouter(
    tags=["Users"],
    responses={404: {"description": "Not found"}},
)


async def count_bookings(db: AsyncSession, user: User) -> int:
    query = select(func.count(Booking.uid))
    if user.role == UserRole.customer.value:
        query = query.where(Booking.customer_id == user.uid)
    elif user.role == UserRole.provider.value:
        query = query.where(Booking.provider_id == user.uid)
    return (await db.execute(query)).scalar_one()


async def apply_user_update(db: AsyncSession, user: User, update_data: dict) -> User:
    """
    Write the given fields onto ``user``; 400 when the email is taken.
    """
    new_email = update_data.get("email")
    if new_email and new_email != user.email:
        existing = await get_user_by_email(db, new_email)
        if existing and existing.uid != user.uid:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    for key, value in update_data.items():
        if value is None and key in ("name", "email"):
            continue
        setattr(user, key, value)
    user.updated_at = utc_now()

    db.add(user)
    await db.commit()
    # the cities list is derived from provider users
    if update_data.keys() & {"city", "role", "is_active"}:
        cache.clear_cache(cache.CITIES_PREFIX)
    return user


@router.get(
    "/profile",
    response_model=schemas.ProfileResponse,
    summary="The caller's profile"
)
async def get_profile(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    profile = await provider_service.get_profile_by_user(db, current_user.uid)
    return schemas.ProfileResponse(
        user=UserPublic.model_validate(current_user),
        provider_profile=schemas.ProviderProfilePublic.from_profile(profile) if profile else None,
        bookings_count=await count_bookings(db, current_user),
    )


@router.patch(
    "/profile",
    response_model=UserPublic,
    summary="Update the caller's profile"
)
async def update_profile(
    profile_data: schemas.ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await apply_user_update(db, current_user, profile_data.model_dump(exclude_unset=True))


@router.patch(
    "/users/{user_uid}",
    response_model=UserPublic,
    summary="Update a user"
)
async def update_user(
    user_uid: str,
    user_data: schemas.UserUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    A user may edit themself; admins may edit anyone and change roles.
    Passwords are not changed here.
    """
    is_admin = current_user.role == UserRole.admin.value
    if not is_admin and current_user.uid != user_uid:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    db_user = (await db.execute(select(User).where(User.uid == user_uid))).scalars().first()
    if not db_user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    update_data = user_data.model_dump(exclude_unset=True)
    if "role" in update_data and update_data["role"] != db_user.role and not is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Cannot change role")
    if update_data.get("role") is None:
        update_data.pop("role", None)

    return await apply_user_update(db, db_user, update_data)

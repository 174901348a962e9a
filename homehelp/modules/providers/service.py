# homehelp/modules/providers/service.py

import logging
from typing import Iterable, Optional

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import contains_eager, joinedload, selectinload

from homehelp.shared import cache
from homehelp.shared.models.user_models import User, UserRole
from homehelp.shared.models.service_models import Service, ServiceCategory
from homehelp.shared.models.provider_models import ProviderProfile
from homehelp.shared.models.booking_models import Booking, Review
from .schemas import (
    ProviderSort,
    ProviderPublic,
    ProviderDetail,
    ProviderProfileCreate,
    ProviderProfileUpdate,
    CredentialPublic,
    ReviewPublic,
)

logger = logging.getLogger(__name__)


class ProviderProfileError(ValueError):
    """Invalid provider profile operation (maps to 400)."""


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def rating_summary_subquery():
    """
    Average rating and review count per provider user, via their bookings.
    """
    return (
        select(
            Booking.provider_id.label("provider_user_id"),
            func.avg(Review.rating).label("average_rating"),
            func.count(Review.uid).label("review_count"),
        )
        .join(Review, Review.booking_id == Booking.uid)
        .group_by(Booking.provider_id)
        .subquery()
    )


# --- search ---

async def search_providers(
    db: AsyncSession,
    service_uid: Optional[str] = None,
    category: Optional[ServiceCategory] = None,
    city: Optional[str] = None,
    search: Optional[str] = None,
    sort: ProviderSort = ProviderSort.rating,
) -> list[ProviderPublic]:
    """
    Filter and sort the provider directory.

    Only active users with the provider role are listed. ``city`` is a
    case-insensitive exact match; ``search`` is a case-insensitive substring
    match over the provider's name, bio, city and offered service names.
    """
    ratings = rating_summary_subquery()

    query = (
        select(ProviderProfile, ratings.c.average_rating, ratings.c.review_count)
        .join(ProviderProfile.user)
        .outerjoin(ratings, ratings.c.provider_user_id == ProviderProfile.user_id)
        .where(User.role == UserRole.provider.value, User.is_active.is_(True))
        .options(contains_eager(ProviderProfile.user), selectinload(ProviderProfile.services))
    )

    if service_uid:
        query = query.where(ProviderProfile.services.any(Service.uid == service_uid))

    if category:
        query = query.where(ProviderProfile.category == category)

    if city and city.strip():
        query = query.where(func.lower(User.city) == city.strip().lower())

    if search and search.strip():
        pattern = f"%{escape_like(search.strip().lower())}%"
        query = query.where(
            or_(
                func.lower(User.name).like(pattern, escape="\\"),
                func.lower(User.bio).like(pattern, escape="\\"),
                func.lower(User.city).like(pattern, escape="\\"),
                ProviderProfile.services.any(func.lower(Service.name).like(pattern, escape="\\")),
            )
        )

    if sort == ProviderSort.price_asc:
        query = query.order_by(ProviderProfile.hourly_rate.asc(), User.name)
    elif sort == ProviderSort.price_desc:
        query = query.order_by(ProviderProfile.hourly_rate.desc(), User.name)
    elif sort == ProviderSort.experience:
        query = query.order_by(func.coalesce(ProviderProfile.years_of_experience, 0).desc(), User.name)
    else:
        # unrated providers sink below every rated one (ratings are 1..5)
        query = query.order_by(func.coalesce(ratings.c.average_rating, 0).desc(), User.name)

    rows = (await db.execute(query)).all()
    return [
        ProviderPublic.from_listing(profile, average_rating, review_count)
        for profile, average_rating, review_count in rows
    ]


# --- lookups ---

async def get_provider_profile(db: AsyncSession, profile_uid: str) -> ProviderProfile | None:
    query = (
        select(ProviderProfile)
        .where(ProviderProfile.uid == profile_uid)
        .options(
            joinedload(ProviderProfile.user),
            selectinload(ProviderProfile.services),
            selectinload(ProviderProfile.credentials),
        )
        .execution_options(populate_existing=True)
    )
    return (await db.execute(query)).scalars().first()


async def get_profile_by_user(db: AsyncSession, user_uid: str) -> ProviderProfile | None:
    query = (
        select(ProviderProfile)
        .where(ProviderProfile.user_id == user_uid)
        .options(
            joinedload(ProviderProfile.user),
            selectinload(ProviderProfile.services),
            selectinload(ProviderProfile.credentials),
        )
        .execution_options(populate_existing=True)
    )
    return (await db.execute(query)).scalars().first()


async def get_rating_summary(db: AsyncSession, provider_user_uid: str) -> tuple[Optional[float], int]:
    row = (await db.execute(
        select(func.avg(Review.rating), func.count(Review.uid))
        .join(Booking, Review.booking_id == Booking.uid)
        .where(Booking.provider_id == provider_user_uid)
    )).one()
    return row[0], row[1] or 0


async def list_provider_reviews(db: AsyncSession, provider_user_uid: str) -> list[Review]:
    query = (
        select(Review)
        .join(Booking, Review.booking_id == Booking.uid)
        .where(Booking.provider_id == provider_user_uid)
        .order_by(Review.created_at.desc())
    )
    return list((await db.execute(query)).scalars().all())


async def build_provider_detail(db: AsyncSession, profile: ProviderProfile) -> ProviderDetail:
    average_rating, review_count = await get_rating_summary(db, profile.user_id)
    reviews = await list_provider_reviews(db, profile.user_id)
    listing = ProviderPublic.from_listing(profile, average_rating, review_count)
    return ProviderDetail(
        **listing.model_dump(),
        credentials=[CredentialPublic.model_validate(c) for c in profile.credentials],
        reviews=[ReviewPublic.model_validate(r) for r in reviews],
    )


async def load_services(db: AsyncSession, service_uids: Iterable[str]) -> list[Service]:
    """
    Resolve service uids, failing on any unknown uid.
    """
    wanted = list(dict.fromkeys(service_uids))
    if not wanted:
        return []
    found = (await db.execute(select(Service).where(Service.uid.in_(wanted)))).scalars().all()
    by_uid = {s.uid: s for s in found}
    missing = [uid for uid in wanted if uid not in by_uid]
    if missing:
        raise ProviderProfileError(f"Unknown service: {missing[0]}")
    return [by_uid[uid] for uid in wanted]


# --- writes ---

async def create_profile(db: AsyncSession, user: User, data: ProviderProfileCreate) -> ProviderProfile:
    """
    Create the caller's provider profile and promote a customer to provider.
    """
    if user.role == UserRole.admin.value:
        raise ProviderProfileError("Admins cannot have a provider profile")

    if await get_profile_by_user(db, user.uid):
        raise ProviderProfileError("User already has a provider profile")

    services = await load_services(db, data.service_uids)

    profile = ProviderProfile(
        user_id=user.uid,
        hourly_rate=data.hourly_rate,
        category=data.category,
        years_of_experience=data.years_of_experience,
        work_images=list(data.work_images),
    )
    profile.services = services
    db.add(profile)

    user.role = UserRole.provider.value
    db.add(user)
    await db.commit()
    cache.clear_cache(cache.CITIES_PREFIX)

    logger.info("User %s now has provider profile %s", user.uid, profile.uid)
    return await get_provider_profile(db, profile.uid)


async def update_profile(
    db: AsyncSession,
    profile: ProviderProfile,
    data: ProviderProfileUpdate,
) -> ProviderProfile:
    update_data = data.model_dump(exclude_unset=True)
    service_uids = update_data.pop("service_uids", None)

    for key, value in update_data.items():
        if value is None and key in ("hourly_rate", "category"):
            continue
        setattr(profile, key, value)

    if service_uids is not None:
        profile.services = await load_services(db, service_uids)

    db.add(profile)
    await db.commit()
    return await get_provider_profile(db, profile.uid)


async def set_verified(db: AsyncSession, profile: ProviderProfile, is_verified: bool) -> ProviderProfile:
    profile.is_verified = is_verified
    db.add(profile)
    await db.commit()
    logger.info("Provider profile %s verified=%s", profile.uid, is_verified)
    return await get_provider_profile(db, profile.uid)


async def list_cities(db: AsyncSession) -> list[str]:
    """
    Distinct cities of active providers, read through the cache.
    """
    cache_key = cache.build_cache_key(cache.CITIES_PREFIX, "list")
    cached = cache.get_cache_value(cache_key)
    if cached is not None:
        return cached

    query = (
        select(User.city)
        .join(ProviderProfile, ProviderProfile.user_id == User.uid)
        .where(
            User.role == UserRole.provider.value,
            User.is_active.is_(True),
            User.city.is_not(None),
        )
        .distinct()
    )
    cities = sorted({c.strip() for c in (await db.execute(query)).scalars().all() if c and c.strip()})
    cache.set_cache_value(cache_key, cities)
    return cities

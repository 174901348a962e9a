# homehelp/modules/providers/router.py

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from homehelp.core.database import get_db
from homehelp.modules.auth.security import get_current_user
from homehelp.shared.models.user_models import User, UserRole
from homehelp.shared.models.service_models import ServiceCategory
from . import schemas
from . import service as provider_service

router = APIRouter(
    tags=["Providers"],
    responses={404: {"description": "Not found"}},
)

PROVIDER_NOT_FOUND = "Provider not found"


@router.get(
    "/providers",
    response_model=List[schemas.ProviderPublic],
    summary="Search the provider directory"
)
async def get_providers(
    service_uid: Optional[str] = Query(None, alias="serviceId", description="Service UID the provider must offer"),
    category: Optional[ServiceCategory] = Query(None, description="Provider category"),
    city: Optional[str] = Query(None, description="City, case-insensitive"),
    search: Optional[str] = Query(None, description="Free text over name, bio, city and services"),
    sort: schemas.ProviderSort = Query(schemas.ProviderSort.rating, description="Ordering"),
    db: AsyncSession = Depends(get_db),
):
    return await provider_service.search_providers(
        db=db,
        service_uid=service_uid,
        category=category,
        city=city,
        search=search,
        sort=sort,
    )


@router.get(
    "/cities",
    response_model=List[str],
    summary="Cities with at least one provider"
)
async def get_cities(db: AsyncSession = Depends(get_db)):
    return await provider_service.list_cities(db)


@router.get(
    "/providers/user/{user_uid}",
    response_model=schemas.ProviderProfilePublic,
    summary="Provider profile of a user"
)
async def get_provider_by_user(
    user_uid: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    The user themself or an admin only.
    """
    if current_user.role != UserRole.admin.value and current_user.uid != user_uid:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    profile = await provider_service.get_profile_by_user(db, user_uid)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Provider profile not found")

    return schemas.ProviderProfilePublic.from_profile(profile)


@router.get(
    "/providers/{profile_uid}",
    response_model=schemas.ProviderDetail,
    summary="Provider detail page"
)
async def get_provider(
    profile_uid: str,
    db: AsyncSession = Depends(get_db),
):
    profile = await provider_service.get_provider_profile(db, profile_uid)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PROVIDER_NOT_FOUND)

    return await provider_service.build_provider_detail(db, profile)


@router.get(
    "/providers/{profile_uid}/reviews",
    response_model=List[schemas.ReviewPublic],
    summary="Reviews of a provider"
)
async def get_provider_reviews(
    profile_uid: str,
    db: AsyncSession = Depends(get_db),
):
    profile = await provider_service.get_provider_profile(db, profile_uid)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PROVIDER_NOT_FOUND)

    return await provider_service.list_provider_reviews(db, profile.user_id)


@router.get(
    "/providers/{profile_uid}/credentials",
    response_model=List[schemas.CredentialPublic],
    summary="Credentials of a provider"
)
async def get_provider_credentials(
    profile_uid: str,
    db: AsyncSession = Depends(get_db),
):
    profile = await provider_service.get_provider_profile(db, profile_uid)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PROVIDER_NOT_FOUND)

    return profile.credentials


@router.post(
    "/providers",
    response_model=schemas.ProviderPublic,
    status_code=status.HTTP_201_CREATED,
    summary="Become a provider"
)
async def create_provider_profile(
    profile_data: schemas.ProviderProfileCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Create the caller's provider profile. Customers are promoted to providers.
    """
    try:
        profile = await provider_service.create_profile(db, current_user, profile_data)
    except provider_service.ProviderProfileError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return schemas.ProviderPublic.from_listing(profile, None, 0)


@router.patch(
    "/providers/{profile_uid}",
    response_model=schemas.ProviderPublic,
    summary="Update a provider profile"
)
async def update_provider_profile(
    profile_uid: str,
    profile_data: schemas.ProviderProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    The profile owner or an admin only.
    """
    profile = await provider_service.get_provider_profile(db, profile_uid)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PROVIDER_NOT_FOUND)

    if current_user.role != UserRole.admin.value and profile.user_id != current_user.uid:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    try:
        profile = await provider_service.update_profile(db, profile, profile_data)
    except provider_service.ProviderProfileError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    average_rating, review_count = await provider_service.get_rating_summary(db, profile.user_id)
    return schemas.ProviderPublic.from_listing(profile, average_rating, review_count)

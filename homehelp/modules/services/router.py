# homehelp/modules/services/router.py

from fastapi import APIRouter, Depends, HTTPException, Response, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import delete
from typing import List, Optional

from homehelp.core.database import get_db
from homehelp.shared import cache
from homehelp.shared.models.service_models import Service, ServiceCategory, provider_service_link_table
from homehelp.shared.models.booking_models import Booking
from homehelp.shared.models.user_models import User
from homehelp.modules.auth.security import get_current_admin_user
from . import schemas
from . import service as catalog_service

router = APIRouter(
    tags=["Services"],
    responses={404: {"description": "Not found"}},
)

SERVICE_NOT_FOUND = "Service not found"

@router.get(
    "/services",
    response_model=List[schemas.ServicePublic],
    summary="List the service catalog"
)
async def get_services(
    category: Optional[ServiceCategory] = Query(None, description="Only this category"),
    db: AsyncSession = Depends(get_db),
):
    return await catalog_service.list_services(db, category)

@router.get(
    "/services/{service_uid}",
    response_model=schemas.ServicePublic,
    summary="Get one service"
)
async def get_service(
    service_uid: str,
    db: AsyncSession = Depends(get_db),
):
    db_service = await catalog_service.get_service(db, service_uid)
    if not db_service:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=SERVICE_NOT_FOUND)
    return db_service

@router.post(
    "/services",
    response_model=schemas.ServicePublic,
    status_code=status.HTTP_201_CREATED,
    summary="Create a service"
)
async def create_service(
    service_data: schemas.ServiceCreate,
    db: AsyncSession = Depends(get_db),
    admin_user: User = Depends(get_current_admin_user)
):
    """
    (Admin Only) Add a service to the catalog. Names are unique.
    """
    if await catalog_service.get_service_by_name(db, service_data.name):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A service with this name already exists"
        )

    new_service = Service(
        name=service_data.name,
        description=service_data.description,
        category=service_data.category,
    )
    db.add(new_service)
    await db.commit()
    cache.clear_cache(cache.SERVICES_PREFIX)

    return new_service

@router.put(
    "/services/{service_uid}",
    response_model=schemas.ServicePublic,
    summary="Update a service"
)
async def update_service(
    service_uid: str,
    service_data: schemas.ServiceUpdate,
    db: AsyncSession = Depends(get_db),
    admin_user: User = Depends(get_current_admin_user)
):
    """
    (Admin Only) Update name, description or category.
    """
    db_service = await catalog_service.get_service(db, service_uid)
    if not db_service:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=SERVICE_NOT_FOUND)

    # only fields the client actually sent
    update_data = service_data.model_dump(exclude_unset=True)

    new_name = update_data.get("name")
    if new_name and new_name != db_service.name:
        if await catalog_service.get_service_by_name(db, new_name):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="A service with this name already exists"
            )

    for key, value in update_data.items():
        # every service column is NOT NULL; an explicit null leaves it as is
        if value is None:
            continue
        setattr(db_service, key, value)

    db.add(db_service)
    await db.commit()
    cache.clear_cache(cache.SERVICES_PREFIX)

    return db_service

@router.delete(
    "/services/{service_uid}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a service"
)
async def delete_service(
    service_uid: str,
    db: AsyncSession = Depends(get_db),
    admin_user: User = Depends(get_current_admin_user)
):
    """
    (Admin Only) Delete a service. Refused while bookings reference it.
    """
    db_service = await catalog_service.get_service(db, service_uid)
    if not db_service:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=SERVICE_NOT_FOUND)

    has_bookings = (await db.execute(
        select(Booking.uid).where(Booking.service_id == service_uid).limit(1)
    )).scalars().first()
    if has_bookings:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Service has bookings and cannot be deleted"
        )

    await db.execute(
        delete(provider_service_link_table).where(
            provider_service_link_table.c.service_id == service_uid
        )
    )
    await db.delete(db_service)
    await db.commit()
    cache.clear_cache(cache.SERVICES_PREFIX)

    return Response(status_code=status.HTTP_204_NO_CONTENT)

# homehelp/modules/bookings/router.py

import logging
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from homehelp.core.database import get_db
from homehelp.modules.auth.security import get_current_user, require_roles
from homehelp.shared.deps.arq import get_arq_pool
from homehelp.shared.models.user_models import User, UserRole
from homehelp.shared.models.booking_models import BookingStatus
from homehelp.modules.notifications.service import enqueue_booking_notification
from . import schemas
from . import service as booking_service
from . import business_rules

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Bookings"],
    responses={404: {"description": "Not found"}},
)


@router.get(
    "/bookings",
    response_model=List[schemas.BookingDetail],
    summary="List bookings"
)
async def get_bookings(
    customer_uid: Optional[str] = Query(None, alias="customerId"),
    provider_uid: Optional[str] = Query(None, alias="providerId"),
    booking_status: Optional[BookingStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Customers see the bookings they made, providers the bookings made with
    them, admins everything. Asking for somebody else's bookings is a 403.
    """
    if current_user.role == UserRole.customer.value:
        if provider_uid or (customer_uid and customer_uid != current_user.uid):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        customer_uid = current_user.uid

    elif current_user.role == UserRole.provider.value:
        if customer_uid and customer_uid != current_user.uid:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        if provider_uid and provider_uid != current_user.uid:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        # a provider may also have booked other providers as a customer
        if not customer_uid:
            provider_uid = current_user.uid

    bookings = await booking_service.list_bookings(
        db,
        customer_uid=customer_uid,
        provider_uid=provider_uid,
        status=booking_status,
    )
    return [schemas.BookingDetail.from_booking(b) for b in bookings]


@router.get(
    "/bookings/{booking_uid}",
    response_model=schemas.BookingDetail,
    summary="Booking detail"
)
async def get_booking(
    booking_uid: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    booking = await booking_service.get_booking(db, booking_uid)
    if not booking:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")

    if not booking_service.can_view(current_user, booking):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    return schemas.BookingDetail.from_booking(booking)


@router.post(
    "/bookings",
    response_model=schemas.BookingDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Request a booking"
)
async def create_booking(
    booking_data: schemas.BookingCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.customer.value, UserRole.admin.value)),
    arq_pool=Depends(get_arq_pool)
):
    try:
        booking = await booking_service.create_booking(db, current_user, booking_data)
    except booking_service.BookingNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except booking_service.BookingError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    await enqueue_booking_notification(arq_pool, booking.uid, "created")
    return schemas.BookingDetail.from_booking(booking)


@router.patch(
    "/bookings/{booking_uid}/status",
    response_model=schemas.BookingDetail,
    summary="Change the status of a booking"
)
async def update_booking_status(
    booking_uid: str,
    status_data: schemas.BookingStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    arq_pool=Depends(get_arq_pool)
):
    """
    Providers accept, reject and complete; customers cancel and approve.
    """
    booking = await booking_service.get_booking(db, booking_uid)
    if not booking:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")

    if not booking_service.can_view(current_user, booking):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    try:
        booking = await booking_service.update_status(db, booking, status_data.status, current_user)
    except business_rules.TransitionForbiddenError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except (business_rules.InvalidStatusError, business_rules.InvalidTransitionError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    await enqueue_booking_notification(arq_pool, booking.uid, booking.status)
    return schemas.BookingDetail.from_booking(booking)

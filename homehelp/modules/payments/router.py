# homehelp/modules/payments/router.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from homehelp.core.database import get_db
from homehelp.modules.auth.security import get_current_user, get_current_admin_user
from homehelp.modules.bookings import service as booking_service
from homehelp.modules.bookings.schemas import PaymentPublic
from homehelp.modules.notifications.service import enqueue_booking_notification
from homehelp.shared.deps.arq import get_arq_pool
from homehelp.shared.models.user_models import User, UserRole
from . import schemas
from . import service as payment_service

router = APIRouter(
    tags=["Payments"],
    responses={404: {"description": "Not found"}},
)


@router.post(
    "/payments",
    response_model=PaymentPublic,
    status_code=status.HTTP_201_CREATED,
    summary="Pay for a completed booking"
)
async def create_payment(
    payment_data: schemas.PaymentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    arq_pool=Depends(get_arq_pool)
):
    """
    The booking's customer (or an admin) pays; the booking becomes approved.
    """
    booking = await booking_service.get_booking(db, payment_data.booking_id)
    if not booking:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")

    if current_user.role != UserRole.admin.value and booking.customer_id != current_user.uid:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    try:
        payment = await payment_service.create_payment(db, booking, payment_data.payment_method)
    except payment_service.PaymentError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    await enqueue_booking_notification(arq_pool, booking.uid, "paid")
    return payment


@router.get(
    "/payments/{payment_uid}",
    response_model=PaymentPublic,
    summary="Get one payment"
)
async def get_payment(
    payment_uid: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    payment = await payment_service.get_payment(db, payment_uid)
    if not payment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payment not found")

    if not booking_service.can_view(current_user, payment.booking):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    return payment


@router.post(
    "/payments/{payment_uid}/refund",
    response_model=PaymentPublic,
    summary="Refund a payment"
)
async def refund_payment(
    payment_uid: str,
    db: AsyncSession = Depends(get_db),
    admin_user: User = Depends(get_current_admin_user)
):
    """
    (Admin Only)
    """
    payment = await payment_service.get_payment(db, payment_uid)
    if not payment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payment not found")

    try:
        return await payment_service.refund_payment(db, payment)
    except payment_service.PaymentError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

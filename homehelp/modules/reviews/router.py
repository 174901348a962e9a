# homehelp/modules/reviews/router.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from homehelp.core.database import get_db
from homehelp.modules.auth.security import get_current_user
from homehelp.modules.bookings import service as booking_service
from homehelp.modules.providers.schemas import ReviewPublic
from homehelp.shared.models.user_models import User
from homehelp.shared.models.booking_models import BookingStatus, PaymentStatus, Review
from . import schemas

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Reviews"],
    responses={404: {"description": "Not found"}},
)


@router.post(
    "/reviews",
    response_model=ReviewPublic,
    status_code=status.HTTP_201_CREATED,
    summary="Review a finished booking"
)
async def create_review(
    review_data: schemas.ReviewCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Only the booking's customer, once the booking is approved and paid.
    """
    booking = await booking_service.get_booking(db, review_data.booking_id)
    if not booking:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")

    if booking.customer_id != current_user.uid:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    if booking.review is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Review already exists for this booking"
        )

    if booking.status != BookingStatus.approved.value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Booking must be approved before it can be reviewed"
        )

    if booking.payment is None or booking.payment.status != PaymentStatus.completed.value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Booking must be paid before it can be reviewed"
        )

    review = Review(
        booking_id=booking.uid,
        rating=review_data.rating,
        comment=review_data.comment,
    )
    db.add(review)
    await db.commit()

    logger.info("Review %s (%d stars) for booking %s", review.uid, review.rating, booking.uid)
    return review

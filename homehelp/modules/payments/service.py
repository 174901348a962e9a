# homehelp/modules/payments/service.py

import logging

import ulid
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from homehelp.core.database import utc_now
from homehelp.shared.models.booking_models import Booking, BookingStatus, Payment, PaymentStatus

logger = logging.getLogger(__name__)


class PaymentError(ValueError):
    """Payment cannot be made or changed (maps to 400)."""


def mock_transaction_id() -> str:
    return f"mock-{ulid.new()}"


async def get_payment(db: AsyncSession, payment_uid: str) -> Payment | None:
    query = (
        select(Payment)
        .where(Payment.uid == payment_uid)
        .options(joinedload(Payment.booking))
        .execution_options(populate_existing=True)
    )
    return (await db.execute(query)).scalars().first()


async def create_payment(db: AsyncSession, booking: Booking, payment_method: str) -> Payment:
    """
    Record a mock payment for a completed booking and approve the booking.
    """
    if booking.payment is not None:
        raise PaymentError("Payment already exists for this booking")
    if booking.status != BookingStatus.completed.value:
        raise PaymentError("Booking must be completed before payment")

    payment = Payment(
        booking_id=booking.uid,
        amount=booking.total_amount,
        status=PaymentStatus.completed.value,
        payment_method=payment_method,
        transaction_id=mock_transaction_id(),
    )
    booking.status = BookingStatus.approved.value
    booking.updated_at = utc_now()

    db.add(payment)
    db.add(booking)
    try:
        await db.commit()
    except IntegrityError:
        # a concurrent request paid the same booking first
        await db.rollback()
        raise PaymentError("Payment already exists for this booking")

    logger.info("Payment %s of %.2f for booking %s", payment.uid, payment.amount, booking.uid)
    return await get_payment(db, payment.uid)


async def refund_payment(db: AsyncSession, payment: Payment) -> Payment:
    if payment.status != PaymentStatus.completed.value:
        raise PaymentError("Only completed payments can be refunded")

    payment.status = PaymentStatus.refunded.value
    db.add(payment)
    await db.commit()

    logger.info("Payment %s refunded", payment.uid)
    return await get_payment(db, payment.uid)

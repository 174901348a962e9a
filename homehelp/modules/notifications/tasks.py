# homehelp/modules/notifications/tasks.py
"""
arq worker for booking notifications.

Run with::

    arq homehelp.modules.notifications.tasks.WorkerSettings
"""
import logging

from arq.connections import RedisSettings

from homehelp.core.config import settings
from homehelp.core.database import AsyncSessionLocal
from homehelp.core.logging_config import setup_logging
from homehelp.modules.bookings import service as booking_service

logger = logging.getLogger(__name__)

# what each event tells the two parties
EVENT_MESSAGES = {
    "created": "New booking request",
    "accepted": "Booking accepted by the provider",
    "rejected": "Booking rejected by the provider",
    "completed": "Work marked as completed",
    "approved": "Booking approved",
    "cancelled": "Booking cancelled",
    "paid": "Payment received",
}


async def send_booking_notification(ctx: dict, booking_uid: str, event: str) -> dict:
    """
    Notify the customer and the provider of a booking event.
    Delivery is a log line until an email provider is wired in.
    """
    session_factory = ctx.get("session_factory", AsyncSessionLocal)
    async with session_factory() as db:
        booking = await booking_service.get_booking(db, booking_uid)

    if booking is None:
        logger.warning("Booking %s vanished before notification %s", booking_uid, event)
        return {"status": "missing", "booking_uid": booking_uid, "event": event}

    subject = EVENT_MESSAGES.get(event, f"Booking update: {event}")
    recipients = [booking.customer.email, booking.provider.email]
    for email in recipients:
        logger.info("Notify %s: %s (booking %s, service %s)", email, subject, booking.uid, booking.service.name)

    return {
        "status": "sent",
        "booking_uid": booking_uid,
        "event": event,
        "subject": subject,
        "recipients": recipients,
    }


async def startup(ctx: dict) -> None:
    setup_logging(settings.LOG_LEVEL)
    ctx["session_factory"] = AsyncSessionLocal
    logger.info("Notification worker started")


class WorkerSettings:
    functions = [send_booking_notification]
    on_startup = startup
    redis_settings = RedisSettings.from_dsn(settings.REDIS_URL)
    max_tries = 3

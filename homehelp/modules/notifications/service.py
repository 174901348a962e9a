# homehelp/modules/notifications/service.py

import logging
from typing import Optional

from arq.connections import ArqRedis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

NOTIFICATION_TASK = "send_booking_notification"


async def enqueue_booking_notification(
    pool: Optional[ArqRedis],
    booking_uid: str,
    event: str,
) -> bool:
    """
    Queue a notification job for a booking event.

    Returns False when the queue is disabled or Redis is unreachable; the
    booking itself has already been committed at that point.
    """
    if pool is None:
        logger.debug("Task queue disabled, skipping %s for booking %s", event, booking_uid)
        return False
    try:
        await pool.enqueue_job(NOTIFICATION_TASK, booking_uid, event)
    except (RedisError, OSError) as exc:
        logger.warning("Could not enqueue %s for booking %s: %s", event, booking_uid, exc)
        return False
    return True

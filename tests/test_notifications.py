"""
Tests for the booking notification queue helper and the arq task.
"""

from unittest.mock import AsyncMock

from redis.exceptions import ConnectionError as RedisConnectionError

from conftest import future_date
from homehelp.main import app
from homehelp.modules.notifications.service import NOTIFICATION_TASK, enqueue_booking_notification
from homehelp.modules.notifications.tasks import WorkerSettings, send_booking_notification


class TestEnqueue:

    async def test_disabled_queue_is_a_no_op(self):
        assert await enqueue_booking_notification(None, "booking-uid", "created") is False

    async def test_enqueues_job(self):
        pool = AsyncMock()

        assert await enqueue_booking_notification(pool, "booking-uid", "accepted") is True
        pool.enqueue_job.assert_awaited_once_with(NOTIFICATION_TASK, "booking-uid", "accepted")

    async def test_redis_failure_is_swallowed(self):
        pool = AsyncMock()
        pool.enqueue_job.side_effect = RedisConnectionError("down")

        assert await enqueue_booking_notification(pool, "booking-uid", "created") is False


class TestSendNotification:

    async def test_sends_to_both_parties(self, session_factory, customer, provider, services, create_booking):
        booking = await create_booking(customer, provider[0], services["Plumbing Repair"])

        result = await send_booking_notification(
            {"session_factory": session_factory}, booking.uid, "created"
        )

        assert result["status"] == "sent"
        assert result["subject"] == "New booking request"
        assert result["recipients"] == [customer.email, provider[0].email]

    async def test_unknown_event_still_sends(self, session_factory, customer, provider, services, create_booking):
        booking = await create_booking(customer, provider[0], services["Plumbing Repair"])

        result = await send_booking_notification({"session_factory": session_factory}, booking.uid, "rescheduled")

        assert result["subject"] == "Booking update: rescheduled"

    async def test_missing_booking(self, session_factory):
        result = await send_booking_notification(
            {"session_factory": session_factory}, "01HZZZZZZZZZZZZZZZZZZZZZZZ", "created"
        )

        assert result == {"status": "missing", "booking_uid": "01HZZZZZZZZZZZZZZZZZZZZZZZ", "event": "created"}


def test_worker_registers_task():
    assert send_booking_notification in WorkerSettings.functions
    assert WorkerSettings.redis_settings.host == "localhost"


async def test_routes_enqueue_when_queue_is_enabled(client, customer, provider, services, auth_headers):
    pool = AsyncMock()
    app.state.arq_pool = pool
    try:
        response = await client.post(
            "/api/bookings",
            json={
                "provider_id": provider[0].uid,
                "service_id": services["Plumbing Repair"].uid,
                "scheduled_date": future_date().isoformat(),
                "description": "Blocked drain",
                "address": "1 Main Street",
                "city": "Springfield",
            },
            headers=auth_headers(customer),
        )
    finally:
        app.state.arq_pool = None

    assert response.status_code == 201
    pool.enqueue_job.assert_awaited_once_with(NOTIFICATION_TASK, response.json()["uid"], "created")

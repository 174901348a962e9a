"""
Tests for the admin back office.
"""

import pytest

from conftest import TEST_PASSWORD
from homehelp.shared.models import BookingStatus, Credential, Payment, PaymentStatus


async def test_admin_routes_require_admin(client, customer, auth_headers):
    for path in ("/api/admin/dashboard", "/api/admin/users", "/api/admin/providers", "/api/admin/bookings"):
        response = await client.get(path, headers=auth_headers(customer))
        assert response.status_code == 403, path


async def test_dashboard(
    client, admin, customer, provider, services, create_booking, session_factory, auth_headers
):
    plumbing = services["Plumbing Repair"]
    await create_booking(customer, provider[0], plumbing)
    await create_booking(customer, provider[0], plumbing, BookingStatus.completed)
    paid = await create_booking(customer, provider[0], plumbing, BookingStatus.approved, total_amount=80.0)
    refunded = await create_booking(customer, provider[0], plumbing, BookingStatus.approved, total_amount=999.0)
    async with session_factory() as db:
        db.add(Payment(booking_id=paid.uid, amount=80.0, status=PaymentStatus.completed.value))
        db.add(Payment(booking_id=refunded.uid, amount=999.0, status=PaymentStatus.refunded.value))
        db.add(Credential(provider_id=provider[1].uid, document_name="Insurance", document_url="https://files.homehelp.io/i.pdf"))
        await db.commit()

    response = await client.get("/api/admin/dashboard", headers=auth_headers(admin))

    assert response.status_code == 200
    body = response.json()
    assert body["stats"] == {
        "total_users": 3,
        "total_customers": 1,
        "total_providers": 1,
        "total_bookings": 4,
        "requested_bookings": 1,
        "completed_bookings": 1,
        "total_revenue": 80.0,
        "pending_verifications": 1,
    }
    assert [c["document_name"] for c in body["pending_credentials"]] == ["Insurance"]


class TestUserAdmin:

    async def test_list_by_role(self, client, admin, customer, provider, auth_headers):
        response = await client.get("/api/admin/users", params={"role": "provider"}, headers=auth_headers(admin))

        assert response.status_code == 200
        users = response.json()
        assert [u["username"] for u in users] == ["bob"]
        assert "password_hash" not in users[0]

    async def test_change_role(self, client, admin, customer, auth_headers):
        response = await client.put(
            f"/api/admin/users/{customer.uid}/role", json={"role": "admin"}, headers=auth_headers(admin)
        )

        assert response.status_code == 200
        assert response.json()["role"] == "admin"

    async def test_change_role_of_missing_user(self, client, admin, auth_headers):
        response = await client.put(
            "/api/admin/users/01HZZZZZZZZZZZZZZZZZZZZZZZ/role", json={"role": "admin"}, headers=auth_headers(admin)
        )
        assert response.status_code == 404

    async def test_invalid_role(self, client, admin, customer, auth_headers):
        response = await client.put(
            f"/api/admin/users/{customer.uid}/role", json={"role": "superuser"}, headers=auth_headers(admin)
        )
        assert response.status_code == 400

    async def test_deactivate_blocks_login(self, client, admin, customer, auth_headers):
        response = await client.patch(
            f"/api/admin/users/{customer.uid}/active", json={"is_active": False}, headers=auth_headers(admin)
        )
        assert response.status_code == 200
        assert response.json()["is_active"] is False

        login = await client.post("/api/login", json={"username": customer.username, "password": TEST_PASSWORD})
        assert login.status_code == 401

        me = await client.get("/api/user", headers=auth_headers(customer))
        assert me.status_code == 401

    async def test_cannot_deactivate_self(self, client, admin, auth_headers):
        response = await client.patch(
            f"/api/admin/users/{admin.uid}/active", json={"is_active": False}, headers=auth_headers(admin)
        )
        assert response.status_code == 400


class TestProviderAdmin:

    async def test_lists_inactive_providers_too(self, client, admin, provider, create_provider, auth_headers):
        await create_provider("quiet", is_active=False)

        response = await client.get("/api/admin/providers", headers=auth_headers(admin))

        assert response.status_code == 200
        assert {p["user"]["username"] for p in response.json()} == {"bob", "quiet"}

    async def test_verify_provider(self, client, admin, provider, auth_headers):
        _, profile = provider

        response = await client.patch(
            f"/api/admin/providers/{profile.uid}/verify", json={"is_verified": True}, headers=auth_headers(admin)
        )

        assert response.status_code == 200
        assert response.json()["is_verified"] is True

        public = await client.get(f"/api/providers/{profile.uid}")
        assert public.json()["is_verified"] is True

    async def test_verify_missing_provider(self, client, admin, auth_headers):
        response = await client.patch(
            "/api/admin/providers/01HZZZZZZZZZZZZZZZZZZZZZZZ/verify",
            json={"is_verified": True},
            headers=auth_headers(admin),
        )
        assert response.status_code == 404


@pytest.mark.parametrize("status_filter, expected", [(None, 2), ("completed", 1), ("cancelled", 0)])
async def test_all_bookings(
    client, admin, customer, provider, services, create_booking, auth_headers, status_filter, expected
):
    plumbing = services["Plumbing Repair"]
    await create_booking(customer, provider[0], plumbing)
    await create_booking(customer, provider[0], plumbing, BookingStatus.completed)

    params = {"status": status_filter} if status_filter else {}
    response = await client.get("/api/admin/bookings", params=params, headers=auth_headers(admin))

    assert response.status_code == 200
    assert len(response.json()) == expected

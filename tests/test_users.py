"""
Tests for the profile endpoints and user updates.
"""

from homehelp.shared.models import BookingStatus


class TestProfile:

    async def test_customer_profile(self, client, customer, provider, services, create_booking, auth_headers):
        await create_booking(customer, provider[0], services["Plumbing Repair"])
        await create_booking(customer, provider[0], services["Plumbing Repair"], BookingStatus.cancelled)

        response = await client.get("/api/profile", headers=auth_headers(customer))

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["uid"] == customer.uid
        assert body["provider_profile"] is None
        assert body["bookings_count"] == 2

    async def test_provider_profile(self, client, customer, provider, services, create_booking, auth_headers):
        user, profile = provider
        await create_booking(customer, user, services["Plumbing Repair"])

        body = (await client.get("/api/profile", headers=auth_headers(user))).json()

        assert body["provider_profile"]["uid"] == profile.uid
        assert body["bookings_count"] == 1

    async def test_update_own_profile(self, client, customer, auth_headers):
        response = await client.patch(
            "/api/profile",
            json={"name": "Alice Liddell", "city": "Capital City", "email": "alice.l@homehelp.io"},
            headers=auth_headers(customer),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Alice Liddell"
        assert body["city"] == "Capital City"
        assert body["email"] == "alice.l@homehelp.io"

    async def test_email_taken(self, client, customer, admin, auth_headers):
        response = await client.patch(
            "/api/profile", json={"email": admin.email}, headers=auth_headers(customer)
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Email already registered"}

    async def test_requires_login(self, client):
        assert (await client.get("/api/profile")).status_code == 401


class TestUpdateUser:

    async def test_self_update(self, client, customer, auth_headers):
        response = await client.patch(
            f"/api/users/{customer.uid}", json={"phone": "555-0100"}, headers=auth_headers(customer)
        )

        assert response.status_code == 200
        assert response.json()["phone"] == "555-0100"

    async def test_cannot_change_own_role(self, client, customer, auth_headers):
        response = await client.patch(
            f"/api/users/{customer.uid}", json={"role": "admin"}, headers=auth_headers(customer)
        )

        assert response.status_code == 403
        assert response.json() == {"message": "Cannot change role"}

    async def test_sending_current_role_is_fine(self, client, customer, auth_headers):
        response = await client.patch(
            f"/api/users/{customer.uid}", json={"role": "customer", "bio": "Hi"}, headers=auth_headers(customer)
        )
        assert response.status_code == 200

    async def test_cannot_edit_others(self, client, customer, admin, auth_headers):
        response = await client.patch(
            f"/api/users/{admin.uid}", json={"name": "Hacked"}, headers=auth_headers(customer)
        )
        assert response.status_code == 403

    async def test_admin_changes_role(self, client, customer, admin, auth_headers):
        response = await client.patch(
            f"/api/users/{customer.uid}", json={"role": "provider"}, headers=auth_headers(admin)
        )

        assert response.status_code == 200
        assert response.json()["role"] == "provider"

    async def test_password_is_ignored(self, client, customer, auth_headers):
        response = await client.patch(
            f"/api/users/{customer.uid}", json={"password": "new-password"}, headers=auth_headers(customer)
        )

        assert response.status_code == 200
        assert "password" not in response.json()

    async def test_missing_user(self, client, admin, auth_headers):
        response = await client.patch(
            "/api/users/01HZZZZZZZZZZZZZZZZZZZZZZZ", json={"name": "Nobody"}, headers=auth_headers(admin)
        )

        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}


class TestCitiesCache:

    async def test_moving_city_refreshes_cities(self, client, provider, auth_headers, fake_redis):
        user, _ = provider
        assert (await client.get("/api/cities")).json() == ["Springfield"]
        assert "cities:list" in fake_redis.store

        response = await client.patch("/api/profile", json={"city": "Shelbyville"}, headers=auth_headers(user))
        assert response.status_code == 200

        assert (await client.get("/api/cities")).json() == ["Shelbyville"]

    async def test_role_change_refreshes_cities(self, client, admin, provider, auth_headers, fake_redis):
        user, _ = provider
        assert (await client.get("/api/cities")).json() == ["Springfield"]

        response = await client.patch(
            f"/api/users/{user.uid}", json={"role": "customer"}, headers=auth_headers(admin)
        )
        assert response.status_code == 200

        assert (await client.get("/api/cities")).json() == []

    async def test_name_change_keeps_cities_cached(self, client, provider, auth_headers, fake_redis):
        user, _ = provider
        await client.get("/api/cities")

        await client.patch("/api/profile", json={"name": "Robert"}, headers=auth_headers(user))

        assert "cities:list" in fake_redis.store

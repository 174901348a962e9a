"""
Tests for registration, login and the current-user endpoints.
"""

from conftest import TEST_PASSWORD


class TestRegister:

    async def test_register_customer(self, client):
        response = await client.post("/api/register", json={
            "username": "carol",
            "password": "hunter22",
            "email": "carol@homehelp.io",
            "name": "Carol",
            "city": "Shelbyville",
        })

        assert response.status_code == 201
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["access_token"]
        assert body["user"]["username"] == "carol"
        assert body["user"]["role"] == "customer"
        assert "password" not in body["user"]
        assert "password_hash" not in body["user"]

    async def test_register_provider_role(self, client):
        response = await client.post("/api/register", json={
            "username": "dave",
            "password": "hunter22",
            "email": "dave@homehelp.io",
            "name": "Dave",
            "role": "provider",
        })

        assert response.status_code == 201
        assert response.json()["user"]["role"] == "provider"

    async def test_register_admin_is_rejected(self, client):
        response = await client.post("/api/register", json={
            "username": "mallory",
            "password": "hunter22",
            "email": "mallory@homehelp.io",
            "name": "Mallory",
            "role": "admin",
        })

        assert response.status_code == 400
        assert response.json()["message"] == "Validation error"

    async def test_duplicate_username(self, client, customer):
        response = await client.post("/api/register", json={
            "username": customer.username,
            "password": "hunter22",
            "email": "other@homehelp.io",
            "name": "Other",
        })

        assert response.status_code == 400
        assert response.json() == {"message": "Username already exists"}

    async def test_duplicate_email(self, client, customer):
        response = await client.post("/api/register", json={
            "username": "someone",
            "password": "hunter22",
            "email": customer.email,
            "name": "Someone",
        })

        assert response.status_code == 400
        assert response.json() == {"message": "Email already registered"}

    async def test_registered_user_can_log_in(self, client):
        await client.post("/api/register", json={
            "username": "erin",
            "password": "hunter22",
            "email": "erin@homehelp.io",
            "name": "Erin",
        })

        response = await client.post("/api/login", json={"username": "erin", "password": "hunter22"})
        assert response.status_code == 200


class TestLogin:

    async def test_login_omits_password(self, client, customer):
        response = await client.post("/api/login", json={
            "username": customer.username,
            "password": TEST_PASSWORD,
        })

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["uid"] == customer.uid
        assert "password" not in body["user"]
        assert "password_hash" not in body["user"]
        assert "password" not in response.text

    async def test_wrong_password(self, client, customer):
        response = await client.post("/api/login", json={
            "username": customer.username,
            "password": "not-the-password",
        })

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid credentials"}

    async def test_unknown_user(self, client):
        response = await client.post("/api/login", json={"username": "ghost", "password": "whatever"})
        assert response.status_code == 401

    async def test_inactive_user_cannot_log_in(self, client, create_user):
        user = await create_user("sleeper", is_active=False)

        response = await client.post("/api/login", json={"username": user.username, "password": TEST_PASSWORD})
        assert response.status_code == 401

    async def test_missing_field_is_400(self, client):
        response = await client.post("/api/login", json={"username": "alice"})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation error"
        assert body["errors"]


class TestCurrentUser:

    async def test_requires_token(self, client):
        response = await client.get("/api/user")

        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized"}

    async def test_rejects_garbage_token(self, client):
        response = await client.get("/api/user", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    async def test_returns_user(self, client, customer, auth_headers):
        response = await client.get("/api/user", headers=auth_headers(customer))

        assert response.status_code == 200
        assert response.json()["username"] == customer.username

    async def test_token_from_login_works(self, client, customer):
        login = await client.post("/api/login", json={"username": customer.username, "password": TEST_PASSWORD})
        token = login.json()["access_token"]

        response = await client.get("/api/user", headers={"Authorization": f"Bearer {token}"})
        assert response.json()["uid"] == customer.uid

    async def test_logout(self, client, customer, auth_headers):
        response = await client.post("/api/logout", headers=auth_headers(customer))

        assert response.status_code == 200
        assert response.json() == {"message": "Logged out"}

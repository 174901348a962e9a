async def test_api_test_endpoint(client):
    response = await client.get("/api/test")

    assert response.status_code == 200
    assert response.json() == {"message": "API is working!"}


async def test_status(client):
    response = await client.get("/status")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "running"
    assert body["environment"] == "test"
    assert body["service"] == "HomeHelp Backend"
    assert body["memory_mb"] > 0
    assert isinstance(body["timestamp"], float)


async def test_unknown_route_uses_message_body(client):
    response = await client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}

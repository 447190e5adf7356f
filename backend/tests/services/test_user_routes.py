"""Caller Identity Routes — echo of the gateway-resolved identity."""


async def test_me_returns_resolved_identity(client):
    headers = {
        "X-User-Id": "sub-7", "X-Username": "marta",
        "X-User-Roles": "role_admin, CLIENT",
    }
    res = await client.get("/api/v1/users/me", headers=headers)
    assert res.status_code == 200
    assert res.json() == {
        "id": "sub-7",
        "username": "marta",
        "roles": ["ADMIN", "CLIENT"],
        "is_admin": True,
        "is_super_admin": False,
    }


async def test_me_without_identity_is_401(client):
    res = await client.get("/api/v1/users/me")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "AUTHENTICATION_REQUIRED"


async def test_me_needs_no_particular_role(client):
    res = await client.get("/api/v1/users/me/roles", headers={"X-User-Id": "u1"})
    assert res.status_code == 200
    assert res.json() == []


async def test_single_field_routes(client, client_headers):
    res = await client.get("/api/v1/users/me/id", headers=client_headers)
    assert res.json() == "client-1"

    res = await client.get("/api/v1/users/me/username", headers=client_headers)
    assert res.json() == "client"

    res = await client.get("/api/v1/users/me/is-admin", headers=client_headers)
    assert res.json() is False


async def test_super_admin_flag(client):
    headers = {"X-User-Id": "root", "X-User-Roles": "SUPER_ADMIN"}
    res = await client.get("/api/v1/users/me/is-super-admin", headers=headers)
    assert res.json() is True

    res = await client.get("/api/v1/users/me/is-admin", headers=headers)
    assert res.json() is False

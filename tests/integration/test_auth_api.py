from __future__ import annotations

import pytest

from tests.utils import FINANCE, HR, PASSWORD, create_user

pytestmark = pytest.mark.asyncio


def _registration(**overrides):
    payload = {
        "name": "Nina New",
        "email": "nina@acme.org",
        "password": "s3cret-pass",
        "password_confirmation": "s3cret-pass",
        "department_id": FINANCE,
    }
    payload.update(overrides)
    return payload


async def test_register_creates_employee_with_token(async_client) -> None:
    response = await async_client.post("/api/v1/register", json=_registration())

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["message"] == "User registered successfully"
    assert body["user"]["roles"] == ["employee"]
    assert body["user"]["department"]["name"] == "Finance"
    assert body["token"]

    me = await async_client.get(
        "/api/v1/user", headers={"Authorization": f"Bearer {body['token']}"}
    )
    assert me.status_code == 200
    assert me.json()["user"]["email"] == "nina@acme.org"


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"password_confirmation": "different"}, "password_confirmation"),
        ({"password": "short", "password_confirmation": "short"}, "password"),
        ({"department_id": 999}, "department_id"),
        ({"department_id": 2**70}, "department_id"),
        ({"email": "not-an-email"}, "email"),
        ({"name": "   "}, "name"),
    ],
)
async def test_register_rejects_invalid_input(async_client, overrides, field) -> None:
    response = await async_client.post("/api/v1/register", json=_registration(**overrides))

    assert response.status_code == 422, response.text
    body = response.json()
    assert body["message"] == "The given data was invalid."
    assert field in [error["loc"][-1] for error in body["detail"]]


async def test_register_rejects_duplicate_email(async_client, users) -> None:
    response = await async_client.post(
        "/api/v1/register", json=_registration(email="EVE@acme.org")
    )

    assert response.status_code == 422
    assert response.json()["detail"][0]["msg"] == "The email has already been taken."


async def test_login_failures_are_indistinguishable(async_client, users) -> None:
    wrong_password = await async_client.post(
        "/api/v1/login", json={"email": users.employee.email, "password": "nope-nope"}
    )
    unknown_email = await async_client.post(
        "/api/v1/login", json={"email": "ghost@acme.org", "password": "nope-nope"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["message"] == "Invalid credentials"


async def test_login_revokes_previous_tokens(async_client, users) -> None:
    old_headers = users.manager.headers

    response = await async_client.post(
        "/api/v1/login", json={"email": users.manager.email, "password": PASSWORD}
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["user"]["department_id"] == HR

    stale = await async_client.get("/api/v1/user", headers=old_headers)
    assert stale.status_code == 401

    fresh = await async_client.get(
        "/api/v1/user", headers={"Authorization": f"Bearer {body['token']}"}
    )
    assert fresh.status_code == 200


async def test_logout_revokes_only_presenting_token(async_client, users) -> None:
    response = await async_client.post("/api/v1/logout", headers=users.employee.headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Logged out successfully"}

    after = await async_client.get("/api/v1/user", headers=users.employee.headers)
    assert after.status_code == 401

    other = await async_client.get("/api/v1/user", headers=users.admin.headers)
    assert other.status_code == 200


async def test_protected_routes_require_a_token(async_client) -> None:
    for path in ("/api/v1/user", "/api/v1/documents", "/api/v1/dashboard", "/api/v1/categories"):
        response = await async_client.get(path)
        assert response.status_code == 401, path
        assert response.headers["www-authenticate"] == "Bearer"


async def test_reference_data_listing(async_client, users) -> None:
    departments = await async_client.get("/api/v1/departments")
    assert departments.status_code == 200
    assert [item["name"] for item in departments.json()["data"]] == [
        "HR",
        "Finance",
        "IT",
        "Marketing",
        "Operations",
    ]

    categories = await async_client.get("/api/v1/categories", headers=users.employee.headers)
    assert categories.status_code == 200
    assert [item["title"] for item in categories.json()["data"]][:2] == ["Policy", "Report"]


async def test_user_without_roles_is_a_server_error(async_client, settings, users) -> None:
    roleless = await create_user(
        settings, name="No Role", email="nobody@acme.org", department_id=HR, roles=()
    )

    response = await async_client.get("/api/v1/documents", headers=roleless.headers)

    assert response.status_code == 500
    assert response.json() == {"message": "Server Error", "detail": "Internal server error"}

"""
tests.test_api

End-to-end HTTP flows: auth, gatekeeper degradation, route policy and store authority.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import httpx
import pytest
from fastapi import FastAPI

from molla_api.api.deps import db_session
from molla_api.auth.jwt import JwtConfig, decode_token, issue_token
from molla_api.auth.models import UserRole
from molla_api.auth.password import hash_password
from molla_api.db.models import User
from molla_api.db.repositories.users import UserRepo


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def _create_store(client: httpx.AsyncClient, token: str, brand: str = "Owner Co") -> dict:
    r = await client.post(
        "/api/stores",
        json={"brand": brand, "description": "Groceries", "contact": {"phone": "123"}},
        headers=bearer(token),
    )
    assert r.status_code == 200, r.text
    return r.json()


async def _seed_user(app: FastAPI, email: str, role: UserRole, store_id: int | None = None) -> None:
    # Admins cannot self-register; provision directly.
    async with app.state.sessionmaker() as session:
        await UserRepo(session).save(
            User(
                email=email,
                password_hash=hash_password("Secret1!", rounds=4),
                full_name="Seeded",
                role=role,
                store_id=store_id,
            )
        )
        await session.commit()


async def _login(client: httpx.AsyncClient, email: str, password: str = "Secret1!") -> str:
    r = await client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["jwt"]


@pytest.mark.asyncio
async def test_signup_login_scenario(client: httpx.AsyncClient, signup, jwt_cfg: JwtConfig) -> None:
    body = await signup("a@x.com", role="employee")
    assert body["user"]["email"] == "a@x.com"
    assert body["user"]["role"] == "ROLE_EMPLOYEE"
    assert "password" not in body["user"] and "password_hash" not in body["user"]
    claims = decode_token(cfg=jwt_cfg, token=body["jwt"])
    assert (claims.subject, claims.role) == ("a@x.com", "ROLE_EMPLOYEE")

    token = await _login(client, "a@x.com")
    assert decode_token(cfg=jwt_cfg, token=token).subject == "a@x.com"

    r = await client.post("/auth/login", json={"email": "a@x.com", "password": "wrong"})
    assert r.status_code == 401
    assert r.json() == {
        "success": False,
        "message": "Invalid email or password",
        "error": "InvalidCredentials",
    }

    r2 = await client.post("/auth/login", json={"email": "ghost@x.com", "password": "wrong"})
    assert r2.status_code == 401
    assert r2.json() == r.json()


@pytest.mark.asyncio
async def test_signup_errors(client: httpx.AsyncClient, signup) -> None:
    r = await client.post(
        "/auth/signup",
        json={"email": "root@x.com", "password": "Secret1!", "full_name": "R", "role": "ADMIN"},
    )
    assert r.status_code == 403
    assert r.json()["error"] == "ForbiddenRole"

    await signup("dup@x.com")
    r = await client.post(
        "/auth/signup",
        json={"email": "dup@x.com", "password": "Secret1!", "full_name": "D"},
    )
    assert r.status_code == 409
    assert r.json()["error"] == "AlreadyExists"

    r = await client.post(
        "/auth/signup",
        json={"email": "bad@x.com", "password": "Secret1!", "full_name": "B", "role": "wizard"},
    )
    assert r.status_code == 422
    assert r.json()["error"] == "ValidationError"


@pytest.mark.asyncio
async def test_profile_requires_a_valid_token(
    client: httpx.AsyncClient, signup, jwt_cfg: JwtConfig
) -> None:
    body = await signup("a@x.com")

    r = await client.get("/api/users/profile", headers=bearer(body["jwt"]))
    assert r.status_code == 200
    assert r.json()["email"] == "a@x.com"

    r = await client.get("/api/users/profile")
    assert r.status_code == 401
    assert r.json()["error"] == "Unauthenticated"

    expired = issue_token(
        cfg=jwt_cfg,
        subject="a@x.com",
        role="ROLE_CUSTOMER",
        now=datetime.now(tz=UTC) - timedelta(hours=25),
    )
    forged = issue_token(
        cfg=JwtConfig(secret="attacker-controlled-secret-0123456789abcdef"),
        subject="a@x.com",
        role="ROLE_ADMIN",
    )
    for token in (expired, forged, "garbage"):
        r = await client.get("/api/users/profile", headers=bearer(token))
        assert r.status_code == 401
        assert r.json()["error"] == "Unauthenticated"

    # Public routes stay reachable with a broken token.
    r = await client.get("/healthz", headers=bearer("garbage"))
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_user_lookup_by_id(client: httpx.AsyncClient, signup) -> None:
    body = await signup("a@x.com")
    token = body["jwt"]

    r = await client.get(f"/api/users/{body['user']['id']}", headers=bearer(token))
    assert r.status_code == 200
    assert r.json()["email"] == "a@x.com"

    r = await client.get("/api/users/9999", headers=bearer(token))
    assert r.status_code == 404
    assert r.json()["error"] == "NotFound"


@pytest.mark.asyncio
async def test_store_owner_scenario(client: httpx.AsyncClient, signup) -> None:
    owner = (await signup("owner@x.com", role="store_admin"))["jwt"]
    stranger = (await signup("stranger@x.com", role="customer"))["jwt"]

    store = await _create_store(client, owner)
    assert store["store_admin"]["email"] == "owner@x.com"
    assert store["status"] == "PENDING"
    assert store["contact"]["phone"] == "123"

    # Owner may add a category; a customer who does not own the store may not.
    r = await client.post(
        "/api/categories",
        json={"store_id": store["id"], "name": "Fruit"},
        headers=bearer(owner),
    )
    assert r.status_code == 200
    category = r.json()

    r = await client.post(
        "/api/categories",
        json={"store_id": store["id"], "name": "Hijack"},
        headers=bearer(stranger),
    )
    assert r.status_code == 403
    assert r.json()["error"] == "Forbidden"

    r = await client.put(
        f"/api/categories/{category['id']}", json={"name": "Renamed"}, headers=bearer(stranger)
    )
    assert r.status_code == 403

    r = await client.put(f"/api/stores/{store['id']}", json={"brand": "X"}, headers=bearer(stranger))
    assert r.status_code == 403

    r = await client.delete(f"/api/stores/{store['id']}", headers=bearer(stranger))
    assert r.status_code == 403

    r = await client.put(
        f"/api/stores/{store['id']}", json={"brand": "Owner Mart"}, headers=bearer(owner)
    )
    assert r.status_code == 200
    assert r.json()["brand"] == "Owner Mart"
    assert r.json()["description"] == "Groceries"


@pytest.mark.asyncio
async def test_one_store_per_admin(client: httpx.AsyncClient, signup) -> None:
    owner = (await signup("owner@x.com", role="store_admin"))["jwt"]

    r = await client.get("/api/stores/admin", headers=bearer(owner))
    assert r.json() == []

    store = await _create_store(client, owner)
    r = await client.post("/api/stores", json={"brand": "Second"}, headers=bearer(owner))
    assert r.status_code == 409
    assert r.json()["error"] == "AlreadyExists"

    r = await client.get("/api/stores/admin", headers=bearer(owner))
    assert [s["id"] for s in r.json()] == [store["id"]]

    r = await client.get("/api/stores", headers=bearer(owner))
    assert len(r.json()) == 1


@pytest.mark.asyncio
async def test_category_for_missing_store_is_forbidden(client: httpx.AsyncClient, signup) -> None:
    token = (await signup("owner@x.com", role="store_admin"))["jwt"]
    r = await client.post(
        "/api/categories", json={"store_id": 4242, "name": "Ghost"}, headers=bearer(token)
    )
    assert r.status_code == 403

    r = await client.get("/api/stores/4242", headers=bearer(token))
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_products_crud_and_search(client: httpx.AsyncClient, signup) -> None:
    owner = (await signup("owner@x.com", role="store_admin"))["jwt"]
    stranger = (await signup("stranger@x.com"))["jwt"]
    store = await _create_store(client, owner)
    category = (
        await client.post(
            "/api/categories",
            json={"store_id": store["id"], "name": "Fruit"},
            headers=bearer(owner),
        )
    ).json()

    payload = {
        "store_id": store["id"],
        "category_id": category["id"],
        "name": "Green Apple",
        "sku": "APL-1",
        "brand": "Orchard",
        "mrp": 2.5,
        "selling_price": 2.0,
    }
    r = await client.post("/api/products", json=payload, headers=bearer(owner))
    assert r.status_code == 200, r.text
    product = r.json()
    assert product["category"]["name"] == "Fruit"

    r = await client.post("/api/products", json=payload, headers=bearer(owner))
    assert r.status_code == 409

    r = await client.post(
        "/api/products", json={**payload, "sku": "APL-2"}, headers=bearer(stranger)
    )
    assert r.status_code == 403

    r = await client.get(f"/api/products/search/{store['id']}", params={"q": "apple"},
                         headers=bearer(stranger))
    assert [p["sku"] for p in r.json()] == ["APL-1"]
    r = await client.get(f"/api/products/search/{store['id']}", params={"q": "orch"},
                         headers=bearer(stranger))
    assert len(r.json()) == 1
    r = await client.get(f"/api/products/search/{store['id']}", params={"q": "pear"},
                         headers=bearer(stranger))
    assert r.json() == []

    r = await client.put(
        f"/api/products/{product['id']}", json={"selling_price": 1.5}, headers=bearer(owner)
    )
    assert r.status_code == 200
    assert r.json()["selling_price"] == 1.5
    assert r.json()["name"] == "Green Apple"

    r = await client.delete(f"/api/products/{product['id']}", headers=bearer(stranger))
    assert r.status_code == 403
    r = await client.delete(f"/api/products/{product['id']}", headers=bearer(owner))
    assert r.status_code == 200
    assert r.json()["success"] is True

    r = await client.get(f"/api/products/store/{store['id']}", headers=bearer(owner))
    assert r.json() == []


@pytest.mark.asyncio
async def test_deleting_a_store_removes_its_catalogue(client: httpx.AsyncClient, signup) -> None:
    owner = (await signup("owner@x.com", role="store_admin"))["jwt"]
    store = await _create_store(client, owner)
    category = (
        await client.post(
            "/api/categories",
            json={"store_id": store["id"], "name": "Fruit"},
            headers=bearer(owner),
        )
    ).json()
    r = await client.post(
        "/api/products",
        json={"store_id": store["id"], "category_id": category["id"], "name": "Pear", "sku": "P-1"},
        headers=bearer(owner),
    )
    assert r.status_code == 200

    r = await client.delete(f"/api/stores/{store['id']}", headers=bearer(owner))
    assert r.status_code == 200

    r = await client.get(f"/api/stores/{store['id']}", headers=bearer(owner))
    assert r.status_code == 404
    r = await client.get(f"/api/categories/store/{store['id']}", headers=bearer(owner))
    assert r.json() == []
    r = await client.get(f"/api/products/store/{store['id']}", headers=bearer(owner))
    assert r.json() == []


@pytest.mark.asyncio
async def test_global_admin_routes(client: httpx.AsyncClient, app: FastAPI, signup) -> None:
    owner = (await signup("owner@x.com", role="store_admin"))["jwt"]
    store = await _create_store(client, owner)
    await _seed_user(app, "root@x.com", UserRole.admin)
    root = await _login(client, "root@x.com")

    r = await client.get("/api/super-admin/users", headers=bearer(owner))
    assert r.status_code == 403
    r = await client.get("/api/super-admin/users")
    assert r.status_code == 401
    r = await client.get("/api/super-admin/users", headers=bearer(root))
    assert r.status_code == 200
    assert {u["email"] for u in r.json()} == {"owner@x.com", "root@x.com"}

    r = await client.put(
        f"/api/stores/{store['id']}/moderate", json={"status": "ACTIVE"}, headers=bearer(owner)
    )
    assert r.status_code == 403
    r = await client.put(
        f"/api/stores/{store['id']}/moderate", json={"status": "ACTIVE"}, headers=bearer(root)
    )
    assert r.status_code == 200
    assert r.json()["status"] == "ACTIVE"


@pytest.mark.asyncio
async def test_employee_store(client: httpx.AsyncClient, app: FastAPI, signup) -> None:
    owner = (await signup("owner@x.com", role="store_admin"))["jwt"]
    store = await _create_store(client, owner)
    await _seed_user(app, "clerk@x.com", UserRole.employee, store_id=store["id"])
    clerk = await _login(client, "clerk@x.com")
    loner = (await signup("loner@x.com", role="employee"))["jwt"]

    r = await client.get("/api/stores/employee", headers=bearer(clerk))
    assert r.status_code == 200
    assert r.json()["id"] == store["id"]

    r = await client.get("/api/stores/employee", headers=bearer(loner))
    assert r.status_code == 404

    # Employees are not operators: no mutation rights on the store they work in.
    r = await client.put(f"/api/stores/{store['id']}", json={"brand": "Mine"}, headers=bearer(clerk))
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_password_limit_is_counted_in_bytes(client: httpx.AsyncClient) -> None:
    # 40 characters, 80 UTF-8 bytes: over bcrypt's input limit.
    password = "é" * 40

    r = await client.post(
        "/auth/signup",
        json={"email": "accent@x.com", "password": password, "full_name": "A"},
    )
    assert r.status_code == 422
    assert r.json()["error"] == "ValidationError"

    r = await client.post("/auth/login", json={"email": "accent@x.com", "password": password})
    assert r.status_code == 422

    # 36 characters, 72 bytes: accepted.
    r = await client.post(
        "/auth/signup",
        json={"email": "accent@x.com", "password": "é" * 36, "full_name": "A"},
    )
    assert r.status_code == 201
    await _login(client, "accent@x.com", "é" * 36)


@pytest.mark.asyncio
async def test_null_store_fields_are_ignored_on_update(client: httpx.AsyncClient, signup) -> None:
    owner = (await signup("owner@x.com", role="store_admin"))["jwt"]
    store = await _create_store(client, owner)

    r = await client.put(
        f"/api/stores/{store['id']}",
        json={"brand": None, "description": "Fresh"},
        headers=bearer(owner),
    )
    assert r.status_code == 200
    assert r.json()["brand"] == "Owner Co"
    assert r.json()["description"] == "Fresh"


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(client: httpx.AsyncClient, signup) -> None:
    owner = (await signup("owner@x.com", role="store_admin"))["jwt"]
    store = await _create_store(client, owner)
    for name, sku in (("Plain Rice", "RICE-1"), ("Rice 100% Basmati", "RICE_2")):
        r = await client.post(
            "/api/products",
            json={"store_id": store["id"], "name": name, "sku": sku},
            headers=bearer(owner),
        )
        assert r.status_code == 200

    async def search(q: str) -> list[str]:
        r = await client.get(
            f"/api/products/search/{store['id']}", params={"q": q}, headers=bearer(owner)
        )
        assert r.status_code == 200
        return [p["sku"] for p in r.json()]

    assert await search("%") == ["RICE_2"]
    assert await search("_") == ["RICE_2"]
    assert await search("rice") == ["RICE-1", "RICE_2"]


@pytest.mark.asyncio
async def test_category_moderation_is_role_gated(
    client: httpx.AsyncClient, app: FastAPI, signup
) -> None:
    owner = (await signup("owner@x.com", role="store_admin"))["jwt"]
    store = await _create_store(client, owner)
    category = (
        await client.post(
            "/api/categories",
            json={"store_id": store["id"], "name": "Fruit"},
            headers=bearer(owner),
        )
    ).json()
    manager = (await signup("manager@x.com", role="store_manager"))["jwt"]
    await _seed_user(app, "clerk@x.com", UserRole.employee, store_id=store["id"])
    clerk = await _login(client, "clerk@x.com")
    customer = (await signup("c@x.com"))["jwt"]
    url = f"/api/categories/{category['id']}/moderate"

    r = await client.put(url, json={"name": "Fresh Fruit"}, headers=bearer(owner))
    assert r.status_code == 200
    assert r.json()["name"] == "Fresh Fruit"

    r = await client.put(url, json={"name": "Seasonal"}, headers=bearer(manager))
    assert r.status_code == 200
    assert r.json()["name"] == "Seasonal"

    for token in (clerk, customer):
        r = await client.put(url, json={"name": "Nope"}, headers=bearer(token))
        assert r.status_code == 403
        assert r.json() == {
            "success": False,
            "message": "Insufficient role",
            "error": "Forbidden",
        }

    r = await client.get(f"/api/categories/store/{store['id']}", headers=bearer(owner))
    assert [c["name"] for c in r.json()] == ["Seasonal"]


@pytest.mark.asyncio
async def test_unexpected_errors_render_generic_500(app: FastAPI) -> None:
    async def broken_session():
        raise RuntimeError("database driver exploded")
        yield  # pragma: no cover

    app.dependency_overrides[db_session] = broken_session
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            r = await c.get("/readyz")
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 500
    assert r.json() == {
        "success": False,
        "message": "An unexpected error occurred",
        "error": "InternalError",
    }
    assert "exploded" not in r.text

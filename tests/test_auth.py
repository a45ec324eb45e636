import asyncio
import time

import jwt
import pytest
from httpx import AsyncClient

from auth import repository as auth_repository
from auth import security
from feedback import repository as feedback_repository
from performance import repository as performance_repository

ADMIN_HASH = security.hash_password("admin123")
STAFF_HASH = security.hash_password("staff123")


@pytest.fixture
def accounts(monkeypatch):
    calls = []

    async def fake_get_account_by_email(db, *, role, email):
        calls.append((role, email))
        table = {
            "admin": {"admin@example.com": {"id": 1, "name": "Site Admin", "email": "admin@example.com", "password_hash": ADMIN_HASH}},
            "staff": {"staff1@example.com": {"id": 7, "name": "S. Kulkarni", "email": "staff1@example.com", "password_hash": STAFF_HASH}},
        }[role]
        return table.get(auth_repository.normalize_email(email))

    monkeypatch.setattr(auth_repository, "get_account_by_email", fake_get_account_by_email)
    return calls


@pytest.fixture
def empty_admin_data(monkeypatch):
    async def count_feedback(db):
        return 0

    async def staff_performance(db):
        return []

    monkeypatch.setattr(feedback_repository, "count_feedback", count_feedback)
    monkeypatch.setattr(performance_repository, "staff_performance", staff_performance)


@pytest.mark.asyncio
async def test_admin_login_issues_admin_token(client: AsyncClient, accounts, settings):
    response = await client.post("/api/admin/login", json={"email": "admin@example.com", "password": "admin123"})

    assert response.status_code == 200
    claims = security.decode_access_token(response.json()["token"], settings)
    assert claims.role == "admin"
    assert claims.subject_id == 1
    assert accounts == [("admin", "admin@example.com")]


@pytest.mark.asyncio
async def test_staff_login_is_case_insensitive_on_email(client: AsyncClient, accounts, settings):
    response = await client.post("/api/staff/login", json={"email": " Staff1@Example.com ", "password": "staff123"})

    assert response.status_code == 200
    claims = security.decode_access_token(response.json()["token"], settings)
    assert claims.role == "staff"
    assert claims.subject_id == 7


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path, body",
    [
        ("/api/admin/login", {"email": "admin@example.com", "password": "wrong"}),
        ("/api/admin/login", {"email": "nobody@example.com", "password": "admin123"}),
        ("/api/admin/login", {"email": "staff1@example.com", "password": "staff123"}),
        ("/api/staff/login", {"email": "admin@example.com", "password": "admin123"}),
        ("/api/staff/login", {"email": "staff1@example.com"}),
        ("/api/staff/login", {}),
    ],
)
async def test_login_rejects_bad_credentials(client: AsyncClient, accounts, path, body):
    response = await client.post(path, json=body)

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


@pytest.mark.asyncio
async def test_admin_route_requires_token(client: AsyncClient):
    response = await client.get("/api/admin/summary")

    assert response.status_code == 401
    assert response.json() == {"error": "Missing token"}


@pytest.mark.asyncio
@pytest.mark.parametrize("header", ["Token abc", "Bearer", "Bearer    ", "abc"])
async def test_malformed_authorization_header(client: AsyncClient, header):
    response = await client.get("/api/admin/summary", headers={"Authorization": header})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_invalid_token_is_unauthenticated(client: AsyncClient):
    response = await client.get("/api/admin/summary", headers={"Authorization": "Bearer not.a.jwt"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


@pytest.mark.asyncio
async def test_expired_token_is_unauthenticated(client: AsyncClient, settings):
    now = security.now_epoch_s()
    token = jwt.encode(
        {"sub": "1", "role": "admin", "iat": now - 9 * 3600, "exp": now - 3600},
        settings.jwt_secret,
        algorithm="HS256",
    )
    response = await client.get("/api/admin/summary", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == {"error": "Token expired"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, path",
    [
        ("GET", "/api/admin/summary"),
        ("POST", "/api/admin/grade"),
        ("GET", "/api/admin/feedback"),
        ("GET", "/api/admin/grades?staffId=1"),
        ("GET", "/api/admin/grades/latest?staffId=1"),
    ],
)
async def test_staff_token_is_forbidden_on_admin_routes(client: AsyncClient, staff_headers, method, path):
    kwargs = {"json": {"staffId": 1, "grade": "A"}} if method == "POST" else {}
    response = await client.request(method, path, headers=staff_headers, **kwargs)

    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden"}


@pytest.mark.asyncio
async def test_admin_token_is_forbidden_on_staff_dashboard(client: AsyncClient, admin_headers):
    response = await client.get("/api/staff/dashboard", headers=admin_headers)

    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden"}


@pytest.mark.asyncio
async def test_admin_token_is_accepted_on_admin_route(client: AsyncClient, admin_headers, empty_admin_data):
    response = await client.get("/api/admin/summary", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"totalFeedback": 0, "staffPerformance": []}


@pytest.mark.asyncio
async def test_password_check_does_not_block_the_event_loop(client: AsyncClient, accounts, monkeypatch):
    real_verify = security.verify_password

    def slow_verify(plain_password, password_hash):
        time.sleep(0.2)
        return real_verify(plain_password, password_hash)

    monkeypatch.setattr(security, "verify_password", slow_verify)

    gaps = []
    done = asyncio.Event()

    async def ticker():
        loop = asyncio.get_running_loop()
        last = loop.time()
        while not done.is_set():
            await asyncio.sleep(0.005)
            now = loop.time()
            gaps.append(now - last)
            last = now

    tick_task = asyncio.create_task(ticker())
    body = {"email": "staff1@example.com", "password": "staff123"}
    responses = await asyncio.gather(*(client.post("/api/staff/login", json=body) for _ in range(5)))
    done.set()
    await tick_task

    assert [r.status_code for r in responses] == [200] * 5
    assert gaps
    assert max(gaps) < 0.1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"email": "staff1@example.com", "password": "x" * 500},
        {"email": "a" * 1000 + "@example.com", "password": "staff123"},
    ],
)
async def test_oversized_credentials_are_rejected_as_invalid(client: AsyncClient, accounts, body):
    response = await client.post("/api/staff/login", json=body)

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}

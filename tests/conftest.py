import pytest
from httpx import ASGITransport, AsyncClient

from auth import security
from core.config import Settings
from core.db import get_db
from main import create_app

TEST_SECRET = "test-secret-not-for-production"


class UnusedDatabase:
    """Stand-in storage handle; tests patch the repository functions instead."""

    def __getattr__(self, name):
        raise AssertionError(f"unexpected database access: {name}")


@pytest.fixture
def settings():
    return Settings(database_url="postgresql://unused/unused", jwt_secret=TEST_SECRET)


@pytest.fixture
def fake_db():
    return UnusedDatabase()


@pytest.fixture
def app(settings, fake_db):
    application = create_app(settings)
    application.dependency_overrides[get_db] = lambda: fake_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin_headers(settings):
    token = security.build_access_token(subject_id=1, role=security.ROLE_ADMIN, settings=settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def staff_headers(settings):
    token = security.build_access_token(subject_id=7, role=security.ROLE_STAFF, settings=settings)
    return {"Authorization": f"Bearer {token}"}

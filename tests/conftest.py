"""Test configuration and fixtures."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from authz.config.settings import DEFAULT_MATRIX_PATH, Settings
from authz.dependencies.auth import get_jwt_service
from authz.main import create_app
from authz.models.principal import Principal, Role
from authz.policies.engine import DecisionEngine
from authz.policies.matrix import load_config
from authz.policies.store import MatrixStore
from authz.services.jwt_service import JWTService

ORG_A = "org-a"
ORG_B = "org-b"
DEPT_1 = "dept-1"
DEPT_2 = "dept-2"


@pytest.fixture(scope="session")
def test_settings():
    """Test settings configuration."""
    return Settings(
        API_TITLE="Test API",
        LOG_LEVEL="DEBUG",
        JWT_SECRET_KEY="test-jwt-secret-key-super-long-for-testing-purposes-only",
    )


@pytest.fixture(scope="session")
def default_config():
    """The shared matrix shipped with the package."""
    return load_config(DEFAULT_MATRIX_PATH)


@pytest.fixture
def engine(default_config):
    return DecisionEngine(default_config)


# Principals
@pytest.fixture
def make_principal():
    """Factory for principals in ORG_A / DEPT_1 unless overridden."""

    def _make(role=Role.USER, **overrides):
        data = {
            "id": overrides.pop("id", f"user-{role.value if isinstance(role, Role) else role}".lower()),
            "role": role,
            "organization": ORG_A,
            "department": DEPT_1,
        }
        data.update(overrides)
        return Principal(**data)

    return _make


@pytest.fixture
def platform_superadmin(make_principal):
    return make_principal(Role.SUPER_ADMIN, id="platform-root", organization="org-platform", is_platform_user=True)


@pytest.fixture
def customer_superadmin(make_principal):
    return make_principal(Role.SUPER_ADMIN, id="tenant-root")


@pytest.fixture
def admin(make_principal):
    return make_principal(Role.ADMIN, id="admin-1")


@pytest.fixture
def manager(make_principal):
    return make_principal(Role.MANAGER, id="manager-1", is_head_of_department=True)


@pytest.fixture
def user(make_principal):
    return make_principal(Role.USER, id="user-1")


# Documents
@pytest.fixture
def make_task():
    """Factory for task documents in ORG_A / DEPT_1 unless overridden."""

    def _make(**overrides):
        data = {
            "_id": "task-1",
            "organization": ORG_A,
            "department": DEPT_1,
            "createdBy": "someone-else",
            "assignees": [],
            "watchers": [],
        }
        data.update(overrides)
        return data

    return _make


# Application
@pytest.fixture
def matrix_store(default_config):
    return MatrixStore(DEFAULT_MATRIX_PATH, config=default_config)


@pytest.fixture
def app(test_settings, matrix_store, jwt_service):
    application = create_app(test_settings, store=matrix_store)
    application.dependency_overrides[get_jwt_service] = lambda: jwt_service
    return application


@pytest_asyncio.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def jwt_service(test_settings):
    return JWTService(secret_key=test_settings.JWT_SECRET_KEY)


@pytest.fixture
def auth_headers(jwt_service):
    """Build bearer headers for a principal."""

    def _headers(principal: Principal) -> dict[str, str]:
        return {"Authorization": f"Bearer {jwt_service.create_access_token(principal)}"}

    return _headers

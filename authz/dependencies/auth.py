"""Authentication and engine dependencies for FastAPI."""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from authz.models.principal import Principal
from authz.policies.engine import DecisionEngine
from authz.policies.store import MatrixStore
from authz.services.jwt_service import JWTService
from authz.utils.exceptions import AuthenticationError

# Security scheme for Bearer tokens
security = HTTPBearer(auto_error=False)


def get_jwt_service() -> JWTService:
    return JWTService()


def get_matrix_store(request: Request) -> MatrixStore:
    """Return the store attached to the application at startup."""
    return request.app.state.matrix_store


def get_engine(store: MatrixStore = Depends(get_matrix_store)) -> DecisionEngine:
    """An engine bound to the config active when the request arrived."""
    return DecisionEngine.from_store(store)


async def get_optional_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    jwt_service: JWTService = Depends(get_jwt_service),
) -> Principal | None:
    """Decode the bearer token, if any. Invalid tokens raise."""
    if not credentials:
        return None
    return jwt_service.decode_principal(credentials.credentials)


async def get_current_principal(
    principal: Principal | None = Depends(get_optional_principal),
) -> Principal:
    """Require an authenticated principal."""
    if principal is None:
        raise AuthenticationError()
    return principal

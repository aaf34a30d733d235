"""JWT service carrying the principal in access token claims."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from jwt.exceptions import DecodeError, ExpiredSignatureError, InvalidTokenError
from pydantic import ValidationError as PydanticValidationError

from authz.config.settings import settings
from authz.models.principal import Principal
from authz.utils.exceptions import InvalidTokenError as CustomInvalidTokenError
from authz.utils.exceptions import TokenExpiredError


class JWTService:
    """Service for JWT token operations."""

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        issuer: Optional[str] = None,
        audience: Optional[str] = None,
    ):
        self.secret_key = secret_key or settings.JWT_SECRET_KEY
        self.algorithm = algorithm or settings.JWT_ALGORITHM
        self.issuer = issuer or settings.JWT_ISSUER
        self.audience = audience or settings.JWT_AUDIENCE
        self.access_token_expire_minutes = settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES

    def create_access_token(
        self,
        principal: Principal,
        expires_delta: Optional[timedelta] = None,
        extra_claims: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Create a JWT access token whose claims describe ``principal``."""
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.access_token_expire_minutes))

        payload = {
            "sub": principal.id,
            "role": principal.role,
            "type": "access",
            "is_hod": principal.is_head_of_department,
            "is_platform_user": principal.is_platform_user,
            "iat": now,
            "exp": expire,
            "iss": self.issuer,
            "aud": self.audience,
        }

        if principal.organization:
            payload["org_id"] = principal.organization

        if principal.department:
            payload["dept_id"] = principal.department

        if extra_claims:
            payload.update(extra_claims)

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str, verify_exp: bool = True) -> Dict[str, Any]:
        """Decode and validate a JWT token."""
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": verify_exp},
                audience=self.audience,
                issuer=self.issuer,
            )
            return payload

        except ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")

        except (DecodeError, InvalidTokenError) as e:
            raise CustomInvalidTokenError(f"Invalid token: {e}")

    def decode_principal(self, token: str) -> Principal:
        """Decode an access token into the principal it carries."""
        payload = self.decode_token(token)

        if payload.get("type") != "access":
            raise CustomInvalidTokenError("Invalid token type")

        try:
            return Principal(
                id=payload.get("sub"),
                role=payload.get("role"),
                organization=payload.get("org_id"),
                department=payload.get("dept_id"),
                is_head_of_department=payload.get("is_hod", False),
                is_platform_user=payload.get("is_platform_user", False),
            )
        except PydanticValidationError:
            raise CustomInvalidTokenError("Token does not describe a principal")

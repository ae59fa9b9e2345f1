"""
JWT access token handling.

Tokens are issued by the platform's auth service; this service verifies them.
`create_access_token` exists for tests and local tooling.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel

from masterly.config import get_settings


class AccessTokenPayload(BaseModel):
    """JWT access token payload."""

    sub: str  # User ID
    role: str
    exp: datetime
    iat: datetime
    jti: str


class JWTManager:
    """JWT access token creation and verification."""

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        access_token_expire_minutes: Optional[int] = None,
    ):
        settings = get_settings()
        self.secret_key = secret_key or settings.secret_key
        self.algorithm = algorithm or settings.algorithm
        self.access_token_expire_minutes = access_token_expire_minutes or settings.access_token_expire_minutes

    def create_access_token(
        self,
        user_id: uuid.UUID,
        role: str = "student",
        expires_delta: Optional[timedelta] = None,
    ) -> tuple[str, datetime, str]:
        """
        Create a new access token.

        Returns:
            Tuple of (token, expiration_datetime, token_id)
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.access_token_expire_minutes))
        jti = str(uuid.uuid4())

        payload = {
            "sub": str(user_id),
            "role": role,
            "exp": expire,
            "iat": now,
            "jti": jti,
            "type": "access",
        }

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        return token, expire, jti

    def verify_access_token(self, token: str) -> Optional[AccessTokenPayload]:
        """
        Verify and decode an access token.

        Returns None for bad signatures, expired tokens, non-access tokens or
        a subject that is not a UUID.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
            )
        except JWTError:
            return None

        if payload.get("type") != "access":
            return None
        try:
            uuid.UUID(str(payload["sub"]))
            return AccessTokenPayload(
                sub=payload["sub"],
                role=payload.get("role", "student"),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                jti=payload.get("jti", ""),
            )
        except (KeyError, TypeError, ValueError):
            return None


_default_manager: Optional[JWTManager] = None


def get_jwt_manager() -> JWTManager:
    """Lazily built manager using application settings."""
    global _default_manager
    if _default_manager is None:
        _default_manager = JWTManager()
    return _default_manager


def create_access_token(user_id: uuid.UUID, role: str = "student") -> str:
    """Create an access token with application settings."""
    token, _, _ = get_jwt_manager().create_access_token(user_id, role)
    return token


def verify_access_token(token: str) -> Optional[AccessTokenPayload]:
    """Verify an access token with application settings."""
    return get_jwt_manager().verify_access_token(token)

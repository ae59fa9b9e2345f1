"""
Identity - bearer token verification.
"""

from masterly.kernel.identity.jwt import (
    AccessTokenPayload,
    JWTManager,
    create_access_token,
    get_jwt_manager,
    verify_access_token,
)

__all__ = [
    "AccessTokenPayload",
    "JWTManager",
    "create_access_token",
    "get_jwt_manager",
    "verify_access_token",
]

"""JWT authentication and role gates.

Two independent checks, composable per route:

- get_current_user: verifies the signed token from the ``Authorization:
  Bearer`` header or the auth cookie and resolves its subject to a User
- require_admin: accepts an authenticated principal only when its role is
  ``admin``
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from fastapi import Depends, Request

from core.errors import AuthenticationError, AuthorizationError
from patterns.domain_config import AuthConfig
from verticals.books.repository import UserRepository, get_user_repository

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Principal:
    """The authenticated caller."""

    id: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


# =============================================================================
# Tokens
# =============================================================================

def create_access_token(
    user_id: str,
    role: str,
    config: AuthConfig,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign an access token for user_id."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=config.access_token_ttl_minutes))
    payload = {
        "sub": str(user_id),
        "role": role,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)


def decode_token(token: str, config: AuthConfig) -> dict[str, Any]:
    """Verify signature and expiry; raise AuthenticationError otherwise."""
    try:
        return jwt.decode(
            token,
            config.jwt_secret,
            algorithms=[config.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")


def extract_token(request: Request, cookie_name: str) -> Optional[str]:
    """Bearer header first, then the auth cookie."""
    auth_header = request.headers.get("Authorization")
    if auth_header:
        scheme, _, credentials = auth_header.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    return request.cookies.get(cookie_name) or None


# =============================================================================
# Dependencies
# =============================================================================

async def get_current_user(
    request: Request,
    users: UserRepository = Depends(get_user_repository),
) -> Principal:
    """Authenticate the request and return its principal."""
    config: AuthConfig = request.app.state.config.auth

    token = extract_token(request, config.cookie_name)
    if not token:
        raise AuthenticationError()

    claims = decode_token(token, config)
    user = await users.get(claims["sub"])
    if user is None:
        raise AuthenticationError()

    principal = Principal(id=str(user.id), email=user.email, role=user.role)
    request.state.principal = principal
    return principal


async def require_admin(
    principal: Principal = Depends(get_current_user),
) -> Principal:
    """Reject authenticated callers that are not admins."""
    if not principal.is_admin:
        raise AuthorizationError()
    return principal

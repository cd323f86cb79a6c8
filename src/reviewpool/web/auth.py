"""Bearer token authorization for the Reviewpool HTTP API.

Two tokens are configured in ``AuthConfig``: the admin token may call
every endpoint, the user token only the read endpoints. The header may
carry ``Bearer <token>`` or the bare token. An empty configured token
never matches.
"""

from __future__ import annotations

import hmac

from fastapi import Request

from reviewpool.config import AuthConfig
from reviewpool.web.errors import UnauthorizedError


def extract_token(authorization: str | None) -> str | None:
    """Return the token carried by an Authorization header value."""
    if authorization is None:
        return None
    value = authorization.strip()
    if not value:
        return None
    scheme, _, rest = value.partition(" ")
    if rest and scheme.lower() == "bearer":
        return rest.strip()
    return value


def token_matches(token: str | None, *allowed: str) -> bool:
    if not token:
        return False
    return any(
        candidate and hmac.compare_digest(token.encode(), candidate.encode())
        for candidate in allowed
    )


def _auth_config(request: Request) -> AuthConfig:
    return request.app.state.config.auth


async def require_admin(request: Request) -> None:
    """Dependency admitting only the admin token.

    Raises:
        UnauthorizedError: If the request carries no admin token.
    """
    auth = _auth_config(request)
    token = extract_token(request.headers.get("Authorization"))
    if not token_matches(token, auth.admin_token):
        raise UnauthorizedError()


async def require_reader(request: Request) -> None:
    """Dependency admitting the admin or the user token.

    Raises:
        UnauthorizedError: If the request carries neither token.
    """
    auth = _auth_config(request)
    token = extract_token(request.headers.get("Authorization"))
    if not token_matches(token, auth.admin_token, auth.user_token):
        raise UnauthorizedError()

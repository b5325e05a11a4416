"""
Admin authentication.

Admin endpoints require an `Authorization: Bearer <token>` header carrying
the configured admin API token.
"""

import secrets
from typing import Annotated

from fastapi import Header, HTTPException, status

from racevault.config import settings

BEARER_PREFIX = "Bearer "


async def require_admin(
    authorization: Annotated[str | None, Header()] = None,
) -> None:
    """
    Dependency that rejects requests without the admin token.

    Raises:
        HTTPException: 401 when no bearer token is sent,
            403 when the token is not the admin token.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization[len(BEARER_PREFIX) :].strip()
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    expected = settings.admin_api_token
    if not expected or not secrets.compare_digest(token.encode(), expected.encode()):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )

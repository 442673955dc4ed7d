"""
Authentication Dependencies
"""
from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from delivery.dependencies import get_jwt_service
from delivery.shared.exceptions import UnauthorizedError
from delivery.shared.logging import bind_request_context, get_logger
from delivery.shared.security.tokens import JWTService, TokenError, TokenKind
from delivery.users.domain.access_policy import Actor
from delivery.users.domain.role import Role

logger = get_logger(__name__)

# auto_error=False so a missing header goes through the shared error contract
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_actor(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
) -> Actor:
    """
    Resolve the caller from a Bearer access token.

    Raises:
        UnauthorizedError: header missing, token invalid/expired, or not an access token
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing bearer token.")

    try:
        claims = jwt_service.decode(credentials.credentials, expected_kind=TokenKind.ACCESS)
        actor = Actor(username=claims["username"], role=Role(claims["role"]))
    except (TokenError, KeyError, ValueError) as e:
        logger.info("Bearer token rejected", error=str(e), path=request.url.path)
        raise UnauthorizedError("Invalid or expired access token.")

    bind_request_context(username=actor.username)
    return actor


CurrentActor = Annotated[Actor, Depends(get_current_actor)]

"""
JWT Service - Token Generation and Verification
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from enum import StrEnum
from typing import Any, Dict

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from delivery.shared.logging import get_logger

logger = get_logger(__name__)


class TokenKind(StrEnum):
    ACCESS = "access"
    REFRESH = "refresh"


class TokenError(Exception):
    """Raised when a token cannot be decoded, has expired, or is of the wrong kind."""


class JWTService:
    """
    Signs and verifies session tokens (HS256, shared secret).

    Every token carries `sub`/`username`, `email`, `role`, `category`
    (access|refresh), `iat`, `exp` and a unique `jti`, so two tokens issued
    within the same second still differ.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256") -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm

    def issue(
        self,
        kind: TokenKind,
        username: str,
        email: str,
        role: str,
        ttl: timedelta,
    ) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": username,
            "username": username,
            "email": email,
            "role": str(role),
            "category": str(kind),
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": now + ttl,
        }
        token = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        logger.debug("Issued token", kind=str(kind), username=username)
        return token

    def decode(self, token: str, expected_kind: TokenKind | None = None) -> Dict[str, Any]:
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except ExpiredSignatureError as e:
            logger.info("Token expired")
            raise TokenError("Token expired") from e
        except InvalidTokenError as e:
            logger.info("Invalid token", error=str(e))
            raise TokenError("Invalid token") from e

        if expected_kind is not None and claims.get("category") != str(expected_kind):
            raise TokenError("Invalid token type")
        return claims

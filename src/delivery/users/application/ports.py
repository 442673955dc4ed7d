"""
Collaborators consumed by the account service, described by behaviour only.
"""
from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict, Optional, Protocol

from delivery.shared.security.tokens import TokenKind


class PasswordHasher(Protocol):
    @property
    def dummy_hash(self) -> str:
        ...

    def hash(self, plain_password: str) -> str:
        ...

    def verify(self, plain_password: str, hashed: str) -> bool:
        ...


class TokenIssuer(Protocol):
    def issue(self, kind: TokenKind, username: str, email: str, role: str, ttl: timedelta) -> str:
        ...

    def decode(self, token: str, expected_kind: Optional[TokenKind] = None) -> Dict[str, Any]:
        """Raises delivery.shared.security.tokens.TokenError on any failure."""
        ...

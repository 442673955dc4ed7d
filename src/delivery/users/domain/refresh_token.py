"""
RefreshToken Entity - persisted record of an issued refresh token
"""
from __future__ import annotations

import hashlib
from datetime import datetime
from typing import Optional
from uuid import UUID

from delivery.shared.domain.base_entity import BaseEntity, utcnow


def hash_token(token: str) -> str:
    """Tokens are stored as SHA-256 digests, never in plain form."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class RefreshToken(BaseEntity):
    """
    Attributes:
        account_id: Owning account
        token_hash: SHA-256 of the signed refresh token
        expires_at: Expiration timestamp (UTC)
        revoked_at: Revocation timestamp, if revoked
    """

    def __init__(
        self,
        account_id: UUID,
        token_hash: str,
        expires_at: datetime,
        revoked_at: Optional[datetime] = None,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ) -> None:
        super().__init__(id, created_at, updated_at)
        self.account_id = account_id
        self.token_hash = token_hash
        self.expires_at = expires_at
        self.revoked_at = revoked_at

    @classmethod
    def for_token(cls, account_id: UUID, token: str, expires_at: datetime) -> RefreshToken:
        return cls(account_id=account_id, token_hash=hash_token(token), expires_at=expires_at)

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utcnow()) >= self.expires_at

    def is_usable(self, now: Optional[datetime] = None) -> bool:
        return not self.is_revoked and not self.is_expired(now)

    def revoke(self, at: Optional[datetime] = None) -> None:
        if self.revoked_at is None:
            self.revoked_at = at or utcnow()
            self.mark_updated()

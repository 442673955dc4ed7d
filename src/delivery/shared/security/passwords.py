"""
Password Service - Hashing and Verification
"""
from __future__ import annotations

import secrets
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from delivery.shared.logging import get_logger

logger = get_logger(__name__)


class Argon2PasswordHasher:
    """
    Password hashing service using Argon2id.

    `hash` returns the encoded argon2 string (parameters + salt + digest);
    it is the only form in which a password is ever stored.
    """

    def __init__(
        self,
        time_cost: int = 2,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ) -> None:
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,  # KiB
            parallelism=parallelism,
            hash_len=32,
            salt_len=16,
        )
        self._dummy_hash: Optional[str] = None

    def hash(self, plain_password: str) -> str:
        return self._hasher.hash(plain_password)

    @property
    def dummy_hash(self) -> str:
        """Hash of a random secret, verified against when no account matches a username."""
        if self._dummy_hash is None:
            self._dummy_hash = self._hasher.hash(secrets.token_urlsafe(16))
        return self._dummy_hash

    def verify(self, plain_password: str, hashed: str) -> bool:
        try:
            return self._hasher.verify(hashed, plain_password)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError) as e:
            logger.warning("Password verification failed on a malformed hash", error=str(e))
            return False

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from delivery.users.domain.account import Account
from delivery.users.domain.role import Role


@dataclass(frozen=True)
class AccountView:
    """Public representation of an account. Never carries the password hash."""

    id: UUID
    username: str
    email: str
    nickname: str
    role: Role
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> AccountView:
        return cls(
            id=account.id,
            username=account.username,
            email=account.email,
            nickname=account.nickname,
            role=account.role,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"


@dataclass(frozen=True)
class UpdateProfileRequest:
    """Fields left as None keep their stored values."""

    current_password: str
    new_password: Optional[str] = None
    email: Optional[str] = None
    nickname: Optional[str] = None

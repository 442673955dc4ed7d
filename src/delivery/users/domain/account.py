"""
Account aggregate.

An account is never hard-deleted. Its lifecycle state is an explicit status
value, either `Active` or `Deleted(at, by)`, so callers never inspect a
nullable timestamp to decide whether an account is visible.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union
from uuid import UUID

from delivery.shared.domain.base_entity import BaseEntity, utcnow
from delivery.users.domain.role import Role


@dataclass(frozen=True)
class Active:
    pass


@dataclass(frozen=True)
class Deleted:
    at: datetime
    by: str


AccountStatus = Union[Active, Deleted]

ACTIVE = Active()


class Account(BaseEntity):
    """
    A platform user.

    Attributes:
        username: Unique across all accounts (deleted ones included), immutable
        email: Contact e-mail
        nickname: Display name
        password_hash: Encoded argon2 hash, never exposed outside the service
        role: Trust level
        status: Active or Deleted(at, by)
    """

    def __init__(
        self,
        username: str,
        email: str,
        nickname: str,
        password_hash: str,
        role: Role = Role.CUSTOMER,
        status: AccountStatus = ACTIVE,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ) -> None:
        super().__init__(id, created_at, updated_at)
        self._username = username
        self.email = email
        self.nickname = nickname
        self.password_hash = password_hash
        self.role = role
        self.status = status

    @classmethod
    def register(cls, username: str, email: str, nickname: str, password_hash: str) -> Account:
        """New accounts always start as active customers."""
        return cls(
            username=username,
            email=email,
            nickname=nickname,
            password_hash=password_hash,
            role=Role.CUSTOMER,
        )

    @property
    def username(self) -> str:
        return self._username

    @property
    def is_active(self) -> bool:
        return isinstance(self.status, Active)

    @property
    def deleted_at(self) -> Optional[datetime]:
        return self.status.at if isinstance(self.status, Deleted) else None

    @property
    def deleted_by(self) -> Optional[str]:
        return self.status.by if isinstance(self.status, Deleted) else None

    def update_profile(
        self,
        *,
        email: Optional[str] = None,
        nickname: Optional[str] = None,
        password_hash: Optional[str] = None,
    ) -> None:
        """Apply the supplied fields; anything left as None keeps its stored value."""
        if email is not None:
            self.email = email
        if nickname is not None:
            self.nickname = nickname
        if password_hash is not None:
            self.password_hash = password_hash
        self.mark_updated()

    def change_role(self, role: Role) -> None:
        self.role = role
        self.mark_updated()

    def soft_delete(self, by: str, at: Optional[datetime] = None) -> None:
        if not self.is_active:
            raise ValueError(f"Account {self.id} is already deleted")
        self.status = Deleted(at=at or utcnow(), by=by)
        self.mark_updated()

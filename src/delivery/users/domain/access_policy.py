"""
Access policy for account and catalog operations.

Pure and stateless: the decision depends only on (actor, target owner,
operation), so the same inputs always produce the same decision.

| Operation        | Allowed when                                           |
|------------------|--------------------------------------------------------|
| UPDATE_PROFILE   | actor owns the target, or actor is MASTER              |
| UPDATE_ROLE      | actor is MASTER                                        |
| DELETE_ACCOUNT   | actor owns the target, or actor is MASTER or MANAGER   |
| MANAGE_CATALOG   | actor is MANAGER or MASTER                             |
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from delivery.shared.exceptions import ForbiddenError
from delivery.users.domain.role import Role

ACCESS_DENIED = "Access denied."


@dataclass(frozen=True)
class Actor:
    """The authenticated caller, passed explicitly into every sensitive operation."""

    username: str
    role: Role


class AccessOperation(StrEnum):
    UPDATE_PROFILE = "update_profile"
    UPDATE_ROLE = "update_role"
    DELETE_ACCOUNT = "delete_account"
    MANAGE_CATALOG = "manage_catalog"


class Decision(StrEnum):
    ALLOW = "allow"
    DENY = "deny"


Rule = Callable[[Actor, Optional[str]], bool]


def _is_owner(actor: Actor, target_username: Optional[str]) -> bool:
    return target_username is not None and actor.username == target_username


def _can_update_profile(actor: Actor, target_username: Optional[str]) -> bool:
    return _is_owner(actor, target_username) or actor.role is Role.MASTER


def _can_update_role(actor: Actor, target_username: Optional[str]) -> bool:
    return actor.role is Role.MASTER


def _can_delete_account(actor: Actor, target_username: Optional[str]) -> bool:
    return _is_owner(actor, target_username) or actor.role in (Role.MASTER, Role.MANAGER)


def _can_manage_catalog(actor: Actor, target_username: Optional[str]) -> bool:
    return actor.role in (Role.MANAGER, Role.MASTER)


RULES: Mapping[AccessOperation, Rule] = MappingProxyType({
    AccessOperation.UPDATE_PROFILE: _can_update_profile,
    AccessOperation.UPDATE_ROLE: _can_update_role,
    AccessOperation.DELETE_ACCOUNT: _can_delete_account,
    AccessOperation.MANAGE_CATALOG: _can_manage_catalog,
})

_missing = set(AccessOperation) - set(RULES)
if _missing:
    raise RuntimeError(f"No access rule for operations: {sorted(_missing)}")


def evaluate(actor: Actor, target_username: Optional[str], operation: AccessOperation) -> Decision:
    return Decision.ALLOW if RULES[operation](actor, target_username) else Decision.DENY


def is_allowed(actor: Actor, target_username: Optional[str], operation: AccessOperation) -> bool:
    return evaluate(actor, target_username, operation) is Decision.ALLOW


def require(actor: Actor, target_username: Optional[str], operation: AccessOperation) -> None:
    """Raise ForbiddenError("Access denied.") unless the operation is allowed."""
    if not is_allowed(actor, target_username, operation):
        raise ForbiddenError(
            ACCESS_DENIED,
            details={"operation": operation.value},
        )

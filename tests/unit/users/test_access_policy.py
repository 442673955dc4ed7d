import pytest

from delivery.shared.exceptions import ForbiddenError
from delivery.users.domain import access_policy
from delivery.users.domain.access_policy import RULES, AccessOperation, Actor, Decision
from delivery.users.domain.role import Role

OWNER = "alice"
OTHER = "bob"

CASES = [
    # operation, actor role, actor is owner, expected
    (AccessOperation.UPDATE_PROFILE, Role.CUSTOMER, True, Decision.ALLOW),
    (AccessOperation.UPDATE_PROFILE, Role.CUSTOMER, False, Decision.DENY),
    (AccessOperation.UPDATE_PROFILE, Role.MANAGER, False, Decision.DENY),
    (AccessOperation.UPDATE_PROFILE, Role.MASTER, False, Decision.ALLOW),
    (AccessOperation.UPDATE_ROLE, Role.CUSTOMER, True, Decision.DENY),
    (AccessOperation.UPDATE_ROLE, Role.MANAGER, False, Decision.DENY),
    (AccessOperation.UPDATE_ROLE, Role.MASTER, False, Decision.ALLOW),
    (AccessOperation.DELETE_ACCOUNT, Role.CUSTOMER, True, Decision.ALLOW),
    (AccessOperation.DELETE_ACCOUNT, Role.CUSTOMER, False, Decision.DENY),
    (AccessOperation.DELETE_ACCOUNT, Role.MANAGER, False, Decision.ALLOW),
    (AccessOperation.DELETE_ACCOUNT, Role.MASTER, False, Decision.ALLOW),
    (AccessOperation.MANAGE_CATALOG, Role.CUSTOMER, False, Decision.DENY),
    (AccessOperation.MANAGE_CATALOG, Role.MANAGER, False, Decision.ALLOW),
    (AccessOperation.MANAGE_CATALOG, Role.MASTER, False, Decision.ALLOW),
]


@pytest.mark.parametrize("operation, role, is_owner, expected", CASES)
def test_decision_table(operation, role, is_owner, expected):
    actor = Actor(username=OWNER if is_owner else OTHER, role=role)
    assert access_policy.evaluate(actor, OWNER, operation) is expected


def test_every_operation_has_a_rule():
    assert set(RULES) == set(AccessOperation)


def test_same_inputs_same_decision():
    actor = Actor(username=OTHER, role=Role.MANAGER)
    decisions = {access_policy.evaluate(actor, OWNER, AccessOperation.DELETE_ACCOUNT) for _ in range(5)}
    assert decisions == {Decision.ALLOW}


def test_no_target_is_never_ownership():
    actor = Actor(username=OWNER, role=Role.CUSTOMER)
    assert not access_policy.is_allowed(actor, None, AccessOperation.UPDATE_PROFILE)


def test_require_raises_forbidden_with_operation():
    with pytest.raises(ForbiddenError) as exc:
        access_policy.require(Actor(OTHER, Role.CUSTOMER), OWNER, AccessOperation.UPDATE_ROLE)
    assert exc.value.message == "Access denied."
    assert exc.value.details == {"operation": "update_role"}


def test_role_ordering():
    assert Role.MASTER.is_at_least(Role.MANAGER)
    assert Role.MANAGER.is_at_least(Role.CUSTOMER)
    assert not Role.CUSTOMER.is_at_least(Role.MANAGER)

"""Account role value object."""

from enum import StrEnum
from typing import Self


class Role(StrEnum):
    """Trust levels, lowest first: CUSTOMER < MANAGER < MASTER."""

    CUSTOMER = "CUSTOMER"
    MANAGER = "MANAGER"
    MASTER = "MASTER"

    @property
    def level(self) -> int:
        return _LEVELS[self]

    def is_at_least(self, required: Self) -> bool:
        return self.level >= required.level


_LEVELS = {Role.CUSTOMER: 0, Role.MANAGER: 1, Role.MASTER: 2}

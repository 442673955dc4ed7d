"""Domain-level exceptions for accounts."""


class DuplicateUsernameError(Exception):
    """Raised by account stores when an insert hits the username unique constraint."""

    def __init__(self, username: str) -> None:
        super().__init__(username)
        self.username = username

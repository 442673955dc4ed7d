"""Domain-level exceptions for the store catalog."""


class DuplicateProductError(Exception):
    """Raised by product stores when an insert hits the active (store, name) unique index."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

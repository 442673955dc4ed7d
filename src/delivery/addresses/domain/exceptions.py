"""Domain-level exceptions for delivery addresses."""


class DuplicateAddressError(Exception):
    """Raised by address stores when an insert hits the per-account address unique constraint."""

    def __init__(self, delivery_address: str) -> None:
        super().__init__(delivery_address)
        self.delivery_address = delivery_address

"""Error kinds raised by the inventory tracker.

None of these is fatal to a session: the dashboard turns them into inline
form errors or notifications.
"""

from typing import Dict, Optional


class InventoryError(Exception):
    """Base class for inventory tracker errors."""


class ValidationError(InventoryError):
    """A candidate item failed form validation."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Invalid item fields: {fields}")


class NotFoundError(InventoryError):
    """No item in the collection has the requested id."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Item {item_id} not found")


class PersistenceError(InventoryError):
    """Reading or writing the local store failed."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class ParseError(InventoryError):
    """Stored data could not be decoded into inventory items."""

from __future__ import annotations


class LibraryError(Exception):
    """Base class for recoverable catalog failures."""


class ItemNotFound(LibraryError):
    def __init__(self, item_id: int) -> None:
        self.item_id = item_id
        super().__init__(f"Item with ID {item_id} not found")


class InvalidDate(LibraryError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__("Invalid date format. Please use YYYY-MM-DD")


class NotAvailable(LibraryError):
    def __init__(self, item_id: int) -> None:
        self.item_id = item_id
        super().__init__("Item is not available for borrowing")


class NotBorrowed(LibraryError):
    def __init__(self, item_id: int) -> None:
        self.item_id = item_id
        super().__init__("Item was not borrowed")


class WrongItemKind(LibraryError):
    """Raised when a kind-specific operation targets an item of another kind."""

    def __init__(self, item_id: int, expected: str, actual: str) -> None:
        self.item_id = item_id
        self.expected = expected
        self.actual = actual
        super().__init__(f"Item with ID {item_id} is not a {expected} (it is a {actual})")

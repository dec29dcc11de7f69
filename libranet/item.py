from __future__ import annotations

from datetime import date, timedelta
from enum import Enum

from libranet.errors import NotAvailable, NotBorrowed
from libranet.validators import DateValidator, NumberValidator

DEFAULT_FINE_RATE = 10.0
DEFAULT_BORROW_PERIOD_DAYS = 14


class ItemKind(str, Enum):
    """Closed set of catalog item variants."""

    BOOK = "book"
    AUDIOBOOK = "audiobook"
    EMAGAZINE = "emagazine"

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]


_KIND_LABELS = {
    ItemKind.BOOK: "Book",
    ItemKind.AUDIOBOOK: "Audiobook",
    ItemKind.EMAGAZINE: "E-Magazine",
}


class LibraryItem:
    """A single catalog entry and its borrow/return state.

    ``due_date`` is set exactly while the item is borrowed. Failed transitions
    leave the item untouched.
    """

    kind: ItemKind

    def __init__(self, id: int, title: str, author: str) -> None:
        self._id = id
        self.title = title.strip()
        self.author = author.strip()
        self.available = True
        self.due_date: date | None = None

    @property
    def id(self) -> int:
        return self._id

    # ------------------------- Transitions ------------------------- #
    def borrow(self, borrow_date: str, *, borrow_days: int = DEFAULT_BORROW_PERIOD_DAYS) -> date:
        """Mark the item borrowed on ``borrow_date`` and return the due date."""
        if not self.available:
            raise NotAvailable(self.id)
        start = DateValidator.parse_date(borrow_date)
        self.due_date = start + timedelta(days=borrow_days)
        self.available = False
        return self.due_date

    def return_item(self, return_date: str, *, fine_rate: float = DEFAULT_FINE_RATE) -> float:
        """Mark the item available again and return the overdue fine (0.0 if on time)."""
        if self.available:
            raise NotBorrowed(self.id)
        returned_on = DateValidator.parse_date(return_date)
        due = self.due_date
        self.available = True
        self.due_date = None
        if due is not None and returned_on > due:
            return (returned_on - due).days * fine_rate
        return 0.0

    def is_overdue(self, as_of: date) -> bool:
        return not self.available and self.due_date is not None and as_of > self.due_date

    # ------------------------- Views ------------------------- #
    def describe(self) -> str:
        return (
            f"ID: {self.id}, Title: {self.title}, Author: {self.author}, "
            f"Available: {'Yes' if self.available else 'No'}, Type: {self.kind.label}"
            f"{self._describe_details()}"
        )

    def _describe_details(self) -> str:
        return ""

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return self.describe()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, title={self.title!r})"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "title": self.title,
            "author": self.author,
            "available": self.available,
            "due_date": self.due_date.isoformat() if self.due_date else None,
        }


class Book(LibraryItem):
    kind = ItemKind.BOOK

    def __init__(self, id: int, title: str, author: str, page_count: int) -> None:
        super().__init__(id, title, author)
        self.page_count = NumberValidator.require_positive_int("page_count", page_count)

    def _describe_details(self) -> str:
        return f", Pages: {self.page_count}"

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["page_count"] = self.page_count
        return data


class Audiobook(LibraryItem):
    kind = ItemKind.AUDIOBOOK

    def __init__(self, id: int, title: str, author: str, duration_hours: float) -> None:
        super().__init__(id, title, author)
        self.duration_hours = NumberValidator.require_positive_number("duration_hours", duration_hours)

    def play(self) -> str:
        """Return the playback notification; playing does not change state."""
        return f"Playing audiobook: {self.title}"

    def _describe_details(self) -> str:
        return f", Duration: {self.duration_hours:.2f} hours"

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["duration_hours"] = self.duration_hours
        return data


class EMagazine(LibraryItem):
    kind = ItemKind.EMAGAZINE

    def __init__(self, id: int, title: str, author: str, issue_number: int) -> None:
        super().__init__(id, title, author)
        self.issue_number = NumberValidator.require_positive_int("issue_number", issue_number)
        self.archived = False

    def archive(self) -> bool:
        """Archive the issue. Returns False if it was already archived."""
        if self.archived:
            return False
        self.archived = True
        return True

    def archive_notice(self) -> str:
        return f"Issue #{self.issue_number} of {self.title} has been archived."

    def _describe_details(self) -> str:
        return f", Issue: {self.issue_number}, Archived: {'Yes' if self.archived else 'No'}"

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["issue_number"] = self.issue_number
        data["archived"] = self.archived
        return data


_VARIANTS = {
    ItemKind.BOOK: (Book, "page_count"),
    ItemKind.AUDIOBOOK: (Audiobook, "duration_hours"),
    ItemKind.EMAGAZINE: (EMagazine, "issue_number"),
}


def item_from_dict(data: dict) -> LibraryItem:
    """Build the variant named by ``data["kind"]``.

    Only construction fields are read; borrow state always starts fresh.
    """
    try:
        kind = ItemKind(data["kind"])
    except (KeyError, ValueError) as e:
        raise ValueError(f"Unknown item kind: {data.get('kind')!r}") from e
    cls, extra_field = _VARIANTS[kind]
    return cls(
        id=data["id"],
        title=data["title"],
        author=data["author"],
        **{extra_field: data[extra_field]},
    )

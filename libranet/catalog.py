import logging
from datetime import date
from typing import Any, Callable, Dict, Iterator, List, Optional, Union, cast

from libranet.errors import ItemNotFound, WrongItemKind
from libranet.item import (
    DEFAULT_BORROW_PERIOD_DAYS,
    DEFAULT_FINE_RATE,
    Audiobook,
    Book,
    EMagazine,
    ItemKind,
    LibraryItem,
)
from libranet.validators import DateValidator

logger = logging.getLogger(__name__)


class Catalog:
    """Owns the catalog items and the fines ledger.

    Every listing is returned in ascending id order.
    """

    def __init__(self, fine_rate: float = DEFAULT_FINE_RATE, borrow_days: int = DEFAULT_BORROW_PERIOD_DAYS) -> None:
        self.fine_rate = fine_rate
        self.borrow_days = borrow_days
        self.items: Dict[int, LibraryItem] = {}
        self.fines: Dict[int, float] = {}

    # ------------------------- Core operations ------------------------- #
    def add_item(self, item: LibraryItem) -> None:
        """Insert an item by id, replacing any existing entry with the same id."""
        if item.id in self.items:
            logger.debug(f"Replacing item {item.id} in catalog")
        self.items[item.id] = item
        logger.debug(f"Item added: id={item.id}, kind={item.kind.value}, title={item.title!r}")

    def get_item(self, item_id: int) -> Optional[LibraryItem]:
        return self.items.get(item_id)

    def borrow_item(self, item_id: int, borrow_date: str) -> LibraryItem:
        item = self._require(item_id)
        due = item.borrow(borrow_date, borrow_days=self.borrow_days)
        logger.info(f"Item {item_id} borrowed, due {due.isoformat()}")
        return item

    def return_item(self, item_id: int, return_date: str) -> float:
        """Return a borrowed item and record any overdue fine in the ledger."""
        item = self._require(item_id)
        fine = item.return_item(return_date, fine_rate=self.fine_rate)
        if fine > 0:
            self.fines[item_id] = self.fines.get(item_id, 0.0) + fine
            logger.info(f"Item {item_id} returned late, fine {fine:.2f}")
        else:
            logger.info(f"Item {item_id} returned on time")
        return fine

    # ------------------------- Listings & search ------------------------- #
    def list_items(self) -> List[LibraryItem]:
        return list(self._iter_items())

    def search_by_title(self, query: str) -> List[LibraryItem]:
        needle = query.lower()
        return self._filter(lambda item: needle in item.title.lower())

    def search_by_author(self, query: str) -> List[LibraryItem]:
        needle = query.lower()
        return self._filter(lambda item: needle in item.author.lower())

    def search_by_type(self, kind: Union[ItemKind, str]) -> List[LibraryItem]:
        wanted = ItemKind(kind)
        return self._filter(lambda item: item.kind is wanted)

    def get_available_items(self) -> List[LibraryItem]:
        return self._filter(lambda item: item.available)

    def get_borrowed_items(self) -> List[LibraryItem]:
        return self._filter(lambda item: not item.available)

    def get_overdue_items(self, as_of: str) -> List[LibraryItem]:
        """Borrowed items whose due date falls before ``as_of`` (YYYY-MM-DD)."""
        day: date = DateValidator.parse_date(as_of)
        return self._filter(lambda item: item.is_overdue(day))

    # ------------------------- Fines ------------------------- #
    def get_total_fines(self) -> float:
        return sum(self.fines.values(), 0.0)

    def get_fines_for_item(self, item_id: int) -> float:
        return self.fines.get(item_id, 0.0)

    def get_statistics(self) -> Dict[str, Any]:
        items = self.list_items()
        by_kind = {kind.value: 0 for kind in ItemKind}
        for item in items:
            by_kind[item.kind.value] += 1
        borrowed = sum(1 for item in items if not item.available)
        return {
            "total_items": len(items),
            "available_items": len(items) - borrowed,
            "borrowed_items": borrowed,
            "items_by_kind": by_kind,
            "total_fines": self.get_total_fines(),
        }

    # ------------------------- Kind-specific operations ------------------------- #
    def get_page_count(self, item_id: int) -> int:
        book = cast(Book, self._require_kind(item_id, ItemKind.BOOK))
        return book.page_count

    def play(self, item_id: int) -> str:
        """Return the playback notification for an audiobook."""
        audiobook = cast(Audiobook, self._require_kind(item_id, ItemKind.AUDIOBOOK))
        return audiobook.play()

    def archive_issue(self, item_id: int) -> bool:
        """Archive an e-magazine issue. False means it was already archived."""
        magazine = cast(EMagazine, self._require_kind(item_id, ItemKind.EMAGAZINE))
        changed = magazine.archive()
        if changed:
            logger.info(f"E-magazine {item_id} issue #{magazine.issue_number} archived")
        return changed

    # ------------------------- Utilities ------------------------- #
    def _require(self, item_id: int) -> LibraryItem:
        item = self.items.get(item_id)
        if item is None:
            raise ItemNotFound(item_id)
        return item

    def _require_kind(self, item_id: int, kind: ItemKind) -> LibraryItem:
        item = self._require(item_id)
        if item.kind is not kind:
            raise WrongItemKind(item_id, kind.label, item.kind.label)
        return item

    def _iter_items(self) -> Iterator[LibraryItem]:
        for item_id in sorted(self.items):
            yield self.items[item_id]

    def _filter(self, predicate: Callable[[LibraryItem], bool]) -> List[LibraryItem]:
        return [item for item in self._iter_items() if predicate(item)]

    def __len__(self) -> int:
        return len(self.items)

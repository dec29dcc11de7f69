"""Items the catalog is pre-populated with at start-up."""

from typing import List

from libranet.catalog import Catalog
from libranet.item import LibraryItem, item_from_dict

SAMPLE_ITEMS = [
    {"id": 1, "kind": "book", "title": "The Great Gatsby", "author": "F. Scott Fitzgerald", "page_count": 180},
    {"id": 2, "kind": "book", "title": "To Kill a Mockingbird", "author": "Harper Lee", "page_count": 281},
    {"id": 3, "kind": "audiobook", "title": "The Alchemist", "author": "Paulo Coelho", "duration_hours": 4.5},
    {"id": 4, "kind": "audiobook", "title": "Atomic Habits", "author": "James Clear", "duration_hours": 5.2},
    {"id": 5, "kind": "emagazine", "title": "National Geographic", "author": "Various Authors", "issue_number": 256},
    {"id": 6, "kind": "emagazine", "title": "Scientific American", "author": "Various Authors", "issue_number": 312},
]


def sample_items() -> List[LibraryItem]:
    return [item_from_dict(data) for data in SAMPLE_ITEMS]


def populate(catalog: Catalog) -> Catalog:
    for item in sample_items():
        catalog.add_item(item)
    return catalog

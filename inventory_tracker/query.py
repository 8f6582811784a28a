"""
Search and sort over an inventory snapshot.

Everything here is a pure function of its inputs: queries never touch the
repository or local storage.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional

from .models.inventory_item import InventoryItem

SEARCH_FIELDS = ("item_name", "sku", "category")

ASCENDING = "asc"
DESCENDING = "desc"

def _text_key(field: str) -> Callable[[InventoryItem], str]:
    return lambda item: (getattr(item, field) or "").lower()

SORT_KEYS: Dict[str, Callable[[InventoryItem], Any]] = {
    "item_name": _text_key("item_name"),
    "sku": _text_key("sku"),
    "category": _text_key("category"),
    "quantity_counted": lambda item: item.quantity_counted,
    "last_count_date": lambda item: item.last_count_date,
}

def matches_search(item: InventoryItem, search_term: str) -> bool:
    """Case-insensitive substring match against name, SKU or category."""
    term = search_term.lower()
    if not term:
        return True
    return any(term in (getattr(item, field) or "").lower() for field in SEARCH_FIELDS)

def filter_items(items: Iterable[InventoryItem], search_term: Optional[str]) -> List[InventoryItem]:
    return [item for item in items if matches_search(item, search_term or "")]

def sort_items(items: Iterable[InventoryItem], field: str, direction: str = ASCENDING) -> List[InventoryItem]:
    """
    Stable sort on a single field.

    Items with equal keys keep their input order in both directions.

    Raises:
        ValueError: for an unknown field or direction.
    """
    if field not in SORT_KEYS:
        raise ValueError(f"Cannot sort by {field!r}; choose one of {', '.join(SORT_KEYS)}")
    if direction not in (ASCENDING, DESCENDING):
        raise ValueError(f"Sort direction must be '{ASCENDING}' or '{DESCENDING}'")
    # sorted() keeps ties in input order even with reverse=True
    return sorted(items, key=SORT_KEYS[field], reverse=direction == DESCENDING)

def query_items(items: Iterable[InventoryItem], search_term: Optional[str] = "",
                sort_field: str = "item_name", direction: str = ASCENDING) -> List[InventoryItem]:
    """Filter then sort a snapshot into the view the table shows."""
    return sort_items(filter_items(items, search_term), sort_field, direction)


class SortState:
    """Active sort column of the table and its direction."""

    def __init__(self, field: str = "item_name", direction: str = ASCENDING):
        if field not in SORT_KEYS:
            raise ValueError(f"Cannot sort by {field!r}")
        if direction not in (ASCENDING, DESCENDING):
            raise ValueError(f"Sort direction must be '{ASCENDING}' or '{DESCENDING}'")
        self.field = field
        self.direction = direction

    def toggle(self, field: str) -> None:
        """Select a column: the same column flips direction, a new one starts ascending."""
        if field not in SORT_KEYS:
            raise ValueError(f"Cannot sort by {field!r}; choose one of {', '.join(SORT_KEYS)}")
        if field == self.field:
            self.direction = DESCENDING if self.direction == ASCENDING else ASCENDING
        else:
            self.field = field
            self.direction = ASCENDING

    def apply(self, items: Iterable[InventoryItem], search_term: Optional[str] = "") -> List[InventoryItem]:
        return query_items(items, search_term, self.field, self.direction)

    def __repr__(self):
        return f"<SortState(field='{self.field}', direction='{self.direction}')>"

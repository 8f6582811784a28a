import logging
import json
import uuid
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import NotFoundError, ParseError, PersistenceError
from ..models.inventory_item import InventoryItem, ItemFields
from ..utils.config import STORAGE_KEY
from .local_storage import LocalStorage
from .sample_data import sample_items

logger = logging.getLogger(__name__)

def serialize_items(items: List[InventoryItem]) -> str:
    """Serialize a collection to the JSON array kept in local storage."""
    return json.dumps([item.to_dict() for item in items])

def deserialize_items(text: str) -> List[InventoryItem]:
    """
    Decode a stored JSON array into inventory items.

    Raises:
        ParseError: if the text is not a JSON array of valid items.
    """
    try:
        data = json.loads(text)
    except (TypeError, json.JSONDecodeError) as e:
        raise ParseError(f"Stored inventory is not valid JSON: {str(e)}") from e

    if not isinstance(data, list):
        raise ParseError(f"Stored inventory must be a JSON array, got {type(data).__name__}")

    items = []
    seen_ids = set()
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ParseError(f"Entry {index} is not an object")
        try:
            item = InventoryItem.from_dict(entry)
        except PydanticValidationError as e:
            raise ParseError(f"Entry {index} is not a valid inventory item: {str(e)}") from e

        if item.id in seen_ids:
            logger.warning(f"Dropping entry {index}: duplicate id {item.id}")
            continue
        seen_ids.add(item.id)
        items.append(item)
    return items


class ItemRepository:
    """
    Owns the in-memory inventory collection and is the only writer to local storage.

    Every mutation re-serializes the whole collection. If the write fails the
    mutation is kept in memory and PersistenceError propagates to the caller.
    """

    def __init__(self, storage: LocalStorage, key: Optional[str] = None):
        self.storage = storage
        self.key = key or STORAGE_KEY
        self._items: List[InventoryItem] = []

    def load(self) -> None:
        """
        Read the collection from storage, seeding demonstration data if absent or unreadable.

        Raises:
            PersistenceError: if the store itself cannot be read. The
                demonstration data is loaded first so the session can go on.
        """
        try:
            stored = self.storage.get_item(self.key)
        except PersistenceError:
            logger.error("Could not read local storage, loading demonstration data")
            self._items = sample_items()
            raise

        if stored is None:
            logger.info("No stored inventory found, loading demonstration data")
            self._items = sample_items()
            return

        try:
            self._items = deserialize_items(stored)
            logger.info(f"Loaded {len(self._items)} inventory items")
        except ParseError as e:
            logger.warning(f"Could not parse stored inventory, loading demonstration data: {str(e)}")
            self._items = sample_items()

    def list(self) -> List[InventoryItem]:
        """Return a snapshot of the collection."""
        return [item.model_copy() for item in self._items]

    def get(self, item_id: str) -> InventoryItem:
        """
        Get a single item by id.

        Raises:
            NotFoundError: if no item has that id.
        """
        return self._items[self._index_of(item_id)].model_copy()

    def add(self, candidate: ItemFields) -> InventoryItem:
        """
        Store a new item at the front of the collection.

        The candidate is assumed to be validated already.

        Returns:
            The stored item with its newly assigned id.
        """
        item = InventoryItem.from_fields(candidate, item_id=self._new_id())
        self._items.insert(0, item)
        logger.info(f"Added item {item.id} ({item.item_name})")
        self._persist()
        return item.model_copy()

    def update(self, item_id: str, candidate: ItemFields) -> InventoryItem:
        """
        Replace every field of an item except its id.

        Raises:
            NotFoundError: if no item has that id.
        """
        index = self._index_of(item_id)
        item = InventoryItem.from_fields(candidate, item_id=item_id)
        self._items[index] = item
        logger.info(f"Updated item {item_id} ({item.item_name})")
        self._persist()
        return item.model_copy()

    def remove(self, item_id: str) -> None:
        """Delete an item; removing an unknown id does nothing."""
        remaining = [item for item in self._items if item.id != item_id]
        if len(remaining) == len(self._items):
            logger.debug(f"Remove ignored, item {item_id} not present")
            return
        self._items = remaining
        logger.info(f"Removed item {item_id}")
        self._persist()

    def low_stock(self) -> List[InventoryItem]:
        """Items at or below their reorder level, in collection order."""
        return [item.model_copy() for item in self._items if item.is_low_stock]

    def total_quantity(self) -> int:
        return sum(item.quantity_counted for item in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def _index_of(self, item_id: str) -> int:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        raise NotFoundError(item_id)

    def _new_id(self) -> str:
        existing = {item.id for item in self._items}
        while True:
            item_id = str(uuid.uuid4())
            if item_id not in existing:
                return item_id

    def _persist(self) -> None:
        self.storage.set_item(self.key, serialize_items(self._items))

import os
import sys
import shutil
import tempfile
from datetime import date

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from inventory_tracker.db.local_storage import LocalStorage
from inventory_tracker.db.repository import ItemRepository
from inventory_tracker.models.inventory_item import InventoryItem, ItemFields

TEST_STORAGE_KEY = "warehouse-inventory"

def make_fields(**overrides):
    """Build a valid ItemFields, overriding any attribute."""
    data = {
        "sku": "SKU900",
        "item_name": "Test Item",
        "quantity_counted": 10,
        "unit_of_measure": "pcs",
        "location_in_warehouse": "Aisle 9",
        "category": "Tools",
        "last_count_date": date(2024, 3, 1),
        "reorder_level": 2,
    }
    data.update(overrides)
    return ItemFields(**data)

def make_item(item_id, **overrides):
    return InventoryItem.from_fields(make_fields(**overrides), item_id=item_id)

class TempStorage:
    """A LocalStorage in a throwaway directory; use as a context manager or call cleanup()."""

    def __init__(self):
        self.directory = tempfile.mkdtemp(prefix="inventory-test-")
        self.storage = LocalStorage(directory=self.directory, filename="store.json", retry_delay=0)

    def repository(self, load=True):
        repository = ItemRepository(self.storage, key=TEST_STORAGE_KEY)
        if load:
            repository.load()
        return repository

    def cleanup(self):
        shutil.rmtree(self.directory, ignore_errors=True)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.cleanup()
        return False


def break_writes(storage):
    """Point a storage at a path that cannot be opened for writing."""
    storage.path = os.path.join(storage.directory, "missing-dir", "store.json")

"""
Inventory dashboard: the presentation layer over the repository.

The dashboard keeps the view state (search term, sort column, open form,
pending deletion), turns user intents into repository calls and reports the
outcome through a Notifier. No error raised by the layers below ends the
session: validation errors go back to the form, everything else becomes a
notification.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from .db.repository import ItemRepository
from .exceptions import NotFoundError, PersistenceError, ValidationError
from .models.category import CATEGORIES
from .models.inventory_item import InventoryItem
from .query import ASCENDING, SortState
from .validation import RELAXED, build_item_fields

logger = logging.getLogger(__name__)

class Notification:
    """A dismissible message shown to the user."""

    def __init__(self, title: str, description: str, variant: str = "default"):
        self.title = title
        self.description = description
        self.variant = variant

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"

    def __str__(self):
        return f"{self.title}: {self.description}"

    def __repr__(self):
        return f"<Notification(title='{self.title}', variant='{self.variant}')>"


class Notifier:
    """Collects notifications and logs them; the CLI prints and dismisses them."""

    def __init__(self):
        self.pending: List[Notification] = []

    def success(self, description: str) -> None:
        self._push(Notification("Success", description))

    def error(self, description: str) -> None:
        self._push(Notification("Error", description, variant="destructive"))

    def _push(self, notification: Notification) -> None:
        if notification.is_error:
            logger.error(str(notification))
        else:
            logger.info(str(notification))
        self.pending.append(notification)

    def drain(self) -> List[Notification]:
        """Return pending notifications and dismiss them."""
        notifications, self.pending = self.pending, []
        return notifications


class FormState:
    """The add/edit form: which item is being edited and its current values."""

    def __init__(self, item: Optional[InventoryItem] = None):
        self.editing_id = item.id if item else None
        self.values = self._initial_values(item)
        self.errors: Dict[str, str] = {}

    @property
    def is_edit(self) -> bool:
        return self.editing_id is not None

    @staticmethod
    def _initial_values(item: Optional[InventoryItem]) -> Dict[str, Any]:
        if item is None:
            return {
                "sku": "",
                "item_name": "",
                "quantity_counted": 0,
                "unit_of_measure": "",
                "location_in_warehouse": "",
                "category": "",
                "custom_category": "",
                "condition_notes": "",
                "last_count_date": date.today().isoformat(),
                "reorder_level": 0,
                "supplier": "",
                "image_url": "",
            }

        values = {field: (value if value is not None else "") for field, value in item.to_dict().items()}
        values.pop("id")
        # Categories outside the fixed list go through the custom override
        if item.category in CATEGORIES:
            values["custom_category"] = ""
        else:
            values["category"] = ""
            values["custom_category"] = item.category
        return values


class InventoryDashboard:
    """Dispatches user intents to the repository and renders its current view."""

    def __init__(self, repository: ItemRepository, notifier: Optional[Notifier] = None,
                 policy: str = RELAXED):
        self.repository = repository
        self.notifier = notifier or Notifier()
        self.policy = policy
        self.search_term = ""
        self.sort = SortState()
        self.form: Optional[FormState] = None
        self.pending_delete: Optional[str] = None
        self.logged_out = False

    def load(self) -> bool:
        """Load the inventory; a read failure is reported and the session continues."""
        try:
            self.repository.load()
        except PersistenceError as e:
            logger.error(f"Could not load inventory: {str(e)}")
            self.notifier.error("Failed to load inventory items.")
            return False
        return True

    # Statistics

    def total_items(self) -> int:
        return len(self.repository)

    def total_quantity(self) -> int:
        return self.repository.total_quantity()

    def low_stock_items(self) -> List[InventoryItem]:
        return self.repository.low_stock()

    def low_stock_alert(self) -> Optional[str]:
        """Summary line for the low stock card, or None when nothing is low."""
        low = self.low_stock_items()
        if not low:
            return None
        badges = ", ".join(f"{item.item_name} ({item.quantity_counted} left)" for item in low)
        return f"{len(low)} item(s) are at or below their reorder level: {badges}"

    # Table view

    def visible_items(self) -> List[InventoryItem]:
        return self.sort.apply(self.repository.list(), self.search_term)

    def search(self, term: Optional[str]) -> List[InventoryItem]:
        self.search_term = term or ""
        return self.visible_items()

    def sort_by(self, field: str) -> List[InventoryItem]:
        self.sort.toggle(field)
        return self.visible_items()

    # Add / edit form

    def open_add_form(self) -> FormState:
        self.form = FormState()
        return self.form

    def open_edit_form(self, item_id: str) -> Optional[FormState]:
        """Open the form pre-populated from an item; a missing item leaves the form closed."""
        try:
            item = self.repository.get(item_id)
        except NotFoundError:
            logger.warning(f"Edit requested for missing item {item_id}")
            self.notifier.error("Item no longer exists.")
            return None
        self.form = FormState(item)
        return self.form

    def close_form(self) -> None:
        self.form = None

    def submit_form(self, values: Optional[Mapping[str, Any]] = None) -> Optional[InventoryItem]:
        """
        Validate the open form and commit it.

        Args:
            values: Field values to merge into the form before validating.

        Returns:
            The stored item, or None if validation failed (errors are kept on
            the form) or the edited item disappeared.
        """
        if self.form is None:
            raise RuntimeError("No item form is open")
        form = self.form
        if values:
            form.values.update(values)

        try:
            fields = build_item_fields(form.values, self.policy)
        except ValidationError as e:
            form.errors = e.errors
            return None
        form.errors = {}

        action = "update" if form.is_edit else "add"
        try:
            if form.is_edit:
                item = self.repository.update(form.editing_id, fields)
                self.notifier.success("Item updated successfully!")
            else:
                item = self.repository.add(fields)
                self.notifier.success("Item added successfully!")
        except NotFoundError:
            logger.warning(f"Item {form.editing_id} disappeared before it could be updated")
            self.notifier.error("Failed to update item.")
            self.close_form()
            return None
        except PersistenceError as e:
            # The in-memory change stands; the next successful write catches up
            logger.error(f"Could not save after {action}: {str(e)}")
            self.notifier.error(f"Failed to save inventory after {action}. Changes are kept for this session.")
            item = self._find_after_failed_write(form)

        self.close_form()
        return item

    def _find_after_failed_write(self, form: FormState) -> Optional[InventoryItem]:
        if form.is_edit:
            return self.repository.get(form.editing_id)
        # Additions are prepended
        snapshot = self.repository.list()
        return snapshot[0] if snapshot else None

    # Deletion

    def request_delete(self, item_id: str) -> Optional[InventoryItem]:
        """Ask for confirmation before deleting; returns the item awaiting confirmation."""
        try:
            item = self.repository.get(item_id)
        except NotFoundError:
            logger.warning(f"Delete requested for missing item {item_id}")
            self.pending_delete = None
            return None
        self.pending_delete = item_id
        return item

    def cancel_delete(self) -> None:
        self.pending_delete = None

    def confirm_delete(self) -> bool:
        """Delete the item awaiting confirmation. Returns False when nothing was pending or it is already gone."""
        if self.pending_delete is None:
            return False
        item_id, self.pending_delete = self.pending_delete, None
        try:
            self.repository.get(item_id)
        except NotFoundError:
            logger.warning(f"Item {item_id} was removed before the delete was confirmed")
            self.notifier.error("Item no longer exists.")
            return False
        try:
            self.repository.remove(item_id)
        except PersistenceError as e:
            logger.error(f"Could not save after delete: {str(e)}")
            self.notifier.error("Failed to save inventory after delete. Changes are kept for this session.")
            return True
        self.notifier.success("Item deleted successfully!")
        return True

    def logout(self) -> None:
        """End the session view; stored inventory is left as it is."""
        self.form = None
        self.pending_delete = None
        self.logged_out = True
        logger.info("Logged out")

    # Rendering

    TABLE_COLUMNS = [
        ("SKU", "sku", 8),
        ("Item Name", "item_name", 26),
        ("Quantity", "quantity_counted", 10),
        ("Unit", "unit_of_measure", 7),
        ("Location", "location_in_warehouse", 24),
        ("Category", "category", 16),
        ("Last Count", "last_count_date", 12),
    ]

    def render_table(self, items: Optional[List[InventoryItem]] = None) -> str:
        """Render items (default: the visible view) as a plain-text table."""
        items = self.visible_items() if items is None else items
        if not items:
            return "No inventory items found."

        def cell(value: Any, width: int) -> str:
            text = "" if value is None else str(value)
            if len(text) > width:
                text = text[:width - 1] + "~"
            return text.ljust(width)

        id_width = max(len("ID"), max(len(item.id) for item in items))
        header = ["ID".ljust(id_width)]
        for title, field, width in self.TABLE_COLUMNS:
            marker = ""
            if field == self.sort.field:
                marker = " ^" if self.sort.direction == ASCENDING else " v"
            header.append(cell(title + marker, width))
        header.append("Status")
        lines = [" | ".join(header)]
        lines.append("-" * len(lines[0]))

        for item in items:
            row = [item.id.ljust(id_width)]
            row.extend(cell(getattr(item, field), width) for _, field, width in self.TABLE_COLUMNS)
            row.append("Low Stock" if item.is_low_stock else "In Stock")
            lines.append(" | ".join(row))
        return "\n".join(lines)

    def render_summary(self) -> str:
        lines = [
            f"Total Items: {self.total_items()}",
            f"Total Quantity: {self.total_quantity():,}",
            f"Low Stock Alerts: {len(self.low_stock_items())}",
        ]
        alert = self.low_stock_alert()
        if alert:
            lines.append(f"Low Stock Alert - {alert}")
        return "\n".join(lines)

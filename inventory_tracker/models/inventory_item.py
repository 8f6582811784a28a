from pydantic import BaseModel, Field
from typing import Optional
from datetime import date
import uuid

class ItemFields(BaseModel):
    """Editable attributes of an inventory item (everything except its id)."""

    sku: Optional[str] = None
    item_name: str = Field(..., min_length=1)
    quantity_counted: int = Field(0, ge=0)
    unit_of_measure: Optional[str] = None
    location_in_warehouse: Optional[str] = None
    category: str = Field(..., min_length=1)
    condition_notes: Optional[str] = None
    last_count_date: date
    reorder_level: int = Field(0, ge=0)
    supplier: Optional[str] = None
    image_url: Optional[str] = None  # display hint only

    @property
    def is_low_stock(self) -> bool:
        """At or below the reorder level counts as low stock."""
        return self.quantity_counted <= self.reorder_level


class InventoryItem(ItemFields):
    """Model for a warehouse stock record."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self):
        """Convert the model to a dictionary for storage in the local store."""
        return {
            "id": self.id,
            "sku": self.sku,
            "item_name": self.item_name,
            "quantity_counted": self.quantity_counted,
            "unit_of_measure": self.unit_of_measure,
            "location_in_warehouse": self.location_in_warehouse,
            "category": self.category,
            "condition_notes": self.condition_notes,
            "last_count_date": self.last_count_date.isoformat(),
            "reorder_level": self.reorder_level,
            "supplier": self.supplier,
            "image_url": self.image_url
        }

    @classmethod
    def from_dict(cls, data):
        """Create an InventoryItem from a stored dictionary."""
        return cls(**data)

    @classmethod
    def from_fields(cls, fields: ItemFields, item_id: Optional[str] = None):
        """Create an InventoryItem from validated fields, keeping item_id when given."""
        data = fields.model_dump()
        if item_id is not None:
            data["id"] = item_id
        return cls(**data)

    def editable_fields(self) -> ItemFields:
        """Return the editable fields of this item."""
        return ItemFields(**self.model_dump(exclude={"id"}))

"""Demonstration dataset used when the local store holds no inventory yet."""

from datetime import date
from typing import List

from ..models.inventory_item import InventoryItem

def sample_items() -> List[InventoryItem]:
    """Return a fresh copy of the five demonstration items."""
    return [
        InventoryItem(
            id="1",
            sku="SKU001",
            item_name="Industrial Safety Helmet",
            quantity_counted=45,
            unit_of_measure="pcs",
            location_in_warehouse="Aisle 1, Shelf A",
            category="Safety Gear",
            condition_notes="Good condition, regular stock rotation",
            last_count_date=date(2024, 1, 15),
            reorder_level=10,
            supplier="SafetyFirst Corp",
        ),
        InventoryItem(
            id="2",
            sku="SKU002",
            item_name="Heavy Duty Work Gloves",
            quantity_counted=5,
            unit_of_measure="pairs",
            location_in_warehouse="Aisle 1, Shelf B",
            category="Safety Gear",
            condition_notes="Various sizes available",
            last_count_date=date(2024, 1, 14),
            reorder_level=20,
            supplier="ProtectCo",
        ),
        InventoryItem(
            id="3",
            sku="SKU003",
            item_name="Forklift Battery",
            quantity_counted=8,
            unit_of_measure="units",
            location_in_warehouse="Aisle 3, Floor Storage",
            category="Equipment",
            condition_notes="Requires special handling",
            last_count_date=date(2024, 1, 13),
            reorder_level=2,
            supplier="PowerTech Ltd",
        ),
        InventoryItem(
            id="4",
            sku="SKU004",
            item_name="Cardboard Boxes (Large)",
            quantity_counted=500,
            unit_of_measure="boxes",
            location_in_warehouse="Aisle 5, Bulk Storage",
            category="Packaging",
            condition_notes="Stacked high, good condition",
            last_count_date=date(2024, 1, 12),
            reorder_level=100,
            supplier="PackRight Inc",
        ),
        InventoryItem(
            id="5",
            sku="SKU005",
            item_name="Cleaning Solvent",
            quantity_counted=25,
            unit_of_measure="gallons",
            location_in_warehouse="Chemical Storage, Zone C",
            category="Chemicals",
            condition_notes="Hazardous material - proper ventilation required",
            last_count_date=date(2024, 1, 11),
            reorder_level=5,
            supplier="ChemClean Solutions",
        ),
    ]

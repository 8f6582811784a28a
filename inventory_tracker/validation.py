"""
Field-level validation for the add/edit item form.

validate_item() checks every field and returns a mapping of field name to
message; an empty mapping means the candidate may be committed. Two policies
exist: "relaxed" (default) and "strict", which additionally requires SKU,
unit of measure and location.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Tuple

from .exceptions import ValidationError
from .models.category import category_choice
from .models.inventory_item import ItemFields

logger = logging.getLogger(__name__)

RELAXED = "relaxed"
STRICT = "strict"

# Extra fields the strict form requires, with their messages
STRICT_REQUIRED = {
    "sku": "SKU is required",
    "unit_of_measure": "Unit of measure is required",
    "location_in_warehouse": "Location is required",
}

OPTIONAL_TEXT_FIELDS = (
    "sku",
    "unit_of_measure",
    "location_in_warehouse",
    "condition_notes",
    "supplier",
    "image_url",
)

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())

def _parse_count(value: Any, label: str) -> Tuple[Optional[int], Optional[str]]:
    """Parse a non-negative whole number; returns (value, error message)."""
    if _is_blank(value):
        return 0, None
    if isinstance(value, bool):
        return None, f"{label} must be a whole number"
    if isinstance(value, int):
        number = value
    else:
        try:
            number = int(str(value).strip())
        except ValueError:
            return None, f"{label} must be a whole number"
    if number < 0:
        return None, f"{label} must be 0 or greater"
    return number, None

def _parse_date(value: Any) -> Tuple[Optional[date], Optional[str]]:
    if _is_blank(value):
        return None, "Last count date is required"
    if isinstance(value, datetime):
        return value.date(), None
    if isinstance(value, date):
        return value, None
    try:
        return date.fromisoformat(str(value).strip()), None
    except ValueError:
        return None, "Last count date must be a valid date (YYYY-MM-DD)"

def validate_item(raw: Mapping[str, Any], policy: str = RELAXED) -> Dict[str, str]:
    """
    Validate raw form values.

    Args:
        raw: Form values keyed by field name. The category comes from
            "category" (selected value) and "custom_category" (free-form
            override, wins when non-blank).
        policy: "relaxed" or "strict".

    Returns:
        Mapping of field name to error message; empty when valid.
    """
    if policy not in (RELAXED, STRICT):
        raise ValueError(f"Unknown validation policy {policy!r}")

    errors = {}

    if policy == STRICT:
        for field, message in STRICT_REQUIRED.items():
            if _is_blank(raw.get(field)):
                errors[field] = message

    if _is_blank(raw.get("item_name")):
        errors["item_name"] = "Item name is required"

    _, message = _parse_count(raw.get("quantity_counted"), "Quantity")
    if message:
        errors["quantity_counted"] = message

    _, message = _parse_count(raw.get("reorder_level"), "Reorder level")
    if message:
        errors["reorder_level"] = message

    _, message = _parse_date(raw.get("last_count_date"))
    if message:
        errors["last_count_date"] = message

    if category_choice(raw.get("category"), raw.get("custom_category")) is None:
        errors["category"] = "Category is required"

    if errors:
        logger.debug(f"Validation failed for fields: {', '.join(sorted(errors))}")
    return errors

def build_item_fields(raw: Mapping[str, Any], policy: str = RELAXED) -> ItemFields:
    """
    Validate raw form values and convert them into ItemFields.

    Raises:
        ValidationError: carrying the field error mapping when validation fails.
    """
    errors = validate_item(raw, policy)
    if errors:
        raise ValidationError(errors)

    quantity, _ = _parse_count(raw.get("quantity_counted"), "Quantity")
    reorder_level, _ = _parse_count(raw.get("reorder_level"), "Reorder level")
    last_count_date, _ = _parse_date(raw.get("last_count_date"))
    category = category_choice(raw.get("category"), raw.get("custom_category")).resolve()

    optional = {}
    for field in OPTIONAL_TEXT_FIELDS:
        value = raw.get(field)
        optional[field] = None if _is_blank(value) else str(value).strip()

    return ItemFields(
        item_name=str(raw["item_name"]).strip(),
        quantity_counted=quantity,
        category=category,
        last_count_date=last_count_date,
        reorder_level=reorder_level,
        **optional
    )

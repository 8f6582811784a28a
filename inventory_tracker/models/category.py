from pydantic import BaseModel
from typing import Literal, Optional, Union

# Choices offered by the item form
CATEGORIES = [
    "Electronics",
    "Hardware",
    "Safety Gear",
    "Chemicals",
    "Packaging",
    "Equipment",
    "Tools",
    "Office Supplies",
    "Cleaning Supplies",
    "Other"
]

UNITS_OF_MEASURE = [
    "pcs",
    "boxes",
    "pairs",
    "gallons",
    "liters",
    "units",
    "kg",
    "lbs",
    "meters",
    "feet",
    "rolls",
    "sets"
]

class Enumerated(BaseModel):
    """A category picked from the fixed list."""

    kind: Literal["enumerated"] = "enumerated"
    value: str

    def resolve(self) -> str:
        return self.value.strip()


class Custom(BaseModel):
    """A free-form category typed by the user."""

    kind: Literal["custom"] = "custom"
    text: str

    def resolve(self) -> str:
        return self.text.strip()


CategoryChoice = Union[Enumerated, Custom]

def category_choice(selected: Optional[str], custom: Optional[str] = None) -> Optional[CategoryChoice]:
    """
    Build the category choice from the form's two inputs.

    A non-blank custom override wins over the selected value. Returns None
    when both are blank.
    """
    if custom and custom.strip():
        return Custom(text=custom)
    if selected and selected.strip():
        return Enumerated(value=selected)
    return None

import unittest
import os
import sys
from datetime import date

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from inventory_tracker.exceptions import ValidationError
from inventory_tracker.models.category import Custom, Enumerated, category_choice
from inventory_tracker.validation import build_item_fields, validate_item

def form(**overrides):
    values = {
        "sku": "",
        "item_name": "Pallet Wrap",
        "quantity_counted": "3",
        "unit_of_measure": "",
        "location_in_warehouse": "",
        "category": "Packaging",
        "custom_category": "",
        "condition_notes": "",
        "last_count_date": "2024-02-01",
        "reorder_level": "5",
        "supplier": "",
        "image_url": "",
    }
    values.update(overrides)
    return values

class TestRelaxedPolicy(unittest.TestCase):

    def test_valid_form_has_no_errors(self):
        self.assertEqual(validate_item(form()), {})

    def test_blank_item_name(self):
        self.assertEqual(validate_item(form(item_name="   ")), {"item_name": "Item name is required"})

    def test_negative_counts(self):
        errors = validate_item(form(quantity_counted="-1", reorder_level=-4))
        self.assertEqual(errors, {
            "quantity_counted": "Quantity must be 0 or greater",
            "reorder_level": "Reorder level must be 0 or greater",
        })

    def test_zero_counts_are_valid(self):
        self.assertEqual(validate_item(form(quantity_counted=0, reorder_level="0")), {})

    def test_non_numeric_count(self):
        errors = validate_item(form(quantity_counted="lots"))
        self.assertEqual(errors, {"quantity_counted": "Quantity must be a whole number"})

    def test_missing_date(self):
        self.assertEqual(validate_item(form(last_count_date="")), {"last_count_date": "Last count date is required"})

    def test_malformed_date(self):
        errors = validate_item(form(last_count_date="02/01/2024"))
        self.assertIn("last_count_date", errors)

    def test_missing_category(self):
        self.assertEqual(validate_item(form(category="", custom_category=" ")), {"category": "Category is required"})

    def test_custom_category_alone_is_enough(self):
        self.assertEqual(validate_item(form(category="", custom_category="Spare Parts")), {})

    def test_all_fields_checked_together(self):
        errors = validate_item(form(item_name="", quantity_counted="-2", last_count_date="", category=""))
        self.assertEqual(set(errors), {"item_name", "quantity_counted", "last_count_date", "category"})

    def test_optional_fields_may_be_blank(self):
        self.assertEqual(validate_item(form(sku="", unit_of_measure="", location_in_warehouse="")), {})


class TestStrictPolicy(unittest.TestCase):

    def test_requires_sku_unit_and_location(self):
        errors = validate_item(form(), policy="strict")
        self.assertEqual(errors, {
            "sku": "SKU is required",
            "unit_of_measure": "Unit of measure is required",
            "location_in_warehouse": "Location is required",
        })

    def test_complete_form_passes(self):
        values = form(sku="SKU006", unit_of_measure="rolls", location_in_warehouse="Aisle 5")
        self.assertEqual(validate_item(values, policy="strict"), {})

    def test_unknown_policy(self):
        with self.assertRaises(ValueError):
            validate_item(form(), policy="lenient")


class TestBuildItemFields(unittest.TestCase):

    def test_coerces_form_values(self):
        fields = build_item_fields(form(sku=" SKU006 ", supplier="WrapCo"))
        self.assertEqual(fields.sku, "SKU006")
        self.assertEqual(fields.quantity_counted, 3)
        self.assertEqual(fields.reorder_level, 5)
        self.assertEqual(fields.last_count_date, date(2024, 2, 1))
        self.assertEqual(fields.supplier, "WrapCo")
        self.assertIsNone(fields.unit_of_measure)
        self.assertIsNone(fields.image_url)

    def test_custom_category_takes_precedence(self):
        fields = build_item_fields(form(category="Packaging", custom_category="  Stretch Film "))
        self.assertEqual(fields.category, "Stretch Film")

    def test_raises_with_error_mapping(self):
        with self.assertRaises(ValidationError) as ctx:
            build_item_fields(form(item_name="", reorder_level="-1"))
        self.assertEqual(set(ctx.exception.errors), {"item_name", "reorder_level"})

    def test_accepts_typed_values(self):
        fields = build_item_fields(form(quantity_counted=7, last_count_date=date(2024, 1, 31)))
        self.assertEqual(fields.quantity_counted, 7)
        self.assertEqual(fields.last_count_date, date(2024, 1, 31))


class TestCategoryChoice(unittest.TestCase):

    def test_enumerated(self):
        choice = category_choice("Tools", "")
        self.assertIsInstance(choice, Enumerated)
        self.assertEqual(choice.resolve(), "Tools")

    def test_custom_override(self):
        choice = category_choice("Tools", "Fasteners")
        self.assertIsInstance(choice, Custom)
        self.assertEqual(choice.resolve(), "Fasteners")

    def test_both_blank(self):
        self.assertIsNone(category_choice("", None))


if __name__ == '__main__':
    unittest.main()

import unittest
import os
import sys
from datetime import date

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from tests.utils import make_item
from inventory_tracker.db.sample_data import sample_items
from inventory_tracker.query import SortState, filter_items, query_items, sort_items

class TestSearch(unittest.TestCase):

    def setUp(self):
        self.items = sample_items()

    def test_empty_term_matches_everything(self):
        self.assertEqual(filter_items(self.items, ""), self.items)
        self.assertEqual(filter_items(self.items, None), self.items)

    def test_no_match_returns_empty(self):
        self.assertEqual(filter_items(self.items, "zzz-nothing"), [])

    def test_case_insensitive_name_match(self):
        result = filter_items(self.items, "glove")
        self.assertEqual([item.item_name for item in result], ["Heavy Duty Work Gloves"])
        self.assertEqual(filter_items(self.items, "GLOVE"), result)

    def test_matches_sku(self):
        self.assertEqual([item.id for item in filter_items(self.items, "sku004")], ["4"])

    def test_matches_category(self):
        result = filter_items(self.items, "safety")
        self.assertEqual([item.id for item in result], ["1", "2"])

    def test_other_fields_are_not_searched(self):
        # "Aisle" only appears in locations
        self.assertEqual(filter_items(self.items, "aisle"), [])

    def test_missing_sku_does_not_break_search(self):
        items = [make_item("a", sku=None, item_name="Loose Screws")]
        self.assertEqual(len(filter_items(items, "screw")), 1)
        self.assertEqual(filter_items(items, "sku"), [])


class TestSort(unittest.TestCase):

    def test_quantity_is_numeric(self):
        items = [
            make_item("a", quantity_counted=100),
            make_item("b", quantity_counted=9),
            make_item("c", quantity_counted=25),
        ]
        self.assertEqual([item.id for item in sort_items(items, "quantity_counted")], ["b", "c", "a"])

    def test_descending_reverses_ascending_without_ties(self):
        items = sample_items()
        ascending = sort_items(items, "quantity_counted", "asc")
        descending = sort_items(items, "quantity_counted", "desc")
        self.assertEqual(descending, list(reversed(ascending)))

    def test_ties_keep_input_order_in_both_directions(self):
        items = [
            make_item("first", quantity_counted=5),
            make_item("low", quantity_counted=1),
            make_item("second", quantity_counted=5),
        ]
        self.assertEqual([item.id for item in sort_items(items, "quantity_counted", "asc")],
                         ["low", "first", "second"])
        self.assertEqual([item.id for item in sort_items(items, "quantity_counted", "desc")],
                         ["first", "second", "low"])

    def test_dates_compare_by_value(self):
        items = [
            make_item("feb", last_count_date=date(2024, 2, 1)),
            make_item("jan", last_count_date=date(2024, 1, 31)),
            make_item("dec", last_count_date=date(2023, 12, 5)),
        ]
        self.assertEqual([item.id for item in sort_items(items, "last_count_date")], ["dec", "jan", "feb"])

    def test_text_fields_are_case_insensitive(self):
        items = [
            make_item("b", item_name="bolts"),
            make_item("A", item_name="Anchors"),
            make_item("c", item_name="Cable ties"),
        ]
        self.assertEqual([item.id for item in sort_items(items, "item_name")], ["A", "b", "c"])

    def test_missing_sku_sorts_first(self):
        items = [make_item("x", sku="SKU010"), make_item("y", sku=None)]
        self.assertEqual([item.id for item in sort_items(items, "sku")], ["y", "x"])

    def test_unknown_field(self):
        with self.assertRaises(ValueError):
            sort_items(sample_items(), "supplier")

    def test_sort_does_not_mutate_input(self):
        items = sample_items()
        original = list(items)
        sort_items(items, "item_name", "desc")
        self.assertEqual(items, original)

    def test_query_filters_then_sorts(self):
        result = query_items(sample_items(), "safety", "quantity_counted", "asc")
        self.assertEqual([item.sku for item in result], ["SKU002", "SKU001"])


class TestSortState(unittest.TestCase):

    def test_defaults_to_item_name_ascending(self):
        state = SortState()
        self.assertEqual((state.field, state.direction), ("item_name", "asc"))

    def test_same_field_flips_direction(self):
        state = SortState()
        state.toggle("item_name")
        self.assertEqual(state.direction, "desc")
        state.toggle("item_name")
        self.assertEqual(state.direction, "asc")

    def test_new_field_resets_to_ascending(self):
        state = SortState()
        state.toggle("item_name")
        state.toggle("quantity_counted")
        self.assertEqual((state.field, state.direction), ("quantity_counted", "asc"))

    def test_rejects_unknown_field(self):
        state = SortState()
        with self.assertRaises(ValueError):
            state.toggle("colour")
        self.assertEqual(state.field, "item_name")

    def test_rejects_unknown_direction(self):
        with self.assertRaises(ValueError):
            SortState("item_name", "sideways")

    def test_apply(self):
        state = SortState("quantity_counted", "desc")
        result = state.apply(sample_items(), "")
        self.assertEqual(result[0].sku, "SKU004")


if __name__ == '__main__':
    unittest.main()

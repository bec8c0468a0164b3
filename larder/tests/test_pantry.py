from datetime import date, timedelta
import unittest
from larder.domain.AggregatedItem import AggregatedItem
from larder.domain.Pantry import Pantry
from larder.domain.PantryItem import PantryItem
from larder.events.Event_Bus import EventBus, PANTRY_DEDUCTED, PANTRY_LOW_STOCK, PANTRY_NEAR_EXPIRY
from larder.logic.pantry.analysis import compute_expiring_soon
from larder.logic.pantry.deduction import deduct, low_stock_warnings


def needed(key, qty, unit):
    return AggregatedItem(key, display_title=key, qty_num=qty, qty_text=f"{qty} {unit}", unit=unit)


class TestPantry(unittest.TestCase):

    def setUp(self):
        self.events = []
        bus = EventBus()
        for name in (PANTRY_DEDUCTED, PANTRY_LOW_STOCK, PANTRY_NEAR_EXPIRY):
            bus.subscribe(name, lambda n, p: self.events.append((n, p)))
        self.pantry = Pantry().set_event_bus(bus)

    def test_add_and_remove_item(self):
        item = self.pantry.add_item(PantryItem(name="Sugar", qty_num=100, unit="g"))
        self.assertTrue(item.item_id.startswith("pan_"))
        self.assertIn(item, self.pantry.get_items())
        self.pantry.remove_item(item)
        self.assertNotIn(item, self.pantry.get_items())

    def test_free_text_quantity_is_parsed(self):
        item = PantryItem(name="Flour", qty_text="1 1/2 lb")
        self.assertEqual(item.qty_num, 1.5)
        self.assertEqual(item.unit, "lb")

    def test_full_coverage(self):
        row = self.pantry.add_item(PantryItem(item_id="p1", name="Olive Oil", qty_num=2, unit="cup"))
        items, deductions = deduct([needed("olive oil", 1, "cup")], self.pantry)
        self.assertEqual(items[0].qty_num, 0)
        self.assertEqual(items[0].qty_text, "✓ From Pantry")
        self.assertTrue(items[0].from_pantry)
        self.assertTrue(items[0].to_dict()["FromPantry"])
        self.assertEqual(row.qty_num, 1)
        self.assertEqual(len(deductions), 1)
        self.assertEqual(deductions[0].to_dict(),
                         {"ingredient": "olive oil", "deducted": 1, "unit": "cup", "originalQty": 1})
        self.assertIn(PANTRY_DEDUCTED, [n for n, _ in self.events])

    def test_partial_coverage(self):
        row = self.pantry.add_item(PantryItem(item_id="p1", name="olive oil", qty_num=1, unit="cup"))
        items, deductions = deduct([needed("olive oil", 3, "cup")], self.pantry)
        self.assertEqual(items[0].qty_num, 2)
        self.assertEqual(items[0].qty_text, "2 cup (1 from pantry)")
        self.assertTrue(items[0].partial_pantry)
        self.assertFalse(items[0].from_pantry)
        self.assertEqual(row.qty_num, 0)
        self.assertEqual(deductions[0].deducted, 1)

    def test_deduction_reports_canonical_key(self):
        self.pantry.add_item(PantryItem(item_id="p1", name="Olive Oil", qty_num=2, unit="cup"))
        item = AggregatedItem("olive oil", display_title="Extra Virgin Olive Oil", qty_num=1,
                              qty_text="1 cup", unit="cup")
        _, deductions = deduct([item], self.pantry)
        self.assertEqual(deductions[0].ingredient, "olive oil")

    def test_deduction_converts_and_keeps_row_unit(self):
        row = self.pantry.add_item(PantryItem(item_id="p1", name="Milk", qty_num=500, unit="ml"))
        items, _ = deduct([needed("milk", 1, "cup")], self.pantry)
        self.assertTrue(items[0].from_pantry)
        self.assertEqual(row.unit, "ml")
        self.assertAlmostEqual(row.qty_num, 500 - 236.5882365, places=3)

    def test_rows_consumed_in_name_then_id_order(self):
        b = self.pantry.add_item(PantryItem(item_id="b", name="Flour", qty_num=1, unit="cup"))
        a = self.pantry.add_item(PantryItem(item_id="a", name="flour", qty_num=1, unit="cup"))
        deduct([needed("flour", 1.5, "cup")], self.pantry)
        self.assertEqual(a.qty_num, 0)
        self.assertAlmostEqual(b.qty_num, 0.5)

    def test_count_units_deduct_directly(self):
        row = self.pantry.add_item(PantryItem(item_id="e", name="Eggs", qty_num=6, unit="each"))
        items, _ = deduct([needed("egg", 4, "each")], self.pantry)
        self.assertTrue(items[0].from_pantry)
        self.assertEqual(row.qty_num, 2)

    def test_incompatible_stock_is_left_alone(self):
        row = self.pantry.add_item(PantryItem(item_id="g", name="garlic", qty_num=3, unit="clove"))
        items, deductions = deduct([needed("garlic", 1, "tbsp")], self.pantry)
        self.assertEqual(deductions, [])
        self.assertEqual(items[0].qty_num, 1)
        self.assertEqual(row.qty_num, 3)

    def test_text_only_rows_are_skipped(self):
        self.pantry.add_item(PantryItem(item_id="g", name="garlic", qty_num=3, unit="clove"))
        item = needed("garlic", None, "clove")
        item.text_only = True
        _, deductions = deduct([item], self.pantry)
        self.assertEqual(deductions, [])

    def test_low_stock_warnings(self):
        self.pantry.add_item(PantryItem(name="Rice", qty_num=1, unit="kg", low_stock_threshold=2))
        self.pantry.add_item(PantryItem(name="Beans", qty_num=2, unit="can", low_stock_threshold=2))
        self.pantry.add_item(PantryItem(name="Salt", qty_num=0, unit="g", low_stock_threshold=0))
        self.pantry.add_item(PantryItem(name="Pasta", qty_num=5, unit="lb", low_stock_threshold=1))
        warnings = low_stock_warnings(self.pantry)
        self.assertEqual([w.name for w in warnings], ["Beans", "Rice"])
        self.assertEqual(warnings[1].message, "Rice: 1 kg (threshold: 2)")

    def test_deduction_below_threshold_publishes_low_stock(self):
        self.pantry.add_item(PantryItem(item_id="r", name="Rice", qty_num=5, unit="cup", low_stock_threshold=2))
        self.events.clear()
        deduct([needed("rice", 4, "cup")], self.pantry)
        self.assertIn(PANTRY_LOW_STOCK, [n for n, _ in self.events])

    def test_add_back(self):
        row = self.pantry.add_item(PantryItem(item_id="m", name="Milk", qty_num=1, unit="l"))
        self.pantry.add_back("milk", 500, "ml")
        self.assertAlmostEqual(row.qty_num, 1.5)
        created = self.pantry.add_back("Basil", 1, "bunch")
        self.assertIn(created, self.pantry.get_items())
        self.assertEqual(created.unit, "bunch")
        self.assertEqual(created.qty_num, 1)

    def test_expiring_soon(self):
        today = date(2026, 3, 1)
        rows = [
            PantryItem(name="Yogurt", qty_num=1, unit="each", expiration_date=today + timedelta(days=2)),
            PantryItem(name="Cheese", qty_num=1, unit="each", expiration_date=today + timedelta(days=30)),
            PantryItem(name="Ham", qty_num=1, unit="each", expiration_date=today - timedelta(days=1)),
            PantryItem(name="Rice", qty_num=1, unit="kg"),
        ]
        soon = compute_expiring_soon(rows, window=5, today=today)
        self.assertEqual([r['name'] for r in soon], ["Ham", "Yogurt"])
        self.assertEqual(soon[0]['days_left'], -1)
        # window is clamped to at least one day
        self.assertEqual(len(compute_expiring_soon(rows, window=0, today=today)), 1)


if __name__ == '__main__':
    unittest.main()

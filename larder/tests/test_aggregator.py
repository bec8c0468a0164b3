import unittest
from larder.domain.IngredientLine import IngredientLine, SourceId
from larder.logic.shopping.aggregator import aggregate


def line(rid, idx, name, qty=None, unit="", qty_text="", category="", store_id="", raw=""):
    return IngredientLine(recipe_id=rid, line_index=idx, raw_text=raw or name, name=name,
                          qty_num=qty, qty_text=qty_text, unit=unit, category=category, store_id=store_id)


class TestAggregate(unittest.TestCase):

    def test_olive_oil_scenario(self):
        groups = aggregate([
            line("A", 0, "olive oil", 2, "cup", "2 cups", raw="2 cups olive oil"),
            line("B", 0, "extra virgin olive oil", 1, "cup", "1 cup", raw="1 cup extra virgin olive oil"),
        ])
        self.assertEqual(list(groups), ["olive oil"])
        item = groups["olive oil"]
        self.assertEqual(item.qty_num, 3)
        self.assertEqual(item.unit, "cup")
        self.assertTrue(item.is_merged)
        self.assertEqual(item.count, 2)
        self.assertEqual(item.source_ids, [SourceId("A", 0), SourceId("B", 0)])
        self.assertEqual(item.original_names, ["olive oil", "extra virgin olive oil"])
        self.assertEqual(item.example, "2 cups olive oil")

    def test_same_unit_merge_is_order_independent(self):
        a = line("A", 0, "sugar", 1, "cup")
        b = line("B", 3, "Sugar", 1, "cups")
        forward = aggregate([a, b])["sugar"]
        backward = aggregate([b, a])["sugar"]
        self.assertEqual(forward.qty_num, 2)
        self.assertEqual(backward.qty_num, 2)
        self.assertEqual(forward.source_ids, [SourceId("A", 0), SourceId("B", 3)])
        self.assertEqual(backward.source_ids, [SourceId("B", 3), SourceId("A", 0)])

    def test_compatible_units_convert_into_group_unit(self):
        item = aggregate([
            line("A", 0, "milk", 1, "cup"),
            line("B", 1, "milk", 8, "tbsp"),
        ])["milk"]
        self.assertAlmostEqual(item.qty_num, 1.5)
        self.assertEqual(item.unit, "cup")
        self.assertEqual(item.qty_text, "1 1/2 cup")

    def test_incompatible_units_fall_back_to_text(self):
        item = aggregate([
            line("A", 0, "garlic", 2, "clove", "2 cloves"),
            line("B", 0, "garlic", 1, "tbsp", "1 tbsp"),
            line("C", 0, "garlic", 1, "clove", "1 clove"),
        ])["garlic"]
        self.assertIsNone(item.qty_num)
        self.assertTrue(item.text_only)
        self.assertEqual(item.qty_text, "2 cloves + 1 tbsp + 1 clove")
        self.assertEqual(item.count, 3)

    def test_group_without_number_adopts_first_numeric_line(self):
        item = aggregate([
            line("A", 0, "salt"),
            line("B", 0, "salt", 1, "tsp", "1 tsp"),
        ])["salt"]
        self.assertEqual(item.qty_num, 1)
        self.assertEqual(item.unit, "tsp")
        self.assertEqual(item.qty_text, "1 tsp")
        self.assertTrue(item.is_merged)

    def test_first_seen_category_and_store(self):
        item = aggregate([
            line("A", 0, "butter", 100, "g", category="Dairy", store_id="aldi"),
            line("B", 0, "unsalted butter", 50, "g", category="Baking", store_id="costco"),
        ])["butter"]
        self.assertEqual(item.category, "Dairy")
        self.assertEqual(item.store_id, "aldi")
        self.assertEqual(item.qty_num, 150)

    def test_provenance_matches_count(self):
        lines = [line(f"R{i}", i, "tomatoes", 1, "each") for i in range(5)]
        item = aggregate(lines)["tomato"]
        self.assertEqual(item.count, 5)
        self.assertEqual(len(item.source_ids), item.count)
        self.assertEqual(item.qty_num, 5)

    def test_blank_lines_are_skipped(self):
        groups = aggregate([line("A", 0, ""), line("A", 1, "flour", 2, "cup")])
        self.assertEqual(list(groups), ["flour"])

    def test_group_order_follows_first_appearance(self):
        groups = aggregate([
            line("A", 0, "zucchini", 1, "each"),
            line("A", 1, "apples", 2, "each"),
            line("B", 0, "zucchini", 1, "each"),
        ])
        self.assertEqual(list(groups), ["zucchini", "apple"])

    def test_to_dict_shape(self):
        d = aggregate([line("A", 0, "flour", 2, "cup", "2 cups")])["flour"].to_dict()
        self.assertEqual(d["IngredientNorm"], "flour")
        self.assertEqual(d["Category"], "Other")
        self.assertEqual(d["QtyNum"], 2)
        self.assertEqual(d["SourceIds"], [{"rid": "A", "idx": 0}])
        self.assertFalse(d["IsMerged"])
        self.assertEqual(d["Count"], 1)
        self.assertNotIn("FromPantry", d)


if __name__ == '__main__':
    unittest.main()

import unittest
from larder.logic.shopping.quantity_parser import (
    format_qty, parse_fraction, parse_ingredient_line, parse_qty_text,
)


class TestParseIngredientLine(unittest.TestCase):

    def test_mixed_number_with_unit_and_notes(self):
        p = parse_ingredient_line("1 1/2 cups chopped onions (white)")
        self.assertEqual(p.qty_num, 1.5)
        self.assertEqual(p.qty_text, "1 1/2 cups")
        self.assertEqual(p.unit, "cup")
        self.assertEqual(p.name, "chopped onions")
        self.assertEqual(p.notes, "white")
        self.assertEqual(p.raw, "1 1/2 cups chopped onions (white)")

    def test_range_keeps_first_bound(self):
        p = parse_ingredient_line("2 to 3 cups flour")
        self.assertEqual(p.qty_num, 2.0)
        self.assertEqual(p.qty_text, "2 to 3 cups")
        self.assertEqual(p.unit, "cup")
        self.assertEqual(p.name, "flour")

    def test_unicode_fractions(self):
        self.assertEqual(parse_ingredient_line("½ tsp salt").qty_num, 0.5)
        self.assertEqual(parse_ingredient_line("1½ cups milk").qty_num, 1.5)

    def test_package_size_goes_into_quantity_text(self):
        p = parse_ingredient_line("1 (16 ounce) package spaghetti")
        self.assertEqual(p.qty_num, 1.0)
        self.assertEqual(p.unit, "package")
        self.assertEqual(p.qty_text, "1 (16 ounce) package")
        self.assertEqual(p.name, "spaghetti")

    def test_comma_clause_becomes_note(self):
        p = parse_ingredient_line("3 cloves garlic, minced")
        self.assertEqual(p.unit, "clove")
        self.assertEqual(p.name, "garlic")
        self.assertEqual(p.notes, "minced")

    def test_no_quantity(self):
        p = parse_ingredient_line("salt to taste")
        self.assertIsNone(p.qty_num)
        self.assertEqual(p.unit, "")
        self.assertTrue(p.name.startswith("salt"))

    def test_empty_input(self):
        self.assertIsNone(parse_ingredient_line(""))
        self.assertIsNone(parse_ingredient_line("   "))
        self.assertIsNone(parse_ingredient_line(None))

    def test_zero_denominator_keeps_unit_and_name(self):
        p = parse_ingredient_line("1/0 cup flour")
        self.assertIsNone(p.qty_num)
        self.assertEqual(p.unit, "cup")
        self.assertEqual(p.name, "flour")

    def test_bare_number_has_no_name(self):
        p = parse_ingredient_line("2")
        self.assertEqual(p.qty_num, 2)
        self.assertEqual(p.name_norm, "")

    def test_name_is_lowercased_for_norm(self):
        p = parse_ingredient_line("2 Large Eggs")
        self.assertEqual(p.name, "Large Eggs")
        self.assertEqual(p.name_norm, "large eggs")


class TestQuantityHelpers(unittest.TestCase):

    def test_parse_fraction(self):
        self.assertEqual(parse_fraction("3"), 3.0)
        self.assertEqual(parse_fraction("1/4"), 0.25)
        self.assertEqual(parse_fraction("1 1/2"), 1.5)
        self.assertIsNone(parse_fraction("1/0"))
        self.assertIsNone(parse_fraction("abc"))
        self.assertIsNone(parse_fraction(""))

    def test_parse_qty_text(self):
        self.assertEqual(parse_qty_text("1 1/2 lb"), (1.5, "lb"))
        self.assertEqual(parse_qty_text("250 grams"), (250.0, "g"))
        self.assertEqual(parse_qty_text("a handful"), (None, ""))

    def test_format_qty(self):
        self.assertEqual(format_qty(1.5, "cup"), "1 1/2 cup")
        self.assertEqual(format_qty(2, ""), "2")
        self.assertEqual(format_qty(1 / 3, "cup"), "1/3 cup")
        self.assertEqual(format_qty(1.1, "g"), "1.1 g")
        self.assertEqual(format_qty(None, "each"), "each")


if __name__ == '__main__':
    unittest.main()

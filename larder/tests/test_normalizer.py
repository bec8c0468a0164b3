import unittest
from larder.logic.shopping.normalizer import canonical_key, singularize


class TestCanonicalKey(unittest.TestCase):

    def test_aliases_and_qualifiers(self):
        self.assertEqual(canonical_key("Extra Virgin Olive Oil"), "olive oil")
        self.assertEqual(canonical_key("olive-oil"), "olive oil")
        self.assertEqual(canonical_key("Mayo"), "mayonnaise")
        self.assertEqual(canonical_key("scallions"), "green onion")
        self.assertEqual(canonical_key("grated parmesan"), "parmesan cheese")

    def test_prep_words_and_plurals(self):
        self.assertEqual(canonical_key("Chopped Onions"), "onion")
        self.assertEqual(canonical_key("Tomatoes"), "tomato")
        self.assertEqual(canonical_key("fresh berries"), "berry")
        self.assertEqual(canonical_key("asparagus"), "asparagus")

    def test_trivial_variants_share_a_key(self):
        self.assertEqual(canonical_key("Onion"), canonical_key("onions"))
        self.assertEqual(canonical_key("LARGE EGGS"), canonical_key("egg"))

    def test_idempotent(self):
        names = [
            "Extra Virgin Olive Oil", "Chopped Onions", "confectioners' sugar", "Large",
            "heavy whipping cream", "grated parmesan", "canned diced tomatoes", "Mayo",
            "half-n-half", "chicken stock", "", "   ",
        ]
        for name in names:
            key = canonical_key(name)
            self.assertEqual(canonical_key(key), key, name)

    def test_empty(self):
        self.assertEqual(canonical_key(""), "")
        self.assertEqual(canonical_key(None), "")

    def test_singularize(self):
        self.assertEqual(singularize("dishes"), "dish")
        self.assertEqual(singularize("potatoes"), "potato")
        self.assertEqual(singularize("glass"), "glass")
        self.assertEqual(singularize("peas"), "pea")
        self.assertEqual(singularize("gas"), "gas")


if __name__ == '__main__':
    unittest.main()

"""Ingredient name canonicalization for shopping-list grouping.

canonical_key collapses trivial variants onto one purchase line:
    "Extra Virgin Olive Oil"      -> "olive oil"
    "olive oil, extra-virgin"     -> "olive oil"
    "Chopped Onions"              -> "onion"
    "Mayo"                        -> "mayonnaise"

The mapping is pure and idempotent: canonical_key(canonical_key(n)) == canonical_key(n).
"""
import re
from typing import Dict, FrozenSet

__all__ = ["NOISE_WORDS", "ALIASES", "singularize", "canonical_key"]

NOISE_WORDS: FrozenSet[str] = frozenset({
    # prep
    "chopped", "diced", "minced", "sliced", "grated", "shredded", "crushed", "ground",
    "peeled", "cored", "seeded", "julienned", "halved", "quartered", "cubed", "smashed",
    "beaten", "whisked", "sifted", "melted", "softened", "toasted", "roasted", "cooked",
    "finely", "roughly", "coarsely", "thinly", "freshly", "divided",
    # qualifiers
    "fresh", "dried", "frozen", "raw", "organic", "kosher",
    "extra", "virgin", "reduced", "sodium", "low", "fat", "skim", "whole",
    "large", "medium", "small", "jumbo", "boneless", "skinless", "lean",
    # packaging
    "can", "canned", "jar", "jarred", "bottle", "bottled",
    "package", "packaged", "bag", "box", "of",
})

# Targets are written in canonical form so they reduce to themselves.
ALIASES: Dict[str, str] = {
    "mayo": "mayonnaise",
    "soy": "soy sauce",
    "parm": "parmesan cheese",
    "parmesan": "parmesan cheese",
    "parmigiano": "parmesan cheese",
    "parmigiano reggiano": "parmesan cheese",
    "oj": "orange juice",
    "bbq sauce": "barbecue sauce",
    "catsup": "ketchup",
    "evoo": "olive oil",
    "extra virgin olive oil": "olive oil",
    "veg oil": "vegetable oil",
    "veggie oil": "vegetable oil",
    "canola": "canola oil",
    "unsalted butter": "butter",
    "salted butter": "butter",
    "butter unsalted": "butter",
    "coriander": "cilantro",
    "scallion": "green onion",
    "spring onion": "green onion",
    "stock": "broth",
    "chicken stock": "chicken broth",
    "beef stock": "beef broth",
    "vegetable stock": "vegetable broth",
    "veggie stock": "vegetable broth",
    "veggie broth": "vegetable broth",
    "capsicum": "bell pepper",
    "courgette": "zucchini",
    "aubergine": "eggplant",
    "corn starch": "cornstarch",
    "corn flour": "cornstarch",
    "confectioner sugar": "powdered sugar",
    "icing sugar": "powdered sugar",
    "whipping cream": "heavy cream",
    "heavy whipping cream": "heavy cream",
    "half half": "half and half",
    "half n half": "half and half",
    "creme fraiche": "sour cream",
    "plain yogurt": "yogurt",
    "natural yogurt": "yogurt",
}

# Words whose trailing "s" is not a plural.
_INVARIANT = frozenset({
    "asparagus", "hummus", "couscous", "molasses", "swiss", "grits", "brussels",
    "citrus", "octopus", "hibiscus", "anise", "series", "species",
})

_MAX_PASSES = 8


def singularize(word: str) -> str:
    """Plural -> singular heuristics (tomatoes -> tomato, berries -> berry, dishes -> dish)."""
    w = word or ""
    if len(w) <= 3 or w in _INVARIANT:
        return w
    if w.endswith("ies"):
        return w[:-3] + "y"
    if w.endswith("oes"):
        return w[:-2]
    if w.endswith(("ches", "shes", "xes", "sses")):
        return w[:-2]
    if w.endswith(("ss", "us", "is")):
        return w
    if w.endswith("s"):
        return w[:-1]
    return w


def _reduce(name: str) -> str:
    norm = str(name or "").lower().replace("-", " ")
    norm = re.sub(r"[^\w\s]", "", norm)
    norm = re.sub(r"\s+", " ", norm).strip()
    if not norm:
        return ""
    if norm in ALIASES:
        return ALIASES[norm]
    tokens = norm.split(" ")
    key = " ".join(singularize(t) for t in tokens if t not in NOISE_WORDS)
    if key in ALIASES:
        return ALIASES[key]
    if not key:
        # e.g. "Large" on its own
        return singularize(tokens[-1])
    return key


def canonical_key(name: str) -> str:
    """Grouping key for an ingredient name, coarser than exact lowercase text."""
    key = _reduce(name)
    for _ in range(_MAX_PASSES):
        nxt = _reduce(key)
        if nxt == key:
            break
        key = nxt
    return key

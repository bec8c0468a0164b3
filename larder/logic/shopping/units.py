"""Unit vocabulary and conversion.

Canonical units form a closed set grouped by physical dimension. Volume and
mass units convert through one base unit per dimension (ml, g); count-like
units never convert.
"""
from __future__ import annotations
from enum import Enum
from typing import Dict, NamedTuple, Optional
import re

__all__ = [
    "Dimension", "CanonicalUnit", "Conversion", "UNIT_SYNONYMS", "TO_BASE",
    "canonicalize", "to_canonical_unit", "dimension_of", "compatible", "convert",
]


class Dimension(Enum):
    VOLUME = "volume"
    MASS = "mass"
    COUNT = "count"


class CanonicalUnit(str, Enum):
    # volume
    TSP = "tsp"
    TBSP = "tbsp"
    CUP = "cup"
    FL_OZ = "fl-oz"
    PINT = "pint"
    QUART = "quart"
    GALLON = "gallon"
    ML = "ml"
    L = "l"
    # mass
    G = "g"
    KG = "kg"
    OZ = "oz"
    LB = "lb"
    # count-like
    EACH = "each"
    CLOVE = "clove"
    SLICE = "slice"
    PIECE = "piece"
    PINCH = "pinch"
    DASH = "dash"
    CAN = "can"
    JAR = "jar"
    PACKAGE = "package"
    BUNCH = "bunch"
    HEAD = "head"
    SPRIG = "sprig"
    STICK = "stick"

    @property
    def dimension(self) -> Dimension:
        if self in TO_BASE:
            return TO_BASE[self][0]
        return Dimension.COUNT


# Factor to the dimension's base unit (ml for volume, g for mass).
TO_BASE: Dict[CanonicalUnit, tuple] = {
    CanonicalUnit.TSP: (Dimension.VOLUME, 4.92892159375),
    CanonicalUnit.TBSP: (Dimension.VOLUME, 14.78676478125),
    CanonicalUnit.CUP: (Dimension.VOLUME, 236.5882365),
    CanonicalUnit.FL_OZ: (Dimension.VOLUME, 29.5735295625),
    CanonicalUnit.PINT: (Dimension.VOLUME, 473.176473),
    CanonicalUnit.QUART: (Dimension.VOLUME, 946.352946),
    CanonicalUnit.GALLON: (Dimension.VOLUME, 3785.411784),
    CanonicalUnit.ML: (Dimension.VOLUME, 1.0),
    CanonicalUnit.L: (Dimension.VOLUME, 1000.0),
    CanonicalUnit.G: (Dimension.MASS, 1.0),
    CanonicalUnit.KG: (Dimension.MASS, 1000.0),
    CanonicalUnit.OZ: (Dimension.MASS, 28.349523125),
    CanonicalUnit.LB: (Dimension.MASS, 453.59237),
}

UNIT_SYNONYMS: Dict[str, CanonicalUnit] = {
    "tsp": CanonicalUnit.TSP, "tsps": CanonicalUnit.TSP,
    "teaspoon": CanonicalUnit.TSP, "teaspoons": CanonicalUnit.TSP,
    "tbsp": CanonicalUnit.TBSP, "tbsps": CanonicalUnit.TBSP, "tbs": CanonicalUnit.TBSP,
    "tbl": CanonicalUnit.TBSP, "tablespoon": CanonicalUnit.TBSP, "tablespoons": CanonicalUnit.TBSP,
    "c": CanonicalUnit.CUP, "cup": CanonicalUnit.CUP, "cups": CanonicalUnit.CUP,
    "fl-oz": CanonicalUnit.FL_OZ, "fl oz": CanonicalUnit.FL_OZ, "floz": CanonicalUnit.FL_OZ,
    "fluid ounce": CanonicalUnit.FL_OZ, "fluid ounces": CanonicalUnit.FL_OZ,
    "pint": CanonicalUnit.PINT, "pints": CanonicalUnit.PINT, "pt": CanonicalUnit.PINT,
    "quart": CanonicalUnit.QUART, "quarts": CanonicalUnit.QUART, "qt": CanonicalUnit.QUART,
    "gallon": CanonicalUnit.GALLON, "gallons": CanonicalUnit.GALLON, "gal": CanonicalUnit.GALLON,
    "ml": CanonicalUnit.ML, "milliliter": CanonicalUnit.ML, "milliliters": CanonicalUnit.ML,
    "millilitre": CanonicalUnit.ML, "millilitres": CanonicalUnit.ML,
    "l": CanonicalUnit.L, "liter": CanonicalUnit.L, "liters": CanonicalUnit.L,
    "litre": CanonicalUnit.L, "litres": CanonicalUnit.L,
    "g": CanonicalUnit.G, "gr": CanonicalUnit.G, "gram": CanonicalUnit.G, "grams": CanonicalUnit.G,
    "kg": CanonicalUnit.KG, "kgs": CanonicalUnit.KG, "kilogram": CanonicalUnit.KG,
    "kilograms": CanonicalUnit.KG,
    "oz": CanonicalUnit.OZ, "ounce": CanonicalUnit.OZ, "ounces": CanonicalUnit.OZ,
    "lb": CanonicalUnit.LB, "lbs": CanonicalUnit.LB, "pound": CanonicalUnit.LB,
    "pounds": CanonicalUnit.LB,
    "each": CanonicalUnit.EACH, "ea": CanonicalUnit.EACH, "pcs": CanonicalUnit.EACH,
    "whole": CanonicalUnit.EACH,
    "clove": CanonicalUnit.CLOVE, "cloves": CanonicalUnit.CLOVE,
    "slice": CanonicalUnit.SLICE, "slices": CanonicalUnit.SLICE,
    "piece": CanonicalUnit.PIECE, "pieces": CanonicalUnit.PIECE,
    "pinch": CanonicalUnit.PINCH, "pinches": CanonicalUnit.PINCH,
    "dash": CanonicalUnit.DASH, "dashes": CanonicalUnit.DASH,
    "can": CanonicalUnit.CAN, "cans": CanonicalUnit.CAN,
    "jar": CanonicalUnit.JAR, "jars": CanonicalUnit.JAR,
    "package": CanonicalUnit.PACKAGE, "packages": CanonicalUnit.PACKAGE,
    "pkg": CanonicalUnit.PACKAGE, "pkgs": CanonicalUnit.PACKAGE,
    "packet": CanonicalUnit.PACKAGE, "packets": CanonicalUnit.PACKAGE,
    "bunch": CanonicalUnit.BUNCH, "bunches": CanonicalUnit.BUNCH,
    "head": CanonicalUnit.HEAD, "heads": CanonicalUnit.HEAD,
    "sprig": CanonicalUnit.SPRIG, "sprigs": CanonicalUnit.SPRIG,
    "stick": CanonicalUnit.STICK, "sticks": CanonicalUnit.STICK,
}

_STRIP_PUNCT = re.compile(r"[.,;:()\[\]{}]")


class Conversion(NamedTuple):
    ok: bool
    qty: Optional[float]


def _clean(unit: str) -> str:
    s = _STRIP_PUNCT.sub("", str(unit or "")).strip().lower()
    return re.sub(r"\s+", " ", s)


def to_canonical_unit(unit: str) -> Optional[CanonicalUnit]:
    """Return the CanonicalUnit for a unit string, or None when it is not in the vocabulary."""
    s = _clean(unit)
    if not s:
        return None
    if s in UNIT_SYNONYMS:
        return UNIT_SYNONYMS[s]
    try:
        return CanonicalUnit(s)
    except ValueError:
        return None


def canonicalize(unit: str) -> str:
    """Map a unit synonym to its canonical code; unknown strings pass through lowercased."""
    cu = to_canonical_unit(unit)
    if cu is not None:
        return cu.value
    return str(unit or "").strip().lower()


def dimension_of(unit: str) -> Optional[Dimension]:
    cu = to_canonical_unit(unit)
    return cu.dimension if cu is not None else None


def compatible(a: str, b: str) -> bool:
    """True when both units convert within the same volume or mass dimension."""
    ca, cb = to_canonical_unit(a), to_canonical_unit(b)
    if ca is None or cb is None:
        return False
    if ca not in TO_BASE or cb not in TO_BASE:
        return False
    return TO_BASE[ca][0] is TO_BASE[cb][0]


def convert(qty: float, from_unit: str, to_unit: str) -> Conversion:
    """Convert qty between two units of the same dimension.

    Count-like units never convert, even to a similarly named unit.
    """
    try:
        q = float(qty)
    except (TypeError, ValueError):
        return Conversion(False, None)
    if q != q or q in (float("inf"), float("-inf")):
        return Conversion(False, None)
    if not compatible(from_unit, to_unit):
        return Conversion(False, None)
    src = TO_BASE[to_canonical_unit(from_unit)]
    dst = TO_BASE[to_canonical_unit(to_unit)]
    return Conversion(True, q * src[1] / dst[1])

"""Free-text ingredient line parsing.

parse_ingredient_line("1 1/2 cups chopped onions (white)") ->
    ParsedIngredient(qty_num=1.5, qty_text="1 1/2 cups", unit="cup",
                     name="chopped onions", notes="white", ...)

Quantities that cannot be read degrade to qty_num=None; nothing here raises on
messy input.
"""
from __future__ import annotations
import html
import re
from typing import NamedTuple, Optional, Tuple

from larder.logic.shopping.units import UNIT_SYNONYMS, canonicalize

__all__ = [
    "ParsedIngredient", "UNICODE_FRACTIONS", "parse_ingredient_line",
    "parse_fraction", "parse_qty_text", "format_qty",
]

UNICODE_FRACTIONS = {
    "½": "1/2", "⅓": "1/3", "⅔": "2/3", "¼": "1/4", "¾": "3/4",
    "⅕": "1/5", "⅖": "2/5", "⅗": "3/5", "⅘": "4/5",
    "⅙": "1/6", "⅚": "5/6",
    "⅛": "1/8", "⅜": "3/8", "⅝": "5/8", "⅞": "7/8",
}

_NUM = r"\d+\s+\d+/\d+|\d+/\d+|\d+(?:\.\d+)?|\.\d+"
_QTY_RE = re.compile(rf"^({_NUM})(?:\s*(?:to|-)\s*({_NUM}))?(?![\d/])")
_SIZE_PAREN_RE = re.compile(
    r"^\(([^)]*?\d[^)]*?(?:ounce|oz|lb|pound|gram|g|kg|ml|liter|litre|l)s?\.?[^)]*)\)\s*", re.I)
# Longest synonyms first so "fl oz" wins over "fl" and "tablespoons" over "tablespoon".
_UNIT_RE = re.compile(
    r"^(" + "|".join(re.escape(u) for u in sorted(UNIT_SYNONYMS, key=len, reverse=True)) + r")\.?(?=\s|$|,)",
    re.I)
_EDGE_JUNK = " \t.,;:)]}-/|&*+=!?<>\"`~#@$%^([{"


class ParsedIngredient(NamedTuple):
    raw: str
    qty_num: Optional[float]
    qty_text: str
    unit: str
    name: str
    name_norm: str
    notes: str


def _normalize_text(text: str) -> str:
    text = html.unescape(text)
    text = (text.replace("⁄", "/")
                .replace("–", "-").replace("—", "-")
                .replace("·", " ")
                .replace("“", '"').replace("”", '"')
                .replace("‘", "'").replace("’", "'")
                .replace(" ", " "))
    for uni, ascii_frac in UNICODE_FRACTIONS.items():
        # "1½" -> "1 1/2"
        text = re.sub(rf"(\d){uni}", rf"\1 {ascii_frac}", text)
        text = text.replace(uni, ascii_frac)
    return re.sub(r"\s+", " ", text).strip()


def parse_fraction(token: str) -> Optional[float]:
    """Numeric value of "3", "1.5", "1/2" or "1 1/2"; None when unreadable or the denominator is zero."""
    s = re.sub(r"\s+", " ", str(token or "").strip())
    if not s:
        return None
    m = re.match(r"^(\d+) (\d+)/(\d+)$", s)
    if m:
        den = int(m.group(3))
        if den == 0:
            return None
        return int(m.group(1)) + int(m.group(2)) / den
    m = re.match(r"^(\d+)/(\d+)$", s)
    if m:
        den = int(m.group(2))
        if den == 0:
            return None
        return int(m.group(1)) / den
    try:
        return float(s)
    except ValueError:
        return None


def _extract_notes(name: str) -> Tuple[str, str]:
    notes = []
    paren = re.compile(r"\(([^()]*)\)")
    m = paren.search(name)
    while m:
        content = m.group(1).strip()
        if content:
            notes.append(content)
        name = (name[:m.start()] + " " + name[m.end():]).strip()
        m = paren.search(name)
    m = re.search(r",\s*(.+)$", name)
    if m:
        notes.append(m.group(1).strip())
        name = name[:m.start()].strip()
    m = re.search(r"\s+-\s+(.+)$", name)
    if m:
        notes.append(m.group(1).strip())
        name = name[:m.start()].strip()
    return re.sub(r"\s+", " ", name), "; ".join(notes)


def parse_ingredient_line(text: str) -> Optional[ParsedIngredient]:
    """Split a free-text ingredient statement into quantity, unit, name and notes.

    Returns None for empty input. Ranges ("2 to 3 cups") keep only the first
    bound as qty_num; qty_text records both.
    """
    original = str(text or "").strip()
    if not original:
        return None
    remainder = _normalize_text(original)

    qty_num: Optional[float] = None
    qty_text = ""
    m = _QTY_RE.match(remainder)
    if m:
        first, second = m.group(1), m.group(2)
        qty_num = parse_fraction(first)
        qty_text = f"{first} to {second}" if second else first
        remainder = remainder[m.end():].strip()

    m = _SIZE_PAREN_RE.match(remainder)
    if m:
        size = m.group(1).strip()
        qty_text = f"{qty_text} ({size})" if qty_text else f"({size})"
        remainder = remainder[m.end():].strip()

    unit = ""
    m = _UNIT_RE.match(remainder)
    if m:
        unit = canonicalize(m.group(1))
        qty_text = f"{qty_text} {m.group(1)}" if qty_text else m.group(1)
        remainder = remainder[m.end():].strip()

    name, notes = _extract_notes(remainder)
    name = name.strip(_EDGE_JUNK)
    if name.startswith("of "):
        name = name[3:].strip()
    if len(name) > 1 and name[0] == name[-1] and name[0] in "\"'":
        name = name[1:-1].strip()

    return ParsedIngredient(
        raw=original,
        qty_num=qty_num,
        qty_text=qty_text,
        unit=unit,
        name=name,
        name_norm=name.lower(),
        notes=notes,
    )


def parse_qty_text(text: str) -> Tuple[Optional[float], str]:
    """Best-effort read of a pantry quantity phrase such as "1 1/2 lb"."""
    raw = _normalize_text(str(text or ""))
    m = re.match(rf"^({_NUM})\s*([^\d].*)?$", raw)
    if not m:
        return None, ""
    qty = parse_fraction(m.group(1))
    rest = (m.group(2) or "").strip()
    unit = ""
    if rest:
        um = _UNIT_RE.match(rest)
        unit = canonicalize(um.group(1)) if um else canonicalize(rest.split()[0])
    return qty, unit


_COMMON_FRACTIONS = (
    (0.125, "1/8"), (0.25, "1/4"), (1 / 3, "1/3"), (0.375, "3/8"), (0.5, "1/2"),
    (0.625, "5/8"), (2 / 3, "2/3"), (0.75, "3/4"), (0.875, "7/8"),
)


def format_qty(qty: Optional[float], unit: str = "") -> str:
    """Render a quantity for display, preferring kitchen fractions ("1 1/2 cup")."""
    u = str(unit or "").strip()
    if qty is None:
        return u
    try:
        n = float(qty)
    except (TypeError, ValueError):
        return u
    whole = int(n)
    frac = n - whole
    if frac < 0.01:
        text = str(whole)
    elif frac > 0.99:
        text = str(whole + 1)
    else:
        frac_text = next((t for d, t in _COMMON_FRACTIONS if abs(frac - d) < 0.02), "")
        if frac_text:
            text = f"{whole} {frac_text}" if whole > 0 else frac_text
        else:
            text = f"{round(n, 2):g}"
    return f"{text} {u}" if u else text

"""IngredientLine domain entity: one ingredient statement of a recipe, identified by (recipe_id, line_index)."""
from typing import NamedTuple, Optional


class SourceId(NamedTuple):
    """Provenance key of an ingredient line."""
    recipe_id: str
    line_index: int

    def to_dict(self):
        return {"rid": self.recipe_id, "idx": self.line_index}


class IngredientLine:
    def __init__(self, recipe_id: str = "", line_index: int = 0, raw_text: str = "", name: str = "",
                 qty_num: Optional[float] = None, qty_text: str = "", unit: str = "",
                 category: str = "", store_id: str = "", notes: str = ""):
        self.recipe_id = recipe_id
        self.line_index = line_index
        # raw_text is the scraped/entered statement; corrections only touch name/unit/category/store_id
        self._raw_text = raw_text or ""
        self.name = name or ""
        self.qty_num = qty_num
        self.qty_text = qty_text or ""
        self.unit = unit or ""
        self.category = category or ""
        self.store_id = store_id or ""
        self.notes = notes or ""

    @property
    def raw_text(self) -> str:
        return self._raw_text

    @property
    def source_id(self) -> SourceId:
        return SourceId(self.recipe_id, self.line_index)

    def __str__(self) -> str:
        qty = self.qty_text or ("" if self.qty_num is None else f"{self.qty_num:g} {self.unit}".strip())
        return f"{self.recipe_id}#{self.line_index}: {qty} {self.name}".replace("  ", " ")

    __repr__ = __str__

    @staticmethod
    def from_row(row) -> "IngredientLine":
        """Build from an `ingredients` table row (sqlite3.Row or dict with the column names)."""
        d = dict(row)
        qty = d.get("QtyNum")
        try:
            qty = float(qty) if qty is not None and qty != "" else None
        except (TypeError, ValueError):
            qty = None
        return IngredientLine(
            recipe_id=str(d.get("RecipeId") or ""),
            line_index=int(d.get("idx") or 0),
            raw_text=d.get("IngredientRaw") or "",
            name=d.get("IngredientNorm") or "",
            qty_num=qty,
            qty_text=d.get("QtyText") or "",
            unit=d.get("Unit") or "",
            category=d.get("Category") or "",
            store_id=d.get("StoreId") or "",
            notes=d.get("Notes") or "",
        )

    def to_dict(self):
        return {
            "RecipeId": self.recipe_id,
            "idx": self.line_index,
            "IngredientRaw": self.raw_text,
            "IngredientNorm": self.name,
            "QtyNum": self.qty_num,
            "QtyText": self.qty_text,
            "Unit": self.unit,
            "Category": self.category,
            "StoreId": self.store_id,
            "Notes": self.notes,
        }

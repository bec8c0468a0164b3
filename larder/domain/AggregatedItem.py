"""AggregatedItem: one shopping-list row built from every ingredient line sharing a canonical key."""
from typing import List, Optional
from larder.domain.IngredientLine import IngredientLine, SourceId
from larder.utilities.constants import DEFAULT_CATEGORY


class AggregatedItem:
    def __init__(self, canonical_key: str, display_title: str = "", example: str = "",
                 qty_num: Optional[float] = None, qty_text: str = "", unit: str = "",
                 category: str = "", store_id: str = ""):
        self.canonical_key = canonical_key
        self.display_title = display_title
        self.example = example
        self.original_names: List[str] = []
        self.source_ids: List[SourceId] = []
        self.qty_num = qty_num
        self.qty_text = qty_text
        self.unit = unit
        self.category = category
        self.store_id = store_id
        self.is_merged = False
        self.count = 0
        self.from_pantry = False
        self.partial_pantry = False
        # set once units failed to combine; qty_num stays None afterwards
        self.text_only = False

    @classmethod
    def seed(cls, key: str, line: IngredientLine) -> "AggregatedItem":
        """Start a group from its first contributing line."""
        item = cls(
            canonical_key=key,
            display_title=line.name,
            example=line.raw_text or line.name,
            qty_num=line.qty_num,
            qty_text=line.qty_text,
            unit=line.unit,
            category=line.category,
            store_id=line.store_id,
        )
        item.original_names.append(line.name)
        item.source_ids.append(line.source_id)
        item.count = 1
        return item

    def fold(self, line: IngredientLine):
        """Record that another line contributed to this group."""
        self.original_names.append(line.name)
        self.source_ids.append(line.source_id)
        self.is_merged = True
        self.count += 1

    def __str__(self) -> str:
        qty = self.qty_text or ""
        return f"{self.canonical_key} - {qty} (x{self.count}, store={self.store_id or '-'})"

    __repr__ = __str__

    def to_dict(self):
        d = {
            "Category": self.category or DEFAULT_CATEGORY,
            "IngredientNorm": self.canonical_key,
            "DisplayTitle": self.display_title,
            "QtyNum": self.qty_num,
            "QtyText": self.qty_text or "",
            "Unit": self.unit or "",
            "Examples": [self.example or self.display_title or self.canonical_key],
            "IsMerged": self.is_merged,
            "OriginalNames": list(self.original_names),
            "SourceIds": [s.to_dict() for s in self.source_ids],
            "Count": self.count,
        }
        if self.from_pantry:
            d["FromPantry"] = True
        if self.partial_pantry:
            d["PartialPantry"] = True
        return d

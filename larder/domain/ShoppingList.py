"""ShoppingList result: store groups of aggregated rows plus the pantry report of one build."""
from typing import Dict, List, Optional
from larder.domain.AggregatedItem import AggregatedItem
from larder.logic.shopping.quantity_parser import format_qty
from larder.utilities.constants import UNASSIGNED_STORE_LABEL


class ShoppingGroup:
    def __init__(self, store_id: str = ""):
        self.store_id = store_id or ""
        self.items: List[AggregatedItem] = []

    @property
    def is_unassigned(self) -> bool:
        return self.store_id == ""

    def add_item(self, item: AggregatedItem):
        '''
        Appends a row to the group (order of arrival is kept).
        '''
        self.items.append(item)

    def __str__(self) -> str:
        label = self.store_id or UNASSIGNED_STORE_LABEL
        items_str = ",\n\t".join(str(i) for i in self.items)
        return f"Store {label}:\n\t{items_str}"

    __repr__ = __str__

    def to_dict(self):
        return {"StoreId": self.store_id, "Items": [i.to_dict() for i in self.items]}


class PantryDeduction:
    def __init__(self, ingredient: str, deducted: float, unit: str, original_qty: float):
        self.ingredient = ingredient
        self.deducted = deducted
        self.unit = unit
        self.original_qty = original_qty

    def __str__(self) -> str:
        return f"{self.ingredient}: {format_qty(self.deducted, self.unit)} of {format_qty(self.original_qty, self.unit)}"

    __repr__ = __str__

    def to_dict(self):
        return {
            "ingredient": self.ingredient,
            "deducted": self.deducted,
            "unit": self.unit,
            "originalQty": self.original_qty,
        }


class PantryWarning:
    def __init__(self, name: str, current: Optional[float], threshold: Optional[float], unit: str = ""):
        self.name = name
        self.current = current
        self.threshold = threshold
        self.unit = unit or ""

    @property
    def message(self) -> str:
        return f"{self.name}: {self.current:g} {self.unit} (threshold: {self.threshold:g})".replace("  ", " ")

    def to_dict(self):
        return {
            "name": self.name,
            "current": self.current,
            "threshold": self.threshold,
            "unit": self.unit,
            "message": self.message,
        }


class ShoppingList:
    def __init__(self, groups: Optional[Dict[str, ShoppingGroup]] = None,
                 pantry_deductions: Optional[List[PantryDeduction]] = None,
                 pantry_warnings: Optional[List[PantryWarning]] = None):
        self.groups: Dict[str, ShoppingGroup] = groups or {}
        self.pantry_deductions = pantry_deductions[:] if pantry_deductions else []
        self.pantry_warnings = pantry_warnings[:] if pantry_warnings else []

    @property
    def deductions_applied(self) -> bool:
        return len(self.pantry_deductions) > 0

    def get_items(self) -> List[AggregatedItem]:
        '''
        Returns every row across all store groups.
        '''
        return [item for group in self.groups.values() for item in group.items]

    def find(self, canonical_key: str) -> Optional[AggregatedItem]:
        return next((i for i in self.get_items() if i.canonical_key == canonical_key), None)

    def __str__(self) -> str:
        groups_str = "\n".join(str(g) for g in self.groups.values())
        return f"Shopping List\n{groups_str}"

    def __repr__(self) -> str:
        return self.__str__()

    def to_dict(self):
        return {
            "groups": [g.to_dict() for g in self.groups.values()],
            "pantryDeductions": [d.to_dict() for d in self.pantry_deductions],
            "pantryWarnings": [w.to_dict() for w in self.pantry_warnings],
            "deductionsApplied": self.deductions_applied,
        }

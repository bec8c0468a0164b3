"""Plan domain entities: one recipe scheduled on a date/slot for a user."""
from datetime import date
from typing import Optional


class PlannedMeal:
    def __init__(self, day: date, slot: str, recipe_id: str, title: str = "",
                 user_id: Optional[int] = None, additional: bool = False, meal_id: Optional[int] = None):
        self.meal_id = meal_id
        self.day = day
        self.slot = slot
        self.recipe_id = recipe_id
        self.title = title
        self.user_id = user_id
        # Additional items are shared sides/desserts not tied to a user
        self.additional = additional

    def __str__(self) -> str:
        return f"{self.day.isoformat()} {self.slot}: {self.title or self.recipe_id}"

    __repr__ = __str__

    def to_dict(self):
        return {
            "id": self.meal_id,
            "date": self.day.isoformat(),
            "slot": self.slot,
            "recipeId": self.recipe_id,
            "title": self.title,
            "userId": self.user_id,
            "additional": self.additional,
        }

"""Recipe domain entity: id, title and ordered ingredient lines."""
from typing import List, Optional
from larder.domain.IngredientLine import IngredientLine
from larder.logic.shopping.quantity_parser import parse_ingredient_line


class Recipe:
    def __init__(self, recipe_id: str = "", title: str = "", ingredients: Optional[List[IngredientLine]] = None):
        self.recipe_id = recipe_id
        self.title = title
        self.ingredients = ingredients[:] if ingredients else []

    def __str__(self) -> str:
        return f"{self.title} ({self.recipe_id}) - {len(self.ingredients)} ingredients"

    __repr__ = __str__

    @staticmethod
    def from_text_lines(recipe_id: str, title: str, lines: List[str]) -> "Recipe":
        """Parse free-text ingredient statements into numbered IngredientLines (blank and name-less lines skipped)."""
        recipe = Recipe(recipe_id, title)
        for text in lines:
            parsed = parse_ingredient_line(text)
            if parsed is None or not parsed.name_norm:
                continue
            recipe.ingredients.append(IngredientLine(
                recipe_id=recipe_id,
                line_index=len(recipe.ingredients),
                raw_text=parsed.raw,
                name=parsed.name_norm,
                qty_num=parsed.qty_num,
                qty_text=parsed.qty_text,
                unit=parsed.unit,
                notes=parsed.notes,
            ))
        return recipe

    def to_dict(self):
        return {
            "RecipeId": self.recipe_id,
            "Title": self.title,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
        }

"""Recipe repository: recipes, their ingredient lines, and post-hoc corrections to those lines."""
import logging
import re
from typing import Iterable, List, Optional
from uuid import uuid4

from larder.domain.IngredientLine import IngredientLine, SourceId
from larder.domain.Recipe import Recipe
from larder.infra.database import Database, get_database

logger = logging.getLogger(__name__)


def _recipe_id_for(title: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", title.strip().lower()).strip("-")
    return f"{slug[:40]}-{uuid4().hex[:6]}" if slug else f"rec_{uuid4().hex[:10]}"


class RecipeRepository:
    def __init__(self, db: Optional[Database] = None):
        self.db = db or get_database()

    def upsert_recipe(self, title: str, lines: List[str], recipe_id: Optional[str] = None) -> Recipe:
        """Create or replace a recipe, parsing its free-text ingredient lines."""
        recipe_id = recipe_id or _recipe_id_for(title)
        recipe = Recipe.from_text_lines(recipe_id, title, lines)
        with self.db.transaction() as conn:
            conn.execute(
                """INSERT INTO recipes(RecipeId, Title, TitleLower, CreatedAt, UpdatedAt)
                   VALUES(?,?,?,datetime('now'),datetime('now'))
                   ON CONFLICT(RecipeId) DO UPDATE SET
                     Title=excluded.Title, TitleLower=excluded.TitleLower, UpdatedAt=excluded.UpdatedAt""",
                (recipe_id, title, title.lower()))
            conn.execute("DELETE FROM ingredients WHERE RecipeId=?", (recipe_id,))
            conn.executemany(
                """INSERT INTO ingredients(RecipeId, idx, IngredientNorm, IngredientRaw, Notes,
                                          QtyNum, QtyText, StoreId, Unit, Category)
                   VALUES(:RecipeId, :idx, :IngredientNorm, :IngredientRaw, :Notes,
                          :QtyNum, :QtyText, :StoreId, :Unit, :Category)""",
                [ing.to_dict() for ing in recipe.ingredients])
        logger.info("Saved recipe %s with %d ingredient lines", recipe_id, len(recipe.ingredients))
        return recipe

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        with self.db.connection() as conn:
            row = conn.execute("SELECT RecipeId, Title FROM recipes WHERE RecipeId=?", (recipe_id,)).fetchone()
            if row is None:
                return None
            lines = conn.execute(
                "SELECT * FROM ingredients WHERE RecipeId=? ORDER BY idx ASC", (recipe_id,)).fetchall()
        return Recipe(row["RecipeId"], row["Title"], [IngredientLine.from_row(r) for r in lines])

    def list_recipes(self) -> List[dict]:
        with self.db.connection() as conn:
            rows = conn.execute(
                "SELECT RecipeId, Title FROM recipes ORDER BY TitleLower ASC, RecipeId ASC").fetchall()
        return [dict(r) for r in rows]

    def list_ingredient_lines(self, recipe_ids: Iterable[str], conn=None) -> List[IngredientLine]:
        """Ingredient lines of the given recipes, ordered by name then provenance."""
        ids = [str(r) for r in recipe_ids if r]
        if not ids:
            return []
        placeholders = ",".join("?" for _ in ids)
        sql = f"""SELECT RecipeId, idx, IngredientNorm, IngredientRaw, Notes, QtyNum, QtyText, StoreId, Unit, Category
                  FROM ingredients WHERE RecipeId IN ({placeholders})
                  ORDER BY IngredientNorm ASC, RecipeId ASC, idx ASC"""
        if conn is not None:
            rows = conn.execute(sql, ids).fetchall()
        else:
            with self.db.connection() as own:
                rows = own.execute(sql, ids).fetchall()
        return [IngredientLine.from_row(r) for r in rows]

    def rename_ingredient(self, new_name: str, source_ids: Iterable[SourceId]) -> int:
        """Rewrite the canonical name of each listed line; the raw text stays as entered."""
        norm = (new_name or "").strip()
        if not norm:
            raise ValueError("newName cannot be empty")
        ids = list(source_ids)
        with self.db.transaction() as conn:
            for sid in ids:
                conn.execute("UPDATE ingredients SET IngredientNorm=? WHERE RecipeId=? AND idx=?",
                             (norm, sid.recipe_id, sid.line_index))
        logger.info("Renamed %d ingredient lines to %r", len(ids), norm)
        return len(ids)

    def assign_store(self, store_id: str, source_ids: Iterable[SourceId]) -> int:
        """Push a store choice back to each listed line. Returns rows changed."""
        updated = 0
        with self.db.transaction() as conn:
            for sid in source_ids:
                cur = conn.execute("UPDATE ingredients SET StoreId=? WHERE RecipeId=? AND idx=?",
                                   ((store_id or "").strip(), sid.recipe_id, sid.line_index))
                updated += cur.rowcount
        return updated

    def set_category(self, category: str, source_ids: Iterable[SourceId]) -> int:
        updated = 0
        with self.db.transaction() as conn:
            for sid in source_ids:
                cur = conn.execute("UPDATE ingredients SET Category=? WHERE RecipeId=? AND idx=?",
                                   ((category or "").strip(), sid.recipe_id, sid.line_index))
                updated += cur.rowcount
        return updated

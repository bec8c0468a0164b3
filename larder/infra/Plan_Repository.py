"""Plan repository: meals scheduled per user and date, plus shared additional items."""
import logging
from datetime import date
from typing import List, Optional

from larder.domain.Plan import PlannedMeal
from larder.infra.database import Database, PersistenceError, get_database
from larder.utilities.constants import DATE_FORMAT, MEAL_SLOTS, WHOLE_FAMILY_USER

logger = logging.getLogger(__name__)


class PlanRepository:
    def __init__(self, db: Optional[Database] = None):
        self.db = db or get_database()

    def default_user_id(self) -> int:
        user_id = self.db.user_id_by_name(WHOLE_FAMILY_USER)
        if user_id is None:
            raise PersistenceError(f"Default user '{WHOLE_FAMILY_USER}' is missing")
        return user_id

    def add_meal(self, day: date, slot: str, recipe_id: str, user_id: Optional[int] = None) -> PlannedMeal:
        if slot not in MEAL_SLOTS:
            raise ValueError(f"Unknown meal slot: {slot}")
        user_id = user_id or self.default_user_id()
        with self.db.transaction() as conn:
            title = self._recipe_title(conn, recipe_id)
            cur = conn.execute(
                "INSERT INTO user_plan_meals(user_id, date, slot, recipe_id, title) VALUES(?,?,?,?,?)",
                (user_id, day.strftime(DATE_FORMAT), slot, recipe_id, title))
        logger.info("Planned %s for %s %s (user %s)", recipe_id, day, slot, user_id)
        return PlannedMeal(day, slot, recipe_id, title, user_id=user_id, meal_id=cur.lastrowid)

    def add_additional_item(self, day: date, slot: str, recipe_id: str) -> PlannedMeal:
        """Schedule a shared side/dessert; it lands on every user's shopping list."""
        if slot not in MEAL_SLOTS:
            raise ValueError(f"Unknown meal slot: {slot}")
        with self.db.transaction() as conn:
            title = self._recipe_title(conn, recipe_id)
            cur = conn.execute(
                "INSERT INTO plan_additional_items(date, slot, recipe_id, title) VALUES(?,?,?,?)",
                (day.strftime(DATE_FORMAT), slot, recipe_id, title))
        return PlannedMeal(day, slot, recipe_id, title, additional=True, meal_id=cur.lastrowid)

    @staticmethod
    def _recipe_title(conn, recipe_id: str) -> str:
        row = conn.execute("SELECT Title FROM recipes WHERE RecipeId=?", (recipe_id,)).fetchone()
        if row is None:
            raise ValueError(f"Unknown recipe: {recipe_id}")
        return row["Title"] or ""

    def recipe_ids_between(self, start: date, end: date, user_id: Optional[int] = None, conn=None) -> List[str]:
        """Recipe ids scheduled in [start, end] for the user (or everyone), then additional items.

        Each recipe is listed once, at its first occurrence, however often it is planned.
        """
        if end < start:
            raise ValueError("end date must not be before start date")
        s, e = start.strftime(DATE_FORMAT), end.strftime(DATE_FORMAT)
        meal_sql = "SELECT recipe_id FROM user_plan_meals WHERE date BETWEEN ? AND ? AND recipe_id IS NOT NULL"
        params = [s, e]
        if user_id is not None:
            meal_sql += " AND user_id = ?"
            params.append(user_id)
        meal_sql += " ORDER BY date, slot, id"
        extra_sql = "SELECT recipe_id FROM plan_additional_items WHERE date BETWEEN ? AND ? ORDER BY date, slot, id"

        def _run(c):
            rows = c.execute(meal_sql, params).fetchall()
            rows += c.execute(extra_sql, (s, e)).fetchall()
            return list(dict.fromkeys(r["recipe_id"] for r in rows))

        if conn is not None:
            return _run(conn)
        with self.db.connection() as own:
            return _run(own)

    def get_meals(self, start: date, end: date, user_id: Optional[int] = None) -> List[PlannedMeal]:
        sql = "SELECT id, user_id, date, slot, recipe_id, title FROM user_plan_meals WHERE date BETWEEN ? AND ?"
        params = [start.strftime(DATE_FORMAT), end.strftime(DATE_FORMAT)]
        if user_id is not None:
            sql += " AND user_id = ?"
            params.append(user_id)
        with self.db.connection() as conn:
            rows = conn.execute(sql + " ORDER BY date, slot, id", params).fetchall()
            extras = conn.execute(
                "SELECT id, date, slot, recipe_id, title FROM plan_additional_items "
                "WHERE date BETWEEN ? AND ? ORDER BY date, slot, id", params[:2]).fetchall()
        meals = [PlannedMeal(date.fromisoformat(r["date"]), r["slot"], r["recipe_id"] or "", r["title"] or "",
                             user_id=r["user_id"], meal_id=r["id"]) for r in rows]
        meals += [PlannedMeal(date.fromisoformat(r["date"]), r["slot"], r["recipe_id"], r["title"] or "",
                              additional=True, meal_id=r["id"]) for r in extras]
        return meals

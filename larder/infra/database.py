"""
SQLite storage for the larder application.

One database file holds recipes and their ingredient lines, stores, users and
planned meals, and pantry stock. Writes go through Database.transaction(),
which opens a `BEGIN IMMEDIATE` transaction and commits or rolls back as a
unit.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from larder.utilities.config import DB_PATH, DB_TIMEOUT_SECONDS
from larder.utilities.constants import WHOLE_FAMILY_USER

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS recipes (
    RecipeId TEXT PRIMARY KEY,
    Title TEXT,
    TitleLower TEXT,
    CreatedAt TEXT,
    UpdatedAt TEXT
);

CREATE TABLE IF NOT EXISTS ingredients (
    RecipeId TEXT NOT NULL,
    idx INTEGER NOT NULL,
    IngredientNorm TEXT,
    IngredientRaw TEXT,
    Notes TEXT,
    QtyNum REAL,
    QtyText TEXT,
    StoreId TEXT,
    Unit TEXT,
    Category TEXT,
    PRIMARY KEY (RecipeId, idx),
    FOREIGN KEY (RecipeId) REFERENCES recipes(RecipeId) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS stores (
    StoreId TEXT PRIMARY KEY,
    Name TEXT,
    Priority INTEGER,
    UpdatedAt TEXT
);

CREATE TABLE IF NOT EXISTS users (
    user_id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT UNIQUE NOT NULL,
    is_active INTEGER DEFAULT 1,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS user_plan_meals (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL,
    date TEXT NOT NULL,
    slot TEXT NOT NULL,
    recipe_id TEXT,
    title TEXT,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY(user_id) REFERENCES users(user_id) ON DELETE CASCADE,
    FOREIGN KEY(recipe_id) REFERENCES recipes(RecipeId) ON DELETE SET NULL
);

CREATE TABLE IF NOT EXISTS plan_additional_items (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    date TEXT NOT NULL,
    slot TEXT NOT NULL,
    recipe_id TEXT NOT NULL,
    title TEXT,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY(recipe_id) REFERENCES recipes(RecipeId) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS pantry (
    ItemId TEXT PRIMARY KEY,
    Name TEXT,
    NameLower TEXT,
    QtyText TEXT,
    QtyNum REAL,
    Unit TEXT,
    StoreId TEXT,
    Notes TEXT,
    Category TEXT,
    expiration_date TEXT,
    low_stock_threshold REAL,
    UpdatedAt TEXT
);

CREATE INDEX IF NOT EXISTS idx_pantry_namelower ON pantry(NameLower, ItemId);
CREATE INDEX IF NOT EXISTS idx_ingredients_store_norm ON ingredients(StoreId, IngredientNorm);
CREATE INDEX IF NOT EXISTS idx_user_plan_meals_date ON user_plan_meals(date, user_id);
CREATE INDEX IF NOT EXISTS idx_additional_items_date ON plan_additional_items(date, slot);
"""


class PersistenceError(Exception):
    """Raised when the store cannot be read or written; the surrounding transaction is rolled back."""


class Database:
    """Interface for the application's SQLite database."""

    def __init__(self, db_path: Union[str, Path, None] = None, timeout: float = DB_TIMEOUT_SECONDS):
        """
        Initialize the database, creating the schema when missing.

        Args:
            db_path: Path of the SQLite file (defaults to config DB_PATH)
            timeout: Seconds to wait on a locked database before failing
        """
        self.db_path = Path(db_path) if db_path else DB_PATH
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.timeout = timeout
        self._init_schema()

    def _init_schema(self):
        with self.transaction() as conn:
            for statement in SCHEMA.split(";"):
                if statement.strip():
                    conn.execute(statement)
            # Seed the shared household user
            conn.execute("INSERT OR IGNORE INTO users(name) VALUES(?)", (WHOLE_FAMILY_USER,))
        logger.info("Database ready at %s", self.db_path)

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Open a connection with Row access; closed on exit."""
        try:
            conn = sqlite3.connect(self.db_path, timeout=self.timeout, isolation_level=None)
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot open database {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            conn.execute("PRAGMA foreign_keys = ON")
            yield conn
        finally:
            conn.close()

    @contextmanager
    def transaction(self, conn: Optional[sqlite3.Connection] = None) -> Iterator[sqlite3.Connection]:
        """
        Run a block inside one write transaction.

        Nested use with an existing connection joins the outer transaction.
        sqlite errors are re-raised as PersistenceError after rollback.
        """
        if conn is not None:
            yield conn
            return
        with self.connection() as conn:
            try:
                conn.execute("BEGIN IMMEDIATE")
            except sqlite3.Error as e:
                raise PersistenceError(f"Cannot start transaction: {e}") from e
            try:
                yield conn
                conn.execute("COMMIT")
            except sqlite3.Error as e:
                conn.execute("ROLLBACK")
                logger.error("Transaction rolled back: %s", e)
                raise PersistenceError(str(e)) from e
            except BaseException:
                conn.execute("ROLLBACK")
                logger.warning("Transaction rolled back after error")
                raise

    def user_id_by_name(self, name: str) -> Optional[int]:
        with self.connection() as conn:
            row = conn.execute("SELECT user_id FROM users WHERE name = ?", (name,)).fetchone()
        return row["user_id"] if row else None


_default_db: Optional[Database] = None


def get_database() -> Database:
    """Process-wide Database, created on first use from config."""
    global _default_db
    if _default_db is None:
        _default_db = Database()
    return _default_db


def set_database(db: Optional[Database]) -> None:
    """Swap the process-wide Database (tests point this at a temporary file)."""
    global _default_db
    _default_db = db


__all__ = ['Database', 'PersistenceError', 'get_database', 'set_database', 'SCHEMA']

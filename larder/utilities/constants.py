from typing import Final, Tuple

from larder.utilities.config import DAYS_BEFORE_EXPIRY as _DAYS_BEFORE_EXPIRY

# ISO dates sort correctly as TEXT in SQLite
DATE_FORMAT: Final[str] = "%Y-%m-%d"
DAYS_BEFORE_EXPIRY: Final[int] = _DAYS_BEFORE_EXPIRY
EXPIRING_WINDOW_RANGE: Final[Tuple[int, int]] = (1, 90)

MEAL_SLOTS: Final[Tuple[str, ...]] = ("breakfast", "lunch", "dinner")
WHOLE_FAMILY_USER: Final[str] = "Whole Family"
UNASSIGNED_STORE_LABEL: Final[str] = "Unassigned"
DEFAULT_CATEGORY: Final[str] = "Other"
DEFAULT_STORE_PRIORITY: Final[int] = 999

FROM_PANTRY_TEXT: Final[str] = "✓ From Pantry"

"""Configuration management for the larder application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR: Final[Path] = Path(__file__).parent.parent
env_path = BASE_DIR / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '127.0.0.1')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Storage
DATA_DIR: Final[Path] = Path(os.getenv('LARDER_DATA_DIR', str(BASE_DIR / 'data')))
DB_PATH: Final[Path] = Path(os.getenv('LARDER_DB_PATH', str(DATA_DIR / 'larder.db')))
DB_TIMEOUT_SECONDS: Final[float] = float(os.getenv('LARDER_DB_TIMEOUT', '10'))

# Pantry Alerts Configuration
DAYS_BEFORE_EXPIRY: Final[int] = int(os.getenv('DAYS_BEFORE_EXPIRY', '5'))

# -*- coding: utf-8 -*-


from pathlib import Path
from dataclasses import dataclass
import os

from dotenv import load_dotenv

# ============================================================================
# Load .env file for local environment configuration
# ============================================================================
load_dotenv()

# ============================================================================
# Read settings from environment variables (from .env or system)
# ============================================================================
_PROJECT_ROOT = Path(__file__).parent.parent

# Logging
_LOGS_DIR = Path(os.getenv("INTAKE_LOGS_DIR", str(_PROJECT_ROOT / "logs")))
_LOG_LEVEL = os.getenv("INTAKE_LOG_LEVEL", "INFO").upper()
_LOG_MAX_BYTES = int(os.getenv("INTAKE_LOG_MAX_BYTES", str(5 * 1024 * 1024)))
_LOG_BACKUP_COUNT = int(os.getenv("INTAKE_LOG_BACKUP_COUNT", "3"))

# Wizard
_REFERENCE_PREFIX = os.getenv("INTAKE_REFERENCE_PREFIX", "QTE")

# Optional cover limits (buildings / household contents)
_OPTIONAL_COVER_MIN = int(os.getenv("OPTIONAL_COVER_MIN", "10000"))
_OPTIONAL_COVER_MAX = int(os.getenv("OPTIONAL_COVER_MAX", "100000"))


@dataclass
class Config:
    """Application configuration."""

    # Application Info
    APP_NAME: str = "intake"
    VERSION: str = "1.0.0"

    # Paths
    PROJECT_ROOT: Path = _PROJECT_ROOT
    LOGS_DIR: Path = _LOGS_DIR

    # Logging
    LOG_FILE: str = f"{APP_NAME}.log"
    LOG_PATH: Path = LOGS_DIR / LOG_FILE
    LOG_LEVEL: str = _LOG_LEVEL
    LOG_MAX_BYTES: int = _LOG_MAX_BYTES
    LOG_BACKUP_COUNT: int = _LOG_BACKUP_COUNT

    # Wizard session
    REFERENCE_PREFIX: str = _REFERENCE_PREFIX

    # Validation limits
    OPTIONAL_COVER_MIN: int = _OPTIONAL_COVER_MIN
    OPTIONAL_COVER_MAX: int = _OPTIONAL_COVER_MAX
    MIN_VEHICLE_YEAR: int = 1950
    MIN_BUILDING_YEAR: int = 1800
    MAX_INDEMNITY_PERIOD_MONTHS: int = 36
    FLEET_MANAGEMENT_THRESHOLD: int = 10
    MIN_OPERATOR_HOURS: int = 100

    # Signatures
    SIGNATURE_TYPES: tuple = ("drawn", "uploaded")

"""
Configuration settings for the World Property backend
"""

import os
import logging

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Environment configuration
ENV = os.getenv("ENV", "PROD")  # PROD, QA or DEV
DATABASE_URL = os.getenv("DATABASE_URL")
PORT = int(os.getenv("PORT", 8080))

# Database pool sizing
DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", 2))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", 10))
DB_COMMAND_TIMEOUT = float(os.getenv("DB_COMMAND_TIMEOUT", 60))

# Marketplace behaviour
SAVED_SEARCH_LIMIT = int(os.getenv("SAVED_SEARCH_LIMIT", 20))
SEED_LISTINGS = _env_bool("SEED_LISTINGS", True)
DEFAULT_DISPLAY_CURRENCY = os.getenv("DEFAULT_DISPLAY_CURRENCY", "GBP")

# Bumped whenever the stage catalog changes shape
LEGAL_WORKFLOW_VERSION = 1

# CORS settings
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

logger.info(f"Environment: {ENV}")

if not DATABASE_URL:
    logger.warning("DATABASE_URL not set - falling back to in-memory repositories")

"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  In a
production deployment you should override these via environment
variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Space Ships API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # Path to the SQLite database.  Relative paths are resolved against
    # the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "space_ships.db")

    # The "present day" of the domain.  Ratings are computed relative to
    # it and it is also the latest production year accepted.
    reference_year: int = int(os.getenv("SHIP_REFERENCE_YEAR", "3019"))
    # Earliest production year accepted.
    min_prod_year: int = int(os.getenv("SHIP_MIN_PROD_YEAR", "2800"))

    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "3"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()

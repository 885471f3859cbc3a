"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API can be started locally without any configuration; in a production
deployment you should override them via environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Portfolio API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Prefix under which every route is mounted.  Empty by default so
    # that routes are exactly ``/auth/login``, ``/crud/pays`` and so on;
    # set ``API_PREFIX=/api`` to serve them under ``/api``.
    api_prefix: str = os.getenv("API_PREFIX", "")

    # Lifetime of issued bearer tokens in minutes.  ``0`` means tokens
    # never expire and stay valid until the user logs out.
    token_expire_minutes: int = int(os.getenv("TOKEN_EXPIRE_MINUTES", "0"))

    # Comma‑separated list of origins allowed by the CORS middleware.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Path to the SQLite database file.  If a relative path is
    # provided, it is resolved relative to the project root by the
    # ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "portfolio.db")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()

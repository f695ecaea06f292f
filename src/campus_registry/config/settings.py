"""
Configuration settings for the Campus Registry backend
"""

import os
import logging
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass
class Settings:
    """Environment-driven settings for the registry service"""

    # Supabase REST backend
    supabase_url: Optional[str] = field(default_factory=lambda: os.getenv("SUPABASE_URL"))
    supabase_key: Optional[str] = field(default_factory=lambda: os.getenv("SUPABASE_KEY"))

    # Direct Postgres backend (takes precedence when set)
    database_url: Optional[str] = field(default_factory=lambda: os.getenv("DATABASE_URL"))
    db_pool_min_size: int = field(default_factory=lambda: _env_int("DB_POOL_MIN_SIZE", 1))
    db_pool_max_size: int = field(default_factory=lambda: _env_int("DB_POOL_MAX_SIZE", 5))
    db_command_timeout: float = field(default_factory=lambda: _env_float("DB_COMMAND_TIMEOUT", 60))

    # Status banner lifetime
    status_timeout_seconds: float = field(default_factory=lambda: _env_float("STATUS_TIMEOUT_SECONDS", 3))

    # HTTP server
    port: int = field(default_factory=lambda: _env_int("PORT", 8080))
    allowed_origins: List[str] = field(default_factory=lambda: _env_list("ALLOWED_ORIGINS", "*"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    @property
    def backend(self) -> str:
        """Name of the table backend these settings select"""
        return "postgres" if self.database_url else "postgrest"

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors"""
        errors = []

        if not self.database_url:
            if not self.supabase_url:
                errors.append("SUPABASE_URL is required when DATABASE_URL is not set")
            if not self.supabase_key:
                errors.append("SUPABASE_KEY is required when DATABASE_URL is not set")

        if self.db_pool_min_size > self.db_pool_max_size:
            errors.append("DB_POOL_MIN_SIZE cannot exceed DB_POOL_MAX_SIZE")

        if self.status_timeout_seconds <= 0:
            errors.append("STATUS_TIMEOUT_SECONDS must be positive")

        return errors


def get_settings() -> Settings:
    """Read settings from the current environment"""
    settings = Settings()
    logger.debug(f"Settings loaded - backend: {settings.backend}")
    return settings

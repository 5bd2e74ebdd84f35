"""
Configuration management for Contact Watchman.

Uses pydantic-settings to load configuration from environment variables
(prefixed with ``CONTACT_WATCHMAN_``) and .env files.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Directories
    input_dir: Optional[Path] = None
    output_dir: Optional[Path] = None
    error_dir: Optional[Path] = None

    # File naming
    input_extension: str = ".csv"
    output_extension: str = ".json"

    # Worker Configuration
    max_workers: int = 4

    # Claim policy: a file that produced output stays claimed unless one of
    # these frees its name.
    release_on_success: bool = False
    delete_processed_input: bool = False

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="CONTACT_WATCHMAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def get_directories(self) -> dict[str, Optional[Path]]:
        """Return the configured directories keyed by role."""
        return {
            "input": self.input_dir,
            "output": self.output_dir,
            "error": self.error_dir,
        }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

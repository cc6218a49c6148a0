"""Centralized configuration for the streaming catalog analytics.

Every value can be overridden through environment variables or the
.env file; all sections carry safe defaults.

Usage:
    from streamcat.settings import settings

    settings.sources.catalog_files
    settings.analysis.divergence_min_year
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from streamcat.settings.analysis import AnalysisSettings
from streamcat.settings.base import LoggingSettings, PathsSettings
from streamcat.settings.database import DatabaseSettings
from streamcat.settings.sources import SourcesSettings

__all__ = [
    # Main
    "Settings",
    "settings",
    # Sections
    "PathsSettings",
    "LoggingSettings",
    "SourcesSettings",
    "DatabaseSettings",
    "AnalysisSettings",
    # Utilities
    "print_sources_status",
]


# =============================================================================
# GLOBAL SETTINGS
# =============================================================================


class Settings(BaseSettings):
    """Global application settings.

    Aggregates all configuration sections into a single object.
    Access via the singleton: `from streamcat.settings import settings`
    """

    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    paths: PathsSettings = Field(default_factory=PathsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    sources: SourcesSettings = Field(default_factory=SourcesSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"development", "production", "test"}
        v_lower = v.lower()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid ENVIRONMENT. Valid: {valid_envs}")
        return v_lower

    def model_post_init(self, _: Any) -> None:
        """Initialize directories after settings are loaded."""
        self.paths.ensure_directories()


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

settings = Settings()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def print_sources_status() -> None:
    """Print availability of every catalog source."""
    print("\nCATALOG SOURCES:")
    print("-" * 40)

    if settings.database.is_configured:
        print("  database: configured")
        for service, table in settings.database.catalog_tables.items():
            print(f"  {service:<8} -> table {table}")
        print(f"  {'genres':<8} -> table {settings.database.genres_table}")
    else:
        files = {**settings.sources.catalog_files, "genres": settings.sources.genres_path}
        for name, path in files.items():
            status = "ok" if path.exists() else "missing"
            print(f"  [{status:>7}] {name:<8} {path}")

    print("-" * 40)

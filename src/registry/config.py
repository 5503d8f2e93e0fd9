"""Application configuration with structured settings groups."""
import logging
from functools import lru_cache

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


# =============================================================================
# Nested Settings Models
# =============================================================================


class DatabaseSettings(BaseModel):
    """
    Engine options for the registry database.

    echo: Log every SQL statement through the sqlalchemy.engine logger.
    pool_pre_ping: Test pooled connections before handing them out.
    """

    echo: bool = False
    pool_pre_ping: bool = True


class LoggingSettings(BaseModel):
    """Root log level for the application loggers."""

    level: str = "INFO"


class SeedSettings(BaseModel):
    """
    Sample data loading.

    enabled: Load the bundled data set on startup when the registry is empty.
    data_file: Optional path to another JSON data set with the same layout.
    """

    enabled: bool = False
    data_file: str | None = None


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """
    Application settings with nested configuration groups.

    Environment variables use double underscore as delimiter for nested values.
    Example: DATABASE__ECHO=true, LOGGING__LEVEL=DEBUG, SEED__ENABLED=true
    """

    # Application metadata
    app_name: str = "Animal Registry API"
    app_version: str = "1.0.0"
    api_prefix: str = "/api/v1"

    # Database
    database_url: str = "postgresql+asyncpg://localhost/registry"

    # Nested settings groups
    database: DatabaseSettings = DatabaseSettings()
    logging: LoggingSettings = LoggingSettings()
    seed: SeedSettings = SeedSettings()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

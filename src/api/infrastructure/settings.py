"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Document store connection settings.

    Environment variables:
        RENTTRACKER_DB_HOST: Database host (default: localhost)
        RENTTRACKER_DB_PORT: Database port (default: 5432)
        RENTTRACKER_DB_DATABASE: Database name (default: renttracker)
        RENTTRACKER_DB_USERNAME: Database user (default: renttracker)
        RENTTRACKER_DB_PASSWORD: Database password (required in production)
        RENTTRACKER_DB_POOL_SIZE: Connections kept in the pool (default: 10)
        RENTTRACKER_DB_POOL_MAX_OVERFLOW: Extra connections under load (default: 0)
        RENTTRACKER_DB_ECHO: Log emitted SQL (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="RENTTRACKER_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="renttracker", description="Database name")
    username: str = Field(default="renttracker", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_size: int = Field(
        default=10,
        description="Connections kept in the pool",
        ge=1,
        le=100,
    )
    pool_max_overflow: int = Field(
        default=0,
        description="Connections allowed beyond pool_size under load",
        ge=0,
        le=100,
    )
    echo: bool = Field(default=False, description="Log emitted SQL statements")

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class Settings(BaseSettings):
    """Main application settings.

    Environment variables:
        RENTTRACKER_APP_NAME: Application name
        RENTTRACKER_DEBUG: Debug mode (default: false)
        RENTTRACKER_CREATE_SCHEMA: Create tables at startup instead of
            relying on alembic migrations (default: false)
        RENTTRACKER_SEED_DEFAULTS: Seed system default records at startup
            (default: true)
    """

    model_config = SettingsConfigDict(
        env_prefix="RENTTRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Rent Tracker API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    create_schema: bool = Field(
        default=False,
        description="Create tables at startup (development only)",
    )
    seed_defaults: bool = Field(
        default=True,
        description="Seed system default records at startup",
    )

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()

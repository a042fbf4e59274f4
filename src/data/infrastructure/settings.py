"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from aroma.domain.value_objects import LengthOfTime, TimeUnit


class CassandraSettings(BaseSettings):
    """Wide-column store connection settings.

    Environment variables:
        AROMA_CASSANDRA_CONTACT_POINTS: JSON list of hosts (default: ["localhost"])
        AROMA_CASSANDRA_PORT: Native protocol port (default: 9042)
        AROMA_CASSANDRA_KEYSPACE: Keyspace holding the Aroma tables (default: aroma)
        AROMA_CASSANDRA_USERNAME: Username for plain-text auth (optional)
        AROMA_CASSANDRA_PASSWORD: Password for plain-text auth (optional)
        AROMA_CASSANDRA_REQUEST_TIMEOUT_SECONDS: Per-request timeout (default: 10)
        AROMA_CASSANDRA_PROTOCOL_VERSION: Native protocol version (optional)
    """

    model_config = SettingsConfigDict(
        env_prefix="AROMA_CASSANDRA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    contact_points: list[str] = Field(
        default_factory=lambda: ["localhost"], description="Cluster contact points"
    )
    port: int = Field(default=9042, description="Native protocol port")
    keyspace: str = Field(default="aroma", description="Keyspace name")
    username: str | None = Field(default=None, description="Auth username")
    password: SecretStr = Field(default=SecretStr(""), description="Auth password")
    request_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout applied to every request",
        gt=0,
    )
    protocol_version: int | None = Field(
        default=None, description="Native protocol version", ge=3, le=5
    )


class DatabaseSettings(BaseSettings):
    """Relational store connection settings.

    Environment variables:
        AROMA_DB_URL: Full SQLAlchemy URL; overrides the individual fields
        AROMA_DB_DRIVERNAME: SQLAlchemy driver (default: postgresql+psycopg2)
        AROMA_DB_HOST: Database host (default: localhost)
        AROMA_DB_PORT: Database port (default: 5432)
        AROMA_DB_DATABASE: Database name (default: aroma)
        AROMA_DB_USERNAME: Database user (default: aroma)
        AROMA_DB_PASSWORD: Database password (required in production)
        AROMA_DB_POOL_MIN_CONNECTIONS: Connections kept in the pool (default: 2)
        AROMA_DB_POOL_MAX_CONNECTIONS: Upper bound on connections (default: 10)
        AROMA_DB_ECHO: Log every SQL statement (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="AROMA_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str | None = Field(default=None, description="Full SQLAlchemy URL")
    drivername: str = Field(
        default="postgresql+psycopg2", description="SQLAlchemy driver name"
    )
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="aroma", description="Database name")
    username: str = Field(default="aroma", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    echo: bool = Field(default=False, description="Echo SQL statements")

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self


class DataLayerDefaults(BaseSettings):
    """Service-wide lifetimes and bounds applied when callers omit them.

    Environment variables (each lifetime is a value plus a unit):
        AROMA_DEFAULTS_MESSAGE_LIFETIME_VALUE / _UNIT (default: 30 DAYS)
        AROMA_DEFAULTS_INBOX_LIFETIME_VALUE / _UNIT (default: 30 DAYS)
        AROMA_DEFAULTS_TOKEN_LIFETIME_VALUE / _UNIT (default: 60 DAYS)
        AROMA_DEFAULTS_ACTIVITY_LIFETIME_VALUE / _UNIT (default: 7 DAYS)
        AROMA_DEFAULTS_RECENTLY_CREATED_LIMIT: Rows read from recency projections
        AROMA_DEFAULTS_SEARCH_LIMIT: Rows scanned by best-effort searches
        AROMA_DEFAULTS_MAX_MEDIA_SIZE_BYTES: Largest accepted media blob
        AROMA_DEFAULTS_MAX_THUMBNAIL_SIZE_BYTES: Largest accepted thumbnail
    """

    model_config = SettingsConfigDict(
        env_prefix="AROMA_DEFAULTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    message_lifetime_value: int = Field(default=30, gt=0)
    message_lifetime_unit: TimeUnit = Field(default=TimeUnit.DAYS)
    inbox_lifetime_value: int = Field(default=30, gt=0)
    inbox_lifetime_unit: TimeUnit = Field(default=TimeUnit.DAYS)
    token_lifetime_value: int = Field(default=60, gt=0)
    token_lifetime_unit: TimeUnit = Field(default=TimeUnit.DAYS)
    activity_lifetime_value: int = Field(default=7, gt=0)
    activity_lifetime_unit: TimeUnit = Field(default=TimeUnit.DAYS)
    recently_created_limit: int = Field(default=200, ge=1, le=10_000)
    search_limit: int = Field(default=500, ge=1, le=100_000)
    max_media_size_bytes: int = Field(default=5 * 1024 * 1024, ge=1)
    max_thumbnail_size_bytes: int = Field(default=1024 * 1024, ge=1)

    @property
    def message_lifetime(self) -> LengthOfTime:
        return LengthOfTime(self.message_lifetime_value, self.message_lifetime_unit)

    @property
    def inbox_lifetime(self) -> LengthOfTime:
        return LengthOfTime(self.inbox_lifetime_value, self.inbox_lifetime_unit)

    @property
    def token_lifetime(self) -> LengthOfTime:
        return LengthOfTime(self.token_lifetime_value, self.token_lifetime_unit)

    @property
    def activity_lifetime(self) -> LengthOfTime:
        return LengthOfTime(self.activity_lifetime_value, self.activity_lifetime_unit)


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="AROMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Aroma Data", description="Application name")
    backend: Literal["cassandra", "memory"] = Field(
        default="cassandra", description="Which repository family to use"
    )
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def cassandra(self) -> CassandraSettings:
        """Get wide-column store settings."""
        return get_cassandra_settings()

    @property
    def database(self) -> DatabaseSettings:
        """Get relational store settings."""
        return get_database_settings()

    @property
    def defaults(self) -> DataLayerDefaults:
        """Get service-wide defaults."""
        return get_data_layer_defaults()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_cassandra_settings() -> CassandraSettings:
    """Get cached wide-column store settings."""
    return CassandraSettings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached relational store settings."""
    return DatabaseSettings()


@lru_cache
def get_data_layer_defaults() -> DataLayerDefaults:
    """Get cached service-wide defaults."""
    return DataLayerDefaults()

"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        ORGADMIN_DB_HOST: Database host (default: localhost)
        ORGADMIN_DB_PORT: Database port (default: 5432)
        ORGADMIN_DB_DATABASE: Database name (default: orgadmin)
        ORGADMIN_DB_USERNAME: Database user (default: orgadmin)
        ORGADMIN_DB_PASSWORD: Database password (required in production)
        ORGADMIN_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        ORGADMIN_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        ORGADMIN_DB_APPLICATION_NAME: Prefix of the pool application_name
            (default: orgadmin)
        ORGADMIN_DB_READ_STATEMENT_TIMEOUT_MS: Statement timeout of read
            connections, 0 disables it (default: 5000)
        ORGADMIN_DB_ECHO_SQL: Log every SQL statement (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="ORGADMIN_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="orgadmin", description="Database name")
    username: str = Field(default="orgadmin", description="Database username")
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
    application_name: str = Field(
        default="orgadmin",
        description="Prefix of the application_name reported by each pool",
        min_length=1,
    )
    read_statement_timeout_ms: int = Field(
        default=5000,
        description="Statement timeout of read connections (0 disables)",
        ge=0,
    )
    echo_sql: bool = Field(default=False, description="Log every SQL statement")

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class TenancySettings(BaseSettings):
    """Tenant resolution settings.

    Environment variables:
        ORGADMIN_TENANCY_CENTRAL_DOMAINS: JSON list of hosts served without a
            tenant (default: ["localhost", "127.0.0.1", "::1"])
        ORGADMIN_TENANCY_CACHE_TTL_SECONDS: Lifetime of cached tenant lookups
            (default: 3600)
        ORGADMIN_TENANCY_CACHE_MAX_ENTRIES: Most lookups kept before the least
            recently used are evicted (default: 10000)
        ORGADMIN_TENANCY_EXCLUDED_PATHS: JSON list of path prefixes that skip
            tenant resolution (default: ["/health"])
        ORGADMIN_TENANCY_SESSION_SECRET: Key signing the session cookie that
            remembers a switched tenant
    """

    model_config = SettingsConfigDict(
        env_prefix="ORGADMIN_TENANCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    central_domains: list[str] = Field(
        default=["localhost", "127.0.0.1", "::1"],
        description="Hosts that may be served without a resolved tenant",
    )
    cache_ttl_seconds: int = Field(
        default=3600,
        description="Seconds a tenant lookup stays cached",
        gt=0,
    )
    cache_max_entries: int = Field(
        default=10_000,
        description="Most tenant lookups kept in the cache",
        gt=0,
    )
    excluded_paths: list[str] = Field(
        default=["/health"],
        description="Path prefixes that bypass tenant resolution",
    )
    session_secret: SecretStr = Field(
        default=SecretStr("change-me"),
        description="Secret used to sign the session cookie",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="OrgAdmin API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def tenancy(self) -> TenancySettings:
        """Get tenancy settings."""
        return get_tenancy_settings()


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


@lru_cache
def get_tenancy_settings() -> TenancySettings:
    """Get cached tenancy settings."""
    return TenancySettings()

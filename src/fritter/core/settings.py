"""Application settings and configuration.

This module defines all configuration options for the Fritter Stage application.
Settings are loaded from environment variables with sensible defaults.
"""

from datetime import timedelta

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    This class defines all configuration options for the Fritter Stage application.
    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Fritter Stage", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")

    # Database configuration
    database_url: str = Field(default="sqlite:///./fritter.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # JWT authentication settings
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 30,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Freet content limits
    freet_max_length: int = Field(default=140, alias="FREET_MAX_LENGTH")

    # Feed composition
    feed_window_days: int = Field(default=7, alias="FEED_WINDOW_DAYS")
    default_sort: str = Field(default="hot", alias="DEFAULT_SORT")
    discovery_stride: int = Field(default=4, alias="DISCOVERY_STRIDE")

    # Audit trigger and resolution
    audit_window_hours: float = Field(default=12.0, alias="AUDIT_WINDOW_HOURS")
    audit_fail_ratio: float = Field(default=2.0, alias="AUDIT_FAIL_RATIO")
    audit_min_downvotes: int = Field(default=10, alias="AUDIT_MIN_DOWNVOTES")
    audit_report_ratio: float = Field(default=0.1, alias="AUDIT_REPORT_RATIO")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous database operations
        like Alembic migrations.

        Returns:
            Database URL compatible with synchronous database drivers
        """
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The active database URL (test database if in testing mode, otherwise production)
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def audit_window(self) -> timedelta:
        """Return how long an audit collects votes before it may resolve."""
        return timedelta(hours=self.audit_window_hours)

    @property
    def feed_window(self) -> timedelta:
        """Return how far back feeds look for modified freets."""
        return timedelta(days=self.feed_window_days)


settings = Settings()  # type: ignore[call-arg]

"""Application settings and configuration.

This module defines all configuration options for the Idea Catalog service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Idea Catalog", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Database configuration
    database_url: str = Field(default="sqlite:///./idea_catalog.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Catalog behaviour
    teaser_title_marker: str = Field(default="BuyButton", alias="TEASER_TITLE_MARKER")
    default_page_size: int = Field(default=20, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=100, alias="MAX_PAGE_SIZE")
    free_tier_showcase_limit: int = Field(default=5, alias="FREE_TIER_SHOWCASE_LIMIT")

    # Discussion behaviour
    comment_display_depth: int = Field(default=3, alias="COMMENT_DISPLAY_DEPTH")
    anonymous_display_name: str = Field(default="Anonymous", alias="ANONYMOUS_DISPLAY_NAME")

    # Project link statistics
    campaign_goal: int = Field(default=4000, alias="CAMPAIGN_GOAL")
    campaign_tools: list[str] = Field(
        default=["Claude", "Bolt", "Lovable"],
        alias="CAMPAIGN_TOOLS",
    )

    # Dashboard
    dashboard_top_ideas: int = Field(default=10, alias="DASHBOARD_TOP_IDEAS")
    recent_registration_days: int = Field(default=7, alias="RECENT_REGISTRATION_DAYS")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
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
        """
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()  # type: ignore[call-arg]

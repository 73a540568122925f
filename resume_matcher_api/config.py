"""Application configuration using pydantic-settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service settings
    service_host: str = Field(default="0.0.0.0", description="Host to bind the service")
    service_port: int = Field(default=8000, description="Port to bind the service")
    service_workers: int = Field(default=4, description="Number of worker processes")
    log_level: str = Field(default="info", description="Logging level")

    # Database - PostgreSQL connection
    database_url: str | None = Field(
        default=None,
        description="Full database connection URL (overrides individual fields)",
    )
    database_user: str = Field(default="resume_matcher", description="Database username")
    database_password: str = Field(default="dev_password", description="Database password")
    database_host: str = Field(default="localhost", description="Database host")
    database_port: int = Field(default=5432, description="Database port")
    database_name: str = Field(default="resume_matcher", description="Database name")
    database_pool_min_size: int = Field(
        default=5,
        description="Minimum database connection pool size",
    )
    database_pool_max_size: int = Field(
        default=20,
        description="Maximum database connection pool size",
    )
    database_ssl_mode: str = Field(
        default="prefer",
        description="SSL mode: disable, prefer, require",
    )

    # Security
    secret_key: str = Field(
        default="development-secret-key-change-in-production",
        description="Secret key for signing session tokens (rotating it logs everyone out)",
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    token_expire_days: int = Field(default=7, description="Signed token lifetime in days")
    session_expire_days: int = Field(default=7, description="Session record lifetime in days")
    bcrypt_rounds: int = Field(default=12, description="bcrypt cost factor for passwords")

    # Rate limiting
    max_queries_per_day: int = Field(
        default=5, description="Analyses allowed per user in the rolling window"
    )
    rate_limit_window_hours: int = Field(
        default=24, description="Length of the rolling rate limit window in hours"
    )

    # CORS
    allowed_origins: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)",
    )

    def get_allowed_origins(self) -> list[str]:
        """Get allowed origins as a list."""
        if isinstance(self.allowed_origins, str):
            return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]
        return self.allowed_origins

    # AI
    gemini_api_key: str | None = Field(default=None, description="Google Gemini API key")
    default_model: str = Field(default="gemini-1.5-flash", description="Default analysis model")

    # Uploads
    upload_dir: Path = Field(default=Path("./uploads"), description="Where uploaded files go")
    max_file_size_mb: int = Field(default=10, description="Maximum upload size per file")
    max_images: int = Field(default=6, description="Maximum images per upload request")

    def get_database_url(self) -> str:
        """
        Get PostgreSQL connection URL.

        If database_url is set, use it directly.
        Otherwise, construct from individual components.
        """
        from urllib.parse import quote_plus

        if self.database_url:
            return self.database_url

        user = quote_plus(self.database_user)
        password = quote_plus(self.database_password)

        ssl_param = ""
        if self.database_ssl_mode in ("require", "prefer"):
            ssl_param = f"?sslmode={self.database_ssl_mode}"

        return (
            f"postgresql://{user}:{password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}{ssl_param}"
        )


# Global settings instance
settings = Settings()

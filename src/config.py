"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database (MySQL connection parts)
    db_host: str = Field(default="localhost")
    db_port: int = Field(default=3306)
    db_user: str = Field(default="root")
    db_pass: str = Field(default="")
    database: str = Field(default="usuarios")

    # Full SQLAlchemy URL, takes precedence over the parts above
    database_url: str | None = Field(default=None)

    # Connection pool
    db_pool_size: int = Field(default=5)
    db_max_overflow: int = Field(default=10)

    # Password hashing
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # API
    environment: str = Field(default="development")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production" and self.database_url is None:
            if not self.db_pass:
                raise ValueError("DB_PASS must be set in production")
            if self.db_host in ("localhost", "127.0.0.1"):
                raise ValueError("DB_HOST should not use localhost in production")
        return self

    @property
    def database_url_resolved(self) -> str:
        """SQLAlchemy URL for the user database."""
        if self.database_url:
            return self.database_url
        url = URL.create(
            "mysql+pymysql",
            username=self.db_user,
            password=self.db_pass or None,
            host=self.db_host,
            port=self.db_port,
            database=self.database,
        )
        return url.render_as_string(hide_password=False)

    @property
    def alembic_url(self) -> str:
        """Database URL escaped for Alembic's configparser, which treats % as interpolation."""
        return self.database_url_resolved.replace("%", "%%")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

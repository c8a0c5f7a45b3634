"""Application configuration management using Pydantic Settings."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application Environment
    app_env: str = Field(default="development", alias="APP_ENV")

    # Flask Configuration
    secret_key: str = Field(..., alias="SECRET_KEY")
    flask_env: str = Field(default="development", alias="FLASK_ENV")

    # Forecast defaults applied when a request omits them
    default_state: str = Field(default="California", alias="DEFAULT_STATE")
    default_filing_status: str = Field(
        default="single", alias="DEFAULT_FILING_STATUS"
    )
    default_projection_years: int = Field(
        default=10, ge=1, le=100, alias="DEFAULT_PROJECTION_YEARS"
    )

    # Monte Carlo limits
    monte_carlo_max_simulations: int = Field(
        default=100000, ge=1, alias="MONTE_CARLO_MAX_SIMULATIONS"
    )
    monte_carlo_workers: int = Field(default=2, ge=1, alias="MONTE_CARLO_WORKERS")

    # Logging Configuration
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v):
        """Ensure SECRET_KEY is provided and not a placeholder."""
        if not v or v == "your-secret-key-here-change-in-production":
            raise ValueError("SECRET_KEY must be set to a secure value")
        return v

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v):
        """Validate application environment."""
        allowed_envs = {"development", "testing", "production"}
        if v not in allowed_envs:
            raise ValueError(f"APP_ENV must be one of {allowed_envs}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed_levels:
            raise ValueError(f"LOG_LEVEL must be one of {allowed_levels}")
        return v.upper()

    @field_validator("default_filing_status")
    @classmethod
    def validate_default_filing_status(cls, v):
        """Validate the default filing status."""
        allowed_statuses = {
            "single",
            "married_filing_jointly",
            "married_filing_separately",
            "head_of_household",
        }
        if v not in allowed_statuses:
            raise ValueError(f"DEFAULT_FILING_STATUS must be one of {allowed_statuses}")
        return v


def get_settings(env_file: Optional[str] = None) -> Settings:
    """Get application settings instance."""
    if env_file is not None:
        return Settings(_env_file=env_file)
    return Settings()


# Global settings instance - created lazily on first use
_settings: Optional[Settings] = None


def get_global_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = get_settings()
    return _settings


def reset_global_settings() -> None:
    """Reset global settings instance (useful for testing)."""
    global _settings
    _settings = None

# backend/portfolio_engine/config.py
"""
Engine configuration using Pydantic Settings.

Loads configuration from environment variables with validation:
- ENVIRONMENT: Runtime mode (development, test, production)
- LOG_LEVEL / LOG_FORMAT: Logging setup used by setup_logging()
- PROJECTION_YEARS: Horizon for the portfolio projection and chart series
- PROJECTION_TIME_HORIZONS: Horizons used by get_investment_projections()

Invalid configuration raises a ValueError with a descriptive message
when the settings object is created.

Usage:
    from portfolio_engine.config import settings

    horizon = settings.projection_years
"""
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Optional .env next to the backend/ directory
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_PROJECT_ROOT = _BACKEND_DIR.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """
    Engine settings loaded from environment variables.

    Environment variables:
        - ENVIRONMENT: Runtime environment (development, test, production)
        - APP_NAME: Name reported in logs (default: "Portfolio Statistics Engine")
        - LOG_LEVEL: Logging level (default: "INFO")
        - LOG_FORMAT: "text" or "json" (default: "text")
        - PROJECTION_YEARS: Years compounded for projections (default: 10)
        - PROJECTION_TIME_HORIZONS: JSON list of horizons (default: [1, 3, 5, 10])
    """

    environment: Literal["development", "test", "production"] = Field(
        default="development",
        description="Runtime environment (development, test, production)"
    )

    app_name: str = "Portfolio Statistics Engine"

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        default="text",
        description="Log output format (text or json)"
    )

    # =========================================================================
    # PROJECTIONS
    # =========================================================================
    projection_years: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Years used for the portfolio projected value and chart data"
    )
    projection_time_horizons: list[int] = Field(
        default=[1, 3, 5, 10],
        description="Horizons (in years) returned by get_investment_projections"
    )

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_engine_config(self) -> "Settings":
        """
        Validate cross-field settings.

        Rules:
        - log_format must be "text" or "json"
        - every projection horizon must be a positive number of years
        """
        if self.log_format.lower() not in ("text", "json"):
            raise ValueError(
                f"Invalid LOG_FORMAT: '{self.log_format}'. Valid options: text, json"
            )

        invalid = [h for h in self.projection_time_horizons if h <= 0]
        if invalid:
            raise ValueError(
                f"PROJECTION_TIME_HORIZONS must be positive, got: {invalid}"
            )

        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


# Create single instance
settings = Settings()

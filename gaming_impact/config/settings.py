"""Gaming Impact settings loaded from environment variables."""

from enum import StrEnum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    """Deployment environment."""

    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Engine-wide settings loaded from environment variables / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- IO model ---
    IO_BASE_YEAR: int = Field(
        default=2019,
        ge=1997,
        le=2100,
        description="Vintage of the StateIO tables; employment coefficients are in these dollars.",
    )
    PCE_COLUMN: str = Field(
        default="F010",
        description="Use-table final-demand column holding personal consumption expenditure.",
    )
    EMPLOYMENT_FALLBACK_COEF: float = Field(
        default=10.0,
        gt=0,
        description="Jobs per $1M value added when a state has no usable employment data.",
    )

    # --- Batch ---
    BATCH_MAX_WORKERS: int = Field(
        default=4,
        ge=1,
        description="Thread pool size for per-state multiplier computation.",
    )
    MULTIPLIER_TABLE_PATH: str = Field(
        default="./data/state_multipliers.csv",
        description="Where the batch writes, and the request layer reads, the multiplier table.",
    )

    # --- State lookup ---
    STATE_MATCH_CUTOFF: float = Field(
        default=80.0,
        ge=0,
        le=100,
        description="Minimum rapidfuzz ratio for typo suggestions on unknown state names.",
    )
    STATE_SUGGESTION_SAMPLE: int = Field(
        default=10,
        ge=1,
        description="How many valid states to list when nothing resembles the request.",
    )

    # --- Logging ---
    LOG_LEVEL: LogLevel = Field(
        default=LogLevel.INFO,
        description="Application log level.",
    )

    # --- Environment ---
    ENVIRONMENT: Environment = Field(
        default=Environment.DEV,
        description="Deployment environment (dev/staging/prod).",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENVIRONMENT == Environment.PROD


def get_settings() -> Settings:
    """Factory function for dependency injection."""
    return Settings()

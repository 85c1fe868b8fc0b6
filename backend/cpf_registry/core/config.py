"""Application Configuration.

Centralized configuration using Pydantic Settings for type safety and validation.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import StoreBackends


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application
    APP_NAME: str = "CPF Registry"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # API
    API_V1_PREFIX: str = "/api/v1"

    # Persistence
    DATABASE_URL: str = Field(
        default="sqlite:///./cpf_registry.db",
        description="SQLAlchemy URL for the durable user store"
    )
    USER_STORE_BACKEND: str = Field(
        default=StoreBackends.DATABASE,
        description="User store selected by the API layer: 'database' or 'memory'"
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # Business rules
    CREDIT_ELIGIBILITY_MIN_MONTHS: int = Field(
        default=6,
        description="Whole months since enrollment required for credit eligibility"
    )

    # Spreadsheet import
    MAX_SPREADSHEET_SIZE_KB: int = Field(
        default=1024,
        description="Maximum accepted CSV upload size in KB"
    )

    @field_validator('ENVIRONMENT', mode='after')
    @classmethod
    def validate_environment(cls, v):
        if v not in ("development", "test", "production"):
            raise ValueError(f"ENVIRONMENT must be development, test or production, got '{v}'")
        return v

    @field_validator('USER_STORE_BACKEND', mode='after')
    @classmethod
    def validate_store_backend(cls, v):
        """Only the known store backends can be selected."""
        if v not in StoreBackends.ALL:
            raise ValueError(
                f"USER_STORE_BACKEND must be one of {StoreBackends.ALL}, got '{v}'"
            )
        return v

    @field_validator('LOG_LEVEL', mode='after')
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"LOG_LEVEL '{v}' is not a valid logging level")
        return level

    @field_validator('CREDIT_ELIGIBILITY_MIN_MONTHS', 'MAX_SPREADSHEET_SIZE_KB', mode='after')
    @classmethod
    def validate_positive(cls, v, info):
        if v <= 0:
            raise ValueError(f"{info.field_name} must be greater than zero")
        return v


settings = Settings()

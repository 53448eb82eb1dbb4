"""Library configuration using pydantic-settings."""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    # Application Configuration
    app_env: str = Field(default="development", description="Application environment (development/staging/production)")
    log_level: str = Field(default="INFO", description="Logging level")

    # Invoice Defaults
    default_currency: str = Field(default="USD", min_length=3, max_length=3, description="ISO 4217 currency for new invoices")
    minimum_invoice_amount: float = Field(
        default=0.50,
        ge=0,
        description="Smallest chargeable amount in major currency units; finalized invoices below it are cancelled",
    )

    # Identifier Prefixes
    discount_id_prefix: str = Field(default="discount", description="Prefix for generated discount IDs")
    credit_id_prefix: str = Field(default="credit", description="Prefix for generated credit IDs")


# Global settings instance
settings = Settings()

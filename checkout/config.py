from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    PAYPAL_CLIENT_ID: str
    PAYPAL_CLIENT_SECRET: str
    PAYPAL_ENVIRONMENT: Literal["sandbox", "production"] = "sandbox"
    PAYPAL_TIMEOUT: float = Field(default=60, gt=0)
    PAYPAL_LOG_BODIES: bool = False
    HTTP_PORT: int = Field(
        default=8080, validation_alias=AliasChoices("HTTP_PORT", "PORT")
    )
    LOG_LEVEL: str = "INFO"

    # Create-order pricing policy. The cart is not priced.
    ORDER_CURRENCY: str = "USD"
    ORDER_AMOUNT: Decimal = Decimal("100")
    ORDER_INTENT: Literal["AUTHORIZE", "CAPTURE"] = "AUTHORIZE"
    CARD_VERIFICATION_METHOD: str | None = "SCA_WHEN_REQUIRED"
    ORDER_SHIPPING_OPTIONS: bool = True

    @field_validator("PAYPAL_CLIENT_ID", "PAYPAL_CLIENT_SECRET")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("CARD_VERIFICATION_METHOD")
    @classmethod
    def _empty_disables(cls, value: str | None) -> str | None:
        return value or None

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached Settings instance."""
    return Settings()

"""
Configuration Management for BillSplit

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Nothing in the ledger reads the environment directly; the flow and the UI
receive a settings object and pass values down explicitly.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BillSplitSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from BILLSPLIT_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="BILLSPLIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Tax
    default_tax_rate: Decimal = Field(
        default=Decimal("0"),
        description="Tax rate (percent) pre-filled in the UI"
    )
    min_tax_rate: Decimal = Field(
        default=Decimal("0"),
        description="Lowest tax rate the UI accepts"
    )
    max_tax_rate: Decimal = Field(
        default=Decimal("100"),
        description="Highest tax rate the UI accepts"
    )

    # Export
    summary_title: str = Field(
        default="Bill Summary",
        min_length=1,
        max_length=100,
        description="Header line of the exported summary"
    )

    # Audit
    activity_history_size: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Number of audit events kept in memory for the activity panel"
    )

    @model_validator(mode='after')
    def validate_tax_bounds(self) -> 'BillSplitSettings':
        """Validate the UI tax range."""
        if self.max_tax_rate < self.min_tax_rate:
            raise ValueError("max_tax_rate cannot be below min_tax_rate")
        if not self.min_tax_rate <= self.default_tax_rate <= self.max_tax_rate:
            raise ValueError("default_tax_rate must lie within the tax bounds")
        return self

    def clamp_tax_rate(self, rate: Decimal) -> Decimal:
        """
        Clamp a user-entered tax rate to the configured bounds.

        Only the UI clamps. The calculation core accepts any finite rate.
        """
        return max(self.min_tax_rate, min(self.max_tax_rate, rate))


@lru_cache()
def get_settings() -> BillSplitSettings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return BillSplitSettings()

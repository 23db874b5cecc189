"""
Configuration Management for FinanceFlow

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Nothing in the app requires configuration to start; every field has a
default so a fresh checkout runs with `streamlit run app/main.py`.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Key-value store configuration."""
    
    model_config = SettingsConfigDict(
        env_prefix="FINANCEFLOW_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    backend: Literal["file", "memory"] = Field(
        default="file",
        description="Where to keep the store: a JSON file or process memory"
    )
    file_path: Path = Field(
        default=Path(".financeflow/storage.json"),
        description="Location of the JSON store when backend is 'file'"
    )
    
    @field_validator('file_path')
    @classmethod
    def validate_file_path(cls, v: Path) -> Path:
        """The store file must not point at a directory."""
        if v.exists() and v.is_dir():
            raise ValueError(f"Storage path {v} is a directory, expected a file")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.
    
    Loads configuration from environment variables and .env file.
    """
    
    model_config = SettingsConfigDict(
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
    
    # Display
    currency_symbol: str = Field(
        default="$",
        min_length=1,
        max_length=3,
        description="Symbol shown in front of every amount"
    )
    
    # Analytics
    trend_months: int = Field(
        default=6,
        ge=1,
        le=24,
        description="Number of months in the spending trend chart"
    )
    top_categories_count: int = Field(
        default=5,
        ge=1,
        le=20,
        description="How many categories the top spending chart shows"
    )
    recent_transactions_limit: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Transactions listed on the overview page"
    )
    
    @property
    def log_level(self) -> str:
        """Stdlib log level name derived from debug mode."""
        return "DEBUG" if self.debug_mode else "INFO"


class Settings(BaseSettings):
    """
    Root settings container.
    
    Aggregates all sub-settings for easy access.
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()
    
    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).
    
    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.
    
    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}
    
    settings = get_settings()
    
    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)
    
    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)
    
    return results

"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerCoreConfig(BaseSettings):
    """Ledger core configuration"""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_CORE_",
        env_file=".env",
        case_sensitive=False,
    )

    # Decimal arithmetic
    decimal_precision: int = 28  # Significant digits of the global decimal context

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stderr

    # Plugins a new Ledger starts with, e.g. ["beancount.plugins.sellgains"]
    default_plugins: List[str] = []


# Global configuration instance
config = LedgerCoreConfig()


def get_config() -> LedgerCoreConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> LedgerCoreConfig:
    """Reload configuration from environment"""
    global config
    config = LedgerCoreConfig()
    return config

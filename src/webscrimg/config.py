# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to fetch headers, pipeline limits, classifier tuning and logging config

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_ACCEPT_LANGUAGE = "pt-BR,pt;q=0.9,en-US;q=0.8,en;q=0.7"


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="WEBSCRIMG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # HTTP fetch configuration
    request_timeout: float = Field(default=15.0, gt=0, description="Per-source request timeout in seconds")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent header sent to every source")
    accept_language: str = Field(
        default=DEFAULT_ACCEPT_LANGUAGE, description="Accept-Language header; several sources vary markup by locale"
    )
    fetch_retries: int = Field(
        default=2, ge=1, description="Total attempts for a fetch that fails with a transport (connection) error"
    )

    # Pipeline configuration
    default_limit: int = Field(default=20, ge=1, description="Images per page when the caller does not say")
    default_concurrency: int = Field(default=4, ge=1, description="Concurrent sources during a fan-out")
    candidate_multiplier: int = Field(
        default=3, ge=1, description="Raw candidates scanned per requested image before a strategy stops"
    )

    # Classifier tuning
    min_image_dimension: int = Field(
        default=100, ge=0, description="w=/h= query hints below this many pixels mark an icon-sized image"
    )
    extra_blocked_keywords: list[str] = Field(
        default_factory=list, description="Keywords added to the built-in chrome-image blocklist"
    )
    extra_blocked_hosts: list[str] = Field(
        default_factory=list, description="Host or path fragments added to the CDN-chrome blocklist"
    )

    # Source registry
    extra_sources: dict[str, str] = Field(
        default_factory=dict, description="Additional sources as a JSON object of id -> URL template"
    )

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance

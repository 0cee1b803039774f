"""
Configuration settings - Infrastructure component for managing application configuration.
Uses pydantic-settings for validation and environment variable loading.
"""

from __future__ import annotations
from typing import Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TRANSPORT_BACKENDS = ('requests', 'httpx')


class TransportSettings(BaseSettings):
    """Transport configuration shared by every attempt of an executor."""

    model_config = SettingsConfigDict(env_prefix='FALLBACK_', env_file='.env', extra='ignore')

    backend: str = Field('requests')
    connect_timeout_s: float = Field(5.0)
    read_timeout_s: float = Field(30.0)
    user_agent: str = Field('fallback-chain/1.0')
    verify_tls: bool = Field(True)
    follow_redirects: bool = Field(True)

    @field_validator('backend')
    @classmethod
    def validate_backend(cls, v: str) -> str:
        """Unknown backends fall back to requests."""
        v = (v or '').strip().lower()
        return v if v in TRANSPORT_BACKENDS else 'requests'

    @field_validator('connect_timeout_s', 'read_timeout_s')
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        return max(0.1, v)


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(env_prefix='FALLBACK_', env_file='.env', extra='ignore')

    transport: TransportSettings = Field(default_factory=TransportSettings)

    quiet: bool = Field(False)

    # Logging
    log_level: str = Field('INFO')
    log_format: str = Field('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            return 'INFO'
        return v.upper()

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary for serialization."""
        return {
            'transport': self.transport.model_dump(),
            'quiet': self.quiet,
            'log_level': self.log_level
        }


# Global settings instance
_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get global settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Reload settings from environment (for testing)."""
    global _settings
    _settings = AppSettings()
    return _settings

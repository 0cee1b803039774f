"""Configuration package."""

from .settings import AppSettings, TransportSettings, get_settings, reload_settings

__all__ = ['AppSettings', 'TransportSettings', 'get_settings', 'reload_settings']

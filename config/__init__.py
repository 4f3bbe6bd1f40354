"""
Configuration module.

Exports:
    settings: Application settings instance
    get_settings: Function to get settings (for dependency injection)
    Settings: Settings class
"""

from config.settings import settings, get_settings, Settings

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",
]

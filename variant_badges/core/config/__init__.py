"""
Configuration module for Variant Badges
"""

from .settings import settings, Settings, get_settings
from .settings import (
    DatabaseSettings,
    ShopifySettings,
    PlanSettings,
    LoggingSettings,
)

__all__ = [
    "settings",
    "Settings",
    "get_settings",
    "DatabaseSettings",
    "ShopifySettings",
    "PlanSettings",
    "LoggingSettings",
]

"""
SQLAlchemy models for Variant Badges
"""

from .base import Base, BaseModel, TimestampMixin, IDMixin, ShopScopedMixin
from .enums import PlanName, SubscriptionStatus, AnalyticsEventType, ChargeStatus
from .shop import Shop
from .app_settings import AppSettings
from .badge_assignment import BadgeAssignment
from .subscription import Subscription
from .badge_analytics import BadgeAnalyticsEvent

__all__ = [
    "Base",
    "BaseModel",
    "TimestampMixin",
    "IDMixin",
    "ShopScopedMixin",
    "PlanName",
    "SubscriptionStatus",
    "AnalyticsEventType",
    "ChargeStatus",
    "Shop",
    "AppSettings",
    "BadgeAssignment",
    "Subscription",
    "BadgeAnalyticsEvent",
]

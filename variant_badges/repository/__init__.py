from .ShopRepository import ShopRepository
from .SettingsRepository import SettingsRepository
from .BadgeAssignmentRepository import BadgeAssignmentRepository
from .SubscriptionRepository import SubscriptionRepository, FREE_ACTIVE_VALUES
from .BadgeAnalyticsRepository import BadgeAnalyticsRepository

__all__ = [
    "ShopRepository",
    "SettingsRepository",
    "BadgeAssignmentRepository",
    "SubscriptionRepository",
    "FREE_ACTIVE_VALUES",
    "BadgeAnalyticsRepository",
]

from .badge_analytics_service import BadgeAnalyticsService

__all__ = ["BadgeAnalyticsService"]

"""
Storefront badge analytics

Ingestion never fails the caller: a bad event or a storage error is logged
and dropped.
"""

from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError

from variant_badges.core.logging import get_logger
from variant_badges.models.analytics_models import TrackEventRequest
from variant_badges.repository import BadgeAnalyticsRepository

logger = get_logger(__name__)


class BadgeAnalyticsService:
    def __init__(self, analytics: BadgeAnalyticsRepository):
        self.analytics = analytics

    async def track(self, payload: Any) -> bool:
        """Persist one event; returns whether it was stored."""
        try:
            event = TrackEventRequest.model_validate(payload)
        except PydanticValidationError as e:
            logger.warning("Analytics event rejected", errors=e.error_count())
            return False

        try:
            await self.analytics.add(
                {
                    "shop": event.shop,
                    "product_id": event.product_id,
                    "variant_id": event.variant_id,
                    "badge_type": event.badge_type,
                    "option_value": event.option_value,
                    "event_type": event.event_type.value,
                    "session_id": event.session_id,
                }
            )
        except Exception as e:
            logger.error("Analytics insert error", shop=event.shop, error=str(e))
            return False
        return True

    async def summary(self, shop: str, recent_limit: int = 10) -> Dict[str, Any]:
        counts = await self.analytics.counts_by_type(shop)
        recent = await self.analytics.recent(shop, recent_limit)

        totals: Dict[str, int] = {}
        for event_type, _badge_type, count in counts:
            totals[event_type] = totals.get(event_type, 0) + count

        return {
            "byType": [
                {"eventType": event_type, "badgeType": badge_type, "count": count}
                for event_type, badge_type, count in counts
            ],
            "totals": totals,
            "totalEvents": sum(totals.values()),
            "recent": [
                {
                    "id": event.id,
                    "eventType": event.event_type,
                    "badgeType": event.badge_type,
                    "productId": event.product_id,
                    "variantId": event.variant_id,
                    "optionValue": event.option_value,
                    "createdAt": event.created_at.isoformat() if event.created_at else None,
                }
                for event in recent
            ],
        }

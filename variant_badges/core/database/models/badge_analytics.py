"""
Storefront badge analytics events (append-only)
"""

from sqlalchemy import Column, String, Index

from .base import BaseModel, ShopScopedMixin


class BadgeAnalyticsEvent(BaseModel, ShopScopedMixin):
    """A view, click or add-to-cart on a badged variant"""

    __tablename__ = "badge_analytics"

    product_id = Column(String(255), nullable=True)
    variant_id = Column(String(255), nullable=True)
    badge_type = Column(String(20), nullable=True)
    option_value = Column(String(100), nullable=True)
    event_type = Column(String(20), nullable=False)
    session_id = Column(String(255), nullable=True)

    __table_args__ = (
        Index("idx_badge_analytics_event", "shop", "event_type"),
        Index("idx_badge_analytics_date", "created_at"),
    )

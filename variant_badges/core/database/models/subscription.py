"""
Subscription model

Single row per shop, mutated in place. The effective plan is re-derived
from these fields on every read (see PlanResolver).
"""

from sqlalchemy import Column, String, DateTime, UniqueConstraint

from .base import BaseModel, ShopScopedMixin
from .enums import PlanName, SubscriptionStatus


class Subscription(BaseModel, ShopScopedMixin):
    """Shop subscription state"""

    __tablename__ = "subscriptions"

    plan_name = Column(String(20), nullable=False, default=PlanName.FREE.value)
    status = Column(
        String(20), nullable=False, default=SubscriptionStatus.ACTIVE.value, index=True
    )
    charge_id = Column(String(255), nullable=True)
    # Grace-period expiry when cancelled, next bill date when active
    billing_on = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (UniqueConstraint("shop", name="subscriptions_shop_unique"),)

    def __repr__(self) -> str:
        return f"<Subscription(shop={self.shop}, plan={self.plan_name}, status={self.status})>"

"""
Enum models for SQLAlchemy

Columns store the plain string values.
"""

from enum import Enum


class PlanName(str, Enum):
    """Subscription plans"""

    FREE = "free"
    PRO = "pro"


class SubscriptionStatus(str, Enum):
    """Shop subscription status"""

    ACTIVE = "active"
    PENDING = "pending"  # Upgrade awaiting merchant approval
    CANCELLED = "cancelled"  # Pro cancelled, grace period until billing_on
    UNINSTALLED = "uninstalled"


class AnalyticsEventType(str, Enum):
    """Storefront badge events"""

    VIEW = "view"
    CLICK = "click"
    ADD_TO_CART = "add_to_cart"


class ChargeStatus(str, Enum):
    """Shopify recurring application charge status"""

    PENDING = "pending"
    ACCEPTED = "accepted"
    ACTIVE = "active"
    DECLINED = "declined"
    EXPIRED = "expired"
    FROZEN = "frozen"
    CANCELLED = "cancelled"

"""
Billing domain services
"""

from .badge_cleanup import BadgeCleanupService, CleanupResult, select_retained_products
from .plan_resolver import PlanResolver, PlanDecision, evaluate_plan
from .plan_limit_gate import PlanLimitGate, LimitDecision
from .billing_service import BillingService

__all__ = [
    "BadgeCleanupService",
    "CleanupResult",
    "select_retained_products",
    "PlanResolver",
    "PlanDecision",
    "evaluate_plan",
    "PlanLimitGate",
    "LimitDecision",
    "BillingService",
]

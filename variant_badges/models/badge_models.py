from typing import List, Optional

from pydantic import Field, field_validator

from variant_badges.shared.helpers import normalize_shopify_id
from .base_models import CamelModel


class BadgeAssignmentRequest(CamelModel):
    """Badge (or clear, when badge_type is null) every variant with an option value"""

    product_id: str = Field(..., min_length=1, description="Numeric or gid product id")
    option_value: str = Field(..., min_length=1, max_length=100)
    badge_type: Optional[str] = Field(None, description="Badge type, null to clear")

    @field_validator("product_id", mode="before")
    @classmethod
    def normalize_product_id(cls, v):
        """Normalize GraphQL ID to numeric ID"""
        return normalize_shopify_id(v)

    @field_validator("badge_type", mode="before")
    @classmethod
    def normalize_badge_type(cls, v):
        if v is None:
            return None
        v = str(v).strip().upper()
        return v or None


class BulkBadgeAssignmentRequest(CamelModel):
    assignments: List[BadgeAssignmentRequest] = Field(..., min_length=1, max_length=250)

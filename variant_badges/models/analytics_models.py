from typing import Optional

from pydantic import Field, field_validator

from variant_badges.core.database.models.enums import AnalyticsEventType
from variant_badges.shared.helpers import normalize_shopify_id
from .base_models import CamelModel


class TrackEventRequest(CamelModel):
    """Storefront badge event"""

    shop: str = Field(..., min_length=1, max_length=255)
    event_type: AnalyticsEventType
    product_id: Optional[str] = None
    variant_id: Optional[str] = None
    badge_type: Optional[str] = Field(None, max_length=20)
    option_value: Optional[str] = Field(None, max_length=100)
    session_id: Optional[str] = Field(None, max_length=255)

    @field_validator("product_id", "variant_id", mode="before")
    @classmethod
    def normalize_ids(cls, v):
        """Normalize GraphQL ID to numeric ID"""
        return normalize_shopify_id(v)

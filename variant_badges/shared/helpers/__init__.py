"""
Helpers module for Variant Badges
"""

from .datetime_utils import (
    now_utc,
    parse_iso_timestamp,
    ensure_utc,
)
from .id_utils import normalize_shopify_id, to_product_gid


__all__ = [
    "now_utc",
    "parse_iso_timestamp",
    "ensure_utc",
    "normalize_shopify_id",
    "to_product_gid",
]

"""
Badge and plan constants
"""

DEFAULT_BADGE_TYPES = ["HOT", "NEW", "SALE"]
DEFAULT_FREE_PLAN_MAX_PRODUCTS = 5

MIXED_BADGE_LABEL = "none"

# Shopify plans that get test charges
DEVELOPMENT_SHOP_PLANS = ("partner_test", "affiliate", "staff_business")

# Theme files that may host the app block
THEME_BLOCK_ASSET_KEYS = (
    "templates/product.json",
    "sections/header-group.json",
    "sections/footer-group.json",
)
THEME_BLOCK_MARKERS = ("variant-badges-display", "variant_badges")

__all__ = [
    "DEFAULT_BADGE_TYPES",
    "DEFAULT_FREE_PLAN_MAX_PRODUCTS",
    "MIXED_BADGE_LABEL",
    "DEVELOPMENT_SHOP_PLANS",
    "THEME_BLOCK_ASSET_KEYS",
    "THEME_BLOCK_MARKERS",
]

"""
Variant Badges service

Promotional badges for Shopify product variants, gated by a subscription plan.
"""

__version__ = "1.0.0"

"""
Shopify identifier helpers
"""

from typing import Optional, Union


def normalize_shopify_id(value: Optional[Union[str, int]]) -> Optional[str]:
    """
    Normalize Shopify GraphQL ID to numeric ID.

    Converts: gid://shopify/ProductVariant/8830605820155 -> 8830605820155
    Returns the original value (as a string) if it's not a GraphQL ID format.
    """
    if value is None:
        return None

    value = str(value).strip()
    if value.startswith("gid://shopify/"):
        parts = value.split("/")
        if len(parts) >= 4:
            return parts[-1]

    return value


def to_product_gid(product_id: Union[str, int]) -> str:
    """Build the GraphQL global ID for a product"""
    product_id = str(product_id)
    if product_id.startswith("gid://"):
        return product_id
    return f"gid://shopify/Product/{product_id}"

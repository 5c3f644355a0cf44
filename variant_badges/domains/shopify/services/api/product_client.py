"""
Shopify Product API client
"""

from typing import List, Optional

from variant_badges.core.logging import get_logger
from variant_badges.shared.helpers import to_product_gid
from ...models import Product
from .base_client import BaseShopifyAPIClient

logger = get_logger(__name__)

_PRODUCT_FIELDS = """
    id
    title
    handle
    options {
        id
        name
        values
        position
    }
    variants(first: 100) {
        edges {
            node {
                id
                title
                price
                compareAtPrice
                selectedOptions {
                    name
                    value
                }
            }
        }
    }
"""

PRODUCTS_QUERY = (
    """
query getProducts($first: Int!) {
    products(first: $first) {
        edges {
            node {
"""
    + _PRODUCT_FIELDS
    + """
                images(first: 10) {
                    edges {
                        node {
                            id
                            url
                            altText
                        }
                    }
                }
            }
        }
    }
}
"""
)

SINGLE_PRODUCT_QUERY = (
    """
query getProduct($id: ID!) {
    product(id: $id) {
"""
    + _PRODUCT_FIELDS
    + """
    }
}
"""
)


class ProductAPIClient(BaseShopifyAPIClient):
    """Shopify Product API client"""

    async def get_products(
        self, shop_domain: str, access_token: str, first: int = 50
    ) -> List[Product]:
        """First page of the shop's products with options and variants"""
        data = await self.execute_query(
            PRODUCTS_QUERY, {"first": first}, shop_domain, access_token
        )
        edges = (data.get("products") or {}).get("edges", [])
        products = [Product.from_graphql(edge.get("node") or {}) for edge in edges]
        logger.info("Products fetched", shop_domain=shop_domain, count=len(products))
        return products

    async def get_product(
        self, shop_domain: str, access_token: str, product_id: str
    ) -> Optional[Product]:
        """Single product by numeric or gid id; None when Shopify has no such product"""
        data = await self.execute_query(
            SINGLE_PRODUCT_QUERY,
            {"id": to_product_gid(product_id)},
            shop_domain,
            access_token,
        )
        node = data.get("product")
        if not node:
            return None
        return Product.from_graphql(node)

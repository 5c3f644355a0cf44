from .shopify_clients import ShopifyClients, get_shopify_clients

__all__ = ["ShopifyClients", "get_shopify_clients"]

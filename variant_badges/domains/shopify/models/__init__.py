from .product_models import Product, ProductOption, ProductVariant, SelectedOption

__all__ = ["Product", "ProductOption", "ProductVariant", "SelectedOption"]

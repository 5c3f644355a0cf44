from .shop_lifecycle_service import ShopLifecycleService, ShopRemovalResult
from .theme_setup_service import ThemeSetupService, asset_has_app_block

__all__ = [
    "ShopLifecycleService",
    "ShopRemovalResult",
    "ThemeSetupService",
    "asset_has_app_block",
]

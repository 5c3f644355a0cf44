"""
Per-shop app settings
"""

from sqlalchemy import Column, String, Boolean, UniqueConstraint

from .base import BaseModel, ShopScopedMixin


class AppSettings(BaseModel, ShopScopedMixin):
    """Which product option carries badges, plus display toggles"""

    __tablename__ = "app_settings"

    selected_option = Column(String(100), nullable=True)
    badge_display_enabled = Column(Boolean, default=True, nullable=False)
    auto_sale_enabled = Column(Boolean, default=False, nullable=False)

    __table_args__ = (UniqueConstraint("shop", name="app_settings_shop_unique"),)

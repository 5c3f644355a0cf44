"""
Badge assignment model

One row per badged variant. A later write for the same variant overwrites
the earlier one.
"""

from sqlalchemy import Column, String, Index, UniqueConstraint

from .base import BaseModel, ShopScopedMixin


class BadgeAssignment(BaseModel, ShopScopedMixin):
    """A variant currently carrying a badge"""

    __tablename__ = "badge_assignments"

    variant_id = Column(String(255), nullable=False)
    product_id = Column(String(255), nullable=False)
    option_value = Column(String(100), nullable=False)
    option_type = Column(String(100), nullable=True)
    badge_type = Column(String(20), nullable=False)

    __table_args__ = (
        UniqueConstraint("shop", "variant_id", name="unique_shop_variant"),
        Index("idx_badge_product", "shop", "product_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<BadgeAssignment(shop={self.shop}, variant={self.variant_id}, "
            f"badge={self.badge_type})>"
        )

"""
Shop model for SQLAlchemy

Represents an installed Shopify store and its offline access token.
"""

from sqlalchemy import Column, String, Boolean, Text, UniqueConstraint

from .base import BaseModel


class Shop(BaseModel):
    """Shop model representing a Shopify store"""

    __tablename__ = "shops"

    shop_domain = Column(String(255), nullable=False, index=True)
    access_token = Column(Text, nullable=False)
    scope = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (UniqueConstraint("shop_domain", name="shop_domain_unique"),)

    def __repr__(self) -> str:
        return f"<Shop(domain={self.shop_domain}, active={self.is_active})>"

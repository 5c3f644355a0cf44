"""
Base model class for SQLAlchemy models

Provides common functionality and base configuration for all models.
"""

import uuid
from typing import Any, Dict

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import declarative_base, declared_attr

from variant_badges.shared.helpers import now_utc

# Create the declarative base
Base = declarative_base()


class TimestampMixin:
    """Mixin for models that need created_at and updated_at timestamps"""

    created_at = Column(
        "created_at",
        DateTime(timezone=True),
        default=now_utc,
        nullable=False,
    )
    updated_at = Column(
        "updated_at",
        DateTime(timezone=True),
        default=now_utc,
        onupdate=now_utc,
        nullable=False,
    )


class IDMixin:
    """Mixin for models that need a primary key ID"""

    @declared_attr
    def id(cls):
        return Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))


class BaseModel(Base, IDMixin, TimestampMixin):
    """
    Base model class with common functionality.

    All models should inherit from this class to get:
    - Automatic ID generation
    - Created/updated timestamps
    - Common utility methods
    """

    __abstract__ = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert model instance to dictionary"""
        return {
            column.name: getattr(self, column.name) for column in self.__table__.columns
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"


class ShopScopedMixin:
    """Mixin for rows owned by a shop, keyed by its domain"""

    shop = Column("shop", String(255), nullable=False, index=True)

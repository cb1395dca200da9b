"""
Cart item model: a property placed in an anonymous user's cart.
"""

from sqlalchemy import Text, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.property import Property


class CartItem(Base):
    """Cart entry of one user identifier; unique per (user, property)."""

    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("user_identifier", "property_id", name="uq_cart_items_user_property"),
    )

    user_identifier: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        index=True,
        comment="Opaque per-browser token"
    )

    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    property_rel: Mapped["Property"] = relationship("Property", back_populates="cart_items")

    def __repr__(self) -> str:
        return f"<CartItem(user={self.user_identifier}, property_id={self.property_id})>"

"""
Property model for marketplace listings.
Handles listing data, status, media and the relations that reference a listing.
"""

from sqlalchemy import Text, BigInteger, Integer, Boolean, JSON, Enum as SQLEnum, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base, UpdatedAtMixin
import enum
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.order import Order
    from app.models.favorite import Favorite
    from app.models.cart import CartItem
    from app.models.inquiry import Inquiry


def enum_values(enum_cls) -> List[str]:
    """Persist enum values (not member names) in the database."""
    return [member.value for member in enum_cls]


class PropertyType(str, enum.Enum):
    """Kind of real-estate unit."""
    HOUSE = "house"
    APARTMENT = "apartment"
    CONDO = "condo"
    LAND = "land"
    COMMERCIAL = "commercial"


class PropertyStatus(str, enum.Enum):
    """Sale status of a listing."""
    AVAILABLE = "available"
    SOLD = "sold"
    PENDING = "pending"


class Property(UpdatedAtMixin, Base):
    """
    Property listing available for sale.
    Owns the orders, favorites, cart items and inquiries that reference it.
    """

    __tablename__ = "properties"

    # Basic listing information
    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        index=True,
        comment="Listing title"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Detailed listing description"
    )

    price: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        index=True,
        comment="Asking price in whole currency units"
    )

    location: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        index=True,
        comment="Free-form location, e.g. 'Austin, TX'"
    )

    type: Mapped[PropertyType] = mapped_column(
        SQLEnum(PropertyType, name="property_type", native_enum=False, values_callable=enum_values),
        nullable=False,
        index=True,
        comment="Kind of property"
    )

    # Specifications
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    bathrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    area: Mapped[int] = mapped_column(BigInteger, nullable=False, comment="Area in square feet")
    year_built: Mapped[int] = mapped_column(Integer, nullable=False)

    # Media and features, stored as ordered JSON arrays
    images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    amenities: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    featured: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True
    )

    status: Mapped[PropertyStatus] = mapped_column(
        SQLEnum(PropertyStatus, name="property_status", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=PropertyStatus.AVAILABLE,
        index=True
    )

    # Dependent records are removed together with the listing
    orders: Mapped[List["Order"]] = relationship(
        "Order",
        back_populates="property_rel",
        cascade="all, delete-orphan",
    )

    favorites: Mapped[List["Favorite"]] = relationship(
        "Favorite",
        back_populates="property_rel",
        cascade="all, delete-orphan",
    )

    cart_items: Mapped[List["CartItem"]] = relationship(
        "CartItem",
        back_populates="property_rel",
        cascade="all, delete-orphan",
    )

    inquiries: Mapped[List["Inquiry"]] = relationship(
        "Inquiry",
        back_populates="property_rel",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title[:30]}, price={self.price})>"


# Composite index for the common browse filters
search_index = Index(
    "idx_properties_search",
    Property.status,
    Property.type,
    Property.price,
    Property.bedrooms,
)

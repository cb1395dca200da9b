"""
Order model for checkout requests (viewings, offers, information and financing).
"""

from sqlalchemy import Text, Float, Integer, ForeignKey, Enum as SQLEnum, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base, UpdatedAtMixin
from app.models.property import enum_values
import enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.property import Property


class InquiryType(str, enum.Enum):
    """What the buyer is asking for."""
    VIEWING = "viewing"
    OFFER = "offer"
    INFORMATION = "information"
    FINANCING = "financing"


class OrderStatus(str, enum.Enum):
    """Processing state of an order."""
    PENDING = "pending"
    CONTACTED = "contacted"
    VIEWING_SCHEDULED = "viewing_scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Order(UpdatedAtMixin, Base):
    """
    Buyer request created at checkout, one per property in the cart.
    """

    __tablename__ = "orders"

    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Buyer contact details
    buyer_name: Mapped[str] = mapped_column(Text, nullable=False)
    buyer_email: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    buyer_phone: Mapped[str] = mapped_column(Text, nullable=False)
    buyer_address: Mapped[str] = mapped_column(Text, nullable=False)
    buyer_city: Mapped[str] = mapped_column(Text, nullable=False)
    buyer_state: Mapped[str] = mapped_column(Text, nullable=False)
    buyer_zip_code: Mapped[str] = mapped_column(Text, nullable=False)

    inquiry_type: Mapped[InquiryType] = mapped_column(
        SQLEnum(InquiryType, name="inquiry_type", native_enum=False, values_callable=enum_values),
        nullable=False
    )
    preferred_contact_time: Mapped[str] = mapped_column(Text, nullable=False)
    additional_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    order_status: Mapped[OrderStatus] = mapped_column(
        SQLEnum(
            OrderStatus,
            name="order_status",
            native_enum=False,
            length=32,
            values_callable=enum_values,
        ),
        nullable=False,
        default=OrderStatus.PENDING,
        index=True
    )

    total_value: Mapped[float] = mapped_column(Float, nullable=False)

    property_rel: Mapped["Property"] = relationship("Property", back_populates="orders")

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, property_id={self.property_id}, status={self.order_status})>"


status_property_index = Index(
    "idx_orders_status_property",
    Order.order_status,
    Order.property_id,
)

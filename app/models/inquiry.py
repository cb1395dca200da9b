"""
Inquiry model: a free-form contact message about one property.
"""

from sqlalchemy import Text, Integer, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
from app.models.property import enum_values
import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.property import Property


class InquiryStatus(str, enum.Enum):
    """Triage state of an inquiry."""
    NEW = "new"
    READ = "read"
    RESPONDED = "responded"
    CLOSED = "closed"


class Inquiry(Base):
    """Contact message tied to a listing. Inquiries carry no updated_at."""

    __tablename__ = "inquiries"

    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(Text, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[InquiryStatus] = mapped_column(
        SQLEnum(InquiryStatus, name="inquiry_status", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=InquiryStatus.NEW,
        index=True
    )

    property_rel: Mapped["Property"] = relationship("Property", back_populates="inquiries")

    def __repr__(self) -> str:
        return f"<Inquiry(id={self.id}, property_id={self.property_id}, status={self.status})>"

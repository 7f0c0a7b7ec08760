from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..session import Base


class EquipmentCategory(str, PyEnum):
    audio = "audio"
    video = "video"
    furniture = "furniture"
    lighting = "lighting"
    other = "other"


class RentalUnit(str, PyEnum):
    hour = "hour"
    day = "day"
    event = "event"


class Equipment(Base):
    __tablename__ = "equipment"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_equipment_quantity_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    category: Mapped[EquipmentCategory] = mapped_column(Enum(EquipmentCategory), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    rental_rate: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    unit: Mapped[RentalUnit] = mapped_column(Enum(RentalUnit), default=RentalUnit.event)
    description: Mapped[str | None] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class EquipmentRental(Base):
    """Units of one equipment item held by a conference booking."""

    __tablename__ = "equipment_rentals"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_equipment_rental_quantity_positive"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    booking_id: Mapped[int] = mapped_column(
        ForeignKey("conference_bookings.id", ondelete="CASCADE"), index=True
    )
    equipment_id: Mapped[int] = mapped_column(ForeignKey("equipment.id"), index=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    booking = relationship("ConferenceBooking", back_populates="rentals")
    equipment = relationship("Equipment")

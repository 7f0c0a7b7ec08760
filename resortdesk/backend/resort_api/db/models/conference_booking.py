from datetime import date, datetime
from enum import Enum as PyEnum
from sqlalchemy import (
    Boolean,
    Date,
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


class EventType(str, PyEnum):
    meeting = "meeting"
    seminar = "seminar"
    conference = "conference"
    wedding = "wedding"
    party = "party"
    training = "training"
    exhibition = "exhibition"


class ConferencePaymentStatus(str, PyEnum):
    pending = "pending"
    partial = "partial"
    paid = "paid"
    cancelled = "cancelled"
    refunded = "refunded"


class ConferenceBookingStatus(str, PyEnum):
    pending = "pending"
    approved = "approved"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"


class ConferenceBooking(Base):
    __tablename__ = "conference_bookings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    booking_number: Mapped[str] = mapped_column(String(32), unique=True, index=True)
    event_name: Mapped[str] = mapped_column(String(255), nullable=False)
    client_name: Mapped[str] = mapped_column(String(128), nullable=False)
    company: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    hall_type: Mapped[str] = mapped_column(
        ForeignKey("conference_halls.value", onupdate="CASCADE"), nullable=False, index=True
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    event_type: Mapped[EventType] = mapped_column(Enum(EventType), nullable=False)
    attendees: Mapped[int] = mapped_column(Integer, nullable=False)
    catering_required: Mapped[bool] = mapped_column(Boolean, default=False)
    equipment_required: Mapped[bool] = mapped_column(Boolean, default=False)
    special_requirements: Mapped[str | None] = mapped_column(Text)
    amount: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    advance_paid: Mapped[float] = mapped_column(Numeric(10, 2), default=0)
    payment_status: Mapped[ConferencePaymentStatus] = mapped_column(
        Enum(ConferencePaymentStatus), default=ConferencePaymentStatus.pending
    )
    booking_status: Mapped[ConferenceBookingStatus] = mapped_column(
        Enum(ConferenceBookingStatus), default=ConferenceBookingStatus.pending
    )
    invoice_number: Mapped[str | None] = mapped_column(String(32), unique=True)
    notes: Mapped[str | None] = mapped_column(Text)
    created_by: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    approved_by: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    hall = relationship("ConferenceHall", back_populates="bookings")
    creator = relationship("User", foreign_keys=[created_by])
    approver = relationship("User", foreign_keys=[approved_by])
    rentals = relationship(
        "EquipmentRental",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="EquipmentRental.id",
    )

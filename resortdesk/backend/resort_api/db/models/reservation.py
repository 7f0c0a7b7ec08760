from datetime import date, datetime
from enum import Enum as PyEnum
from sqlalchemy import Date, DateTime, Enum, ForeignKey, Integer, JSON, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..session import Base


class ReservationPaymentStatus(str, PyEnum):
    paid = "paid"
    pending = "pending"
    partial = "partial"


class ReservationStatus(str, PyEnum):
    confirmed = "confirmed"
    checked_in = "checked_in"
    checked_out = "checked_out"
    cancelled = "cancelled"
    no_show = "no_show"


class Reservation(Base):
    __tablename__ = "reservations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    reservation_number: Mapped[str] = mapped_column(String(32), unique=True, index=True)
    guest_name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    check_in: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    check_out: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    actual_check_in: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    actual_check_out: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    room_type: Mapped[str] = mapped_column(String(64), nullable=False)
    room_number: Mapped[str] = mapped_column(
        ForeignKey("rooms.room_number", onupdate="CASCADE"), nullable=False, index=True
    )
    adults: Mapped[int] = mapped_column(Integer, nullable=False)
    children: Mapped[int] = mapped_column(Integer, default=0)
    total_nights: Mapped[int] = mapped_column(Integer, nullable=False)
    room_rate: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    extra_charges: Mapped[list | None] = mapped_column(JSON, default=list)
    sub_total: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    tax: Mapped[float] = mapped_column(Numeric(10, 2), default=0)
    discount: Mapped[float] = mapped_column(Numeric(10, 2), default=0)
    total_amount: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    payment_status: Mapped[ReservationPaymentStatus] = mapped_column(
        Enum(ReservationPaymentStatus), default=ReservationPaymentStatus.pending
    )
    reservation_status: Mapped[ReservationStatus] = mapped_column(
        Enum(ReservationStatus), default=ReservationStatus.confirmed
    )
    special_requests: Mapped[str | None] = mapped_column(Text)
    created_by: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    room = relationship("Room", back_populates="reservations")
    creator = relationship("User")

    @property
    def occupants(self) -> int:
        return (self.adults or 0) + (self.children or 0)

from datetime import date, datetime
from enum import Enum as PyEnum
from sqlalchemy import Date, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..session import Base
from .ticket_price import PassType


class PoolPaymentStatus(str, PyEnum):
    paid = "paid"
    pending = "pending"
    cancelled = "cancelled"


class PoolBooking(Base):
    __tablename__ = "pool_bookings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    booking_number: Mapped[str] = mapped_column(String(32), unique=True, index=True)
    customer_name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    time_slot: Mapped[str] = mapped_column(
        ForeignKey("time_slots.value", onupdate="CASCADE"), nullable=False, index=True
    )
    pass_type: Mapped[PassType] = mapped_column(Enum(PassType), nullable=False)
    persons: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    payment_status: Mapped[PoolPaymentStatus] = mapped_column(
        Enum(PoolPaymentStatus), default=PoolPaymentStatus.pending
    )
    notes: Mapped[str | None] = mapped_column(Text)
    created_by: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    slot = relationship("TimeSlot", back_populates="bookings")
    creator = relationship("User")

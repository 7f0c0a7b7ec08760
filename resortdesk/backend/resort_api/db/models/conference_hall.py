from sqlalchemy import Boolean, CheckConstraint, Integer, JSON, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..session import Base


class ConferenceHall(Base):
    __tablename__ = "conference_halls"
    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_conference_hall_capacity_positive"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    hall_code: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    value: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    hourly_rate: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    daily_rate: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    amenities: Mapped[list | None] = mapped_column(JSON, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    max_daily_bookings: Mapped[int] = mapped_column(Integer, default=3)

    bookings = relationship("ConferenceBooking", back_populates="hall")

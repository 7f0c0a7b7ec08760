from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, JSON, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..session import Base


class RoomStatus(str, PyEnum):
    available = "available"
    occupied = "occupied"
    maintenance = "maintenance"
    cleaning = "cleaning"


class Room(Base):
    __tablename__ = "rooms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    room_number: Mapped[str] = mapped_column(String(16), unique=True, nullable=False, index=True)
    room_type: Mapped[str] = mapped_column(
        ForeignKey("room_types.name", onupdate="CASCADE"), nullable=False
    )
    floor: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[RoomStatus] = mapped_column(Enum(RoomStatus), default=RoomStatus.available)
    price: Mapped[float] = mapped_column(Numeric(10, 2), default=0)
    features: Mapped[list | None] = mapped_column(JSON, default=list)
    last_cleaned: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    type = relationship("RoomType", back_populates="rooms")
    reservations = relationship("Reservation", back_populates="room")

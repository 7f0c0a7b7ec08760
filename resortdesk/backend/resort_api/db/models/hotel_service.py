from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import Boolean, DateTime, Enum, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column
from ..session import Base


class ServiceCategory(str, PyEnum):
    food = "food"
    beverage = "beverage"
    spa = "spa"
    laundry = "laundry"
    transport = "transport"
    other = "other"


class HotelService(Base):
    """Chargeable guest service; reservation extra charges are priced from it."""

    __tablename__ = "hotel_services"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    category: Mapped[ServiceCategory] = mapped_column(Enum(ServiceCategory), default=ServiceCategory.other)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

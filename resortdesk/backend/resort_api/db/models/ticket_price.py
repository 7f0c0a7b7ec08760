from enum import Enum as PyEnum
from sqlalchemy import Boolean, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column
from ..session import Base


class PassType(str, PyEnum):
    hourly = "hourly"
    daily = "daily"
    family = "family"


class TicketPrice(Base):
    __tablename__ = "ticket_prices"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    pass_type: Mapped[PassType] = mapped_column(Enum(PassType), unique=True, nullable=False)
    price: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    max_persons: Mapped[int] = mapped_column(Integer, default=1)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    updated_by: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from ..session import Base


class Sequence(Base):
    """Named monotonic counter used for booking, sale and invoice numbers."""

    __tablename__ = "sequences"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

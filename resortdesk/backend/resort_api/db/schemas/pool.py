from datetime import date as Date, datetime
from pydantic import BaseModel, Field
from ..models.pool_booking import PoolPaymentStatus
from ..models.ticket_price import PassType

HHMM = r"^([01]\d|2[0-3]):[0-5]\d$"


class TimeSlot(BaseModel):
    id: int
    slot_code: str
    label: str
    value: str
    start_time: str
    end_time: str
    max_capacity: int
    is_active: bool
    current_bookings: int = 0
    available: int = 0

    class Config:
        from_attributes = True


class TimeSlotUpdate(BaseModel):
    label: str | None = None
    max_capacity: int | None = Field(default=None, ge=1)
    is_active: bool | None = None


class TicketPrice(BaseModel):
    id: int
    pass_type: PassType
    price: float
    description: str
    max_persons: int
    is_active: bool

    class Config:
        from_attributes = True


class TicketPriceUpdate(BaseModel):
    price: float | None = Field(default=None, ge=0)
    max_persons: int | None = Field(default=None, ge=1)
    description: str | None = None
    is_active: bool | None = None


class PoolBookingBase(BaseModel):
    customer_name: str = Field(min_length=1, max_length=128)
    email: str = Field(min_length=3, max_length=255)
    phone: str = Field(min_length=3, max_length=32)
    date: Date
    time_slot: str
    pass_type: PassType
    persons: int = Field(ge=1, le=10)
    notes: str | None = None


class PoolBookingCreate(PoolBookingBase):
    payment_status: PoolPaymentStatus = PoolPaymentStatus.pending


class PoolBookingUpdate(BaseModel):
    customer_name: str | None = None
    email: str | None = None
    phone: str | None = None
    date: Date | None = None
    time_slot: str | None = None
    pass_type: PassType | None = None
    persons: int | None = Field(default=None, ge=1, le=10)
    notes: str | None = None


class PoolPaymentStatusUpdate(BaseModel):
    payment_status: PoolPaymentStatus


class PoolBooking(PoolBookingBase):
    id: int
    booking_number: str
    amount: float
    payment_status: PoolPaymentStatus
    created_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True

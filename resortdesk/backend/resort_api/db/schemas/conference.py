from datetime import date, datetime
from pydantic import BaseModel, Field
from ..models.equipment import EquipmentCategory, RentalUnit
from ..models.conference_booking import (
    ConferenceBookingStatus,
    ConferencePaymentStatus,
    EventType,
)
from .pool import HHMM


class ConferenceHall(BaseModel):
    id: int
    hall_code: str
    name: str
    value: str
    capacity: int
    hourly_rate: float
    daily_rate: float
    description: str
    amenities: list[dict] = []
    is_active: bool
    max_daily_bookings: int
    bookings_today: int = 0
    available_today: bool = True

    class Config:
        from_attributes = True


class ConferenceHallUpdate(BaseModel):
    name: str | None = None
    capacity: int | None = Field(default=None, ge=1)
    hourly_rate: float | None = Field(default=None, ge=0)
    daily_rate: float | None = Field(default=None, ge=0)
    description: str | None = None
    amenities: list[dict] | None = None
    is_active: bool | None = None
    max_daily_bookings: int | None = Field(default=None, ge=1)


class EquipmentBase(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    category: EquipmentCategory
    quantity: int = Field(ge=0)
    rental_rate: float = Field(ge=0)
    unit: RentalUnit = RentalUnit.event
    description: str | None = None
    is_active: bool = True


class EquipmentCreate(EquipmentBase):
    pass


class EquipmentUpdate(BaseModel):
    name: str | None = None
    category: EquipmentCategory | None = None
    quantity: int | None = Field(default=None, ge=0)
    rental_rate: float | None = Field(default=None, ge=0)
    unit: RentalUnit | None = None
    description: str | None = None
    is_active: bool | None = None


class Equipment(EquipmentBase):
    id: int
    available_quantity: int = 0

    class Config:
        from_attributes = True


class EquipmentRequest(BaseModel):
    equipment_id: int
    quantity: int = Field(ge=1)


class EquipmentRental(BaseModel):
    equipment_id: int
    quantity: int

    class Config:
        from_attributes = True


class ConferenceBookingBase(BaseModel):
    event_name: str = Field(min_length=1, max_length=255)
    client_name: str = Field(min_length=1, max_length=128)
    company: str | None = None
    email: str = Field(min_length=3, max_length=255)
    phone: str = Field(min_length=3, max_length=32)
    hall_type: str
    start_date: date
    end_date: date
    start_time: str = Field(pattern=HHMM)
    end_time: str = Field(pattern=HHMM)
    event_type: EventType
    attendees: int = Field(ge=1, le=500)
    catering_required: bool = False
    equipment_required: bool = False
    special_requirements: str | None = None
    amount: float = Field(gt=0)
    notes: str | None = None


class ConferenceBookingCreate(ConferenceBookingBase):
    advance_paid: float = Field(default=0, ge=0)
    equipment: list[EquipmentRequest] = []


class ConferenceBookingUpdate(BaseModel):
    event_name: str | None = None
    client_name: str | None = None
    company: str | None = None
    email: str | None = None
    phone: str | None = None
    hall_type: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    start_time: str | None = Field(default=None, pattern=HHMM)
    end_time: str | None = Field(default=None, pattern=HHMM)
    event_type: EventType | None = None
    attendees: int | None = Field(default=None, ge=1, le=500)
    catering_required: bool | None = None
    equipment_required: bool | None = None
    special_requirements: str | None = None
    amount: float | None = Field(default=None, gt=0)
    advance_paid: float | None = Field(default=None, ge=0)
    notes: str | None = None
    equipment: list[EquipmentRequest] | None = None


class ConferenceStatusUpdate(BaseModel):
    booking_status: ConferenceBookingStatus


class ConferencePaymentUpdate(BaseModel):
    payment_status: ConferencePaymentStatus | None = None
    advance_paid: float | None = Field(default=None, ge=0)


class ConferenceBooking(ConferenceBookingBase):
    id: int
    booking_number: str
    advance_paid: float
    payment_status: ConferencePaymentStatus
    booking_status: ConferenceBookingStatus
    invoice_number: str | None = None
    created_by: int | None = None
    approved_by: int | None = None
    approved_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    rentals: list[EquipmentRental] = []

    class Config:
        from_attributes = True

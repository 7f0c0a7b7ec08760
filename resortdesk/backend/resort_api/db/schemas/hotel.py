from datetime import date, datetime
from pydantic import BaseModel, Field
from ..models.hotel_service import ServiceCategory
from ..models.room import RoomStatus
from ..models.reservation import ReservationPaymentStatus, ReservationStatus


class RoomTypeBase(BaseModel):
    name: str = Field(min_length=1, max_length=64)
    description: str
    base_price: float = Field(ge=0)
    max_occupancy: int = Field(ge=1)
    amenities: list[str] = []
    is_active: bool = True


class RoomTypeCreate(RoomTypeBase):
    pass


class RoomTypeUpdate(BaseModel):
    description: str | None = None
    base_price: float | None = Field(default=None, ge=0)
    max_occupancy: int | None = Field(default=None, ge=1)
    amenities: list[str] | None = None
    is_active: bool | None = None


class RoomType(RoomTypeBase):
    id: int

    class Config:
        from_attributes = True


class RoomBase(BaseModel):
    room_number: str = Field(min_length=1, max_length=16)
    room_type: str
    floor: int = Field(ge=1)
    price: float | None = Field(default=None, ge=0)
    features: list[str] = []
    is_active: bool = True


class RoomCreate(RoomBase):
    status: RoomStatus = RoomStatus.available


class RoomUpdate(BaseModel):
    room_type: str | None = None
    floor: int | None = Field(default=None, ge=1)
    price: float | None = Field(default=None, ge=0)
    features: list[str] | None = None
    is_active: bool | None = None


class RoomStatusUpdate(BaseModel):
    status: RoomStatus


class Room(RoomBase):
    id: int
    status: RoomStatus
    price: float | None = None
    last_cleaned: datetime | None = None

    class Config:
        from_attributes = True


class HotelServiceBase(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    description: str = Field(min_length=1)
    price: float = Field(ge=0)
    category: ServiceCategory = ServiceCategory.other
    is_available: bool = True


class HotelServiceCreate(HotelServiceBase):
    pass


class HotelServiceUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    category: ServiceCategory | None = None
    is_available: bool | None = None


class HotelService(HotelServiceBase):
    id: int

    class Config:
        from_attributes = True


class ExtraCharge(BaseModel):
    service: str = Field(min_length=1)
    amount: float | None = Field(default=None, ge=0)
    quantity: int = Field(default=1, ge=1)


class ReservationBase(BaseModel):
    guest_name: str = Field(min_length=1, max_length=128)
    email: str | None = None
    phone: str = Field(min_length=3, max_length=32)
    check_in: date
    check_out: date
    room_number: str
    adults: int = Field(ge=1, le=4)
    children: int = Field(default=0, ge=0, le=3)
    extra_charges: list[ExtraCharge] = []
    discount: float = Field(default=0, ge=0)
    special_requests: str | None = None


class ReservationCreate(ReservationBase):
    payment_status: ReservationPaymentStatus = ReservationPaymentStatus.pending


class ReservationUpdate(BaseModel):
    guest_name: str | None = None
    email: str | None = None
    phone: str | None = None
    check_in: date | None = None
    check_out: date | None = None
    room_number: str | None = None
    adults: int | None = Field(default=None, ge=1, le=4)
    children: int | None = Field(default=None, ge=0, le=3)
    extra_charges: list[ExtraCharge] | None = None
    discount: float | None = Field(default=None, ge=0)
    special_requests: str | None = None


class ReservationStatusUpdate(BaseModel):
    reservation_status: ReservationStatus


class ReservationPaymentUpdate(BaseModel):
    payment_status: ReservationPaymentStatus


class Reservation(ReservationBase):
    id: int
    reservation_number: str
    room_type: str
    total_nights: int
    room_rate: float
    sub_total: float
    tax: float
    total_amount: float
    payment_status: ReservationPaymentStatus
    reservation_status: ReservationStatus
    actual_check_in: datetime | None = None
    actual_check_out: datetime | None = None
    created_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True

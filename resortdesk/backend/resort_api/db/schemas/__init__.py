from .common import Envelope, Page
from .user import PasswordChange, User, UserCreate, UserUpdate
from .pool import (
    TimeSlot,
    TimeSlotUpdate,
    TicketPrice,
    TicketPriceUpdate,
    PoolBooking,
    PoolBookingCreate,
    PoolBookingUpdate,
    PoolPaymentStatusUpdate,
)
from .conference import (
    ConferenceHall,
    ConferenceHallUpdate,
    ConferenceBooking,
    ConferenceBookingCreate,
    ConferenceBookingUpdate,
    ConferenceStatusUpdate,
    ConferencePaymentUpdate,
    Equipment,
    EquipmentCreate,
    EquipmentUpdate,
    EquipmentRequest,
    EquipmentRental,
)
from .hotel import (
    RoomType,
    RoomTypeCreate,
    RoomTypeUpdate,
    Room,
    RoomCreate,
    RoomUpdate,
    RoomStatusUpdate,
    ExtraCharge,
    HotelService,
    HotelServiceCreate,
    HotelServiceUpdate,
    Reservation,
    ReservationCreate,
    ReservationUpdate,
    ReservationStatusUpdate,
    ReservationPaymentUpdate,
)
from .restaurant import (
    MenuCategory,
    MenuCategoryCreate,
    MenuCategoryUpdate,
    MenuItem,
    MenuItemCreate,
    MenuItemUpdate,
    SaleItem,
    SaleItemCreate,
    Sale,
    SaleCreate,
    SaleUpdate,
    SalePaymentStatusUpdate,
    SaleOrderStatusUpdate,
)

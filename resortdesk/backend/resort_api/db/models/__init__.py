from .user import User, UserRole
from .sequence import Sequence
from .audit_log import AuditLog, ActorType
from .time_slot import TimeSlot
from .ticket_price import TicketPrice, PassType
from .pool_booking import PoolBooking, PoolPaymentStatus
from .conference_hall import ConferenceHall
from .equipment import Equipment, EquipmentCategory, EquipmentRental, RentalUnit
from .conference_booking import (
    ConferenceBooking,
    ConferenceBookingStatus,
    ConferencePaymentStatus,
    EventType,
)
from .room_type import RoomType
from .hotel_service import HotelService, ServiceCategory
from .room import Room, RoomStatus
from .reservation import Reservation, ReservationPaymentStatus, ReservationStatus
from .menu_category import MenuCategory, CategoryIcon
from .menu_item import MenuItem, TaxType
from .sale import Sale, SaleItem, SalePaymentStatus, OrderStatus, OrderType, PaymentMethod

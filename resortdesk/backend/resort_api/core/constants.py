"""Common application-wide constants."""

from ..db.models import (
    ConferenceBookingStatus,
    OrderStatus,
    PoolPaymentStatus,
    ReservationPaymentStatus,
    ReservationStatus,
    SalePaymentStatus,
)

# Statuses whose bookings hold capacity on their subject
POOL_ACTIVE_STATUSES = frozenset(
    {PoolPaymentStatus.pending, PoolPaymentStatus.paid}
)
CONFERENCE_ACTIVE_STATUSES = frozenset(
    {
        ConferenceBookingStatus.pending,
        ConferenceBookingStatus.approved,
        ConferenceBookingStatus.confirmed,
    }
)
CONFERENCE_HOLDING_STATUSES = frozenset(
    {ConferenceBookingStatus.approved, ConferenceBookingStatus.confirmed}
)
HOTEL_ACTIVE_STATUSES = frozenset(
    {ReservationStatus.confirmed, ReservationStatus.checked_in}
)

# Allowed conference lifecycle moves; completed is terminal
CONFERENCE_TRANSITIONS = {
    ConferenceBookingStatus.pending: frozenset(
        {ConferenceBookingStatus.approved, ConferenceBookingStatus.cancelled}
    ),
    ConferenceBookingStatus.approved: frozenset(
        {ConferenceBookingStatus.confirmed, ConferenceBookingStatus.cancelled}
    ),
    ConferenceBookingStatus.confirmed: frozenset(
        {ConferenceBookingStatus.completed, ConferenceBookingStatus.cancelled}
    ),
    ConferenceBookingStatus.cancelled: frozenset(
        {
            ConferenceBookingStatus.pending,
            ConferenceBookingStatus.approved,
            ConferenceBookingStatus.confirmed,
        }
    ),
    ConferenceBookingStatus.completed: frozenset(),
}

# Records in these states can no longer be deleted
POOL_UNDELETABLE = frozenset({PoolPaymentStatus.paid})
CONFERENCE_UNDELETABLE = frozenset(
    {ConferenceBookingStatus.confirmed, ConferenceBookingStatus.completed}
)
HOTEL_UNDELETABLE = frozenset(
    {ReservationStatus.checked_in, ReservationStatus.checked_out}
)
SALE_UNDELETABLE = frozenset({SalePaymentStatus.confirmed})

CHECKOUT_BLOCKING_PAYMENTS = frozenset(
    {ReservationPaymentStatus.pending, ReservationPaymentStatus.partial}
)

SALE_INACTIVE_ORDER_STATUS = OrderStatus.cancelled

POOL_BOOKING_PREFIX = "PB"
CONFERENCE_BOOKING_PREFIX = "CH"
HOTEL_RESERVATION_PREFIX = "HR"
SALE_PREFIX = "RBS"
INVOICE_PREFIX = "INV-CH"

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


__all__ = [
    "POOL_ACTIVE_STATUSES",
    "CONFERENCE_ACTIVE_STATUSES",
    "CONFERENCE_HOLDING_STATUSES",
    "HOTEL_ACTIVE_STATUSES",
    "CONFERENCE_TRANSITIONS",
    "POOL_UNDELETABLE",
    "CONFERENCE_UNDELETABLE",
    "HOTEL_UNDELETABLE",
    "SALE_UNDELETABLE",
    "CHECKOUT_BLOCKING_PAYMENTS",
    "SALE_INACTIVE_ORDER_STATUS",
    "POOL_BOOKING_PREFIX",
    "CONFERENCE_BOOKING_PREFIX",
    "HOTEL_RESERVATION_PREFIX",
    "SALE_PREFIX",
    "INVOICE_PREFIX",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
]

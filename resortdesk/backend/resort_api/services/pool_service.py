"""Pool bookings: per-slot, per-date head count capacity."""

from datetime import date
import logging

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from ..core.constants import POOL_ACTIVE_STATUSES, POOL_BOOKING_PREFIX, POOL_UNDELETABLE
from ..db import models, schemas
from ..db.models import PassType, PoolPaymentStatus
from .availability import admit, atomic, booking_number, lock_row, log_rejection, record_audit
from .errors import CapacityError, ConflictError, NotFoundError, ValidationError
from .pagination import order_by, paginate
from .pricing import to_money

logger = logging.getLogger(__name__)

SORTABLE = {"created_at", "date", "amount", "customer_name", "persons"}

DEFAULT_TIME_SLOTS = [
    {"slot_code": "1", "label": "06:00 AM - 09:00 AM", "value": "06:00-09:00", "start_time": "06:00", "end_time": "09:00"},
    {"slot_code": "2", "label": "09:00 AM - 12:00 PM", "value": "09:00-12:00", "start_time": "09:00", "end_time": "12:00"},
    {"slot_code": "3", "label": "12:00 PM - 03:00 PM", "value": "12:00-15:00", "start_time": "12:00", "end_time": "15:00"},
    {"slot_code": "4", "label": "03:00 PM - 06:00 PM", "value": "15:00-18:00", "start_time": "15:00", "end_time": "18:00"},
    {"slot_code": "5", "label": "06:00 PM - 09:00 PM", "value": "18:00-21:00", "start_time": "18:00", "end_time": "21:00"},
]
DEFAULT_SLOT_CAPACITY = 50

DEFAULT_TICKET_PRICES = [
    {"pass_type": PassType.hourly, "price": 15, "description": "Per person per hour", "max_persons": 1},
    {"pass_type": PassType.daily, "price": 25, "description": "Full day access per person", "max_persons": 1},
    {"pass_type": PassType.family, "price": 60, "description": "Up to 4 family members", "max_persons": 4},
]


def committed_persons(db: Session, slot_value: str, day: date, exclude_id: int | None = None) -> int:
    stmt = select(func.coalesce(func.sum(models.PoolBooking.persons), 0)).where(
        models.PoolBooking.time_slot == slot_value,
        models.PoolBooking.date == day,
        models.PoolBooking.payment_status.in_(POOL_ACTIVE_STATUSES),
    )
    if exclude_id is not None:
        stmt = stmt.where(models.PoolBooking.id != exclude_id)
    return int(db.scalar(stmt) or 0)


def _lock_active_slot(db: Session, slot_value: str) -> models.TimeSlot:
    slot = lock_row(db, models.TimeSlot, models.TimeSlot.value == slot_value)
    if slot is None or not slot.is_active:
        raise ValidationError("Selected time slot is not available")
    return slot


def _ensure_room_in_slot(
    db: Session,
    slot: models.TimeSlot,
    day: date,
    persons: int,
    exclude_id: int | None,
    message: str,
) -> None:
    admission = admit(slot.max_capacity, committed_persons(db, slot.value, day, exclude_id), persons)
    if not admission.admitted:
        log_rejection(f"pool:{slot.value}:{day.isoformat()}", admission)
        raise CapacityError(message.format(remaining=admission.remaining), admission.remaining)


def _active_ticket(db: Session, pass_type: PassType) -> models.TicketPrice:
    ticket = db.execute(
        select(models.TicketPrice).where(models.TicketPrice.pass_type == pass_type)
    ).scalar_one_or_none()
    if ticket is None or not ticket.is_active:
        raise ValidationError("Selected pass type is not available")
    return ticket


def _check_party_size(ticket: models.TicketPrice, persons: int) -> None:
    if persons > ticket.max_persons:
        raise ValidationError(
            f"Maximum {ticket.max_persons} persons allowed for {ticket.pass_type.value} pass"
        )


def booking_amount(ticket: models.TicketPrice, persons: int):
    if ticket.pass_type == PassType.family:
        return to_money(ticket.price)
    return to_money(to_money(ticket.price) * persons)


def list_bookings(
    db: Session,
    status: PoolPaymentStatus | None = None,
    day: date | None = None,
    search: str | None = None,
    page: int = 1,
    limit: int = 10,
    sort_by: str | None = None,
    sort_order: str | None = None,
) -> tuple[list[models.PoolBooking], int]:
    stmt = select(models.PoolBooking)
    if status:
        stmt = stmt.where(models.PoolBooking.payment_status == status)
    if day:
        stmt = stmt.where(models.PoolBooking.date == day)
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(
            or_(
                models.PoolBooking.customer_name.ilike(pattern),
                models.PoolBooking.email.ilike(pattern),
                models.PoolBooking.phone.ilike(pattern),
                models.PoolBooking.booking_number.ilike(pattern),
            )
        )
    stmt = order_by(stmt, models.PoolBooking, sort_by, sort_order, SORTABLE)
    return paginate(db, stmt, page, limit)


def get_booking(db: Session, booking_id: int) -> models.PoolBooking:
    booking = db.get(models.PoolBooking, booking_id)
    if booking is None:
        raise NotFoundError("Booking not found")
    return booking


def create_booking(
    db: Session, payload: schemas.PoolBookingCreate, actor_id: int | None = None
) -> models.PoolBooking:
    with atomic(db):
        slot = _lock_active_slot(db, payload.time_slot)
        _ensure_room_in_slot(
            db,
            slot,
            payload.date,
            payload.persons,
            None,
            "Only {remaining} spots available in this slot",
        )
        ticket = _active_ticket(db, payload.pass_type)
        _check_party_size(ticket, payload.persons)
        booking = models.PoolBooking(
            **payload.model_dump(),
            booking_number=booking_number(db, POOL_BOOKING_PREFIX),
            amount=booking_amount(ticket, payload.persons),
            created_by=actor_id,
        )
        db.add(booking)
        db.flush()
        record_audit(db, actor_id, "pool_booking.create", {"booking_id": booking.id})
    logger.info(
        "Pool booking created",
        extra={"booking_id": booking.id, "slot": booking.time_slot, "persons": booking.persons},
    )
    return booking


def update_booking(
    db: Session, booking_id: int, payload: schemas.PoolBookingUpdate, actor_id: int | None = None
) -> models.PoolBooking:
    with atomic(db):
        booking = get_booking(db, booking_id)
        changes = payload.model_dump(exclude_unset=True)
        changes = {key: value for key, value in changes.items() if value is not None}
        target_slot = changes.get("time_slot") or booking.time_slot
        target_day = changes.get("date") or booking.date
        target_persons = changes.get("persons") or booking.persons
        target_pass = changes.get("pass_type") or booking.pass_type

        moves_demand = any(
            key in changes and changes[key] != getattr(booking, key)
            for key in ("time_slot", "date", "persons")
        )
        if moves_demand and booking.payment_status in POOL_ACTIVE_STATUSES:
            slot = _lock_active_slot(db, target_slot)
            _ensure_room_in_slot(
                db,
                slot,
                target_day,
                target_persons,
                booking.id,
                "Only {remaining} spots available in this slot",
            )
        if "pass_type" in changes or "persons" in changes:
            ticket = _active_ticket(db, target_pass)
            _check_party_size(ticket, target_persons)
            changes["amount"] = booking_amount(ticket, target_persons)

        for key, value in changes.items():
            setattr(booking, key, value)
        record_audit(db, actor_id, "pool_booking.update", {"booking_id": booking.id})
    logger.info("Pool booking updated", extra={"booking_id": booking.id})
    return booking


def update_payment_status(
    db: Session, booking_id: int, payment_status: PoolPaymentStatus, actor_id: int | None = None
) -> models.PoolBooking:
    with atomic(db):
        booking = get_booking(db, booking_id)
        previous = booking.payment_status
        reviving = (
            previous == PoolPaymentStatus.cancelled
            and payment_status != PoolPaymentStatus.cancelled
        )
        if reviving:
            slot = lock_row(db, models.TimeSlot, models.TimeSlot.value == booking.time_slot)
            if slot is None:
                raise ValidationError("Selected time slot is not available")
            _ensure_room_in_slot(
                db,
                slot,
                booking.date,
                booking.persons,
                booking.id,
                "Slot is now full. Only {remaining} spots available",
            )
        booking.payment_status = payment_status
        record_audit(
            db,
            actor_id,
            "pool_booking.status",
            {"booking_id": booking.id, "from": previous.value, "to": payment_status.value},
        )
    logger.info(
        "Pool booking payment status changed",
        extra={"booking_id": booking.id, "from": previous.value, "to": payment_status.value},
    )
    return booking


def delete_booking(db: Session, booking_id: int, actor_id: int | None = None) -> None:
    with atomic(db):
        booking = get_booking(db, booking_id)
        if booking.payment_status in POOL_UNDELETABLE:
            raise ConflictError("Cannot delete paid bookings")
        db.delete(booking)
        record_audit(db, actor_id, "pool_booking.delete", {"booking_id": booking_id})
    logger.info("Pool booking deleted", extra={"booking_id": booking_id})


def slot_occupancy(db: Session, day: date) -> dict[str, int]:
    rows = db.execute(
        select(models.PoolBooking.time_slot, func.coalesce(func.sum(models.PoolBooking.persons), 0))
        .where(
            models.PoolBooking.date == day,
            models.PoolBooking.payment_status.in_(POOL_ACTIVE_STATUSES),
        )
        .group_by(models.PoolBooking.time_slot)
    ).all()
    return {value: int(total) for value, total in rows}


def list_time_slots(db: Session, day: date | None = None) -> list[models.TimeSlot]:
    day = day or date.today()
    slots = db.execute(select(models.TimeSlot).order_by(models.TimeSlot.start_time)).scalars().all()
    occupancy = slot_occupancy(db, day)
    for slot in slots:
        booked = occupancy.get(slot.value, 0)
        setattr(slot, "current_bookings", booked)
        setattr(slot, "available", max(slot.max_capacity - booked, 0))
    return list(slots)


def update_time_slot(
    db: Session, slot_id: int, payload: schemas.TimeSlotUpdate, today: date | None = None
) -> models.TimeSlot:
    today = today or date.today()
    with atomic(db):
        slot = lock_row(db, models.TimeSlot, models.TimeSlot.id == slot_id)
        if slot is None:
            raise NotFoundError("Time slot not found")
        changes = payload.model_dump(exclude_unset=True)
        if changes.get("max_capacity") is not None:
            per_day = (
                select(func.sum(models.PoolBooking.persons).label("persons"))
                .where(
                    models.PoolBooking.time_slot == slot.value,
                    models.PoolBooking.date >= today,
                    models.PoolBooking.payment_status.in_(POOL_ACTIVE_STATUSES),
                )
                .group_by(models.PoolBooking.date)
                .subquery()
            )
            peak = int(db.scalar(select(func.coalesce(func.max(per_day.c.persons), 0))) or 0)
            if changes["max_capacity"] < peak:
                raise ConflictError(f"Cannot set capacity lower than current bookings ({peak})")
        for key, value in changes.items():
            if value is not None:
                setattr(slot, key, value)
    logger.info("Time slot updated", extra={"slot": slot.value})
    return slot


def initialize_time_slots(db: Session) -> int:
    created = 0
    with atomic(db):
        for data in DEFAULT_TIME_SLOTS:
            exists = db.execute(
                select(models.TimeSlot.id).where(models.TimeSlot.value == data["value"])
            ).first()
            if exists:
                continue
            db.add(models.TimeSlot(**data, max_capacity=DEFAULT_SLOT_CAPACITY, is_active=True))
            created += 1
    logger.info("Time slots initialized", extra={"created_count": created})
    return created


def list_ticket_prices(db: Session) -> list[models.TicketPrice]:
    return list(
        db.execute(select(models.TicketPrice).order_by(models.TicketPrice.pass_type)).scalars().all()
    )


def update_ticket_price(
    db: Session, ticket_id: int, payload: schemas.TicketPriceUpdate, actor_id: int | None = None
) -> models.TicketPrice:
    with atomic(db):
        ticket = db.get(models.TicketPrice, ticket_id)
        if ticket is None:
            raise NotFoundError("Ticket price not found")
        for key, value in payload.model_dump(exclude_unset=True).items():
            if value is None:
                continue
            setattr(ticket, key, to_money(value) if key == "price" else value)
        ticket.updated_by = actor_id
    logger.info("Ticket price updated", extra={"pass_type": ticket.pass_type.value})
    return ticket


def initialize_ticket_prices(db: Session) -> int:
    created = 0
    with atomic(db):
        for data in DEFAULT_TICKET_PRICES:
            exists = db.execute(
                select(models.TicketPrice.id).where(models.TicketPrice.pass_type == data["pass_type"])
            ).first()
            if exists:
                continue
            db.add(models.TicketPrice(**{**data, "price": to_money(data["price"])}, is_active=True))
            created += 1
    logger.info("Ticket prices initialized", extra={"created_count": created})
    return created


def dashboard(db: Session, today: date | None = None) -> dict:
    today = today or date.today()
    active_today = (
        models.PoolBooking.date == today,
        models.PoolBooking.payment_status.in_(POOL_ACTIVE_STATUSES),
    )
    today_bookings = db.scalar(select(func.count(models.PoolBooking.id)).where(*active_today)) or 0
    today_revenue = db.scalar(
        select(func.coalesce(func.sum(models.PoolBooking.amount), 0)).where(
            models.PoolBooking.date == today,
            models.PoolBooking.payment_status == PoolPaymentStatus.paid,
        )
    )
    pending_payments = db.scalar(
        select(func.count(models.PoolBooking.id)).where(
            models.PoolBooking.date == today,
            models.PoolBooking.payment_status == PoolPaymentStatus.pending,
        )
    ) or 0
    slots = list_time_slots(db, today)
    occupancy = [
        {
            "time_slot": slot.value,
            "label": slot.label,
            "booked": slot.current_bookings,
            "capacity": slot.max_capacity,
            "available": slot.available,
        }
        for slot in slots
        if slot.is_active
    ]
    distribution = dict(
        db.execute(
            select(models.PoolBooking.time_slot, func.count(models.PoolBooking.id))
            .where(*active_today)
            .group_by(models.PoolBooking.time_slot)
        ).all()
    )
    recent = db.execute(
        select(models.PoolBooking)
        .order_by(models.PoolBooking.created_at.desc(), models.PoolBooking.id.desc())
        .limit(5)
    ).scalars().all()
    return {
        "today_bookings": int(today_bookings),
        "today_revenue": float(today_revenue or 0),
        "pending_payments": int(pending_payments),
        "slot_occupancy": occupancy,
        "slot_distribution": {key: int(value) for key, value in distribution.items()},
        "recent_bookings": [schemas.PoolBooking.model_validate(item).model_dump(mode="json") for item in recent],
    }

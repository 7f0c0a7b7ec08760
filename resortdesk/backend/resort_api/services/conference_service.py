"""Conference hall bookings.

A hall is an exclusive resource: one active booking per overlapping
``[start_date + start_time, end_date + end_time)`` window.
"""

from collections import defaultdict
from datetime import date, datetime, time, timedelta
import logging

from sqlalchemy import extract, func, or_, select
from sqlalchemy.orm import Session

from ..core.constants import (
    CONFERENCE_ACTIVE_STATUSES,
    CONFERENCE_BOOKING_PREFIX,
    CONFERENCE_HOLDING_STATUSES,
    CONFERENCE_TRANSITIONS,
    CONFERENCE_UNDELETABLE,
)
from ..db import models, schemas
from ..db.models import ConferenceBookingStatus, ConferencePaymentStatus
from .availability import (
    admit,
    atomic,
    booking_number,
    combine,
    invoice_number,
    lock_row,
    log_rejection,
    record_audit,
    utc_now,
    windows_overlap,
)
from .errors import CapacityError, ConflictError, NotFoundError, ValidationError
from .pagination import order_by, paginate
from .pricing import derive_conference_payment_status, to_money

logger = logging.getLogger(__name__)

SORTABLE = {"created_at", "start_date", "amount", "event_name", "client_name"}

DEFAULT_HALLS = [
    {
        "hall_code": "HALL_A",
        "name": "Hall A",
        "value": "hall_a",
        "capacity": 100,
        "hourly_rate": 50,
        "daily_rate": 400,
        "description": "Standard conference hall with basic AV equipment",
        "amenities": [
            {"name": "Projector", "included": True, "extra_charge": 0},
            {"name": "Sound System", "included": True, "extra_charge": 0},
            {"name": "Whiteboard", "included": True, "extra_charge": 0},
            {"name": "Stage Setup", "included": False, "extra_charge": 100},
        ],
    },
    {
        "hall_code": "HALL_B",
        "name": "Hall B",
        "value": "hall_b",
        "capacity": 50,
        "hourly_rate": 40,
        "daily_rate": 300,
        "description": "Medium-sized hall for meetings and seminars",
        "amenities": [
            {"name": "Projector", "included": True, "extra_charge": 0},
            {"name": "Sound System", "included": True, "extra_charge": 0},
            {"name": "Whiteboard", "included": True, "extra_charge": 0},
        ],
    },
    {
        "hall_code": "GRAND_HALL",
        "name": "Grand Hall",
        "value": "grand_hall",
        "capacity": 200,
        "hourly_rate": 100,
        "daily_rate": 800,
        "description": "Large hall for events and weddings",
        "amenities": [
            {"name": "Projector", "included": True, "extra_charge": 0},
            {"name": "Professional Sound System", "included": True, "extra_charge": 0},
            {"name": "Stage Lighting", "included": True, "extra_charge": 0},
            {"name": "Dance Floor", "included": False, "extra_charge": 200},
        ],
    },
    {
        "hall_code": "MEETING_ROOM_1",
        "name": "Meeting Room 1",
        "value": "meeting_room_1",
        "capacity": 20,
        "hourly_rate": 25,
        "daily_rate": 150,
        "description": "Small meeting room for board meetings",
        "amenities": [
            {"name": "TV Screen", "included": True, "extra_charge": 0},
            {"name": "Conference Phone", "included": True, "extra_charge": 0},
            {"name": "Whiteboard", "included": True, "extra_charge": 0},
        ],
    },
    {
        "hall_code": "MEETING_ROOM_2",
        "name": "Meeting Room 2",
        "value": "meeting_room_2",
        "capacity": 20,
        "hourly_rate": 25,
        "daily_rate": 150,
        "description": "Small meeting room for team meetings",
        "amenities": [
            {"name": "TV Screen", "included": True, "extra_charge": 0},
            {"name": "Whiteboard", "included": True, "extra_charge": 0},
        ],
    },
]


def _window(start_date: date, start_time: str, end_date: date, end_time: str):
    start = combine(start_date, start_time)
    end = combine(end_date, end_time)
    if end <= start:
        raise ValidationError("End date/time must be after start date/time")
    return start, end


def overlapping_bookings(
    db: Session,
    hall_value: str,
    start_date: date,
    start_time: str,
    end_date: date,
    end_time: str,
    statuses=CONFERENCE_ACTIVE_STATUSES,
    exclude_id: int | None = None,
) -> list[models.ConferenceBooking]:
    start, end = _window(start_date, start_time, end_date, end_time)
    stmt = select(models.ConferenceBooking).where(
        models.ConferenceBooking.hall_type == hall_value,
        models.ConferenceBooking.booking_status.in_(statuses),
        models.ConferenceBooking.start_date <= end_date,
        models.ConferenceBooking.end_date >= start_date,
    )
    if exclude_id is not None:
        stmt = stmt.where(models.ConferenceBooking.id != exclude_id)
    candidates = db.execute(stmt).scalars().all()
    return [
        booking
        for booking in candidates
        if windows_overlap(
            combine(booking.start_date, booking.start_time),
            combine(booking.end_date, booking.end_time),
            start,
            end,
        )
    ]


def _lock_active_hall(db: Session, hall_value: str) -> models.ConferenceHall:
    hall = lock_row(db, models.ConferenceHall, models.ConferenceHall.value == hall_value)
    if hall is None or not hall.is_active:
        raise ValidationError("Selected hall is not available")
    return hall


def _ensure_hall_free(
    db: Session,
    hall: models.ConferenceHall,
    start_date: date,
    start_time: str,
    end_date: date,
    end_time: str,
    attendees: int,
    statuses=CONFERENCE_ACTIVE_STATUSES,
    exclude_id: int | None = None,
    message: str = "Hall is already booked for selected dates",
) -> None:
    if attendees > hall.capacity:
        raise ValidationError(
            f"Hall capacity is {hall.capacity}, cannot book for {attendees} attendees"
        )
    clashes = overlapping_bookings(
        db, hall.value, start_date, start_time, end_date, end_time, statuses, exclude_id
    )
    admission = admit(1, len(clashes), 1)
    if not admission.admitted:
        log_rejection(f"conference:{hall.value}:{start_date.isoformat()}", admission)
        raise CapacityError(message, admission.remaining)


def _equipment_demand(requests) -> dict[int, int]:
    demand: dict[int, int] = defaultdict(int)
    for request in requests or []:
        demand[request["equipment_id"]] += request["quantity"]
    return dict(demand)


def _held_equipment(booking: models.ConferenceBooking) -> dict[int, int]:
    return _equipment_demand(
        {"equipment_id": rental.equipment_id, "quantity": rental.quantity} for rental in booking.rentals
    )


def _rental_windows(
    db: Session,
    equipment_id: int,
    first_day: date,
    last_day: date | None = None,
    statuses=CONFERENCE_ACTIVE_STATUSES,
    exclude_id: int | None = None,
):
    stmt = (
        select(
            models.EquipmentRental.quantity,
            models.ConferenceBooking.start_date,
            models.ConferenceBooking.start_time,
            models.ConferenceBooking.end_date,
            models.ConferenceBooking.end_time,
        )
        .join(models.ConferenceBooking, models.ConferenceBooking.id == models.EquipmentRental.booking_id)
        .where(
            models.EquipmentRental.equipment_id == equipment_id,
            models.ConferenceBooking.booking_status.in_(statuses),
            models.ConferenceBooking.end_date >= first_day,
        )
    )
    if last_day is not None:
        stmt = stmt.where(models.ConferenceBooking.start_date <= last_day)
    if exclude_id is not None:
        stmt = stmt.where(models.ConferenceBooking.id != exclude_id)
    return [
        (quantity, combine(start_date, start_time), combine(end_date, end_time))
        for quantity, start_date, start_time, end_date, end_time in db.execute(stmt).all()
    ]


def reserved_units(
    db: Session,
    equipment_id: int,
    start: datetime,
    end: datetime,
    statuses=CONFERENCE_ACTIVE_STATUSES,
    exclude_id: int | None = None,
) -> int:
    windows = _rental_windows(db, equipment_id, start.date(), end.date(), statuses, exclude_id)
    return sum(
        quantity
        for quantity, rental_start, rental_end in windows
        if windows_overlap(rental_start, rental_end, start, end)
    )


def peak_reserved_units(db: Session, equipment_id: int, since: datetime) -> int:
    """Largest number of units held at any one moment from ``since`` onwards."""
    events = []
    for quantity, start, end in _rental_windows(db, equipment_id, since.date()):
        if end <= since:
            continue
        events.append((max(start, since), quantity))
        events.append((end, -quantity))
    peak = held = 0
    # releases sort before pick-ups at the same instant
    for _, delta in sorted(events):
        held += delta
        peak = max(peak, held)
    return peak


def _ensure_equipment_free(
    db: Session,
    demand: dict[int, int],
    start: datetime,
    end: datetime,
    statuses=CONFERENCE_ACTIVE_STATUSES,
    exclude_id: int | None = None,
) -> None:
    for equipment_id in sorted(demand):
        item = lock_row(db, models.Equipment, models.Equipment.id == equipment_id)
        if item is None or not item.is_active:
            raise ValidationError(f"Equipment {equipment_id} is not available")
        committed = reserved_units(db, item.id, start, end, statuses, exclude_id)
        admission = admit(item.quantity, committed, demand[equipment_id])
        if not admission.admitted:
            log_rejection(f"equipment:{item.id}:{start.date().isoformat()}", admission)
            raise CapacityError(
                f"Only {admission.remaining} x {item.name} available for selected dates",
                admission.remaining,
            )


def _rentals(demand: dict[int, int]) -> list[models.EquipmentRental]:
    return [
        models.EquipmentRental(equipment_id=equipment_id, quantity=quantity)
        for equipment_id, quantity in sorted(demand.items())
    ]


def list_bookings(
    db: Session,
    payment_status: ConferencePaymentStatus | None = None,
    booking_status: ConferenceBookingStatus | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    search: str | None = None,
    page: int = 1,
    limit: int = 10,
    sort_by: str | None = None,
    sort_order: str | None = None,
) -> tuple[list[models.ConferenceBooking], int]:
    stmt = select(models.ConferenceBooking)
    if payment_status:
        stmt = stmt.where(models.ConferenceBooking.payment_status == payment_status)
    if booking_status:
        stmt = stmt.where(models.ConferenceBooking.booking_status == booking_status)
    if start_date:
        stmt = stmt.where(models.ConferenceBooking.end_date >= start_date)
    if end_date:
        stmt = stmt.where(models.ConferenceBooking.start_date <= end_date)
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(
            or_(
                models.ConferenceBooking.event_name.ilike(pattern),
                models.ConferenceBooking.client_name.ilike(pattern),
                models.ConferenceBooking.company.ilike(pattern),
                models.ConferenceBooking.email.ilike(pattern),
                models.ConferenceBooking.booking_number.ilike(pattern),
            )
        )
    stmt = order_by(stmt, models.ConferenceBooking, sort_by, sort_order, SORTABLE)
    return paginate(db, stmt, page, limit)


def get_booking(db: Session, booking_id: int) -> models.ConferenceBooking:
    booking = db.get(models.ConferenceBooking, booking_id)
    if booking is None:
        raise NotFoundError("Booking not found")
    return booking


def create_booking(
    db: Session, payload: schemas.ConferenceBookingCreate, actor_id: int | None = None
) -> models.ConferenceBooking:
    with atomic(db):
        hall = _lock_active_hall(db, payload.hall_type)
        _ensure_hall_free(
            db,
            hall,
            payload.start_date,
            payload.start_time,
            payload.end_date,
            payload.end_time,
            payload.attendees,
        )
        demand = _equipment_demand(request.model_dump() for request in payload.equipment)
        if demand:
            _ensure_equipment_free(
                db,
                demand,
                *_window(payload.start_date, payload.start_time, payload.end_date, payload.end_time),
            )
        data = payload.model_dump(exclude={"equipment"})
        data["equipment_required"] = payload.equipment_required or bool(demand)
        data["amount"] = to_money(payload.amount)
        data["advance_paid"] = to_money(payload.advance_paid)
        booking = models.ConferenceBooking(
            **data,
            booking_number=booking_number(db, CONFERENCE_BOOKING_PREFIX),
            payment_status=ConferencePaymentStatus(
                derive_conference_payment_status(payload.advance_paid, payload.amount)
            ),
            booking_status=ConferenceBookingStatus.pending,
            created_by=actor_id,
            rentals=_rentals(demand),
        )
        db.add(booking)
        db.flush()
        record_audit(db, actor_id, "conference_booking.create", {"booking_id": booking.id})
    logger.info(
        "Conference booking created",
        extra={"booking_id": booking.id, "hall": booking.hall_type, "start": str(booking.start_date)},
    )
    return booking


def update_booking(
    db: Session,
    booking_id: int,
    payload: schemas.ConferenceBookingUpdate,
    actor_id: int | None = None,
) -> models.ConferenceBooking:
    with atomic(db):
        booking = get_booking(db, booking_id)
        changes = payload.model_dump(exclude_unset=True)
        changes = {key: value for key, value in changes.items() if value is not None}
        equipment = changes.pop("equipment", None)
        target = {
            key: changes.get(key, getattr(booking, key))
            for key in ("hall_type", "start_date", "start_time", "end_date", "end_time", "attendees")
        }
        rechecks = any(key in changes and changes[key] != getattr(booking, key) for key in target)
        if rechecks:
            _window(target["start_date"], target["start_time"], target["end_date"], target["end_time"])
        if rechecks and booking.booking_status in CONFERENCE_ACTIVE_STATUSES:
            hall = _lock_active_hall(db, target["hall_type"])
            _ensure_hall_free(
                db,
                hall,
                target["start_date"],
                target["start_time"],
                target["end_date"],
                target["end_time"],
                target["attendees"],
                exclude_id=booking.id,
            )
        demand = _equipment_demand(equipment) if equipment is not None else _held_equipment(booking)
        holds_equipment = bool(demand) and booking.booking_status in CONFERENCE_ACTIVE_STATUSES
        if holds_equipment and (rechecks or equipment is not None):
            _ensure_equipment_free(
                db,
                demand,
                *_window(target["start_date"], target["start_time"], target["end_date"], target["end_time"]),
                exclude_id=booking.id,
            )
        if equipment is not None:
            booking.rentals = _rentals(demand)
            if demand:
                changes["equipment_required"] = True
        for key in ("amount", "advance_paid"):
            if key in changes:
                changes[key] = to_money(changes[key])
        if "amount" in changes or "advance_paid" in changes:
            changes["payment_status"] = ConferencePaymentStatus(
                derive_conference_payment_status(
                    changes.get("advance_paid", booking.advance_paid),
                    changes.get("amount", booking.amount),
                )
            )
        for key, value in changes.items():
            setattr(booking, key, value)
        record_audit(db, actor_id, "conference_booking.update", {"booking_id": booking.id})
    logger.info("Conference booking updated", extra={"booking_id": booking.id})
    return booking


def update_status(
    db: Session,
    booking_id: int,
    new_status: ConferenceBookingStatus,
    actor_id: int | None = None,
) -> models.ConferenceBooking:
    with atomic(db):
        booking = get_booking(db, booking_id)
        current = booking.booking_status
        if new_status == current:
            return booking
        if new_status not in CONFERENCE_TRANSITIONS[current]:
            raise ConflictError(
                f"Cannot change booking status from {current.value} to {new_status.value}"
            )
        if current == ConferenceBookingStatus.cancelled:
            hall = _lock_active_hall(db, booking.hall_type)
            _ensure_hall_free(
                db,
                hall,
                booking.start_date,
                booking.start_time,
                booking.end_date,
                booking.end_time,
                booking.attendees,
                exclude_id=booking.id,
                message="Hall is already booked for these dates",
            )
        elif new_status in CONFERENCE_HOLDING_STATUSES:
            hall = _lock_active_hall(db, booking.hall_type)
            _ensure_hall_free(
                db,
                hall,
                booking.start_date,
                booking.start_time,
                booking.end_date,
                booking.end_time,
                booking.attendees,
                statuses=CONFERENCE_HOLDING_STATUSES,
                exclude_id=booking.id,
                message="Hall is already booked for these dates",
            )
        demand = _held_equipment(booking)
        reviving = current == ConferenceBookingStatus.cancelled
        if demand and (reviving or new_status in CONFERENCE_HOLDING_STATUSES):
            _ensure_equipment_free(
                db,
                demand,
                *_window(booking.start_date, booking.start_time, booking.end_date, booking.end_time),
                statuses=CONFERENCE_ACTIVE_STATUSES if reviving else CONFERENCE_HOLDING_STATUSES,
                exclude_id=booking.id,
            )
        if new_status in CONFERENCE_HOLDING_STATUSES and booking.invoice_number is None:
            now = utc_now()
            booking.approved_by = actor_id
            booking.approved_at = now
            booking.invoice_number = invoice_number(db, now.year)
        booking.booking_status = new_status
        record_audit(
            db,
            actor_id,
            "conference_booking.status",
            {"booking_id": booking.id, "from": current.value, "to": new_status.value},
        )
    logger.info(
        "Conference booking status changed",
        extra={"booking_id": booking.id, "from": current.value, "to": new_status.value},
    )
    return booking


def update_payment(
    db: Session,
    booking_id: int,
    payload: schemas.ConferencePaymentUpdate,
    actor_id: int | None = None,
) -> models.ConferenceBooking:
    with atomic(db):
        booking = get_booking(db, booking_id)
        if payload.advance_paid is not None:
            booking.advance_paid = to_money(payload.advance_paid)
            booking.payment_status = ConferencePaymentStatus(
                derive_conference_payment_status(booking.advance_paid, booking.amount)
            )
        if payload.payment_status is not None:
            booking.payment_status = payload.payment_status
        record_audit(
            db,
            actor_id,
            "conference_booking.payment",
            {"booking_id": booking.id, "payment_status": booking.payment_status.value},
        )
    logger.info(
        "Conference booking payment updated",
        extra={"booking_id": booking.id, "payment_status": booking.payment_status.value},
    )
    return booking


def delete_booking(db: Session, booking_id: int, actor_id: int | None = None) -> None:
    with atomic(db):
        booking = get_booking(db, booking_id)
        if booking.booking_status in CONFERENCE_UNDELETABLE:
            raise ConflictError("Cannot delete confirmed or completed bookings")
        db.delete(booking)
        record_audit(db, actor_id, "conference_booking.delete", {"booking_id": booking_id})
    logger.info("Conference booking deleted", extra={"booking_id": booking_id})


def _bookings_on(db: Session, day: date) -> dict[str, int]:
    rows = db.execute(
        select(models.ConferenceBooking.hall_type, func.count(models.ConferenceBooking.id))
        .where(
            models.ConferenceBooking.booking_status.in_(CONFERENCE_ACTIVE_STATUSES),
            models.ConferenceBooking.start_date <= day,
            models.ConferenceBooking.end_date >= day,
        )
        .group_by(models.ConferenceBooking.hall_type)
    ).all()
    return {hall: int(count) for hall, count in rows}


def list_halls(db: Session, today: date | None = None) -> list[models.ConferenceHall]:
    today = today or date.today()
    halls = db.execute(select(models.ConferenceHall).order_by(models.ConferenceHall.capacity)).scalars().all()
    counts = _bookings_on(db, today)
    for hall in halls:
        booked = counts.get(hall.value, 0)
        setattr(hall, "bookings_today", booked)
        setattr(hall, "available_today", bool(hall.is_active) and booked < hall.max_daily_bookings)
    return list(halls)


def update_hall(
    db: Session, hall_id: int, payload: schemas.ConferenceHallUpdate, today: date | None = None
) -> models.ConferenceHall:
    today = today or date.today()
    with atomic(db):
        hall = lock_row(db, models.ConferenceHall, models.ConferenceHall.id == hall_id)
        if hall is None:
            raise NotFoundError("Conference hall not found")
        changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
        if "capacity" in changes:
            largest = db.scalar(
                select(func.coalesce(func.max(models.ConferenceBooking.attendees), 0)).where(
                    models.ConferenceBooking.hall_type == hall.value,
                    models.ConferenceBooking.booking_status.in_(CONFERENCE_ACTIVE_STATUSES),
                    models.ConferenceBooking.end_date >= today,
                )
            )
            largest = int(largest or 0)
            if changes["capacity"] < largest:
                raise ConflictError(f"Cannot set capacity lower than booked attendees ({largest})")
        for key in ("hourly_rate", "daily_rate"):
            if key in changes:
                changes[key] = to_money(changes[key])
        for key, value in changes.items():
            setattr(hall, key, value)
    logger.info("Conference hall updated", extra={"hall": hall.value})
    return hall


def initialize_halls(db: Session) -> int:
    created = 0
    with atomic(db):
        for data in DEFAULT_HALLS:
            exists = db.execute(
                select(models.ConferenceHall.id).where(models.ConferenceHall.value == data["value"])
            ).first()
            if exists:
                continue
            db.add(
                models.ConferenceHall(
                    **{
                        **data,
                        "hourly_rate": to_money(data["hourly_rate"]),
                        "daily_rate": to_money(data["daily_rate"]),
                    },
                    is_active=True,
                    max_daily_bookings=3,
                )
            )
            created += 1
    logger.info("Conference halls initialized", extra={"created_count": created})
    return created


def _day_window(day: date | None = None) -> tuple[datetime, datetime]:
    start = datetime.combine(day or date.today(), time.min)
    return start, start + timedelta(days=1)


def list_equipment(
    db: Session,
    active_only: bool = True,
    day: date | None = None,
) -> list[models.Equipment]:
    """Catalog with ``available_quantity`` for one calendar day, today by default."""
    start, end = _day_window(day)
    stmt = select(models.Equipment)
    if active_only:
        stmt = stmt.where(models.Equipment.is_active.is_(True))
    items = db.execute(stmt.order_by(models.Equipment.category, models.Equipment.name)).scalars().all()
    for item in items:
        reserved = reserved_units(db, item.id, start, end)
        setattr(item, "available_quantity", max(item.quantity - reserved, 0))
    return list(items)


def create_equipment(db: Session, payload: schemas.EquipmentCreate) -> models.Equipment:
    with atomic(db):
        data = payload.model_dump()
        data["rental_rate"] = to_money(payload.rental_rate)
        item = models.Equipment(**data)
        db.add(item)
    setattr(item, "available_quantity", item.quantity)
    logger.info("Equipment created", extra={"equipment_id": item.id, "equipment": item.name})
    return item


def update_equipment(
    db: Session, equipment_id: int, payload: schemas.EquipmentUpdate, since: datetime | None = None
) -> models.Equipment:
    since = since or datetime.now()
    with atomic(db):
        item = lock_row(db, models.Equipment, models.Equipment.id == equipment_id)
        if item is None:
            raise NotFoundError("Equipment not found")
        changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
        peak = peak_reserved_units(db, item.id, since)
        if "quantity" in changes and changes["quantity"] < peak:
            raise ConflictError(f"Cannot set quantity lower than reserved units ({peak})")
        if "rental_rate" in changes:
            changes["rental_rate"] = to_money(changes["rental_rate"])
        for key, value in changes.items():
            setattr(item, key, value)
    start, end = _day_window()
    setattr(item, "available_quantity", max(item.quantity - reserved_units(db, item.id, start, end), 0))
    logger.info("Equipment updated", extra={"equipment_id": item.id})
    return item


def dashboard(db: Session, today: date | None = None) -> dict:
    today = today or date.today()
    todays_events = db.execute(
        select(models.ConferenceBooking)
        .where(
            models.ConferenceBooking.booking_status.in_(CONFERENCE_ACTIVE_STATUSES),
            models.ConferenceBooking.start_date <= today,
            models.ConferenceBooking.end_date >= today,
        )
        .order_by(models.ConferenceBooking.start_time)
    ).scalars().all()
    pending_approvals = db.scalar(
        select(func.count(models.ConferenceBooking.id)).where(
            models.ConferenceBooking.booking_status == ConferenceBookingStatus.pending
        )
    ) or 0
    this_month = (
        extract("year", models.ConferenceBooking.start_date) == today.year,
        extract("month", models.ConferenceBooking.start_date) == today.month,
    )
    monthly_revenue = db.scalar(
        select(func.coalesce(func.sum(models.ConferenceBooking.advance_paid), 0)).where(
            models.ConferenceBooking.booking_status != ConferenceBookingStatus.cancelled,
            *this_month,
        )
    )
    utilisation = dict(
        db.execute(
            select(models.ConferenceBooking.hall_type, func.count(models.ConferenceBooking.id))
            .where(
                models.ConferenceBooking.booking_status.in_(
                    CONFERENCE_HOLDING_STATUSES | {ConferenceBookingStatus.completed}
                ),
                *this_month,
            )
            .group_by(models.ConferenceBooking.hall_type)
        ).all()
    )
    return {
        "todays_events": [
            schemas.ConferenceBooking.model_validate(item).model_dump(mode="json") for item in todays_events
        ],
        "pending_approvals": int(pending_approvals),
        "monthly_revenue": float(monthly_revenue or 0),
        "hall_utilisation": {hall: int(count) for hall, count in utilisation.items()},
    }

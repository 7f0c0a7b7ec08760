"""Hotel reservations, rooms and room types.

Rooms are exclusive over half-open ``[check_in, check_out)`` date windows, so
a check-out day can be the next guest's check-in day. The room ``status``
column follows the reservation lifecycle but never decides availability.
"""

from datetime import date
import logging

from sqlalchemy import extract, func, or_, select
from sqlalchemy.orm import Session

from ..core.constants import (
    CHECKOUT_BLOCKING_PAYMENTS,
    HOTEL_ACTIVE_STATUSES,
    HOTEL_RESERVATION_PREFIX,
    HOTEL_UNDELETABLE,
)
from ..db import models, schemas
from ..db.models import ReservationPaymentStatus, ReservationStatus, RoomStatus, ServiceCategory
from .availability import admit, atomic, booking_number, lock_row, log_rejection, record_audit, utc_now
from .errors import CapacityError, ConflictError, NotFoundError, ValidationError
from .pagination import order_by, paginate
from .pricing import extra_charges_total, to_money

logger = logging.getLogger(__name__)

SORTABLE = {"created_at", "check_in", "check_out", "total_amount", "guest_name"}

SETTABLE_STATUSES = frozenset(
    {ReservationStatus.confirmed, ReservationStatus.cancelled, ReservationStatus.no_show}
)
RELEASING_STATUSES = frozenset({ReservationStatus.cancelled, ReservationStatus.no_show})

DEFAULT_ROOM_TYPES = [
    {
        "name": "Standard Room",
        "description": "Comfortable room with basic amenities",
        "base_price": 100,
        "max_occupancy": 2,
        "amenities": ["TV", "WiFi", "AC", "Mini Fridge"],
    },
    {
        "name": "Deluxe Room",
        "description": "Spacious room with upgraded amenities",
        "base_price": 150,
        "max_occupancy": 3,
        "amenities": ["TV", "WiFi", "AC", "Mini Bar", "Coffee Maker"],
    },
    {
        "name": "Suite",
        "description": "Luxurious suite with separate living area",
        "base_price": 250,
        "max_occupancy": 4,
        "amenities": ["TV", "WiFi", "AC", "Mini Bar", "Coffee Maker", "Jacuzzi", "Living Room"],
    },
    {
        "name": "Executive Suite",
        "description": "Premium suite with executive amenities",
        "base_price": 350,
        "max_occupancy": 2,
        "amenities": [
            "TV",
            "WiFi",
            "AC",
            "Mini Bar",
            "Coffee Maker",
            "Jacuzzi",
            "Work Desk",
            "Meeting Area",
        ],
    },
]
ROOMS_PER_FLOOR = 5
DEFAULT_ROOM_COUNT = 20

DEFAULT_SERVICES = [
    ("Breakfast Buffet", "Continental breakfast buffet", 15, ServiceCategory.food),
    ("Lunch Special", "Daily lunch special from the restaurant", 20, ServiceCategory.food),
    ("Dinner Package", "Three-course dinner package", 35, ServiceCategory.food),
    ("Room Service", "24-hour room service", 10, ServiceCategory.food),
    ("Mineral Water", "Bottled mineral water", 2, ServiceCategory.beverage),
    ("Soft Drinks", "Assorted soft drinks", 3, ServiceCategory.beverage),
    ("Wine Selection", "Premium wine selection", 25, ServiceCategory.beverage),
    ("Spa Treatment", "Relaxing spa treatment", 50, ServiceCategory.spa),
    ("Massage Therapy", "Professional massage therapy", 40, ServiceCategory.spa),
    ("Laundry Service", "Express laundry service", 15, ServiceCategory.laundry),
    ("Dry Cleaning", "Professional dry cleaning", 20, ServiceCategory.laundry),
    ("Airport Transfer", "Hotel to airport transfer", 25, ServiceCategory.transport),
    ("City Tour", "Guided city tour", 30, ServiceCategory.transport),
]


def nights_between(check_in: date, check_out: date) -> int:
    nights = (check_out - check_in).days
    if nights <= 0:
        raise ValidationError("Check-out date must be after check-in date")
    return nights


def overlapping_reservations(
    db: Session,
    room_number: str,
    check_in: date,
    check_out: date,
    exclude_id: int | None = None,
) -> list[models.Reservation]:
    stmt = select(models.Reservation).where(
        models.Reservation.room_number == room_number,
        models.Reservation.reservation_status.in_(HOTEL_ACTIVE_STATUSES),
        models.Reservation.check_in < check_out,
        models.Reservation.check_out > check_in,
    )
    if exclude_id is not None:
        stmt = stmt.where(models.Reservation.id != exclude_id)
    return list(db.execute(stmt).scalars().all())


def _get_room_type(db: Session, name: str) -> models.RoomType:
    room_type = db.execute(
        select(models.RoomType).where(models.RoomType.name == name)
    ).scalar_one_or_none()
    if room_type is None:
        raise ValidationError("Invalid room type")
    return room_type


def _lock_bookable_room(db: Session, room_number: str) -> models.Room:
    room = lock_row(db, models.Room, models.Room.room_number == room_number)
    if room is None or not room.is_active or room.status == RoomStatus.maintenance:
        raise ValidationError("Selected room is not available")
    return room


def _ensure_room_free(
    db: Session,
    room: models.Room,
    room_type: models.RoomType,
    check_in: date,
    check_out: date,
    occupants: int,
    exclude_id: int | None = None,
    message: str = "Room is already booked for selected dates",
) -> None:
    if occupants > room_type.max_occupancy:
        raise ValidationError(
            f"{room_type.name} allows a maximum of {room_type.max_occupancy} guests"
        )
    clashes = overlapping_reservations(db, room.room_number, check_in, check_out, exclude_id)
    admission = admit(1, len(clashes), 1)
    if not admission.admitted:
        log_rejection(f"hotel:{room.room_number}:{check_in.isoformat()}", admission)
        raise CapacityError(message, admission.remaining)


def _release_room(
    db: Session, room_number: str, check_in: date, check_out: date, reservation_id: int
) -> None:
    """Mark a room available again unless another active stay still overlaps."""
    room = lock_row(db, models.Room, models.Room.room_number == room_number)
    if room is None or room.status != RoomStatus.occupied:
        return
    others = overlapping_reservations(db, room_number, check_in, check_out, exclude_id=reservation_id)
    if not others:
        room.status = RoomStatus.available


def _resolve_charges(db: Session, charges: list[dict]) -> list[dict]:
    """Price charges that leave ``amount`` empty from the services catalog."""
    resolved = []
    for charge in charges:
        if charge.get("amount") is None:
            service = db.execute(
                select(models.HotelService).where(models.HotelService.name == charge["service"])
            ).scalar_one_or_none()
            if service is None or not service.is_available:
                raise ValidationError(f"Service {charge['service']} is not available")
            charge = {**charge, "amount": float(to_money(service.price))}
        resolved.append(charge)
    return resolved


def _price(room_rate, nights: int, extra_charges: list[dict], discount):
    sub_total = to_money(to_money(room_rate) * nights + extra_charges_total(extra_charges))
    tax = to_money(0)
    total = max(sub_total + tax - to_money(discount), to_money(0))
    return sub_total, tax, total


def list_reservations(
    db: Session,
    status: ReservationStatus | None = None,
    payment_status: ReservationPaymentStatus | None = None,
    search: str | None = None,
    page: int = 1,
    limit: int = 10,
    sort_by: str | None = None,
    sort_order: str | None = None,
) -> tuple[list[models.Reservation], int]:
    stmt = select(models.Reservation)
    if status:
        stmt = stmt.where(models.Reservation.reservation_status == status)
    if payment_status:
        stmt = stmt.where(models.Reservation.payment_status == payment_status)
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(
            or_(
                models.Reservation.guest_name.ilike(pattern),
                models.Reservation.email.ilike(pattern),
                models.Reservation.phone.ilike(pattern),
                models.Reservation.room_number.ilike(pattern),
                models.Reservation.reservation_number.ilike(pattern),
            )
        )
    stmt = order_by(stmt, models.Reservation, sort_by, sort_order, SORTABLE)
    return paginate(db, stmt, page, limit)


def get_reservation(db: Session, reservation_id: int) -> models.Reservation:
    reservation = db.get(models.Reservation, reservation_id)
    if reservation is None:
        raise NotFoundError("Reservation not found")
    return reservation


def create_reservation(
    db: Session, payload: schemas.ReservationCreate, actor_id: int | None = None
) -> models.Reservation:
    nights = nights_between(payload.check_in, payload.check_out)
    with atomic(db):
        room = _lock_bookable_room(db, payload.room_number)
        room_type = _get_room_type(db, room.room_type)
        _ensure_room_free(
            db,
            room,
            room_type,
            payload.check_in,
            payload.check_out,
            payload.adults + payload.children,
        )
        charges = _resolve_charges(db, [charge.model_dump() for charge in payload.extra_charges])
        sub_total, tax, total = _price(room_type.base_price, nights, charges, payload.discount)
        data = payload.model_dump(exclude={"extra_charges", "discount"})
        reservation = models.Reservation(
            **data,
            reservation_number=booking_number(db, HOTEL_RESERVATION_PREFIX),
            room_type=room_type.name,
            total_nights=nights,
            room_rate=to_money(room_type.base_price),
            extra_charges=charges,
            sub_total=sub_total,
            tax=tax,
            discount=to_money(payload.discount),
            total_amount=total,
            reservation_status=ReservationStatus.confirmed,
            created_by=actor_id,
        )
        db.add(reservation)
        room.status = RoomStatus.occupied
        db.flush()
        record_audit(db, actor_id, "reservation.create", {"reservation_id": reservation.id})
    logger.info(
        "Reservation created",
        extra={"reservation_id": reservation.id, "room": reservation.room_number},
    )
    return reservation


def update_reservation(
    db: Session,
    reservation_id: int,
    payload: schemas.ReservationUpdate,
    actor_id: int | None = None,
) -> models.Reservation:
    with atomic(db):
        reservation = get_reservation(db, reservation_id)
        changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
        old_room = reservation.room_number
        target_room = changes.get("room_number", old_room)
        target_in = changes.get("check_in", reservation.check_in)
        target_out = changes.get("check_out", reservation.check_out)
        target_occupants = changes.get("adults", reservation.adults) + changes.get(
            "children", reservation.children or 0
        )
        nights = nights_between(target_in, target_out)

        moves = any(
            key in changes and changes[key] != getattr(reservation, key)
            for key in ("room_number", "check_in", "check_out", "adults", "children")
        )
        room_type_name = reservation.room_type
        room_rate = reservation.room_rate
        active = reservation.reservation_status in HOTEL_ACTIVE_STATUSES
        if moves and active:
            room = _lock_bookable_room(db, target_room)
            room_type = _get_room_type(db, room.room_type)
            _ensure_room_free(
                db, room, room_type, target_in, target_out, target_occupants, exclude_id=reservation.id
            )
            if target_room != old_room:
                room_type_name = room_type.name
                room_rate = to_money(room_type.base_price)
        elif "room_number" in changes and target_room != old_room:
            room = db.execute(
                select(models.Room).where(models.Room.room_number == target_room)
            ).scalar_one_or_none()
            if room is None:
                raise ValidationError("Selected room is not available")
            room_type = _get_room_type(db, room.room_type)
            room_type_name = room_type.name
            room_rate = to_money(room_type.base_price)

        if "extra_charges" in changes:
            requested = [dict(charge) for charge in changes["extra_charges"]]
            changes["extra_charges"] = _resolve_charges(db, requested)
        charges = changes.get("extra_charges", reservation.extra_charges or [])
        discount = changes.get("discount", reservation.discount)
        sub_total, tax, total = _price(room_rate, nights, charges, discount)

        previous_window = (reservation.check_in, reservation.check_out)
        for key, value in changes.items():
            setattr(reservation, key, to_money(value) if key == "discount" else value)
        reservation.room_type = room_type_name
        reservation.room_rate = room_rate
        reservation.total_nights = nights
        reservation.sub_total = sub_total
        reservation.tax = tax
        reservation.total_amount = total

        if active and target_room != old_room:
            _release_room(db, old_room, *previous_window, reservation.id)
            room.status = RoomStatus.occupied
        record_audit(db, actor_id, "reservation.update", {"reservation_id": reservation.id})
    logger.info("Reservation updated", extra={"reservation_id": reservation.id})
    return reservation


def update_status(
    db: Session,
    reservation_id: int,
    new_status: ReservationStatus,
    actor_id: int | None = None,
) -> models.Reservation:
    if new_status not in SETTABLE_STATUSES:
        raise ValidationError("Invalid status")
    with atomic(db):
        reservation = get_reservation(db, reservation_id)
        current = reservation.reservation_status
        if current in HOTEL_UNDELETABLE:
            raise ConflictError(
                f"Cannot change reservation status from {current.value} to {new_status.value}"
            )
        if new_status == current:
            return reservation
        if new_status in RELEASING_STATUSES and current == ReservationStatus.confirmed:
            _release_room(
                db,
                reservation.room_number,
                reservation.check_in,
                reservation.check_out,
                reservation.id,
            )
        elif new_status == ReservationStatus.confirmed:
            room = _lock_bookable_room(db, reservation.room_number)
            room_type = _get_room_type(db, room.room_type)
            _ensure_room_free(
                db,
                room,
                room_type,
                reservation.check_in,
                reservation.check_out,
                reservation.occupants,
                exclude_id=reservation.id,
                message="Room is no longer available for selected dates",
            )
            room.status = RoomStatus.occupied
        reservation.reservation_status = new_status
        record_audit(
            db,
            actor_id,
            "reservation.status",
            {"reservation_id": reservation.id, "from": current.value, "to": new_status.value},
        )
    logger.info(
        "Reservation status changed",
        extra={"reservation_id": reservation.id, "from": current.value, "to": new_status.value},
    )
    return reservation


def update_payment(
    db: Session,
    reservation_id: int,
    payment_status: ReservationPaymentStatus,
    actor_id: int | None = None,
) -> models.Reservation:
    with atomic(db):
        reservation = get_reservation(db, reservation_id)
        reservation.payment_status = payment_status
        record_audit(
            db,
            actor_id,
            "reservation.payment",
            {"reservation_id": reservation.id, "payment_status": payment_status.value},
        )
    logger.info(
        "Reservation payment updated",
        extra={"reservation_id": reservation.id, "payment_status": payment_status.value},
    )
    return reservation


def check_in(db: Session, reservation_id: int, actor_id: int | None = None) -> models.Reservation:
    with atomic(db):
        reservation = get_reservation(db, reservation_id)
        if reservation.reservation_status != ReservationStatus.confirmed:
            raise ConflictError("Only confirmed reservations can be checked in")
        room = lock_row(db, models.Room, models.Room.room_number == reservation.room_number)
        reservation.reservation_status = ReservationStatus.checked_in
        reservation.actual_check_in = utc_now()
        if room is not None:
            room.status = RoomStatus.occupied
        record_audit(db, actor_id, "reservation.check_in", {"reservation_id": reservation.id})
    logger.info("Guest checked in", extra={"reservation_id": reservation.id})
    return reservation


def check_out(db: Session, reservation_id: int, actor_id: int | None = None) -> models.Reservation:
    with atomic(db):
        reservation = get_reservation(db, reservation_id)
        if reservation.reservation_status != ReservationStatus.checked_in:
            raise ConflictError("Only checked-in guests can check out")
        if reservation.payment_status in CHECKOUT_BLOCKING_PAYMENTS:
            raise ConflictError(
                'Cannot check out with pending payment. Please update payment status to "paid" first.'
            )
        room = lock_row(db, models.Room, models.Room.room_number == reservation.room_number)
        reservation.reservation_status = ReservationStatus.checked_out
        reservation.actual_check_out = utc_now()
        if room is not None:
            room.status = RoomStatus.cleaning
        record_audit(db, actor_id, "reservation.check_out", {"reservation_id": reservation.id})
    logger.info("Guest checked out", extra={"reservation_id": reservation.id})
    return reservation


def delete_reservation(db: Session, reservation_id: int, actor_id: int | None = None) -> None:
    with atomic(db):
        reservation = get_reservation(db, reservation_id)
        if reservation.reservation_status in HOTEL_UNDELETABLE:
            raise ConflictError("Cannot delete reservations that are checked in or checked out")
        if reservation.reservation_status in HOTEL_ACTIVE_STATUSES:
            _release_room(
                db,
                reservation.room_number,
                reservation.check_in,
                reservation.check_out,
                reservation.id,
            )
        db.delete(reservation)
        record_audit(db, actor_id, "reservation.delete", {"reservation_id": reservation_id})
    logger.info("Reservation deleted", extra={"reservation_id": reservation_id})


def list_rooms(
    db: Session, status: RoomStatus | None = None, room_type: str | None = None, floor: int | None = None
) -> list[models.Room]:
    stmt = select(models.Room)
    if status:
        stmt = stmt.where(models.Room.status == status)
    if room_type:
        stmt = stmt.where(models.Room.room_type == room_type)
    if floor:
        stmt = stmt.where(models.Room.floor == floor)
    return list(db.execute(stmt.order_by(models.Room.room_number)).scalars().all())


def get_room(db: Session, room_id: int) -> models.Room:
    room = db.get(models.Room, room_id)
    if room is None:
        raise NotFoundError("Room not found")
    return room


def create_room(db: Session, payload: schemas.RoomCreate) -> models.Room:
    with atomic(db):
        room_type = _get_room_type(db, payload.room_type)
        exists = db.execute(
            select(models.Room.id).where(models.Room.room_number == payload.room_number)
        ).first()
        if exists:
            raise ConflictError("Room number already exists")
        data = payload.model_dump()
        data["price"] = to_money(payload.price if payload.price is not None else room_type.base_price)
        room = models.Room(**data)
        db.add(room)
    logger.info("Room created", extra={"room": room.room_number})
    return room


def update_room(db: Session, room_id: int, payload: schemas.RoomUpdate) -> models.Room:
    with atomic(db):
        room = get_room(db, room_id)
        changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
        if "room_type" in changes:
            _get_room_type(db, changes["room_type"])
        if "price" in changes:
            changes["price"] = to_money(changes["price"])
        for key, value in changes.items():
            setattr(room, key, value)
    logger.info("Room updated", extra={"room": room.room_number})
    return room


def update_room_status(db: Session, room_id: int, status: RoomStatus) -> models.Room:
    with atomic(db):
        room = get_room(db, room_id)
        room.status = status
        if status == RoomStatus.available:
            room.last_cleaned = utc_now()
    logger.info("Room status changed", extra={"room": room.room_number, "status": status.value})
    return room


def list_room_types(db: Session) -> list[models.RoomType]:
    return list(db.execute(select(models.RoomType).order_by(models.RoomType.base_price)).scalars().all())


def create_room_type(db: Session, payload: schemas.RoomTypeCreate) -> models.RoomType:
    with atomic(db):
        exists = db.execute(
            select(models.RoomType.id).where(models.RoomType.name == payload.name)
        ).first()
        if exists:
            raise ConflictError("Room type already exists")
        data = payload.model_dump()
        data["base_price"] = to_money(payload.base_price)
        room_type = models.RoomType(**data)
        db.add(room_type)
    logger.info("Room type created", extra={"room_type": room_type.name})
    return room_type


def update_room_type(db: Session, room_type_id: int, payload: schemas.RoomTypeUpdate) -> models.RoomType:
    with atomic(db):
        room_type = db.get(models.RoomType, room_type_id)
        if room_type is None:
            raise NotFoundError("Room type not found")
        changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
        if "base_price" in changes:
            changes["base_price"] = to_money(changes["base_price"])
        for key, value in changes.items():
            setattr(room_type, key, value)
    logger.info("Room type updated", extra={"room_type": room_type.name})
    return room_type


def initialize_room_types(db: Session) -> int:
    created = 0
    with atomic(db):
        for data in DEFAULT_ROOM_TYPES:
            exists = db.execute(
                select(models.RoomType.id).where(models.RoomType.name == data["name"])
            ).first()
            if exists:
                continue
            db.add(models.RoomType(**{**data, "base_price": to_money(data["base_price"])}, is_active=True))
            created += 1
    logger.info("Room types initialized", extra={"created_count": created})
    return created


def list_services(db: Session, available_only: bool = True) -> list[models.HotelService]:
    stmt = select(models.HotelService)
    if available_only:
        stmt = stmt.where(models.HotelService.is_available.is_(True))
    stmt = stmt.order_by(models.HotelService.category, models.HotelService.name)
    return list(db.execute(stmt).scalars().all())


def _service_name_taken(db: Session, name: str, exclude_id: int | None = None) -> bool:
    stmt = select(models.HotelService.id).where(models.HotelService.name == name)
    if exclude_id is not None:
        stmt = stmt.where(models.HotelService.id != exclude_id)
    return db.execute(stmt).first() is not None


def create_service(db: Session, payload: schemas.HotelServiceCreate) -> models.HotelService:
    with atomic(db):
        if _service_name_taken(db, payload.name):
            raise ConflictError("Service with this name already exists")
        data = payload.model_dump()
        data["price"] = to_money(payload.price)
        service = models.HotelService(**data)
        db.add(service)
    logger.info("Hotel service created", extra={"service": service.name})
    return service


def update_service(db: Session, service_id: int, payload: schemas.HotelServiceUpdate) -> models.HotelService:
    with atomic(db):
        service = db.get(models.HotelService, service_id)
        if service is None:
            raise NotFoundError("Service not found")
        changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
        if "name" in changes and _service_name_taken(db, changes["name"], exclude_id=service.id):
            raise ConflictError("Service with this name already exists")
        if "price" in changes:
            changes["price"] = to_money(changes["price"])
        for key, value in changes.items():
            setattr(service, key, value)
    logger.info("Hotel service updated", extra={"service": service.name})
    return service


def initialize_services(db: Session) -> int:
    created = 0
    with atomic(db):
        for name, description, price, category in DEFAULT_SERVICES:
            if _service_name_taken(db, name):
                continue
            db.add(
                models.HotelService(
                    name=name,
                    description=description,
                    price=to_money(price),
                    category=category,
                    is_available=True,
                )
            )
            created += 1
    logger.info("Hotel services initialized", extra={"created_count": created})
    return created


def default_room_number(index: int) -> tuple[str, int]:
    floor = (index - 1) // ROOMS_PER_FLOOR + 1
    position = index % ROOMS_PER_FLOOR or ROOMS_PER_FLOOR
    return f"{floor}{position:02d}", floor


def initialize_defaults(db: Session) -> dict[str, int]:
    room_types_created = initialize_room_types(db)
    room_types = list_room_types(db)
    by_name = {room_type.name: room_type for room_type in room_types}
    ordered = [by_name[data["name"]] for data in DEFAULT_ROOM_TYPES if data["name"] in by_name]
    rooms_created = 0
    with atomic(db):
        for index in range(1, DEFAULT_ROOM_COUNT + 1):
            room_number, floor = default_room_number(index)
            exists = db.execute(
                select(models.Room.id).where(models.Room.room_number == room_number)
            ).first()
            if exists or not ordered:
                continue
            room_type = ordered[(floor - 1) % len(ordered)]
            db.add(
                models.Room(
                    room_number=room_number,
                    room_type=room_type.name,
                    floor=floor,
                    price=to_money(room_type.base_price),
                    status=RoomStatus.available,
                    features=list(room_type.amenities or []),
                    last_cleaned=utc_now(),
                    is_active=True,
                )
            )
            rooms_created += 1
    logger.info(
        "Hotel defaults initialized",
        extra={"room_types": room_types_created, "rooms": rooms_created},
    )
    return {"room_types": room_types_created, "rooms": rooms_created}


def dashboard(db: Session, today: date | None = None) -> dict:
    today = today or date.today()
    status_counts = dict(
        db.execute(
            select(models.Room.status, func.count(models.Room.id))
            .where(models.Room.is_active.is_(True))
            .group_by(models.Room.status)
        ).all()
    )
    total_rooms = sum(status_counts.values())
    occupied_tonight = db.scalar(
        select(func.count(func.distinct(models.Reservation.room_number))).where(
            models.Reservation.reservation_status.in_(HOTEL_ACTIVE_STATUSES),
            models.Reservation.check_in <= today,
            models.Reservation.check_out > today,
        )
    ) or 0
    check_ins_today = db.scalar(
        select(func.count(models.Reservation.id)).where(
            models.Reservation.check_in == today,
            models.Reservation.reservation_status.in_(HOTEL_ACTIVE_STATUSES),
        )
    ) or 0
    check_outs_today = db.scalar(
        select(func.count(models.Reservation.id)).where(
            models.Reservation.check_out == today,
            models.Reservation.reservation_status.in_(
                HOTEL_ACTIVE_STATUSES | {ReservationStatus.checked_out}
            ),
        )
    ) or 0
    pending_payments = db.scalar(
        select(func.count(models.Reservation.id)).where(
            models.Reservation.payment_status.in_(CHECKOUT_BLOCKING_PAYMENTS),
            models.Reservation.reservation_status.in_(
                HOTEL_ACTIVE_STATUSES | {ReservationStatus.checked_out}
            ),
        )
    ) or 0
    monthly_revenue = db.scalar(
        select(func.coalesce(func.sum(models.Reservation.total_amount), 0)).where(
            models.Reservation.payment_status == ReservationPaymentStatus.paid,
            extract("year", models.Reservation.check_in) == today.year,
            extract("month", models.Reservation.check_in) == today.month,
        )
    )
    return {
        "total_rooms": int(total_rooms),
        "rooms_by_status": {
            status.value: int(status_counts.get(status, 0)) for status in RoomStatus
        },
        "occupancy_rate": round(occupied_tonight / total_rooms * 100, 2) if total_rooms else 0.0,
        "check_ins_today": int(check_ins_today),
        "check_outs_today": int(check_outs_today),
        "pending_payments": int(pending_payments),
        "monthly_revenue": float(monthly_revenue or 0),
    }

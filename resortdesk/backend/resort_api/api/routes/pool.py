from datetime import date
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from ...api import deps
from ...core import policy
from ...db.session import get_db
from ...db import models, schemas
from ...services import pool_service
from ...services.errors import BookingError
from ...services.pagination import clamp, total_pages

router = APIRouter(prefix="/pool", tags=["pool"])


@router.get("/bookings", response_model=schemas.Page[schemas.PoolBooking])
def list_bookings(
    payment_status: models.PoolPaymentStatus | None = Query(None, alias="status"),
    day: date | None = Query(None, alias="date"),
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: str | None = None,
    sort_order: str | None = None,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("pool", policy.READ)),
):
    page, limit = clamp(page, limit)
    items, total = pool_service.list_bookings(
        db, payment_status, day, search, page, limit, sort_by, sort_order
    )
    return {"data": items, "total": total, "page": page, "total_pages": total_pages(total, limit)}


@router.get("/bookings/{booking_id}", response_model=schemas.Envelope[schemas.PoolBooking])
def get_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("pool", policy.READ)),
):
    try:
        booking = pool_service.get_booking(db, booking_id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"data": booking}


@router.post(
    "/bookings",
    response_model=schemas.Envelope[schemas.PoolBooking],
    status_code=status.HTTP_201_CREATED,
)
def create_booking(
    payload: schemas.PoolBookingCreate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("pool", policy.WRITE)),
):
    try:
        booking = pool_service.create_booking(db, payload, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Booking created successfully", "data": booking}


@router.patch("/bookings/{booking_id}", response_model=schemas.Envelope[schemas.PoolBooking])
def update_booking(
    booking_id: int,
    payload: schemas.PoolBookingUpdate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("pool", policy.WRITE)),
):
    try:
        booking = pool_service.update_booking(db, booking_id, payload, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Booking updated successfully", "data": booking}


@router.patch("/bookings/{booking_id}/status", response_model=schemas.Envelope[schemas.PoolBooking])
def update_payment_status(
    booking_id: int,
    payload: schemas.PoolPaymentStatusUpdate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("pool", policy.WRITE)),
):
    try:
        booking = pool_service.update_payment_status(
            db, booking_id, payload.payment_status, actor_id=user.id
        )
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Payment status updated successfully", "data": booking}


@router.delete("/bookings/{booking_id}", response_model=schemas.Envelope[None])
def delete_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("pool", policy.DELETE)),
):
    try:
        pool_service.delete_booking(db, booking_id, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Booking deleted successfully"}


@router.get("/dashboard", response_model=schemas.Envelope[dict])
def dashboard(
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("pool", policy.REPORT)),
):
    return {"data": pool_service.dashboard(db)}


@router.get("/time-slots", response_model=schemas.Envelope[list[schemas.TimeSlot]])
def list_time_slots(
    day: date | None = Query(None, alias="date"),
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("pool", policy.READ)),
):
    return {"data": pool_service.list_time_slots(db, day)}


@router.patch("/time-slots/{slot_id}", response_model=schemas.Envelope[schemas.TimeSlot])
def update_time_slot(
    slot_id: int,
    payload: schemas.TimeSlotUpdate,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("pool", policy.CONFIGURE)),
):
    try:
        slot = pool_service.update_time_slot(db, slot_id, payload)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Time slot updated successfully", "data": slot}


@router.post("/time-slots/initialize", response_model=schemas.Envelope[dict])
def initialize_time_slots(
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("pool", policy.CONFIGURE)),
):
    created = pool_service.initialize_time_slots(db)
    return {"message": "Time slots initialized", "data": {"created": created}}


@router.get("/ticket-prices", response_model=schemas.Envelope[list[schemas.TicketPrice]])
def list_ticket_prices(
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("pool", policy.READ)),
):
    return {"data": pool_service.list_ticket_prices(db)}


@router.patch("/ticket-prices/{ticket_id}", response_model=schemas.Envelope[schemas.TicketPrice])
def update_ticket_price(
    ticket_id: int,
    payload: schemas.TicketPriceUpdate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("pool", policy.CONFIGURE)),
):
    try:
        ticket = pool_service.update_ticket_price(db, ticket_id, payload, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Ticket price updated successfully", "data": ticket}


@router.post("/ticket-prices/initialize", response_model=schemas.Envelope[dict])
def initialize_ticket_prices(
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("pool", policy.CONFIGURE)),
):
    created = pool_service.initialize_ticket_prices(db)
    return {"message": "Ticket prices initialized", "data": {"created": created}}

from datetime import date
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from ...api import deps
from ...core import policy
from ...db.session import get_db
from ...db import models, schemas
from ...services import conference_service
from ...services.errors import BookingError
from ...services.pagination import clamp, total_pages

router = APIRouter(prefix="/conference", tags=["conference"])


@router.get("/bookings", response_model=schemas.Page[schemas.ConferenceBooking])
def list_bookings(
    payment_status: models.ConferencePaymentStatus | None = None,
    booking_status: models.ConferenceBookingStatus | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: str | None = None,
    sort_order: str | None = None,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("conference", policy.READ)),
):
    page, limit = clamp(page, limit)
    items, total = conference_service.list_bookings(
        db,
        payment_status,
        booking_status,
        start_date,
        end_date,
        search,
        page,
        limit,
        sort_by,
        sort_order,
    )
    return {"data": items, "total": total, "page": page, "total_pages": total_pages(total, limit)}


@router.get("/bookings/{booking_id}", response_model=schemas.Envelope[schemas.ConferenceBooking])
def get_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("conference", policy.READ)),
):
    try:
        booking = conference_service.get_booking(db, booking_id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"data": booking}


@router.post(
    "/bookings",
    response_model=schemas.Envelope[schemas.ConferenceBooking],
    status_code=status.HTTP_201_CREATED,
)
def create_booking(
    payload: schemas.ConferenceBookingCreate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("conference", policy.WRITE)),
):
    try:
        booking = conference_service.create_booking(db, payload, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Booking created successfully", "data": booking}


@router.patch("/bookings/{booking_id}", response_model=schemas.Envelope[schemas.ConferenceBooking])
def update_booking(
    booking_id: int,
    payload: schemas.ConferenceBookingUpdate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("conference", policy.WRITE)),
):
    try:
        booking = conference_service.update_booking(db, booking_id, payload, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Booking updated successfully", "data": booking}


@router.patch(
    "/bookings/{booking_id}/status",
    response_model=schemas.Envelope[schemas.ConferenceBooking],
)
def update_booking_status(
    booking_id: int,
    payload: schemas.ConferenceStatusUpdate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("conference", policy.WRITE)),
):
    try:
        booking = conference_service.update_status(
            db, booking_id, payload.booking_status, actor_id=user.id
        )
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Booking status updated successfully", "data": booking}


@router.patch(
    "/bookings/{booking_id}/payment",
    response_model=schemas.Envelope[schemas.ConferenceBooking],
)
def update_payment(
    booking_id: int,
    payload: schemas.ConferencePaymentUpdate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("conference", policy.WRITE)),
):
    try:
        booking = conference_service.update_payment(db, booking_id, payload, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Payment status updated successfully", "data": booking}


@router.delete("/bookings/{booking_id}", response_model=schemas.Envelope[None])
def delete_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("conference", policy.DELETE)),
):
    try:
        conference_service.delete_booking(db, booking_id, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Booking deleted successfully"}


@router.get("/dashboard", response_model=schemas.Envelope[dict])
def dashboard(
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("conference", policy.REPORT)),
):
    return {"data": conference_service.dashboard(db)}


@router.get("/halls", response_model=schemas.Envelope[list[schemas.ConferenceHall]])
def list_halls(
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("conference", policy.READ)),
):
    return {"data": conference_service.list_halls(db)}


@router.patch("/halls/{hall_id}", response_model=schemas.Envelope[schemas.ConferenceHall])
def update_hall(
    hall_id: int,
    payload: schemas.ConferenceHallUpdate,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("conference", policy.CONFIGURE)),
):
    try:
        hall = conference_service.update_hall(db, hall_id, payload)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Conference hall updated successfully", "data": hall}


@router.post("/halls/initialize", response_model=schemas.Envelope[dict])
def initialize_halls(
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("conference", policy.CONFIGURE)),
):
    created = conference_service.initialize_halls(db)
    return {"message": "Conference halls initialized", "data": {"created": created}}


@router.get("/equipment", response_model=schemas.Envelope[list[schemas.Equipment]])
def list_equipment(
    day: date | None = Query(None, alias="date"),
    include_inactive: bool = False,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("conference", policy.READ)),
):
    return {"data": conference_service.list_equipment(db, not include_inactive, day)}


@router.post(
    "/equipment",
    response_model=schemas.Envelope[schemas.Equipment],
    status_code=status.HTTP_201_CREATED,
)
def create_equipment(
    payload: schemas.EquipmentCreate,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("conference", policy.CONFIGURE)),
):
    item = conference_service.create_equipment(db, payload)
    return {"message": "Equipment created successfully", "data": item}


@router.patch("/equipment/{equipment_id}", response_model=schemas.Envelope[schemas.Equipment])
def update_equipment(
    equipment_id: int,
    payload: schemas.EquipmentUpdate,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("conference", policy.CONFIGURE)),
):
    try:
        item = conference_service.update_equipment(db, equipment_id, payload)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Equipment updated successfully", "data": item}

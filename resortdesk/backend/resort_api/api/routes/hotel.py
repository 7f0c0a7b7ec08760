from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from ...api import deps
from ...core import policy
from ...db.session import get_db
from ...db import models, schemas
from ...services import hotel_service
from ...services.errors import BookingError
from ...services.pagination import clamp, total_pages

router = APIRouter(prefix="/hotel", tags=["hotel"])


@router.get("/reservations", response_model=schemas.Page[schemas.Reservation])
def list_reservations(
    reservation_status: models.ReservationStatus | None = Query(None, alias="status"),
    payment_status: models.ReservationPaymentStatus | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: str | None = None,
    sort_order: str | None = None,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("hotel", policy.READ)),
):
    page, limit = clamp(page, limit)
    items, total = hotel_service.list_reservations(
        db, reservation_status, payment_status, search, page, limit, sort_by, sort_order
    )
    return {"data": items, "total": total, "page": page, "total_pages": total_pages(total, limit)}


@router.get("/reservations/{reservation_id}", response_model=schemas.Envelope[schemas.Reservation])
def get_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("hotel", policy.READ)),
):
    try:
        reservation = hotel_service.get_reservation(db, reservation_id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"data": reservation}


@router.post(
    "/reservations",
    response_model=schemas.Envelope[schemas.Reservation],
    status_code=status.HTTP_201_CREATED,
)
def create_reservation(
    payload: schemas.ReservationCreate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("hotel", policy.WRITE)),
):
    try:
        reservation = hotel_service.create_reservation(db, payload, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Reservation created successfully", "data": reservation}


@router.patch("/reservations/{reservation_id}", response_model=schemas.Envelope[schemas.Reservation])
def update_reservation(
    reservation_id: int,
    payload: schemas.ReservationUpdate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("hotel", policy.WRITE)),
):
    try:
        reservation = hotel_service.update_reservation(db, reservation_id, payload, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Reservation updated successfully", "data": reservation}


@router.patch(
    "/reservations/{reservation_id}/status",
    response_model=schemas.Envelope[schemas.Reservation],
)
def update_reservation_status(
    reservation_id: int,
    payload: schemas.ReservationStatusUpdate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("hotel", policy.WRITE)),
):
    try:
        reservation = hotel_service.update_status(
            db, reservation_id, payload.reservation_status, actor_id=user.id
        )
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Reservation status updated successfully", "data": reservation}


@router.patch(
    "/reservations/{reservation_id}/payment",
    response_model=schemas.Envelope[schemas.Reservation],
)
def update_payment(
    reservation_id: int,
    payload: schemas.ReservationPaymentUpdate,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("hotel", policy.WRITE)),
):
    try:
        reservation = hotel_service.update_payment(
            db, reservation_id, payload.payment_status, actor_id=user.id
        )
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Payment status updated successfully", "data": reservation}


@router.post(
    "/reservations/{reservation_id}/check-in",
    response_model=schemas.Envelope[schemas.Reservation],
)
def check_in(
    reservation_id: int,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("hotel", policy.WRITE)),
):
    try:
        reservation = hotel_service.check_in(db, reservation_id, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Guest checked in successfully", "data": reservation}


@router.post(
    "/reservations/{reservation_id}/check-out",
    response_model=schemas.Envelope[schemas.Reservation],
)
def check_out(
    reservation_id: int,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("hotel", policy.WRITE)),
):
    try:
        reservation = hotel_service.check_out(db, reservation_id, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Guest checked out successfully", "data": reservation}


@router.delete("/reservations/{reservation_id}", response_model=schemas.Envelope[None])
def delete_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    user: models.User = Depends(deps.require_permission("hotel", policy.DELETE)),
):
    try:
        hotel_service.delete_reservation(db, reservation_id, actor_id=user.id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Reservation deleted successfully"}


@router.get("/dashboard", response_model=schemas.Envelope[dict])
def dashboard(
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("hotel", policy.REPORT)),
):
    return {"data": hotel_service.dashboard(db)}


@router.get("/rooms", response_model=schemas.Envelope[list[schemas.Room]])
def list_rooms(
    room_status: models.RoomStatus | None = Query(None, alias="status"),
    room_type: str | None = None,
    floor: int | None = None,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("hotel", policy.READ)),
):
    return {"data": hotel_service.list_rooms(db, room_status, room_type, floor)}


@router.get("/rooms/{room_id}", response_model=schemas.Envelope[schemas.Room])
def get_room(
    room_id: int,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("hotel", policy.READ)),
):
    try:
        room = hotel_service.get_room(db, room_id)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"data": room}


@router.post("/rooms", response_model=schemas.Envelope[schemas.Room], status_code=status.HTTP_201_CREATED)
def create_room(
    payload: schemas.RoomCreate,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("hotel", policy.CONFIGURE)),
):
    try:
        room = hotel_service.create_room(db, payload)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Room created successfully", "data": room}


@router.patch("/rooms/{room_id}", response_model=schemas.Envelope[schemas.Room])
def update_room(
    room_id: int,
    payload: schemas.RoomUpdate,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("hotel", policy.CONFIGURE)),
):
    try:
        room = hotel_service.update_room(db, room_id, payload)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Room updated successfully", "data": room}


@router.patch("/rooms/{room_id}/status", response_model=schemas.Envelope[schemas.Room])
def update_room_status(
    room_id: int,
    payload: schemas.RoomStatusUpdate,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("hotel", policy.WRITE)),
):
    try:
        room = hotel_service.update_room_status(db, room_id, payload.status)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Room status updated successfully", "data": room}


@router.get("/room-types", response_model=schemas.Envelope[list[schemas.RoomType]])
def list_room_types(
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("hotel", policy.READ)),
):
    return {"data": hotel_service.list_room_types(db)}


@router.post(
    "/room-types",
    response_model=schemas.Envelope[schemas.RoomType],
    status_code=status.HTTP_201_CREATED,
)
def create_room_type(
    payload: schemas.RoomTypeCreate,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("hotel", policy.CONFIGURE)),
):
    try:
        room_type = hotel_service.create_room_type(db, payload)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Room type created successfully", "data": room_type}


@router.patch("/room-types/{room_type_id}", response_model=schemas.Envelope[schemas.RoomType])
def update_room_type(
    room_type_id: int,
    payload: schemas.RoomTypeUpdate,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("hotel", policy.CONFIGURE)),
):
    try:
        room_type = hotel_service.update_room_type(db, room_type_id, payload)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Room type updated successfully", "data": room_type}


@router.post("/room-types/initialize", response_model=schemas.Envelope[dict])
def initialize_room_types(
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("hotel", policy.CONFIGURE)),
):
    created = hotel_service.initialize_room_types(db)
    return {"message": "Room types initialized", "data": {"created": created}}


@router.post("/initialize-defaults", response_model=schemas.Envelope[dict])
def initialize_defaults(
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("hotel", policy.CONFIGURE)),
):
    created = hotel_service.initialize_defaults(db)
    return {"message": "Hotel defaults initialized successfully", "data": created}


@router.get("/services", response_model=schemas.Envelope[list[schemas.HotelService]])
def list_services(
    include_unavailable: bool = False,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("hotel", policy.READ)),
):
    return {"data": hotel_service.list_services(db, available_only=not include_unavailable)}


@router.post(
    "/services",
    response_model=schemas.Envelope[schemas.HotelService],
    status_code=status.HTTP_201_CREATED,
)
def create_service(
    payload: schemas.HotelServiceCreate,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("hotel", policy.CONFIGURE)),
):
    try:
        service = hotel_service.create_service(db, payload)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Service created successfully", "data": service}


@router.patch("/services/{service_id}", response_model=schemas.Envelope[schemas.HotelService])
def update_service(
    service_id: int,
    payload: schemas.HotelServiceUpdate,
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("hotel", policy.CONFIGURE)),
):
    try:
        service = hotel_service.update_service(db, service_id, payload)
    except BookingError as exc:
        raise deps.http_error(exc) from exc
    return {"message": "Service updated successfully", "data": service}


@router.post("/services/initialize", response_model=schemas.Envelope[dict])
def initialize_services(
    db: Session = Depends(get_db),
    _: models.User = Depends(deps.require_permission("hotel", policy.CONFIGURE)),
):
    created = hotel_service.initialize_services(db)
    return {"message": "Services initialized", "data": {"created": created}}

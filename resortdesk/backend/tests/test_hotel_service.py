from datetime import date, timedelta
from decimal import Decimal

import pytest

from resort_api.db import models, schemas
from resort_api.services import hotel_service
from resort_api.services.errors import CapacityError, ConflictError, NotFoundError, ValidationError

from factories import create_room, create_service

Status = models.ReservationStatus


def stay(days_from_now=5, nights=2):
    check_in = date.today() + timedelta(days=days_from_now)
    return check_in, check_in + timedelta(days=nights)


def reservation_payload(room="101", days_from_now=5, nights=2, adults=2, children=0, **extra):
    check_in, check_out = stay(days_from_now, nights)
    return schemas.ReservationCreate(
        guest_name="Linus Guest",
        phone="555-0303",
        check_in=check_in,
        check_out=check_out,
        room_number=room,
        adults=adults,
        children=children,
        **extra,
    )


def test_create_prices_stay_and_occupies_room(db_session):
    room = create_room(db_session, base_price=100)

    reservation = hotel_service.create_reservation(
        db_session,
        reservation_payload(
            nights=3,
            extra_charges=[schemas.ExtraCharge(service="Breakfast", amount=15, quantity=2)],
            discount=10,
        ),
    )

    assert reservation.total_nights == 3
    assert Decimal(str(reservation.sub_total)) == Decimal("330.00")
    assert Decimal(str(reservation.total_amount)) == Decimal("320.00")
    assert reservation.reservation_number.startswith("HR-")
    db_session.refresh(room)
    assert room.status == models.RoomStatus.occupied


def test_overlapping_stay_rejected_back_to_back_allowed(db_session):
    create_room(db_session)
    hotel_service.create_reservation(db_session, reservation_payload(days_from_now=5, nights=2))

    with pytest.raises(CapacityError, match="Room is already booked for selected dates"):
        hotel_service.create_reservation(db_session, reservation_payload(days_from_now=6, nights=2))

    following = hotel_service.create_reservation(db_session, reservation_payload(days_from_now=7, nights=1))
    assert following.check_in == stay(5, 2)[1]


def test_occupancy_limit_from_room_type(db_session):
    create_room(db_session, max_occupancy=2)

    with pytest.raises(ValidationError, match="maximum of 2 guests"):
        hotel_service.create_reservation(db_session, reservation_payload(adults=2, children=1))


def test_maintenance_room_not_bookable(db_session):
    create_room(db_session, status=models.RoomStatus.maintenance)

    with pytest.raises(ValidationError, match="Selected room is not available"):
        hotel_service.create_reservation(db_session, reservation_payload())


def test_check_out_blocked_while_payment_partial(db_session):
    room = create_room(db_session)
    reservation = hotel_service.create_reservation(
        db_session, reservation_payload(payment_status=models.ReservationPaymentStatus.partial)
    )
    hotel_service.check_in(db_session, reservation.id)

    with pytest.raises(ConflictError, match='Please update payment status to "paid" first.'):
        hotel_service.check_out(db_session, reservation.id)

    db_session.expire_all()
    unchanged = db_session.get(models.Reservation, reservation.id)
    assert unchanged.reservation_status == Status.checked_in
    assert unchanged.actual_check_out is None
    assert db_session.get(models.Room, room.id).status == models.RoomStatus.occupied


def test_check_out_after_payment_sends_room_to_cleaning(db_session):
    room = create_room(db_session)
    reservation = hotel_service.create_reservation(db_session, reservation_payload())
    hotel_service.check_in(db_session, reservation.id)
    hotel_service.update_payment(db_session, reservation.id, models.ReservationPaymentStatus.paid)

    done = hotel_service.check_out(db_session, reservation.id)

    assert done.reservation_status == Status.checked_out
    assert done.actual_check_out is not None
    db_session.refresh(room)
    assert room.status == models.RoomStatus.cleaning


def test_only_confirmed_reservations_check_in(db_session):
    create_room(db_session)
    reservation = hotel_service.create_reservation(db_session, reservation_payload())
    hotel_service.update_status(db_session, reservation.id, Status.cancelled)

    with pytest.raises(ConflictError, match="Only confirmed reservations can be checked in"):
        hotel_service.check_in(db_session, reservation.id)


def test_cancel_frees_room_and_reconfirm_rechecks(db_session):
    room = create_room(db_session)
    first = hotel_service.create_reservation(db_session, reservation_payload())

    hotel_service.update_status(db_session, first.id, Status.cancelled)
    db_session.refresh(room)
    assert room.status == models.RoomStatus.available

    hotel_service.create_reservation(db_session, reservation_payload())
    with pytest.raises(CapacityError, match="Room is no longer available for selected dates"):
        hotel_service.update_status(db_session, first.id, Status.confirmed)

    db_session.expire_all()
    assert db_session.get(models.Reservation, first.id).reservation_status == Status.cancelled


def test_no_show_releases_room(db_session):
    room = create_room(db_session)
    first = hotel_service.create_reservation(db_session, reservation_payload(days_from_now=5, nights=2))
    hotel_service.create_reservation(db_session, reservation_payload(days_from_now=7, nights=2))

    hotel_service.update_status(db_session, first.id, Status.no_show)

    db_session.refresh(room)
    assert room.status == models.RoomStatus.available
    assert hotel_service.overlapping_reservations(db_session, "101", *stay(7, 2))


def test_checked_in_reservations_cannot_be_deleted(db_session):
    create_room(db_session)
    reservation = hotel_service.create_reservation(db_session, reservation_payload())
    hotel_service.check_in(db_session, reservation.id)

    with pytest.raises(ConflictError, match="checked in or checked out"):
        hotel_service.delete_reservation(db_session, reservation.id)


def test_moving_reservation_releases_old_room(db_session):
    old_room = create_room(db_session, number="101")
    new_room = create_room(db_session, number="102")
    reservation = hotel_service.create_reservation(db_session, reservation_payload(room="101"))

    moved = hotel_service.update_reservation(
        db_session, reservation.id, schemas.ReservationUpdate(room_number="102")
    )

    assert moved.room_number == "102"
    db_session.refresh(old_room)
    db_session.refresh(new_room)
    assert old_room.status == models.RoomStatus.available
    assert new_room.status == models.RoomStatus.occupied


def test_initialize_defaults_creates_catalogue_once(db_session):
    assert hotel_service.initialize_defaults(db_session) == {"room_types": 4, "rooms": 20}
    assert hotel_service.initialize_defaults(db_session) == {"room_types": 0, "rooms": 0}

    numbers = [room.room_number for room in hotel_service.list_rooms(db_session)]
    assert numbers[:5] == ["101", "102", "103", "104", "105"]
    assert numbers[-1] == "405"
    executive = hotel_service.list_rooms(db_session, room_type="Executive Suite")
    assert {room.floor for room in executive} == {4}


def test_dashboard_counts_rooms_and_arrivals(db_session):
    create_room(db_session, "101")
    create_room(db_session, "102")
    create_room(db_session, "103", status=models.RoomStatus.maintenance)
    hotel_service.create_reservation(db_session, reservation_payload(days_from_now=0, nights=2))

    summary = hotel_service.dashboard(db_session, today=date.today())

    assert summary["total_rooms"] == 3
    assert summary["rooms_by_status"] == {
        "available": 1,
        "occupied": 1,
        "maintenance": 1,
        "cleaning": 0,
    }
    assert summary["occupancy_rate"] == 33.33
    assert summary["check_ins_today"] == 1
    assert summary["check_outs_today"] == 0
    assert summary["pending_payments"] == 1
    assert summary["monthly_revenue"] == 0.0


def test_room_type_create_update_and_duplicate(db_session):
    payload = schemas.RoomTypeCreate(
        name="Garden Villa", description="Private garden", base_price=180, max_occupancy=3
    )
    created = hotel_service.create_room_type(db_session, payload)
    assert Decimal(str(created.base_price)) == Decimal("180.00")

    with pytest.raises(ConflictError, match="Room type already exists"):
        hotel_service.create_room_type(db_session, payload)

    updated = hotel_service.update_room_type(
        db_session, created.id, schemas.RoomTypeUpdate(base_price=200, max_occupancy=None)
    )
    assert Decimal(str(updated.base_price)) == Decimal("200.00")
    assert updated.max_occupancy == 3

    with pytest.raises(NotFoundError, match="Room type not found"):
        hotel_service.update_room_type(db_session, 999, schemas.RoomTypeUpdate(base_price=1))


def test_room_create_takes_type_price_and_rejects_duplicates(db_session):
    hotel_service.initialize_room_types(db_session)
    standard = next(t for t in hotel_service.list_room_types(db_session) if t.name == "Standard Room")

    room = hotel_service.create_room(
        db_session, schemas.RoomCreate(room_number="501", room_type="Standard Room", floor=5)
    )
    assert Decimal(str(room.price)) == Decimal(str(standard.base_price))

    with pytest.raises(ConflictError, match="Room number already exists"):
        hotel_service.create_room(
            db_session, schemas.RoomCreate(room_number="501", room_type="Standard Room", floor=5)
        )
    with pytest.raises(ValidationError, match="Invalid room type"):
        hotel_service.create_room(
            db_session, schemas.RoomCreate(room_number="502", room_type="Treehouse", floor=5)
        )


def test_room_update_and_status_change(db_session):
    room = create_room(db_session, status=models.RoomStatus.cleaning)

    updated = hotel_service.update_room(
        db_session, room.id, schemas.RoomUpdate(price=120, features=["Balcony"])
    )
    assert Decimal(str(updated.price)) == Decimal("120.00")
    assert updated.features == ["Balcony"]

    with pytest.raises(ValidationError, match="Invalid room type"):
        hotel_service.update_room(db_session, room.id, schemas.RoomUpdate(room_type="Treehouse"))

    cleaned = hotel_service.update_room_status(db_session, room.id, models.RoomStatus.available)
    assert cleaned.status == models.RoomStatus.available
    assert cleaned.last_cleaned is not None


def test_services_catalog_create_update_and_duplicate(db_session):
    payload = schemas.HotelServiceCreate(
        name="Yoga Class", description="Morning session", price=15, category=models.ServiceCategory.spa
    )
    service = hotel_service.create_service(db_session, payload)

    with pytest.raises(ConflictError, match="Service with this name already exists"):
        hotel_service.create_service(db_session, payload)

    create_service(db_session, name="Laundry")
    with pytest.raises(ConflictError, match="Service with this name already exists"):
        hotel_service.update_service(db_session, service.id, schemas.HotelServiceUpdate(name="Laundry"))

    hidden = hotel_service.update_service(
        db_session, service.id, schemas.HotelServiceUpdate(price=18, is_available=False)
    )
    assert Decimal(str(hidden.price)) == Decimal("18.00")
    assert [item.name for item in hotel_service.list_services(db_session)] == ["Laundry"]
    assert len(hotel_service.list_services(db_session, available_only=False)) == 2


def test_initialize_services_is_idempotent(db_session):
    assert hotel_service.initialize_services(db_session) == 13
    assert hotel_service.initialize_services(db_session) == 0


def test_extra_charge_priced_from_services_catalog(db_session):
    create_room(db_session, base_price=100)
    create_service(db_session, name="Airport Transfer", price=40)

    reservation = hotel_service.create_reservation(
        db_session,
        reservation_payload(extra_charges=[schemas.ExtraCharge(service="Airport Transfer", quantity=2)]),
    )

    assert reservation.extra_charges[0]["amount"] == 40.0
    assert Decimal(str(reservation.sub_total)) == Decimal("280.00")


def test_unavailable_service_rejected(db_session):
    create_room(db_session)
    create_service(db_session, name="Spa Treatment", is_available=False)

    with pytest.raises(ValidationError, match="Service Spa Treatment is not available"):
        hotel_service.create_reservation(
            db_session,
            reservation_payload(extra_charges=[schemas.ExtraCharge(service="Spa Treatment")]),
        )
    assert db_session.query(models.Reservation).count() == 0

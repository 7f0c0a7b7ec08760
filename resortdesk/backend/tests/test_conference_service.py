from datetime import date, timedelta

import pytest

from resort_api.db import models, schemas
from resort_api.services import conference_service
from resort_api.services.errors import CapacityError, ConflictError, ValidationError

from factories import create_equipment, create_hall, create_user

Status = models.ConferenceBookingStatus


def event_day() -> date:
    return date.today() + timedelta(days=10)


def booking_payload(start="09:00", end="12:00", day=None, end_day=None, attendees=30, **extra):
    day = day or event_day()
    data = dict(
        event_name="Quarterly Review",
        client_name="Grace Planner",
        email="grace@corp.test",
        phone="555-0202",
        hall_type="hall_a",
        start_date=day,
        end_date=end_day or day,
        start_time=start,
        end_time=end,
        event_type=models.EventType.meeting,
        attendees=attendees,
        amount=400,
    )
    data.update(extra)
    return schemas.ConferenceBookingCreate(**data)


def test_identical_window_rejected_disjoint_admitted(db_session):
    create_hall(db_session)
    conference_service.create_booking(db_session, booking_payload())

    with pytest.raises(CapacityError, match="Hall is already booked for selected dates"):
        conference_service.create_booking(db_session, booking_payload())

    later = conference_service.create_booking(db_session, booking_payload(start="13:00", end="17:00"))
    assert later.booking_status == Status.pending


def test_touching_windows_do_not_overlap(db_session):
    create_hall(db_session)
    conference_service.create_booking(db_session, booking_payload(start="09:00", end="12:00"))

    adjacent = conference_service.create_booking(db_session, booking_payload(start="12:00", end="15:00"))

    assert adjacent.id is not None


def test_multi_day_window_blocks_time_on_following_day(db_session):
    create_hall(db_session)
    conference_service.create_booking(
        db_session,
        booking_payload(start="18:00", end="10:00", end_day=event_day() + timedelta(days=1)),
    )

    with pytest.raises(CapacityError):
        conference_service.create_booking(
            db_session, booking_payload(day=event_day() + timedelta(days=1), start="08:00", end="09:00")
        )


def test_window_must_end_after_start(db_session):
    create_hall(db_session)

    with pytest.raises(ValidationError, match="End date/time must be after start date/time"):
        conference_service.create_booking(db_session, booking_payload(start="12:00", end="09:00"))


def test_attendees_cannot_exceed_hall_capacity(db_session):
    create_hall(db_session, capacity=20)

    with pytest.raises(ValidationError, match="Hall capacity is 20, cannot book for 21 attendees"):
        conference_service.create_booking(db_session, booking_payload(attendees=21))


def test_inactive_hall_rejected(db_session):
    create_hall(db_session, is_active=False)

    with pytest.raises(ValidationError, match="Selected hall is not available"):
        conference_service.create_booking(db_session, booking_payload())


def test_invalid_transition_rejected(db_session):
    create_hall(db_session)
    booking = conference_service.create_booking(db_session, booking_payload())
    conference_service.update_status(db_session, booking.id, Status.approved)
    conference_service.update_status(db_session, booking.id, Status.confirmed)
    conference_service.update_status(db_session, booking.id, Status.completed)

    with pytest.raises(ConflictError, match="Cannot change booking status from completed to pending"):
        conference_service.update_status(db_session, booking.id, Status.pending)


def test_pending_cannot_jump_to_completed(db_session):
    create_hall(db_session)
    booking = conference_service.create_booking(db_session, booking_payload())

    with pytest.raises(ConflictError, match="from pending to completed"):
        conference_service.update_status(db_session, booking.id, Status.completed)


def test_invoice_assigned_once_on_first_approval(db_session):
    approver = create_user(db_session)
    create_hall(db_session)
    booking = conference_service.create_booking(db_session, booking_payload())

    approved = conference_service.update_status(db_session, booking.id, Status.approved, actor_id=approver.id)
    invoice = approved.invoice_number
    assert invoice == f"INV-CH-{approved.approved_at.year}-0001"
    assert approved.approved_by == approver.id

    conference_service.update_status(db_session, booking.id, Status.cancelled)
    again = conference_service.update_status(db_session, booking.id, Status.approved)

    assert again.invoice_number == invoice


def test_reviving_cancelled_booking_rechecks_hall(db_session):
    create_hall(db_session)
    first = conference_service.create_booking(db_session, booking_payload())
    conference_service.update_status(db_session, first.id, Status.cancelled)
    conference_service.create_booking(db_session, booking_payload())

    with pytest.raises(CapacityError, match="Hall is already booked for these dates"):
        conference_service.update_status(db_session, first.id, Status.pending)

    db_session.expire_all()
    assert db_session.get(models.ConferenceBooking, first.id).booking_status == Status.cancelled


def test_update_rechecks_window_excluding_self(db_session):
    create_hall(db_session)
    booking = conference_service.create_booking(db_session, booking_payload())
    other = conference_service.create_booking(db_session, booking_payload(start="13:00", end="15:00"))

    moved = conference_service.update_booking(
        db_session, booking.id, schemas.ConferenceBookingUpdate(end_time="12:30")
    )
    assert moved.end_time == "12:30"

    with pytest.raises(CapacityError):
        conference_service.update_booking(
            db_session, other.id, schemas.ConferenceBookingUpdate(start_time="12:00")
        )


def test_confirmed_and_completed_cannot_be_deleted(db_session):
    create_hall(db_session)
    booking = conference_service.create_booking(db_session, booking_payload())
    conference_service.update_status(db_session, booking.id, Status.approved)
    conference_service.update_status(db_session, booking.id, Status.confirmed)

    with pytest.raises(ConflictError, match="Cannot delete confirmed or completed bookings"):
        conference_service.delete_booking(db_session, booking.id)


def test_payment_status_follows_advance(db_session):
    create_hall(db_session)
    booking = conference_service.create_booking(db_session, booking_payload(advance_paid=100))
    assert booking.payment_status == models.ConferencePaymentStatus.partial

    paid = conference_service.update_payment(
        db_session, booking.id, schemas.ConferencePaymentUpdate(advance_paid=400)
    )
    assert paid.payment_status == models.ConferencePaymentStatus.paid

    refunded = conference_service.update_payment(
        db_session,
        booking.id,
        schemas.ConferencePaymentUpdate(payment_status=models.ConferencePaymentStatus.refunded),
    )
    assert refunded.payment_status == models.ConferencePaymentStatus.refunded


def test_hall_capacity_cannot_drop_below_upcoming_booking(db_session):
    hall = create_hall(db_session, capacity=100)
    conference_service.create_booking(db_session, booking_payload(attendees=60))

    with pytest.raises(ConflictError, match=r"\(60\)"):
        conference_service.update_hall(db_session, hall.id, schemas.ConferenceHallUpdate(capacity=50))

    updated = conference_service.update_hall(db_session, hall.id, schemas.ConferenceHallUpdate(capacity=60))
    assert updated.capacity == 60


def test_initialize_halls_is_idempotent(db_session):
    assert conference_service.initialize_halls(db_session) == 5
    assert conference_service.initialize_halls(db_session) == 0

    halls = conference_service.list_halls(db_session)
    assert [hall.value for hall in halls][-1] == "grand_hall"
    assert all(hall.available_today for hall in halls)


def rent(equipment, quantity):
    return [{"equipment_id": equipment.id, "quantity": quantity}]


def test_equipment_over_reservation_rejected_without_changes(db_session):
    create_hall(db_session)
    create_hall(db_session, "hall_b")
    projector = create_equipment(db_session, quantity=2)
    first = conference_service.create_booking(db_session, booking_payload(equipment=rent(projector, 2)))
    assert first.equipment_required is True
    assert [(rental.equipment_id, rental.quantity) for rental in first.rentals] == [(projector.id, 2)]

    with pytest.raises(CapacityError, match="Only 0 x Projector available for selected dates"):
        conference_service.create_booking(
            db_session, booking_payload(hall_type="hall_b", start="11:00", equipment=rent(projector, 1))
        )
    assert db_session.query(models.ConferenceBooking).count() == 1

    later = conference_service.create_booking(
        db_session,
        booking_payload(hall_type="hall_b", start="12:00", end="15:00", equipment=rent(projector, 2)),
    )
    assert later.rentals[0].quantity == 2


def test_unknown_equipment_rejected(db_session):
    create_hall(db_session)

    with pytest.raises(ValidationError, match="Equipment 99 is not available"):
        conference_service.create_booking(
            db_session, booking_payload(equipment=[{"equipment_id": 99, "quantity": 1}])
        )


def test_reviving_cancelled_booking_rechecks_equipment(db_session):
    create_hall(db_session)
    create_hall(db_session, "hall_b")
    projector = create_equipment(db_session, quantity=2)
    first = conference_service.create_booking(db_session, booking_payload(equipment=rent(projector, 2)))
    conference_service.update_status(db_session, first.id, Status.cancelled)
    conference_service.create_booking(
        db_session, booking_payload(hall_type="hall_b", equipment=rent(projector, 1))
    )

    with pytest.raises(CapacityError, match="Only 1 x Projector"):
        conference_service.update_status(db_session, first.id, Status.pending)

    db_session.expire_all()
    assert db_session.get(models.ConferenceBooking, first.id).booking_status == Status.cancelled


def test_equipment_quantity_cannot_drop_below_reserved_peak(db_session):
    create_hall(db_session)
    create_hall(db_session, "hall_b")
    projector = create_equipment(db_session, quantity=3)
    conference_service.create_booking(db_session, booking_payload(equipment=rent(projector, 2)))
    conference_service.create_booking(
        db_session,
        booking_payload(hall_type="hall_b", start="11:00", end="14:00", equipment=rent(projector, 1)),
    )

    with pytest.raises(ConflictError, match=r"\(3\)"):
        conference_service.update_equipment(db_session, projector.id, schemas.EquipmentUpdate(quantity=2))

    updated = conference_service.update_equipment(
        db_session, projector.id, schemas.EquipmentUpdate(quantity=3, rental_rate=30)
    )
    assert updated.quantity == 3
    assert float(updated.rental_rate) == 30


def test_list_equipment_reports_availability_for_day(db_session):
    create_hall(db_session)
    projector = create_equipment(db_session, quantity=3)
    create_equipment(db_session, name="Old Screen", is_active=False)
    conference_service.create_booking(db_session, booking_payload(equipment=rent(projector, 2)))

    on_event_day = conference_service.list_equipment(db_session, day=event_day())
    day_after = conference_service.list_equipment(db_session, day=event_day() + timedelta(days=1))

    assert [item.name for item in on_event_day] == ["Projector"]
    assert on_event_day[0].available_quantity == 1
    assert day_after[0].available_quantity == 3
    assert len(conference_service.list_equipment(db_session, active_only=False)) == 2


def test_dashboard_summarises_today(db_session):
    create_hall(db_session)
    create_hall(db_session, "hall_b")
    today = date.today()
    first = conference_service.create_booking(db_session, booking_payload(day=today, advance_paid=100))
    conference_service.update_status(db_session, first.id, Status.approved)
    conference_service.create_booking(
        db_session,
        booking_payload(day=today, hall_type="hall_b", start="13:00", end="15:00", advance_paid=50),
    )

    summary = conference_service.dashboard(db_session, today=today)

    assert len(summary["todays_events"]) == 2
    assert summary["pending_approvals"] == 1
    assert summary["monthly_revenue"] == 150.0
    assert summary["hall_utilisation"] == {"hall_a": 1}

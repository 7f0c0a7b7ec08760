from datetime import date

from resort_api.db import models
from resort_api.services import availability


def test_admission_reports_remaining():
    admission = availability.admit(capacity=50, committed=40, requested=15)

    assert not admission.admitted
    assert admission.remaining == 10


def test_admission_never_reports_negative_remaining():
    admission = availability.admit(capacity=5, committed=8, requested=1)

    assert admission.remaining == 0
    assert not admission.admitted


def test_windows_are_half_open():
    assert availability.windows_overlap(1, 5, 4, 8)
    assert not availability.windows_overlap(1, 5, 5, 8)
    assert availability.windows_overlap(date(2026, 1, 1), date(2026, 1, 3), date(2026, 1, 2), date(2026, 1, 4))


def test_sequences_advance_independently(db_session):
    assert availability.next_sequence_value(db_session, "a") == 1
    assert availability.next_sequence_value(db_session, "a") == 2
    assert availability.next_sequence_value(db_session, "b") == 1


def test_sequence_continues_from_stored_value(db_session):
    db_session.add(models.Sequence(name="sale-260309", value=5))
    db_session.commit()

    assert availability.next_sequence_value(db_session, "sale-260309") == 6


def test_counter_row_written_by_another_session_is_kept(db_session):
    availability._insert_missing_sequence(db_session, "booking-PB")
    availability._insert_missing_sequence(db_session, "booking-PB")

    assert availability.next_sequence_value(db_session, "booking-PB") == 1
    assert db_session.query(models.Sequence).filter_by(name="booking-PB").count() == 1


def test_invoice_and_sale_number_format(db_session):
    assert availability.invoice_number(db_session, 2026) == "INV-CH-2026-0001"
    assert availability.invoice_number(db_session, 2026) == "INV-CH-2026-0002"
    assert availability.sale_number(db_session, date(2026, 3, 9)) == "RBS-260309-0001"

import logging

from resort_api.db import models
from resort_api.services.admin import ensure_admin_exists
from resort_api.services.seed import seed
from resort_api.core import security


def test_creates_default_admin(db_session):
    ensure_admin_exists(db_session, "Admin", "strong_password", "admin@resort.test")

    created = db_session.query(models.User).filter_by(username="admin").one()

    assert created.role == models.UserRole.admin
    assert security.verify_password("strong_password", created.password_hash)


def test_updates_password_for_existing_admin(db_session):
    ensure_admin_exists(db_session, "admin", "old_password", "admin@resort.test")

    ensure_admin_exists(db_session, "admin", "new_password", "admin@resort.test")

    admins = db_session.query(models.User).filter_by(username="admin").all()
    assert len(admins) == 1
    assert security.verify_password("new_password", admins[0].password_hash)


def test_seed_runs_every_initializer_once(db_session):
    first = seed(db_session)
    second = seed(db_session)

    assert first == {
        "time_slots": 5,
        "ticket_prices": 3,
        "conference_halls": 5,
        "room_types": 4,
        "rooms": 20,
        "hotel_services": 13,
        "menu_categories": 13,
        "menu_items": 11,
    }
    assert set(second.values()) == {0}
    assert db_session.query(models.User).count() == 1


def test_initializers_log_created_counts_at_info(db_session, caplog):
    caplog.set_level(logging.INFO)

    seed(db_session)

    counts = {
        record.getMessage(): record.created_count
        for record in caplog.records
        if hasattr(record, "created_count")
    }
    assert counts["Time slots initialized"] == 5
    assert counts["Ticket prices initialized"] == 3
    assert counts["Conference halls initialized"] == 5
    assert counts["Room types initialized"] == 4
    assert counts["Hotel services initialized"] == 13
    assert counts["Menu items initialized"] == 11

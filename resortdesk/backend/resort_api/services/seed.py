"""Populate a fresh database with the default admin and resort catalogue.

Run with ``python -m resort_api.services.seed``. Every step is idempotent.
"""

import logging

from ..config import get_settings
from ..db.session import Base, SessionLocal, engine
from . import conference_service, hotel_service, pool_service, restaurant_service
from .admin import ensure_admin_exists

logger = logging.getLogger(__name__)


def seed(session) -> dict[str, int]:
    settings = get_settings()
    ensure_admin_exists(
        session,
        settings.default_admin_username,
        settings.default_admin_password,
        settings.default_admin_email,
    )
    hotel = hotel_service.initialize_defaults(session)
    return {
        "time_slots": pool_service.initialize_time_slots(session),
        "ticket_prices": pool_service.initialize_ticket_prices(session),
        "conference_halls": conference_service.initialize_halls(session),
        "room_types": hotel["room_types"],
        "rooms": hotel["rooms"],
        "hotel_services": hotel_service.initialize_services(session),
        "menu_categories": restaurant_service.initialize_categories(session),
        "menu_items": restaurant_service.initialize_menu_items(session),
    }


def main() -> None:
    logging.basicConfig(level=get_settings().log_level.upper())
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        created = seed(session)
    logger.info("Seed complete", extra=created)
    for name, count in created.items():
        print(f"{name}: {count} created")


if __name__ == "__main__":
    main()

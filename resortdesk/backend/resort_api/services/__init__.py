from . import (
    pool_service,
    conference_service,
    hotel_service,
    restaurant_service,
)
__all__ = [
    "pool_service",
    "conference_service",
    "hotel_service",
    "restaurant_service",
]

from . import (
    auth,
    users,
    pool,
    conference,
    hotel,
    restaurant,
    misc,
)

__all__ = [
    "auth",
    "users",
    "pool",
    "conference",
    "hotel",
    "restaurant",
    "misc",
]

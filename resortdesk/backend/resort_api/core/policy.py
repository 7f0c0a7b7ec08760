"""Declarative access policy: which roles may perform an action on a resource.

Routes never list roles themselves; they ask for ``(resource, action)`` and the
guard is resolved from this table once, when the route is registered.
"""

from ..db.models.user import UserRole

ADMIN = UserRole.admin

READ = "read"
WRITE = "write"
DELETE = "delete"
CONFIGURE = "configure"
REPORT = "report"


def _staff(role: UserRole) -> dict[str, frozenset[UserRole]]:
    staff = frozenset({ADMIN, role})
    admin_only = frozenset({ADMIN})
    return {
        READ: staff,
        WRITE: staff,
        REPORT: staff,
        DELETE: admin_only,
        CONFIGURE: admin_only,
    }


POLICY: dict[str, dict[str, frozenset[UserRole]]] = {
    "pool": _staff(UserRole.pool_staff),
    "conference": {
        **_staff(UserRole.conference_staff),
        REPORT: frozenset({ADMIN}),
    },
    "hotel": _staff(UserRole.hotel_staff),
    "restaurant": _staff(UserRole.restaurant_staff),
    "users": {
        READ: frozenset({ADMIN}),
        WRITE: frozenset({ADMIN}),
        DELETE: frozenset({ADMIN}),
    },
}


def allowed_roles(resource: str, action: str) -> frozenset[UserRole]:
    try:
        return POLICY[resource][action]
    except KeyError as exc:
        raise LookupError(f"No policy for {resource}:{action}") from exc


def is_allowed(role: UserRole | str, resource: str, action: str) -> bool:
    return UserRole(role) in allowed_roles(resource, action)


__all__ = [
    "POLICY",
    "READ",
    "WRITE",
    "DELETE",
    "CONFIGURE",
    "REPORT",
    "allowed_roles",
    "is_allowed",
]

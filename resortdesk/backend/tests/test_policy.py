import pytest

from resort_api.core import policy
from resort_api.db.models import UserRole


def test_admin_allowed_everywhere():
    for resource, actions in policy.POLICY.items():
        for action, roles in actions.items():
            assert UserRole.admin in roles, (resource, action)


@pytest.mark.parametrize(
    "role, resource",
    [
        (UserRole.pool_staff, "pool"),
        (UserRole.conference_staff, "conference"),
        (UserRole.hotel_staff, "hotel"),
        (UserRole.restaurant_staff, "restaurant"),
    ],
)
def test_staff_write_own_module_only(role, resource):
    assert policy.is_allowed(role, resource, policy.WRITE)
    assert not policy.is_allowed(role, resource, policy.DELETE)
    assert not policy.is_allowed(role, "users", policy.READ)
    others = {"pool", "conference", "hotel", "restaurant"} - {resource}
    assert not any(policy.is_allowed(role, other, policy.READ) for other in others)


def test_conference_reports_are_admin_only():
    assert not policy.is_allowed(UserRole.conference_staff, "conference", policy.REPORT)
    assert policy.is_allowed(UserRole.hotel_staff, "hotel", policy.REPORT)


def test_unknown_policy_entry_raises():
    with pytest.raises(LookupError):
        policy.allowed_roles("spa", policy.READ)

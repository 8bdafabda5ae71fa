"""User roles and the views each role may reach."""

from enum import StrEnum


class Role(StrEnum):
    CUSTOMER = "customer"
    THEATER_ADMIN = "theater_admin"
    PLATFORM_OWNER = "platform_owner"


class View(StrEnum):
    CATALOG = "catalog"
    MOVIE_DETAIL = "movie_detail"
    SEAT_SELECTION = "seat_selection"
    BOOKING_CONFIRMATION = "booking_confirmation"
    PROFILE = "profile"
    CHECK_IN = "check_in"
    THEATER_DASHBOARD = "theater_dashboard"
    PLATFORM_DASHBOARD = "platform_dashboard"


_COMMON_VIEWS = frozenset(
    {
        View.CATALOG,
        View.MOVIE_DETAIL,
        View.SEAT_SELECTION,
        View.BOOKING_CONFIRMATION,
        View.PROFILE,
        View.CHECK_IN,
    }
)

CAPABILITIES: dict[Role, frozenset[View]] = {
    Role.CUSTOMER: _COMMON_VIEWS,
    Role.THEATER_ADMIN: _COMMON_VIEWS | {View.THEATER_DASHBOARD},
    Role.PLATFORM_OWNER: _COMMON_VIEWS | {View.PLATFORM_DASHBOARD},
}

STAFF_ROLES = frozenset({Role.THEATER_ADMIN, Role.PLATFORM_OWNER})


def parse_role(value: str) -> Role:
    """Convert a stored role string, falling back to customer for unknown values."""
    try:
        return Role(value)
    except ValueError:
        return Role.CUSTOMER


def can_access(role: Role | str, view: View) -> bool:
    if not isinstance(role, Role):
        role = parse_role(role)
    return view in CAPABILITIES[role]


def allowed_views(role: Role | str) -> list[View]:
    """Views reachable for a role, in declaration order (used for navigation)."""
    if not isinstance(role, Role):
        role = parse_role(role)
    return [view for view in View if view in CAPABILITIES[role]]

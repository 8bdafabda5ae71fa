"""Domain exceptions raised by services and mapped to HTTP responses."""


class CineBookerError(Exception):
    """Base class for all application errors."""


class NotFoundError(CineBookerError):
    """A record is absent for the requested lookup key."""

    def __init__(self, collection: str, key: str) -> None:
        self.collection = collection
        self.key = key
        super().__init__(f"{collection} not found: {key}")


class StateConflictError(CineBookerError):
    """The action is not valid for the current state of a record."""


class SeatUnavailableError(StateConflictError):
    """One or more requested seats are already claimed for the showtime."""

    def __init__(self, seats: list[str]) -> None:
        self.seats = sorted(seats)
        super().__init__(f"Seats no longer available: {', '.join(self.seats)}")


class BookingStateError(StateConflictError):
    """The booking cannot move to the requested state."""


class SelectionError(CineBookerError):
    """A seat selection or layout fails validation."""


class EmptySelectionError(SelectionError):
    def __init__(self) -> None:
        super().__init__("Please select at least one seat")


class SelectionTooLargeError(SelectionError):
    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"You can select maximum {limit} seats")


class InvalidSeatError(SelectionError):
    """A seat id is malformed, duplicated or outside the screen layout."""


class InvalidSeatLayoutError(SelectionError):
    """A screen's seat-layout descriptor cannot be parsed."""


class GatewayError(CineBookerError):
    """The data store or an upstream service failed."""


class SessionBootstrapError(GatewayError):
    """The signed-in identity could not be resolved to an application user."""

"""Named failures raised by the availability engine.

Each failure carries a human-readable ``reason`` and the HTTP status the API
layer reports it with. None of them are partially applied: the operation that
raises leaves the store and indices untouched.
"""


class AvailabilityError(Exception):
    """Base class for availability engine failures."""

    status_code = 400

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class ValidationFailure(AvailabilityError):
    """Malformed title, description or slot, or overlapping slots."""

    status_code = 400


class NotFound(AvailabilityError):
    """The referenced availability does not exist."""

    status_code = 404

    def __init__(self, reason: str = "Availability not found") -> None:
        super().__init__(reason)


class NotOwner(AvailabilityError):
    """The caller does not own the availability."""

    status_code = 403


class EmptyCollection(AvailabilityError):
    """The caller has no availabilities to choose a favorite from."""

    status_code = 409

    def __init__(self, reason: str = "No availabilities found") -> None:
        super().__init__(reason)


class IdentifierExhausted(AvailabilityError):
    """No free share identifier was found within the retry budget."""

    status_code = 503

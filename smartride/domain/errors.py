"""
SmartRide error taxonomy. Every error carries a kind and a human message so the
boundary layer can map it without re-deriving the reason.
"""


class RideError(Exception):
    kind = "internal"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RideError):
    """Malformed or out-of-range request field."""

    kind = "validation"

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(RideError):
    kind = "not_found"


class PermissionDeniedError(RideError):
    """Caller is not the ride's owner or assigned driver, or has the wrong role."""

    kind = "permission"


class ConflictError(RideError):
    """Transition guard failed because of the ride's current status."""

    kind = "conflict"


class InternalError(RideError):
    kind = "internal"

class BookingError(Exception):
    """Base exception for booking service layer failures."""

    status_code = 500

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class NotFoundError(BookingError):
    """Raised when a business, service, appointment or holiday is absent or not owned by the caller."""

    status_code = 404


class BadRequestError(BookingError):
    """Raised for requests that can never succeed as submitted (past dates, inactive services, bad ranges)."""

    status_code = 400


class ConflictError(BookingError):
    """Raised when the request collides with existing state (slot taken, already cancelled, overlapping holiday)."""

    status_code = 409

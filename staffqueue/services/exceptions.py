class ServiceError(Exception):
    """Base exception for service layer failures."""

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class DownstreamServiceError(ServiceError):
    """Raised when the persistence backend returns an error response."""

    def __init__(self, message: str, status_code: int | None = None, *, cause: Exception | None = None):
        super().__init__(message, cause=cause)
        self.status_code = status_code


class NotFoundError(ServiceError):
    """Raised when a referenced record does not exist for the owner."""


class ConflictError(ServiceError):
    """Raised when an explicitly chosen staff member is already booked for the slot."""

    def __init__(self, message: str, conflicting_appointment_id: str, *, cause: Exception | None = None):
        super().__init__(message, cause=cause)
        self.conflicting_appointment_id = conflicting_appointment_id

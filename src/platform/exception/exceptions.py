from typing import Any, Optional


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def to_content(self) -> dict[str, Any]:
        return {'detail': self.message}

    def headers(self) -> Optional[dict[str, str]]:
        return None


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class EmptyRequestError(DomainError):
    pass


class InvalidInputError(DomainError):
    pass


class InvalidTokenError(DomainError):
    pass


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class InvalidReferenceError(NotFoundError):
    """A request names a user or event that does not exist (or is no longer bookable)."""


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class SeatConflictError(ConflictError):
    def __init__(self, seat: str) -> None:
        self.seat = seat
        super().__init__(f'Seat {seat} is already reserved')

    def to_content(self) -> dict[str, Any]:
        return {'detail': self.message, 'seat': self.seat}


class AlreadyAppliedError(ConflictError):
    pass


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class TransientStoreError(CustomBaseError):
    """Storage unavailable or timed out; the request may be retried."""

    def __init__(
        self,
        message: str = 'Storage temporarily unavailable, please retry',
        *,
        retry_after_seconds: int = 1,
    ) -> None:
        self.retry_after_seconds = retry_after_seconds
        super().__init__(message, 503)

    def headers(self) -> Optional[dict[str, str]]:
        return {'Retry-After': str(self.retry_after_seconds)}


class NotificationDeliveryError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 502)

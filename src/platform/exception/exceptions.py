class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationFailedError(DomainError):
    """Input rejected by a validator; `field` names the offending input."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message, 400)


class InvalidStateError(CustomBaseError):
    """A lifecycle transition was attempted from a status that does not allow it."""

    def __init__(self, current_status: str, attempted_transition: str) -> None:
        self.current_status = current_status
        self.attempted_transition = attempted_transition
        super().__init__(
            f'Cannot {attempted_transition} when status is {current_status}', 409
        )


class AlreadyClaimedError(CustomBaseError):
    def __init__(self, message: str = 'Order has already been accepted by another rider') -> None:
        super().__init__(message, 409)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotEligibleError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class ExpiredError(CustomBaseError):
    def __init__(self, message: str = 'OTP has expired') -> None:
        super().__init__(message, 410)


class AttemptsExhaustedError(CustomBaseError):
    def __init__(self, message: str = 'Maximum verification attempts exceeded') -> None:
        super().__init__(message, 429)


class UnavailableError(CustomBaseError):
    def __init__(self, message: str = 'Service temporarily unavailable') -> None:
        super().__init__(message, 503)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class LoginError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)

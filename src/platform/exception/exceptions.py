class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationError(CustomBaseError):
    """Malformed input. Carries every problem found, not only the first one."""

    def __init__(self, message: str, *, errors: list[str] | None = None) -> None:
        self.errors = errors if errors is not None else [message]
        super().__init__(message, 400)

    @classmethod
    def from_errors(cls, errors: list[str]) -> 'ValidationError':
        return cls('; '.join(errors), errors=errors)


class InvalidStateError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class InvalidStatusError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    """Admission refused. `conflicts` holds the ids of the records in the way, when known."""

    def __init__(self, message: str, *, conflicts: list[int] | None = None) -> None:
        self.conflicts = conflicts or []
        super().__init__(message, 409)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)

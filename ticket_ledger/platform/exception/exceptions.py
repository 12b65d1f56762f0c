from enum import StrEnum


class ErrorKind(StrEnum):
    """Transport-neutral error categories; callers map them to status codes."""

    NOT_FOUND = 'not_found'
    FORBIDDEN = 'forbidden'
    INVALID = 'invalid'
    CONFLICT = 'conflict'
    INFRASTRUCTURE = 'infrastructure'


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, kind: ErrorKind) -> None:
        self.message = message
        self.kind = kind
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorKind.INVALID)


class InvalidStatusError(DomainError):
    pass


class InvalidAmountError(DomainError):
    pass


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorKind.FORBIDDEN)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorKind.NOT_FOUND)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorKind.CONFLICT)


class InfrastructureError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorKind.INFRASTRUCTURE)

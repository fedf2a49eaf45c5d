from typing import Optional

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base application exception"""
    pass


class NotFoundError(AppException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class BadRequestError(AppException):
    def __init__(self, detail: str = "Bad request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class UnauthorizedError(AppException):
    def __init__(self, detail: str = "User not authorized"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InternalServerError(AppException):
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class BudgetError(Exception):
    """
    Base class for errors raised by the aggregation engine.

    These carry no HTTP semantics; the web layer decides how to render them.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary with additional error context
    """

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        msg = self.message
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            msg = f"{msg} ({detail_str})"
        return msg


class InvalidAmountError(BudgetError):
    """Raised when a record amount cannot be read as an integer."""
    pass


class InvalidPeriodError(BudgetError):
    """Raised when a month/year/day-count combination does not describe a window."""
    pass

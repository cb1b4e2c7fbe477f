# shelf/exceptions.py


class ShelfError(Exception):
    """Base class for errors raised by the shelf package"""


class AuthenticationError(ShelfError):
    """Raised when a write is attempted without a valid session"""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class PermissionDenied(ShelfError):
    """Raised when a session tries to modify a record it does not own"""


class NotFoundError(ShelfError):
    """Raised when a requested entity does not exist"""


class ValidationError(ShelfError, ValueError):
    """Raised before any mutation when an input value is out of range"""


class InvalidStatus(ValidationError):
    """Raised for a reading status outside the known lifecycle"""

    def __init__(self, status):
        self.status = status
        super().__init__(f"Invalid reading status: {status!r}")


class HardcoverError(ShelfError):
    """Raised when the Hardcover API is unreachable or returns errors"""

"""Error kinds raised by the managers and mapped to HTTP responses at the boundary."""
from typing import Any, Dict


class ExpressError(Exception):
    """Base error carrying a client-facing message and an HTTP status."""

    status: int = 500

    def __init__(self, message: Any = None):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": {"message": self.message, "status": self.status}}


class BadRequestError(ExpressError):
    status = 400

    def __init__(self, message: Any = "Bad Request"):
        super().__init__(message)


class UnauthorizedError(ExpressError):
    status = 401

    def __init__(self, message: Any = "Unauthorized"):
        super().__init__(message)


class NotFoundError(ExpressError):
    status = 404

    def __init__(self, message: Any = "Not Found"):
        super().__init__(message)

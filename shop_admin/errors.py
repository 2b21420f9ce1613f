class ApiError(Exception):
    """Base class for errors that are reported to the caller as JSON."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str = None, payload: dict = None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        self.payload = payload or {}

    def to_dict(self) -> dict:
        body = dict(self.payload)
        body["error"] = self.message
        return body


class ValidationError(ApiError):
    status_code = 400
    message = "Invalid request"


class Unauthorized(ApiError):
    status_code = 401
    message = "Authentication required"


class Forbidden(ApiError):
    status_code = 403
    message = "Access denied"


class NotFound(ApiError):
    status_code = 404
    message = "Resource not found"


class InsufficientStock(ApiError):
    status_code = 400
    message = "Insufficient stock"


class InternalError(ApiError):
    status_code = 500

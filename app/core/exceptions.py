from typing import Optional, Any

from utils.constants import NO_CONNECTION_MESSAGE, INVALID_ID_MESSAGE, MALFORMED_DATA_MESSAGE, ACTION_LOAD

class TodoBoardError(Exception):
    """
    Base exception for TodoBoard application.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class NetworkError(TodoBoardError):
    """
    Raised when there is no network connectivity to the todo API.
    """
    def __init__(self, message: str = NO_CONNECTION_MESSAGE, details: Optional[Any] = None):
        super().__init__(message, code="NETWORK_ERROR", status_code=503, details=details)

class HttpError(TodoBoardError):
    """
    Raised when the todo API answers with a non-success status.
    """
    def __init__(self, status: int, reason: str, action: str = ACTION_LOAD, details: Optional[Any] = None):
        self.status = status
        self.reason = reason
        message = f"Error while {action}: {status} - {reason}."
        super().__init__(message, code="HTTP_ERROR", status_code=502, details=details)

class ValidationError(TodoBoardError):
    """
    Raised when input validation fails.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=422, details=details)

class InvalidIdError(TodoBoardError):
    """
    Raised when a mutation targets a todo id the remote API does not store.
    """
    def __init__(self, message: str = INVALID_ID_MESSAGE, details: Optional[Any] = None):
        super().__init__(message, code="INVALID_ID", status_code=400, details=details)

class ResourceNotFoundError(TodoBoardError):
    """
    Raised when a requested resource is not found.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)

class UnknownUserError(TodoBoardError):
    """
    Raised when a todo refers to a user that was never loaded.
    """
    def __init__(self, user_id: int, details: Optional[Any] = None):
        self.user_id = user_id
        super().__init__(f"User {user_id} is not loaded", code="UNKNOWN_USER", status_code=500, details=details)

class MalformedResponseError(TodoBoardError):
    """
    Raised when the todo API answers with a body that cannot be parsed.
    """
    def __init__(self, message: str = MALFORMED_DATA_MESSAGE, details: Optional[Any] = None):
        super().__init__(message, code="MALFORMED_RESPONSE", status_code=502, details=details)

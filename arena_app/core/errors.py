"""
Exceptions raised by the tournament client.

Controller operations report these as values inside an ``ActionResult``;
the API client and the manager facade raise them.
"""


class ArenaError(Exception):
    """Base exception for all QuizArena errors."""
    pass


class InvalidState(ArenaError):
    """Raised when an operation is not permitted in the current state."""

    def __init__(self, message: str, operation: str | None = None, state: str | None = None):
        self.operation = operation
        self.state = state
        super().__init__(message)


class ConfigurationError(ArenaError):
    """Raised for malformed tournament data that makes it unplayable."""
    pass


class AlreadySubmitted(ArenaError):
    """Raised (or reported) when an attempt is submitted a second time."""
    pass


class ValidationError(ArenaError):
    """Raised when a tournament form does not pass validation."""

    def __init__(self, messages: list[str]):
        self.messages = list(messages)
        super().__init__("; ".join(self.messages) or "Invalid tournament data")


class ApiRequestError(ArenaError):
    """Raised when the remote API rejects a request."""

    def __init__(self, message: str, status_code: int | None = None, details: object = None):
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class NetworkFailure(ApiRequestError):
    """Raised when the remote API cannot be reached or fails server-side."""
    pass


class AuthenticationError(ApiRequestError):
    """Raised when credentials are rejected or the session has expired."""
    pass


class PermissionDenied(ApiRequestError):
    """Raised when the signed-in user may not perform the request."""
    pass


class NotFound(ApiRequestError):
    """Raised when the requested tournament or resource does not exist."""
    pass

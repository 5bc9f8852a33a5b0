"""
Client exceptions.
"""
from typing import Any, Optional


class ConsoleClientError(Exception):
    """Base class for every error raised by the console client."""


class ApiError(ConsoleClientError):
    """The API answered with an error status (or could not be reached)."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def __str__(self):
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


class AuthenticationError(ApiError):
    """401/403: the session is missing, expired or not allowed. Never retried."""


class ValidationError(ConsoleClientError):
    """Input rejected before any request was sent."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message

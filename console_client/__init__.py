"""
Python client for the Queen Cell Production Console API.
"""

from .client import ConsoleClient, DEFAULT_RETRIES
from .errors import ApiError, AuthenticationError, ConsoleClientError, ValidationError
from .token_store import TokenStore

__all__ = [
    'ConsoleClient',
    'DEFAULT_RETRIES',
    'ApiError',
    'AuthenticationError',
    'ConsoleClientError',
    'ValidationError',
    'TokenStore',
]

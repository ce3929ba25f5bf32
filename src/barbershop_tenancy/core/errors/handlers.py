"""Conversion of exceptions into user-facing messages.

Stores never let a backend failure escape; they keep a readable
message in their ``error`` field instead. This module owns that
conversion so every store words failures the same way.
"""

import httpx

from barbershop_tenancy.core.errors.exceptions import AppException


def describe_error(exc: BaseException, fallback: str) -> str:
    """Build a human-readable message for an exception.

    Args:
        exc: The exception raised by a repository or collaborator
        fallback: Message prefix describing the failed action

    Returns:
        Message suitable for an inline error

    Examples:
        >>> describe_error(httpx.ConnectTimeout("timed out"), "Failed to load barbers")
        'Failed to load barbers: request timed out'
    """
    if isinstance(exc, AppException):
        return exc.message
    if isinstance(exc, httpx.HTTPStatusError):
        status_code = exc.response.status_code
        if status_code == 429:
            return f"{fallback}: too many requests, try again shortly"
        return f"{fallback}: server responded with {status_code}"
    if isinstance(exc, httpx.TimeoutException):
        return f"{fallback}: request timed out"
    if isinstance(exc, httpx.TransportError):
        return f"{fallback}: could not reach the server"
    if str(exc):
        return f"{fallback}: {exc}"
    return fallback

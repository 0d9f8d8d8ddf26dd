"""
Project: Cafe POS
Date: October 2026

Description:
Client-side error types and the mapping from any error to the message
shown to the user.
"""

import json
import logging

log = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Cannot reach the server. Please check your connection and try again."
PARSE_ERROR_MESSAGE = "Could not read the response from the server. Please try again."
GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


class PosError(Exception):
    """Base class for client-side errors."""


class NetworkError(PosError):
    """The server could not be reached (connection refused, timeout, ...)."""


class ApiError(PosError):
    """The server answered with a non-2xx status."""

    def __init__(self, status, message=None):
        self.status = status
        self.message = message
        super().__init__(f"{status}: {message}" if message else str(status))


class AuthenticationError(PosError):
    """Credentials were rejected."""

    def __init__(self, message=None):
        self.message = message
        super().__init__(message or "authentication failed")


def get_error_message(error) -> str:
    """Human-readable text for `error`; never raises."""
    if isinstance(error, NetworkError):
        return NETWORK_ERROR_MESSAGE
    if isinstance(error, (ApiError, AuthenticationError)):
        return error.message or GENERIC_ERROR_MESSAGE
    if isinstance(error, json.JSONDecodeError):
        return PARSE_ERROR_MESSAGE
    if isinstance(error, Exception):
        return str(error) or GENERIC_ERROR_MESSAGE
    if isinstance(error, str):
        return error
    message = getattr(error, "message", None)
    if message is None and isinstance(error, dict):
        message = error.get("message") or error.get("error")
    if isinstance(message, str):
        return message
    log.error("Unknown error object: %r", error)
    return GENERIC_ERROR_MESSAGE

"""Custom exceptions for the tracking core."""


class ValidationError(Exception):
    """
    Raised when client input is invalid.

    The message should be safe to send back to the client without exposing
    internal details.
    """


class SessionError(Exception):
    """Raised when a tracking session is driven out of order."""

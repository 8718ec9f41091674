"""
Error taxonomy for the API.

Services raise these; exception handlers in main.py turn them into
``{"error": message}`` responses with the matching status code.
"""


class PixelTrackError(Exception):
    """Base class for errors that map to an HTTP status"""

    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PixelTrackError):
    status_code = 400
    default_message = "Invalid request"


class AppNotFoundError(PixelTrackError):
    status_code = 404
    default_message = "App not found"


class DatabaseError(PixelTrackError):
    status_code = 500
    default_message = "Internal error"


class AuthenticationError(PixelTrackError):
    status_code = 401
    default_message = "Authentication required"


class PermissionDeniedError(PixelTrackError):
    status_code = 403
    default_message = "Permission denied"


# Name used across the codebase's error taxonomy
PermissionError = PermissionDeniedError


class MetaApiError(PixelTrackError):
    """Error returned by the Meta Graph API. Carries the provider's numeric code."""

    status_code = 400
    default_message = "Meta API request failed"

    def __init__(self, message: str | None = None, code: int = 0):
        super().__init__(message)
        self.code = code

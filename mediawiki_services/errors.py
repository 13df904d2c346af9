"""Exceptions raised by the wiki services.

Errors raised by the API client itself (``mwclient.errors.APIError``,
``requests`` exceptions and so on) are not wrapped; they propagate to the
caller unchanged.
"""


class MediawikiServiceError(Exception):
    """Base exception for errors raised by this package."""
    pass


class InvalidPageIdentifierError(MediawikiServiceError, ValueError):
    """Raised when a page identifier has neither a title nor an id."""

    def __init__(self, identifier):
        super().__init__(f"{identifier!r} does not identify a page")
        self.identifier = identifier


class MalformedResponseError(MediawikiServiceError):
    """Raised when an API response lacks the data needed to build a result."""

    def __init__(self, action: str, message: str):
        super().__init__(f"Unexpected '{action}' response: {message}")
        self.action = action

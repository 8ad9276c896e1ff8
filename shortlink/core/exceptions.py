"""
Custom Exceptions

This module defines the exceptions raised by the store and service layers.
Endpoints translate them into HTTP responses:

- MissingURLError, ShortCodeExistsError -> 400
- InvalidRequestBodyError, StoreError -> 500
"""

from pathlib import Path


class URLShortenerException(Exception):
    """Base exception for URL shortener service."""
    pass


class MissingURLError(URLShortenerException):
    """Raised when a creation request carries no URL."""

    def __init__(self):
        super().__init__("URL is required")


class ShortCodeExistsError(URLShortenerException):
    """Raised when the requested short code is already mapped."""
    
    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__("Short code already exists. Try another.")


class InvalidRequestBodyError(URLShortenerException):
    """Raised when a request body cannot be parsed into a creation request."""

    def __init__(self, reason: str, original_error: Exception = None):
        self.reason = reason
        self.original_error = original_error
        super().__init__(f"Invalid request body: {reason}")


class StoreError(URLShortenerException):
    """Raised when the link store cannot be read or written."""
    
    def __init__(self, path: Path, message: str, original_error: Exception = None):
        self.path = path
        self.original_error = original_error
        super().__init__(f"Link store error ({path}): {message}")


class MalformedStoreError(StoreError):
    """Raised when the persisted document exists but is not a JSON object."""

    def __init__(self, path: Path, original_error: Exception = None):
        super().__init__(path, "document is not a valid JSON object", original_error)


class StoreIOError(StoreError):
    """Raised on any file system failure other than a missing document."""

    def __init__(self, path: Path, original_error: OSError):
        super().__init__(path, str(original_error), original_error)

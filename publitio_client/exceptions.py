"""
Custom exceptions for Publitio client library.
"""


class PublitioClientError(Exception):
    """Base exception for Publitio client errors."""
    pass


class ConfigurationError(PublitioClientError):
    """Raised when client configuration is invalid."""
    pass


class RandomSourceError(PublitioClientError):
    """Raised when the system entropy source is unavailable."""
    pass


class URLConstructionError(PublitioClientError):
    """Raised when a signed URL cannot be built from the path and params."""
    pass


class ContentReadError(PublitioClientError):
    """Raised when upload content cannot be read."""
    pass


class MultipartEncodingError(PublitioClientError):
    """Raised when the multipart upload body cannot be built."""
    pass


class TransportError(PublitioClientError):
    """Raised when the HTTP request or response body read fails."""
    pass


class ResponseParseError(PublitioClientError):
    """
    Raised when a response body is not valid JSON.

    Attributes:
        body: Raw response body, truncated to MAX_ERROR_BODY bytes
        status_code: HTTP status of the response, if known
    """

    def __init__(self, message: str, body: bytes = b"", status_code=None):
        super().__init__(message)
        self.body = body
        self.status_code = status_code

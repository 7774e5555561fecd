"""
Publitio API Client Library

A Python client library for the Publitio media hosting API. Requests are
signed with a nonce, a timestamp and a SHA1 signature, and JSON responses
are returned as plain Python values.

Example usage:
    from publitio_client import PublitioClient

    with PublitioClient("your-key", "your-secret") as api:
        files = api.get("files/list", {"limit": "12"})
"""

from .client import PublitioClient, Response
from .exceptions import (
    PublitioClientError,
    ConfigurationError,
    RandomSourceError,
    URLConstructionError,
    ContentReadError,
    MultipartEncodingError,
    TransportError,
    ResponseParseError
)
from .constants import (
    BASE_URL,
    RESERVED_PARAMS,
    DEFAULT_CONFIG
)
from .signing import SignedRequest, generate_nonce, signature
from .urls import build_signed_url

__version__ = "1.0.0"
__all__ = [
    "PublitioClient",
    "Response",
    "PublitioClientError",
    "ConfigurationError",
    "RandomSourceError",
    "URLConstructionError",
    "ContentReadError",
    "MultipartEncodingError",
    "TransportError",
    "ResponseParseError",
    "BASE_URL",
    "RESERVED_PARAMS",
    "DEFAULT_CONFIG",
    "SignedRequest",
    "generate_nonce",
    "signature",
    "build_signed_url"
]

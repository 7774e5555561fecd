"""
Publitio API client.

This module provides the PublitioClient facade which signs every call,
sends it and decodes the JSON response.
"""

import logging
from typing import Any, Optional
from urllib.parse import urlsplit

from .constants import DEFAULT_CONFIG, UPLOAD_PATH
from .decoder import decode_response
from .exceptions import (
    ConfigurationError,
    PublitioClientError,
    ResponseParseError
)
from .transport import Transport, encode_upload
from .urls import Params, build_signed_url

logger = logging.getLogger(__name__)

Response = Any


def _with_stage(stage: str, error: PublitioClientError) -> PublitioClientError:
    """Return a copy of error with the failing stage prepended to its message."""
    message = f"{stage}: {error}"
    if isinstance(error, ResponseParseError):
        return ResponseParseError(message, body=error.body, status_code=error.status_code)
    return type(error)(message)


class PublitioClient:
    """
    Client for the Publitio media hosting API.

    Each call gets a fresh nonce, timestamp and signature, and the client
    holds no per-call state. Calls share one requests.Session; concurrent
    use relies on urllib3's thread-safe connection pool, and a client per
    thread is the safer choice when the session is customized.
    """

    def __init__(self, key: str, secret: str, **config):
        """
        Initialize Publitio client.

        Args:
            key: API key
            secret: API secret
            **config: Configuration options (base_url, timeout, user_agent)
        """
        self.key = key
        self.secret = secret

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}

        self._validate_config()
        self.base_url = self.config['base_url'].rstrip('/')

        self.transport = Transport(
            timeout=self.config['timeout'],
            user_agent=self.config['user_agent']
        )

    def _validate_config(self):
        """Validate client configuration."""
        unknown = set(self.config) - set(DEFAULT_CONFIG)
        if unknown:
            raise ConfigurationError(f"unknown configuration options: {', '.join(sorted(unknown))}")

        base_url = self.config['base_url']
        if not isinstance(base_url, str):
            raise ConfigurationError("base_url must be a string")
        parts = urlsplit(base_url)
        if parts.scheme not in ('http', 'https') or not parts.netloc:
            raise ConfigurationError(f"base_url must be an absolute http(s) URL, got {base_url!r}")

        timeout = self.config['timeout']
        if timeout is not None:
            values = timeout if isinstance(timeout, tuple) else (timeout,)
            for v in values:
                if v is None:
                    continue
                if isinstance(v, bool) or not isinstance(v, (int, float)):
                    raise ConfigurationError(f"timeout must be a number, got {v!r}")
                if v <= 0:
                    raise ConfigurationError("timeout must be positive")

    def __repr__(self):
        return f"{type(self).__name__}(key={self.key!r}, base_url={self.base_url!r})"

    def _sign(self, path: str, params: Optional[Params]) -> str:
        try:
            return build_signed_url(self.base_url, path, self.key, self.secret, params).url
        except PublitioClientError as e:
            raise _with_stage("error while creating Publitio URL", e) from e

    def _decode(self, response) -> Response:
        try:
            return decode_response(response)
        except PublitioClientError as e:
            raise _with_stage("error while parsing the Publitio response", e) from e

    def call(self, method: str, path: str, params: Optional[Params] = None) -> Response:
        """
        Make a signed request with any HTTP method.

        Use get, put and delete for convenience, and upload_file for uploads.

        Args:
            method: HTTP method
            path: API path, e.g. "files/list" or "/files/list"
            params: Query parameters, name -> value or list of values

        Returns:
            Decoded JSON response. Service errors come back as JSON objects
            and are returned, not raised.

        Raises:
            URLConstructionError: If path or params are malformed
            RandomSourceError: If no nonce could be generated
            TransportError: If the request fails
            ResponseParseError: If the response is not JSON
        """
        method = method.upper()
        url = self._sign(path, params)

        logger.debug("%s %s", method, path)
        try:
            response = self.transport.request(method, url)
        except PublitioClientError as e:
            raise _with_stage(f"error while performing Publitio API {method}", e) from e

        logger.debug("%s %s -> %s", method, path, response.status_code)
        return self._decode(response)

    def get(self, path: str, params: Optional[Params] = None) -> Response:
        """Make signed GET request, e.g. to list files."""
        return self.call('GET', path, params)

    def put(self, path: str, params: Optional[Params] = None) -> Response:
        """Make signed PUT request, e.g. to update a file."""
        return self.call('PUT', path, params)

    def delete(self, path: str, params: Optional[Params] = None) -> Response:
        """Make signed DELETE request, e.g. to delete a file."""
        return self.call('DELETE', path, params)

    def upload_file(self, content=None, params: Optional[Params] = None) -> Response:
        """
        Upload a media file.

        To upload from memory pass bytes or a binary file object:
            api.upload_file(open("video.mp4", "rb"), {"title": "My file"})

        To let the service fetch a remote file pass no content:
            api.upload_file(None, {"file_url": "https://example.com/file.png"})

        Raises:
            ContentReadError: If content cannot be read
            MultipartEncodingError: If the multipart body cannot be built
            plus everything call() raises
        """
        try:
            body, content_type = encode_upload(content)
        except PublitioClientError as e:
            raise _with_stage("error while uploading file", e) from e

        # Signed only once the body is ready
        url = self._sign(UPLOAD_PATH, params)

        logger.debug("POST %s (%d byte body)", UPLOAD_PATH, len(body))
        try:
            response = self.transport.post_multipart(url, body, content_type)
        except PublitioClientError as e:
            raise _with_stage("error while uploading file", e) from e

        logger.debug("POST %s -> %s", UPLOAD_PATH, response.status_code)
        return self._decode(response)

    def close(self):
        """Close HTTP session."""
        self.transport.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

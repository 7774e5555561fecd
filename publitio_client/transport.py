"""
HTTP transport for Publitio requests.

Sends plain requests and multipart/form-data uploads through a
requests.Session. Responses are streamed so the decoder owns reading and
closing the body.
"""

import logging
from typing import Optional, Tuple, Union

import requests
from urllib3.filepost import encode_multipart_formdata

from .constants import MULTIPART_CONTENT_TYPE, UPLOAD_FIELD_NAME, UPLOAD_FILENAME
from .exceptions import ContentReadError, MultipartEncodingError, TransportError

logger = logging.getLogger(__name__)


def read_content(content) -> bytes:
    """
    Read upload content fully into memory.

    Args:
        content: bytes, bytearray or a binary file-like object

    Raises:
        ContentReadError: If reading fails or returns something other than bytes
    """
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)

    read = getattr(content, 'read', None)
    if read is None:
        raise ContentReadError(
            f"error while reading file: {type(content).__name__} is not bytes or a readable object"
        )

    try:
        data = read()
    except (OSError, ValueError) as e:
        raise ContentReadError(f"error while reading file: {e}") from e

    if not isinstance(data, (bytes, bytearray)):
        raise ContentReadError(
            f"error while reading file: read() returned {type(data).__name__}, expected bytes"
        )
    return bytes(data)


def encode_upload(content=None) -> Tuple[bytes, str]:
    """
    Build the upload request body.

    With no content the body is empty and the service fetches the file
    itself (for example from a file_url parameter).

    Returns:
        Tuple of (body, content_type)

    Raises:
        ContentReadError: If the content cannot be read
        MultipartEncodingError: If the multipart body cannot be built
    """
    if content is None:
        return b"", MULTIPART_CONTENT_TYPE

    data = read_content(content)

    try:
        body, content_type = encode_multipart_formdata(
            {UPLOAD_FIELD_NAME: (UPLOAD_FILENAME, data, "application/octet-stream")}
        )
    except (TypeError, ValueError) as e:
        raise MultipartEncodingError(f"error while creating multipart body: {e}") from e

    return body, content_type


class Transport:
    """Issues signed requests over a shared requests.Session."""

    def __init__(self, timeout: Optional[Union[float, Tuple[float, float]]] = None,
                 user_agent: Optional[str] = None):
        self.timeout = timeout
        self.session = requests.Session()
        if user_agent:
            self.session.headers['User-Agent'] = user_agent

    def _send(self, method: str, url: str, **kwargs) -> requests.Response:
        try:
            return self.session.request(method, url, stream=True, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s request failed: %s", method, e)
            raise TransportError(f"error while performing HTTP request: {e}") from e

    def request(self, method: str, url: str) -> requests.Response:
        """Send a request with no body."""
        return self._send(method, url)

    def post_multipart(self, url: str, body: bytes, content_type: str) -> requests.Response:
        """POST an already encoded multipart body."""
        return self._send('POST', url, data=body, headers={'Content-Type': content_type})

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

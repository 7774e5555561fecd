"""
JSON response decoding.

The service returns JSON error objects with 4xx/5xx statuses, so the status
code is not inspected here; callers check the shape of the decoded value.
"""

import json
import logging
from typing import Any

import requests

from .constants import MAX_ERROR_BODY
from .exceptions import ResponseParseError, TransportError

logger = logging.getLogger(__name__)


def _reject_constant(name):
    raise ValueError(f"invalid JSON constant {name}")


def decode_response(response: requests.Response) -> Any:
    """
    Read, close and decode a response body.

    The response is closed on every exit path.

    Args:
        response: Streamed requests.Response

    Returns:
        Decoded JSON value (dict, list, str, int, float, bool or None)

    Raises:
        TransportError: If the body cannot be read
        ResponseParseError: If the body is not valid JSON
    """
    try:
        try:
            data = response.content
        except requests.RequestException as e:
            raise TransportError(f"error while reading response: {e}") from e
    finally:
        response.close()

    try:
        # A leading BOM stays as U+FEFF and is rejected by json.loads
        return json.loads(data.decode("utf-8"), parse_constant=_reject_constant)
    except ValueError as e:
        body = data[:MAX_ERROR_BODY]
        logger.warning("Response with status %s is not JSON: %r", response.status_code, body)
        raise ResponseParseError(
            f"error while parsing JSON {body!r}: {e}",
            body=body,
            status_code=response.status_code
        ) from e

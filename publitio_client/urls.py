"""
Signed URL construction for the Publitio API.
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Union
from urllib.parse import urlencode, urlsplit

from .constants import (
    PARAM_NONCE,
    PARAM_TIMESTAMP,
    PARAM_KEY,
    PARAM_SIGNATURE,
    RESERVED_PARAMS
)
from .exceptions import URLConstructionError
from .signing import SignedRequest, current_timestamp, generate_nonce, signature

logger = logging.getLogger(__name__)

Params = Mapping[str, Union[str, Sequence[str]]]


def join_path(base_url: str, path: str) -> str:
    """
    Join base URL and path with exactly one '/' between them.

    Raises:
        URLConstructionError: If the path is empty or not a plain URL path
    """
    if not isinstance(path, str) or not path:
        raise URLConstructionError(f"invalid path {path!r}: must be a non-empty string")

    if any(c.isspace() or ord(c) < 0x20 or ord(c) == 0x7f for c in path):
        raise URLConstructionError(f"invalid path {path!r}: contains whitespace or control characters")

    if '?' in path or '#' in path:
        raise URLConstructionError(f"invalid path {path!r}: pass query parameters through params")

    url = base_url.rstrip('/') + '/' + path.lstrip('/')

    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError on a malformed port
    except ValueError as e:
        raise URLConstructionError(f"invalid URL {url!r}: {e}") from e

    if parts.scheme not in ('http', 'https') or not parts.hostname:
        raise URLConstructionError(f"invalid URL {url!r}")

    return url


def _normalize_params(params: Optional[Params]) -> Dict[str, List[str]]:
    """Copy caller params into a dict of string lists."""
    if params is None:
        return {}

    if not isinstance(params, Mapping):
        raise URLConstructionError(f"params must be a mapping, got {type(params).__name__}")

    normalized = {}
    for name, values in params.items():
        if not isinstance(name, str):
            raise URLConstructionError(f"invalid parameter name {name!r}")
        if isinstance(values, str):
            values = [values]
        elif isinstance(values, (bytes, bytearray)) or not isinstance(values, Sequence):
            raise URLConstructionError(f"invalid value for parameter {name!r}: {values!r}")
        for value in values:
            if not isinstance(value, str):
                raise URLConstructionError(f"invalid value for parameter {name!r}: {value!r}")
        normalized[name] = list(values)
    return normalized


def build_signed_url(base_url: str, path: str, key: str, secret: str,
                     params: Optional[Params] = None) -> SignedRequest:
    """
    Build a signed request URL.

    A fresh nonce and timestamp are generated on every call. The four
    signing parameters replace any caller values with the same names.

    Args:
        base_url: API endpoint including the version prefix
        path: Resource path, with or without a leading '/'
        key: API key
        secret: API secret
        params: Query parameters, name -> value or list of values

    Returns:
        SignedRequest with the signing fields and the complete URL

    Raises:
        URLConstructionError: If the path or params are malformed
        RandomSourceError: If no nonce could be generated
    """
    url = join_path(base_url, path)
    query = _normalize_params(params)

    nonce = generate_nonce()
    timestamp = current_timestamp()
    sig = signature(secret, timestamp, nonce)

    overridden = [name for name in RESERVED_PARAMS if name in query]
    if overridden:
        logger.debug("Ignoring reserved parameters supplied by caller: %s", ", ".join(overridden))

    query[PARAM_NONCE] = [nonce]
    query[PARAM_TIMESTAMP] = [timestamp]
    query[PARAM_KEY] = [key]
    query[PARAM_SIGNATURE] = [sig]

    encoded = urlencode(sorted(query.items()), doseq=True)
    return SignedRequest(nonce=nonce, timestamp=timestamp, signature=sig,
                         url=f"{url}?{encoded}")

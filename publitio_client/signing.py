"""
Request signing for the Publitio API.

Every request carries a random 8-digit nonce, a 32-bit Unix timestamp and
sha1(timestamp + nonce + secret) as a lowercase hex digest.
"""

import hashlib
import secrets
import time
from dataclasses import dataclass
from typing import Optional

from .constants import NONCE_MIN, NONCE_MAX, TIMESTAMP_MODULUS
from .exceptions import RandomSourceError


@dataclass(frozen=True)
class SignedRequest:
    """Signing fields and final URL for a single request. Never reused."""

    nonce: str
    timestamp: str
    signature: str
    url: str


def generate_nonce() -> str:
    """
    Generate a random nonce in [NONCE_MIN, NONCE_MAX].

    Uses the operating system CSPRNG, which is safe to call from many
    threads at once.

    Returns:
        8-digit decimal string

    Raises:
        RandomSourceError: If the entropy source is unavailable
    """
    try:
        value = secrets.randbelow(NONCE_MAX - NONCE_MIN + 1)
    except (OSError, NotImplementedError) as e:
        raise RandomSourceError(f"error while generating nonce: {e}") from e
    return str(value + NONCE_MIN)


def current_timestamp(now: Optional[float] = None) -> str:
    """Return the Unix time in seconds reduced to 32 bits, as a string."""
    if now is None:
        now = time.time()
    return str(int(now) % TIMESTAMP_MODULUS)


def signature(secret: str, timestamp: str, nonce: str) -> str:
    """
    Compute the Publitio request signature.

    Args:
        secret: API secret
        timestamp: Value sent as api_timestamp
        nonce: Value sent as api_nonce

    Returns:
        40-character lowercase hex SHA1 digest of timestamp + nonce + secret
    """
    message = timestamp + nonce + secret
    return hashlib.sha1(message.encode('utf-8')).hexdigest()

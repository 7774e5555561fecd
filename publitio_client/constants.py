"""
Constants for Publitio client library.
Values are fixed by the Publitio API (https://publit.io/docs/).
"""

# API endpoint
BASE_URL = "https://api.publit.io/v1"
UPLOAD_PATH = "/files/create"

# Signing query parameters
PARAM_NONCE = "api_nonce"
PARAM_TIMESTAMP = "api_timestamp"
PARAM_KEY = "api_key"
PARAM_SIGNATURE = "api_signature"
RESERVED_PARAMS = (PARAM_NONCE, PARAM_TIMESTAMP, PARAM_KEY, PARAM_SIGNATURE)

# Nonce is always an 8-digit number
NONCE_MIN = 10000000
NONCE_MAX = 99999999

# Timestamp must fit in 32 bits
TIMESTAMP_MODULUS = 2 ** 32

# Multipart upload
UPLOAD_FIELD_NAME = "file"
UPLOAD_FILENAME = "new "
MULTIPART_CONTENT_TYPE = "multipart/form-data"

# Default configuration values
DEFAULT_CONFIG = {
    'base_url': BASE_URL,
    'timeout': None,            # delegated to requests; None waits forever
    'user_agent': None,         # None keeps the requests default
}

# Raw body bytes kept on ResponseParseError
MAX_ERROR_BODY = 1024

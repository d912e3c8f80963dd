"""
Constants for the cohost client library.
"""

# API origin (cohost web client API_BASE)
API_BASE = "https://cohost.org/api/v1"

# HTTP Headers
HEADER_COOKIE = "Cookie"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_SET_COOKIE = "Set-Cookie"
CONTENT_TYPE_JSON = "application/json"

# Login hash derivation (PBKDF2 parameters used by the cohost web client)
PBKDF2_HASH_NAME = "sha384"
PBKDF2_ITERATIONS = 200000
PBKDF2_KEY_LENGTH = 128

# Default configuration values
DEFAULT_CONFIG = {
    'timeout': None,            # None leaves timeouts to requests
}

# Other constants
DEFAULT_NOTIFICATIONS_LIMIT = 20
FALLBACK_CONTENT_TYPE = "application/octet-stream"

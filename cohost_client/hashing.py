"""
Login hash derivation.

cohost never receives the plain password: the client derives a hash from
it with PBKDF2 and a salt the server issues per login attempt.
"""

import base64
import hashlib

from .constants import (
    PBKDF2_HASH_NAME,
    PBKDF2_ITERATIONS,
    PBKDF2_KEY_LENGTH
)


def decode_salt(salt: str) -> bytes:
    """
    Decode a salt as returned by ``/login/salt``.

    The salt uses the URL-safe alphabet, but the web client decodes it with
    a standard-alphabet decoder that maps ``-`` and ``_`` to zero bits.
    The same bytes must be produced here or the hash will not match.

    Args:
        salt: Salt string from the API

    Returns:
        Decoded salt bytes
    """
    salt = salt.rstrip('=').replace('-', 'A').replace('_', 'A')
    # A single trailing character carries no whole byte
    if len(salt) % 4 == 1:
        salt = salt[:-1]
    salt += '=' * (-len(salt) % 4)
    return base64.b64decode(salt)


def derive_login_hash(password: str, salt: bytes) -> str:
    """
    Derive the client hash sent to ``/login``.

    PBKDF2-HMAC-SHA384, 200000 iterations, 128 byte key.

    Args:
        password: Account password
        salt: Decoded salt bytes

    Returns:
        Base64-encoded derived key
    """
    key = hashlib.pbkdf2_hmac(
        PBKDF2_HASH_NAME,
        password.encode('utf-8'),
        salt,
        PBKDF2_ITERATIONS,
        dklen=PBKDF2_KEY_LENGTH
    )
    return base64.b64encode(key).decode('ascii')

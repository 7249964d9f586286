"""Random salt generation."""
from __future__ import annotations

import os

from scrypt_credentials.core.config import DEFAULT_SALT_BYTES


def generate_salt(length: int = DEFAULT_SALT_BYTES) -> bytes:
    """
    Draw ``length`` bytes from the operating system CSPRNG.

    Errors from ``os.urandom`` are not caught: credential creation must stop
    rather than continue with a weak salt.
    """
    if length < 1:
        raise ValueError("Salt length must be at least 1 byte.")
    return os.urandom(length)

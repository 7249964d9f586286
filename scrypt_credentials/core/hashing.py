"""scrypt key derivation and credential string creation."""
from __future__ import annotations

import hashlib
from typing import Optional, Protocol

from loguru import logger

from scrypt_credentials.core.config import KEY_LENGTH, ScryptPolicy, compute_maxmem, get_policy
from scrypt_credentials.core.credential_string import CredentialParameters, encode_credential
from scrypt_credentials.core.salt import generate_salt

# hashlib takes N as an unsigned long; larger exponents can never run.
MAX_LN = 63
# RFC 7914 requires r * p < 2^30.
MAX_RP = 2 ** 30


class HashingError(RuntimeError):
    """Raised when scrypt cannot derive a key for the requested parameters."""


class CostParameters(Protocol):
    ln: int
    r: int
    p: int


def derive_key(password: bytes, salt: bytes, *, ln: int, r: int, p: int) -> bytes:
    """
    Run scrypt and return a ``KEY_LENGTH``-byte derived key.

    Memory is capped at 1.5x the theoretical working set, so parameters
    that would need more are rejected by the primitive instead of
    allocating without bound.

    Raises
    ------
    HashingError
        If the parameters are out of range or the derivation fails.
    """
    if not 1 <= ln <= MAX_LN or r < 1 or p < 1 or r * p >= MAX_RP:
        raise HashingError(f"Unsupported scrypt parameters ln={ln}, r={r}, p={p}.")

    n = 2 ** ln
    try:
        return hashlib.scrypt(
            password,
            salt=salt,
            n=n,
            r=r,
            p=p,
            maxmem=compute_maxmem(n, r),
            dklen=KEY_LENGTH,
        )
    except (ValueError, OverflowError, TypeError, MemoryError) as exc:
        logger.error(f"scrypt failed for ln={ln}, r={r}, p={p}: {exc}")
        raise HashingError("Password hashing failed.") from exc


def hash_password(
    password: str,
    salt: Optional[bytes] = None,
    params: Optional[CostParameters] = None,
    *,
    policy: Optional[ScryptPolicy] = None,
) -> str:
    """
    Hash ``password`` and return the full credential string.

    Parameters
    ----------
    password : str
        Plaintext password; hashed as UTF-8.
    salt : bytes, optional
        Salt to use. A fresh random salt of ``policy.salt_bytes`` is drawn
        when omitted.
    params : object with ``ln``, ``r`` and ``p``, optional
        Cost parameters, e.g. a decoded ``CredentialParameters``. The
        policy values are used when omitted.
    policy : ScryptPolicy, optional
        Defaults to the process-wide policy from ``get_policy()``.

    Raises
    ------
    HashingError
        If scrypt rejects the parameters or runs out of memory.
    ValueError
        If the salt is empty or the password holds unpaired surrogates.
    """
    if not isinstance(password, str):
        raise TypeError("Password must be a string.")

    if (salt is None or params is None) and policy is None:
        policy = get_policy()
    if salt is None:
        salt = generate_salt(policy.salt_bytes)
    elif not salt:
        raise ValueError("Salt must not be empty.")
    if params is None:
        params = policy

    try:
        password_bytes = password.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValueError("Password is not encodable as UTF-8.") from exc

    derived = derive_key(password_bytes, salt, ln=params.ln, r=params.r, p=params.p)
    logger.debug(f"Derived scrypt credential (ln={params.ln}, r={params.r}, p={params.p})")
    return encode_credential(
        CredentialParameters.from_bytes(ln=params.ln, r=params.r, p=params.p, salt=salt, hash=derived)
    )

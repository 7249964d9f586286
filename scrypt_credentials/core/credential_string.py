"""
Textual credential format for scrypt password hashes.

Syntax::

    $scrypt$ln=17,r=8,p=1$<salt, base64 without padding>$<hash, base64 without padding>

Cost parameters travel with every stored hash, so the recommended values can
change without invalidating older credentials.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from scrypt_credentials.core.base64_canonical import (
    decode_unpadded,
    encode_unpadded,
    is_canonical,
    strip,
)

IDENTIFIER = "scrypt"
_SEPARATOR = "$"
_SEGMENT_COUNT = 5


def _param_pattern(key: str) -> re.Pattern[str]:
    return re.compile(rf"(?:^|,){key}=([0-9]+)(?:,|\Z)")


_PARAM_PATTERNS = {key: _param_pattern(key) for key in ("ln", "r", "p")}


@dataclass(frozen=True)
class CredentialParameters:
    """
    Decoded content of a credential string.

    ``salt`` and ``hash`` hold canonical unpadded base64 text; the raw bytes
    are available through ``salt_bytes`` and ``hash_bytes``.
    """

    ln: int
    r: int
    p: int
    salt: str
    hash: str

    @classmethod
    def from_bytes(cls, *, ln: int, r: int, p: int, salt: bytes, hash: bytes) -> "CredentialParameters":
        return cls(ln=ln, r=r, p=p, salt=encode_unpadded(salt), hash=encode_unpadded(hash))

    @property
    def n(self) -> int:
        return 2 ** self.ln

    @property
    def salt_bytes(self) -> bytes:
        return decode_unpadded(self.salt)

    @property
    def hash_bytes(self) -> bytes:
        return decode_unpadded(self.hash)


def encode_credential(params: CredentialParameters) -> str:
    return (
        f"${IDENTIFIER}$ln={params.ln},r={params.r},p={params.p}"
        f"${params.salt}${params.hash}"
    )


def _extract_param(block: str, key: str) -> Optional[int]:
    match = _PARAM_PATTERNS[key].search(block)
    if match is None:
        return None
    try:
        value = int(match.group(1))
    except ValueError:
        # int() refuses digit strings beyond sys.get_int_max_str_digits()
        return None
    return value if value >= 1 else None


def _is_valid_field(value: str) -> bool:
    return bool(value) and is_canonical(value) and value == strip(value)


def decode_credential(text: str) -> Optional[CredentialParameters]:
    """
    Parse a credential string.

    Returns ``None`` for anything that is not a well-formed scrypt credential;
    it never raises, and callers cannot tell which check rejected the input.
    """
    if not isinstance(text, str):
        return None

    parts = text.split(_SEPARATOR)
    if len(parts) != _SEGMENT_COUNT:
        return None

    leading, identifier, block, salt, hash_ = parts
    if leading or identifier != IDENTIFIER or not block:
        return None

    values = {key: _extract_param(block, key) for key in _PARAM_PATTERNS}
    if any(value is None for value in values.values()):
        return None

    if not _is_valid_field(salt) or not _is_valid_field(hash_):
        return None

    return CredentialParameters(
        ln=values["ln"],
        r=values["r"],
        p=values["p"],
        salt=salt,
        hash=hash_,
    )

"""Unpadded base64 helpers for the salt and hash fields of a credential string."""
from __future__ import annotations

import base64
import binascii
import re

_TRAILING_PADDING = re.compile(r"=+\Z")


def pad(unpadded: str) -> str:
    """
    Append ``=`` so the text length becomes a multiple of 4.

    A remainder of 1 gets three ``=``; such text never decodes, which is
    what makes it non-canonical.
    """
    mod = len(unpadded) % 4
    if mod == 1:
        return f"{unpadded}==="
    if mod == 2:
        return f"{unpadded}=="
    if mod == 3:
        return f"{unpadded}="
    return unpadded


def strip(padded: str) -> str:
    return _TRAILING_PADDING.sub("", padded)


def is_canonical(text: str) -> bool:
    """
    Return True when ``text`` is base64 that round-trips exactly.

    The text is padded, decoded with the standard alphabet and re-encoded;
    it is canonical only if the re-encoding equals the padded input.
    Anything that fails to decode is simply not canonical.
    """
    if not isinstance(text, str):
        return False
    padded = pad(text)
    try:
        raw = base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError):
        return False
    return base64.b64encode(raw).decode("ascii") == padded


def encode_unpadded(raw: bytes) -> str:
    return strip(base64.b64encode(raw).decode("ascii"))


def decode_unpadded(text: str) -> bytes:
    """
    Decode unpadded base64 text back to bytes.

    Raises
    ------
    ValueError
        If ``text`` is not canonical unpadded base64.
    """
    if text != strip(text) or not is_canonical(text):
        raise ValueError("Value is not canonical unpadded base64.")
    return base64.b64decode(pad(text), validate=True)

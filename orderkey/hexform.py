"""
orderkey Hex Display Form
=========================
Reversible mapping between a key's byte form and a fixed-width hex string.

Every byte becomes exactly two lowercase hex characters, and the ASCII
order of "0-9a-f" matches nibble order, so for keys x <= y we always get
to_hex(x) <= to_hex(y) under plain string comparison. Use this form where
a host's string comparison is trusted but its byte comparison is not.
"""

import re

from orderkey.key import Key, KeyDecodeError


_HEX_RE = re.compile(r"(?:[0-9a-fA-F]{2})+")


def to_hex(key: Key) -> str:
    """Lowercase hex of the byte form, two characters per byte."""
    return key.to_bytes().hex()


def from_hex(text: str) -> Key:
    """
    Decode a hex display form back into a Key.

    Upper- and lowercase digits are accepted. Whitespace, separators,
    odd lengths and empty strings are rejected, as is any byte form that
    is not properly terminated.
    """
    if not isinstance(text, str):
        raise KeyDecodeError(f"Hex key must be a string, got {type(text).__name__}")
    if not _HEX_RE.fullmatch(text):
        raise KeyDecodeError(f"Invalid hex key: {text!r}")
    return Key(bytes.fromhex(text))

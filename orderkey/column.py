"""
orderkey Column Binding
=======================
Keys as opaque binary column values for relational and key-value stores.

Binding rules:
  Key      → its byte form (BLOB / BINARY / bytea)
  None     → NULL, for nullable columns
  packed   → keys are self-terminating, so several keys can be written
             back to back into one buffer and read again by scanning
             for the 0x80 terminator. No length prefix needed.

SQLite compares BLOBs with memcmp, so ORDER BY on a column registered via
register_sqlite() follows key order with no custom collation.
"""

import sqlite3
from typing import Any, Optional, Tuple

from orderkey.key import SENTINEL, Key, KeyDecodeError


DEFAULT_SQL_TYPE = "ORDERKEY"


# ─── Column values ──────────────────────────────────────────────────────────

def to_column(key: Optional[Key]) -> Optional[bytes]:
    """Binary column value for a key, or None (NULL)."""
    if key is None:
        return None
    return key.to_bytes()


def from_column(value: Any) -> Optional[Key]:
    """
    Rebuild a key from a binary column value.
    NULL maps back to None. Any non-binary value is rejected.
    """
    if value is None:
        return None
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise KeyDecodeError(
            f"Key column value must be binary, got {type(value).__name__}"
        )
    return Key.from_bytes(value)


# ─── Packed buffers ─────────────────────────────────────────────────────────

def write_key(key: Key, buf: bytearray) -> int:
    """Append a key's byte form to `buf`. Returns the number of bytes written."""
    data = key.to_bytes()
    buf.extend(data)
    return len(data)


def read_key(data: bytes, offset: int = 0) -> Tuple[Key, int]:
    """
    Read one key from `data` at `offset`.
    Returns (key, new_offset). The terminator ends the key.
    """
    if offset < 0 or offset >= len(data):
        raise KeyDecodeError(
            f"Offset {offset} out of range for buffer of {len(data)} bytes"
        )
    end = bytes(data[offset:]).find(SENTINEL)
    if end < 0:
        raise KeyDecodeError(f"Truncated key at offset {offset}: no 0x80 terminator")
    end += offset + 1
    return Key.from_bytes(data[offset:end]), end


def read_all_keys(data: bytes) -> list[Key]:
    """Read every key packed into `data`."""
    keys: list[Key] = []
    offset = 0
    while offset < len(data):
        key, offset = read_key(data, offset)
        keys.append(key)
    return keys


# ─── SQLite ─────────────────────────────────────────────────────────────────

def register_sqlite(type_name: str = DEFAULT_SQL_TYPE) -> None:
    """
    Register Key with the sqlite3 module.

    Keys bind as BLOBs. Columns declared as `type_name` are converted back
    to Key objects when the connection uses detect_types=PARSE_DECLTYPES.
    Registration is process-wide (sqlite3 keeps a global registry).
    """
    sqlite3.register_adapter(Key, to_column)
    sqlite3.register_converter(type_name, Key.from_bytes)

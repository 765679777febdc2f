"""
orderkey
========
Order-maintenance keys: opaque byte strings that can be created before,
after, or between each other, and that sort correctly under plain
byte-wise comparison.

Usage:
    from orderkey import Key, OrderingError, KeyDecodeError
    from orderkey import HexKey, Stringify, OrderedSequence
    from orderkey import to_column, from_column, register_sqlite
"""

from orderkey.key import (
    Key, OrderKeyError, OrderingError, KeyDecodeError,
    SENTINEL, MIN_DIGIT, MAX_DIGIT,
    default_key, key_before, key_after, key_between,
)
from orderkey.hexform import to_hex, from_hex
from orderkey.fields import HexKey, Stringify
from orderkey.column import (
    to_column, from_column, write_key, read_key, read_all_keys, register_sqlite,
)
from orderkey.sequence import OrderedSequence, DuplicateKeyError

__version__ = "1.0.0"

__all__ = [
    "Key", "OrderKeyError", "OrderingError", "KeyDecodeError",
    "SENTINEL", "MIN_DIGIT", "MAX_DIGIT",
    "default_key", "key_before", "key_after", "key_between",
    "to_hex", "from_hex",
    "HexKey", "Stringify",
    "to_column", "from_column", "write_key", "read_key", "read_all_keys",
    "register_sqlite",
    "OrderedSequence", "DuplicateKeyError",
]

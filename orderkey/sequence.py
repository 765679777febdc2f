"""
orderkey Ordered Sequence
=========================
In-memory ordered list whose positions are Keys instead of integers.

Each element carries the key it was inserted with. Inserting at a list
index creates a key between the neighbours at that index, so existing
elements never get renumbered. Keys created by other replicas can be
merged in with insert_key(); their place is decided purely by byte order.

Concurrency: not thread-safe. Keys are immutable, the container is not.
"""

import bisect
import logging
from typing import Any, Iterator, List, Optional, Tuple

from orderkey.key import Key, OrderKeyError


logger = logging.getLogger(__name__)


class DuplicateKeyError(OrderKeyError):
    """Raised when a key is inserted that the sequence already holds."""
    pass


class OrderedSequence:
    """
    Sorted (key, value) pairs.

    - Keys are kept in a parallel sorted list for bisect lookups
    - Values are stored by position alongside their key
    """

    def __init__(self, items: Optional[List[Tuple[Key, Any]]] = None):
        self._keys: List[Key] = []
        self._values: List[Any] = []
        for key, value in items or []:
            self.insert_key(key, value)

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._values))

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, Key):
            return False
        pos = bisect.bisect_left(self._keys, key)
        return pos < len(self._keys) and self._keys[pos] == key

    def __getitem__(self, index: int) -> Any:
        return self._values[index]

    def __repr__(self) -> str:
        return f"OrderedSequence({self.items()!r})"

    # ─── Local edits ────────────────────────────────────────────────

    def insert(self, index: int, value: Any) -> Key:
        """
        Insert `value` so that it ends up at list position `index`.
        Index semantics follow list.insert(). Returns the new key.
        """
        size = len(self._keys)
        if index < 0:
            index = max(size + index, 0)
        index = min(index, size)

        before = self._keys[index - 1] if index > 0 else None
        after = self._keys[index] if index < size else None
        key = Key.new(before=before, after=after)

        self._keys.insert(index, key)
        self._values.insert(index, value)
        logger.debug("Inserted at index %d with key %s (depth %d)",
                     index, key.to_hex(), key.depth)
        return key

    def append(self, value: Any) -> Key:
        return self.insert(len(self._keys), value)

    def prepend(self, value: Any) -> Key:
        return self.insert(0, value)

    # ─── Merging ────────────────────────────────────────────────────

    def insert_key(self, key: Key, value: Any) -> int:
        """
        Insert a value under a key created elsewhere.
        Returns the list position it landed at.
        """
        pos = bisect.bisect_left(self._keys, key)
        if pos < len(self._keys) and self._keys[pos] == key:
            raise DuplicateKeyError(f"Key {key.to_hex()} already present")
        self._keys.insert(pos, key)
        self._values.insert(pos, value)
        logger.debug("Merged key %s at index %d", key.to_hex(), pos)
        return pos

    def remove(self, key: Key) -> Any:
        """Remove the element stored under `key` and return its value."""
        pos = self.index_of(key)
        del self._keys[pos]
        return self._values.pop(pos)

    # ─── Lookup ─────────────────────────────────────────────────────

    def index_of(self, key: Key) -> int:
        """List position of `key`. Raises KeyError if not present."""
        pos = bisect.bisect_left(self._keys, key)
        if pos == len(self._keys) or self._keys[pos] != key:
            raise KeyError(key)
        return pos

    def key_at(self, index: int) -> Key:
        return self._keys[index]

    def keys(self) -> List[Key]:
        return list(self._keys)

    def values(self) -> List[Any]:
        return list(self._values)

    def items(self) -> List[Tuple[Key, Any]]:
        return list(zip(self._keys, self._values))

"""
orderkey Key Codec & Bisector
=============================
Order-maintenance keys that can be created before, after, or between
other keys without renumbering anything. The byte form of a key compares
via memcmp (byte-by-byte) in exactly the intended logical order, so keys
can be used directly as sort keys in any ordered byte-keyed store.

Encoding rules:
  KEY     → zero or more content digits + one 0x80 terminator.
            A content digit is any byte except 0x80.
            The terminator never appears as a content digit, so no key
            is a proper prefix of another (prefix-free).

Why memcmp works:
  0x80 is strictly greater than every digit below the midpoint and
  strictly less than every digit above it. "Key ended here" therefore
  sorts exactly between "continues with a smaller digit" and "continues
  with a larger digit", which is the numeric order of the represented
  values.

Concurrency: keys are immutable values, no locking needed.
"""

from dataclasses import dataclass
from typing import Optional, Union


# ─── Constants ──────────────────────────────────────────────────────────────

SENTINEL = 0x80
MIN_DIGIT = 0x00
MAX_DIGIT = 0xFF

TERMINATOR = bytes([SENTINEL])

BytesLike = Union[bytes, bytearray, memoryview]


# ─── Errors ─────────────────────────────────────────────────────────────────

class OrderKeyError(ValueError):
    """Base class for all orderkey errors."""
    pass


class OrderingError(OrderKeyError):
    """Raised when a key between two bounds is requested but left >= right."""
    pass


class KeyDecodeError(OrderKeyError):
    """Raised when external data is not a well-formed self-terminating key."""
    pass


# ─── Key ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True, order=True)
class Key:
    """
    An immutable order-maintenance key.

    Wraps the full byte form (content digits + terminator). Construction
    from raw data always validates, so every Key instance satisfies the
    self-terminating invariant. Ordering, equality and hashing all use
    the byte form.
    """
    data: bytes

    def __post_init__(self):
        data = self.data
        if isinstance(data, (bytearray, memoryview)):
            data = bytes(data)
            object.__setattr__(self, "data", data)
        elif not isinstance(data, bytes):
            raise KeyDecodeError(
                f"Key data must be bytes-like, got {type(data).__name__}"
            )
        _validate(data)

    # ─── Constructors ───────────────────────────────────────────────

    @classmethod
    def default(cls) -> "Key":
        """The canonical reference key: no content digits, just 0x80."""
        return cls(TERMINATOR)

    @classmethod
    def new_before(cls, key: "Key") -> "Key":
        """Shortest key strictly less than `key`."""
        return cls(_before(key.data))

    @classmethod
    def new_after(cls, key: "Key") -> "Key":
        """Shortest key strictly greater than `key`."""
        return cls(_after(key.data))

    @classmethod
    def new_between(cls, left: "Key", right: "Key") -> "Key":
        """
        A key strictly between `left` and `right`.

        Raises OrderingError unless left < right. Bounds are never swapped.
        """
        if not left.data < right.data:
            raise OrderingError(
                f"Cannot create a key between {left.to_hex()} and "
                f"{right.to_hex()}: left bound must be strictly less than right"
            )
        return cls(_between(left.data, right.data))

    @classmethod
    def new(cls, before: Optional["Key"] = None,
            after: Optional["Key"] = None) -> "Key":
        """
        Generalized constructor.

        `before` is the key the new key must follow, `after` the key it must
        precede. Either may be None, meaning unbounded on that side.
        """
        if before is None and after is None:
            return cls.default()
        if before is None:
            return cls.new_before(after)
        if after is None:
            return cls.new_after(before)
        return cls.new_between(before, after)

    @classmethod
    def from_bytes(cls, data: BytesLike) -> "Key":
        """Decode a key from its byte form. Raises KeyDecodeError."""
        return cls(data)

    @classmethod
    def from_hex(cls, text: str) -> "Key":
        """Decode a key from its hex display form. Raises KeyDecodeError."""
        from orderkey.hexform import from_hex
        return from_hex(text)

    # ─── Accessors ──────────────────────────────────────────────────

    def to_bytes(self) -> bytes:
        """The byte form: content digits followed by the terminator."""
        return self.data

    def to_hex(self) -> str:
        from orderkey.hexform import to_hex
        return to_hex(self)

    @property
    def digits(self) -> bytes:
        """Content digits only (byte form without the terminator)."""
        return self.data[:-1]

    @property
    def depth(self) -> int:
        """Number of content digits."""
        return len(self.data) - 1

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"Key({self.to_hex()!r})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        from orderkey.fields import key_core_schema
        return key_core_schema()

    @classmethod
    def __get_pydantic_json_schema__(cls, schema, handler):
        from orderkey.fields import key_json_schema
        return key_json_schema(handler)


# ─── Validation ─────────────────────────────────────────────────────────────

def _validate(data: bytes) -> None:
    """
    Check the self-terminating form.
    Exactly one 0x80, and it must be the last byte.
    """
    if not data:
        raise KeyDecodeError("Key data is empty (missing 0x80 terminator)")
    if data[-1] != SENTINEL:
        raise KeyDecodeError(
            f"Key data must end with 0x80 terminator, found 0x{data[-1]:02X}"
        )
    pos = data.find(SENTINEL)
    if pos != len(data) - 1:
        raise KeyDecodeError(
            f"Terminator 0x80 found at offset {pos} before end of key "
            f"(length {len(data)})"
        )


# ─── Bisection ──────────────────────────────────────────────────────────────
# All helpers take and return complete byte forms (terminator included).
# The terminator takes part in the walk: reaching it means "extend one
# digit deeper", so the loops always finish on a well-formed input.

def _before(data: bytes) -> bytes:
    """
    Shortest form strictly below `data`.
    0x00 digits have no room below and are carried into the prefix.
    """
    for i, digit in enumerate(data):
        if digit > SENTINEL:
            # Ending here sorts below any continuation with digit > 0x80
            return data[:i] + TERMINATOR
        if digit > MIN_DIGIT:
            return data[:i] + bytes([digit - 1]) + TERMINATOR
    raise KeyDecodeError("Key data is not terminated")


def _after(data: bytes) -> bytes:
    """
    Shortest form strictly above `data`.
    0xFF digits have no room above and are carried into the prefix.
    """
    for i, digit in enumerate(data):
        if digit < SENTINEL:
            return data[:i] + TERMINATOR
        if digit < MAX_DIGIT:
            return data[:i] + bytes([digit + 1]) + TERMINATOR
    raise KeyDecodeError("Key data is not terminated")


def _between(left: bytes, right: bytes) -> bytes:
    """
    A form strictly between `left` and `right` (requires left < right).

    Both forms are prefix-free, so they differ at some position inside
    both of them. At that position, a terminator acts as a virtual digit.
    """
    i = 0
    while left[i] == right[i]:
        i += 1

    prefix = left[:i]
    lo, hi = left[i], right[i]

    if lo < SENTINEL < hi:
        return prefix + TERMINATOR

    if hi - lo > 1:
        # 0x80 lies outside (lo, hi) here, so the midpoint is a content digit
        return prefix + bytes([(lo + hi) // 2]) + TERMINATOR

    # Adjacent digits: keep one of them and go one digit deeper
    if lo == SENTINEL:
        return prefix + bytes([hi]) + _before(right[i + 1:])
    return prefix + bytes([lo]) + _after(left[i + 1:])


# ─── Function aliases ───────────────────────────────────────────────────────

def default_key() -> Key:
    return Key.default()


def key_before(key: Key) -> Key:
    return Key.new_before(key)


def key_after(key: Key) -> Key:
    return Key.new_after(key)


def key_between(left: Key, right: Key) -> Key:
    return Key.new_between(left, right)

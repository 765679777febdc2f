"""
orderkey Hex Display Form Tests
"""

import pytest
from hypothesis import given

from orderkey.hexform import from_hex, to_hex
from orderkey.key import Key, KeyDecodeError
from strategies import key_chains, keys


class TestToHex:

    def test_default(self):
        assert to_hex(Key.default()) == "80"

    def test_lowercase_two_chars_per_byte(self):
        key = Key(b"\x00\xab\x0f\x80")
        assert to_hex(key) == "00ab0f80"
        assert len(to_hex(key)) == 2 * len(key)

    def test_method_alias(self):
        key = Key.new_after(Key.default())
        assert key.to_hex() == to_hex(key) == "8180"


class TestFromHex:

    def test_round_trip(self):
        for text in ["80", "7f80", "817f80", "00ff0180"]:
            assert to_hex(from_hex(text)) == text

    def test_uppercase_accepted(self):
        assert from_hex("817F80") == from_hex("817f80")

    def test_classmethod_alias(self):
        assert Key.from_hex("8180") == Key.new_after(Key.default())

    @pytest.mark.parametrize("text", [
        "",             # empty
        "8",            # odd length
        "818",          # odd length
        "zz80",         # not hex
        "81 80",        # whitespace
        "80\n",         # trailing newline
        "0x80",         # prefix
        "8080",         # valid hex, terminator used as content
        "81",           # valid hex, no terminator
    ])
    def test_invalid_rejected(self, text):
        with pytest.raises(KeyDecodeError):
            from_hex(text)

    def test_non_string_rejected(self):
        with pytest.raises(KeyDecodeError):
            from_hex(b"80")


class TestOrderPreservation:

    def test_documented_scenario(self):
        a = Key.default()
        b = Key.new_after(a)
        c = Key.new_between(a, b)
        assert to_hex(a) < to_hex(c) < to_hex(b)

    @given(keys, keys)
    def test_string_order_matches_key_order(self, a, b):
        assert (a < b) == (to_hex(a) < to_hex(b))
        assert (a == b) == (to_hex(a) == to_hex(b))

    @given(key_chains)
    def test_chain_sorts_identically(self, chain):
        assert sorted(reversed(chain), key=to_hex) == chain

    @given(keys)
    def test_round_trip(self, key):
        assert from_hex(to_hex(key)) == key
        assert from_hex(to_hex(key).upper()) == key

    def test_pairwise_equivalence(self):
        samples = [Key(bytes.fromhex(h)) for h in
                   ["0080", "007f80", "7f80", "80", "817f80", "8180", "ff80", "ff8180"]]
        for a in samples:
            for b in samples:
                assert (a < b) == (to_hex(a) < to_hex(b))

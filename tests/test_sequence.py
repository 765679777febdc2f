"""
orderkey Ordered Sequence Tests
===============================
Local edits by list index, merging keys from other replicas, lookups.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from orderkey.key import Key
from orderkey.sequence import DuplicateKeyError, OrderedSequence


@pytest.fixture
def seq():
    s = OrderedSequence()
    for ch in "abc":
        s.append(ch)
    return s


class TestLocalEdits:

    def test_append(self, seq):
        assert list(seq) == ["a", "b", "c"]
        assert len(seq) == 3

    def test_first_key_is_default(self):
        s = OrderedSequence()
        assert s.append("x") == Key.default()

    def test_insert_middle(self, seq):
        key = seq.insert(1, "x")
        assert list(seq) == ["a", "x", "b", "c"]
        assert seq.key_at(0) < key < seq.key_at(2)

    def test_prepend(self, seq):
        seq.prepend("z")
        assert list(seq) == ["z", "a", "b", "c"]

    def test_negative_index(self, seq):
        seq.insert(-1, "x")
        assert list(seq) == ["a", "b", "x", "c"]

    def test_index_clamped(self, seq):
        seq.insert(100, "end")
        seq.insert(-100, "start")
        assert list(seq) == ["start", "a", "b", "c", "end"]

    def test_existing_keys_unchanged(self, seq):
        before = seq.keys()
        seq.insert(1, "x")
        seq.insert(2, "y")
        after = seq.keys()
        assert [k for k in after if k in before] == before

    @given(st.lists(st.integers(min_value=-200, max_value=200), max_size=150))
    def test_edits_match_list(self, indexes):
        s = OrderedSequence()
        mirror = []
        for i, idx in enumerate(indexes):
            s.insert(idx, i)
            mirror.insert(idx, i)
        assert list(s) == mirror
        assert s.keys() == sorted(s.keys())


class TestMerging:

    def test_insert_key_lands_in_order(self, seq):
        middle = Key.new_between(seq.key_at(0), seq.key_at(1))
        pos = seq.insert_key(middle, "remote")
        assert pos == 1
        assert list(seq) == ["a", "remote", "b", "c"]

    def test_duplicate_key_rejected(self, seq):
        with pytest.raises(DuplicateKeyError):
            seq.insert_key(seq.key_at(0), "dup")
        assert len(seq) == 3

    def test_duplicate_is_value_error(self, seq):
        with pytest.raises(ValueError):
            seq.insert_key(seq.key_at(1), "dup")

    def test_replicas_converge(self, seq):
        replica = OrderedSequence(seq.items())

        local_key = seq.insert(1, "from-a")
        remote_key = replica.insert(3, "from-b")

        seq.insert_key(remote_key, "from-b")
        replica.insert_key(local_key, "from-a")

        assert seq.items() == replica.items()
        assert list(seq) == ["a", "from-a", "b", "c", "from-b"]

    def test_constructor_sorts_items(self):
        k1 = Key.default()
        k2 = Key.new_after(k1)
        s = OrderedSequence([(k2, "second"), (k1, "first")])
        assert list(s) == ["first", "second"]


class TestLookup:

    def test_contains(self, seq):
        assert seq.key_at(0) in seq
        assert Key(b"\x00\x80") not in seq
        assert "a" not in seq

    def test_index_of(self, seq):
        assert seq.index_of(seq.key_at(2)) == 2

    def test_index_of_missing(self, seq):
        with pytest.raises(KeyError):
            seq.index_of(Key(b"\x00\x80"))

    def test_remove(self, seq):
        key = seq.key_at(1)
        assert seq.remove(key) == "b"
        assert list(seq) == ["a", "c"]
        assert key not in seq

    def test_remove_missing(self, seq):
        with pytest.raises(KeyError):
            seq.remove(Key(b"\x00\x80"))

    def test_getitem_and_items(self, seq):
        assert seq[0] == "a"
        assert seq[-1] == "c"
        assert [v for _, v in seq.items()] == ["a", "b", "c"]
        assert seq.values() == ["a", "b", "c"]

"""Tests for the cycle tracker.

Critical Invariants:
- Identity, not equality, keys the tracker
- Registered sources stay alive for the whole copy
"""

import gc
import weakref
from dataclasses import dataclass

from deepclone.core.visited import MISSING


@dataclass
class Item:
    value: int


def test_unknown_source_is_missing(visited):
    assert visited.get([1]) is MISSING
    assert visited.get([1], None) is None
    assert len(visited) == 0


def test_register_then_get(visited):
    source = [1]
    copy = [1]

    visited.register(source, copy)

    assert visited.get(source) is copy
    assert source in visited
    assert len(visited) == 1


def test_identity_not_equality(visited):
    """Equal but distinct objects are distinct identities."""
    first = [1]
    second = [1]

    visited.register(first, "first copy")

    assert second not in visited
    assert visited.get(second) is MISSING


def test_memo_is_keyed_by_id(visited):
    source = Item(1)
    copy = Item(1)

    visited.register(source, copy)

    assert visited.memo == {id(source): copy}


def test_register_keeps_source_alive(visited):
    """CRITICAL: A registered source outlives the references the caller dropped.

    Why: If it were collected, its id() could be reused by a new object that
    would then wrongly resolve to this copy.
    """
    source = Item(1)
    ref = weakref.ref(source)

    visited.register(source, Item(1))
    del source
    gc.collect()

    assert ref() is not None

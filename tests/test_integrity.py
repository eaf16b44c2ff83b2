"""Tests for mutation detection and ring corruption handling."""

import logging
from dataclasses import replace

import pytest

from idxring import (
    ConcurrentModificationError,
    IndexedCircularList,
    IndexedRingError,
    RingCorruptedError,
)
from idxring.types import NodeId


def _relink(ring: IndexedCircularList[str], node_id: NodeId, **links: NodeId) -> None:
    """Overwrite a node's links directly in the arena."""
    ring._nodes[node_id] = replace(ring._nodes[node_id], **links)


def test_insert_during_forward_traversal() -> None:
    """Test that stepping after an insert fails fast."""
    ring = IndexedCircularList([1, 2, 3])
    cursor = ring.iter()
    assert next(cursor) == 1

    ring.insert(4)

    with pytest.raises(ConcurrentModificationError):
        next(cursor)
    with pytest.raises(ConcurrentModificationError):
        cursor.next_back()


def test_insert_inside_for_loop() -> None:
    """Test that growing a list while looping over it is rejected."""
    ring = IndexedCircularList(["a", "b"])
    with pytest.raises(ConcurrentModificationError):
        for value in ring:
            ring.insert(value * 2)


def test_insert_during_reversed_iteration() -> None:
    """Test that growing a list while iterating it backward is rejected."""
    ring = IndexedCircularList(["a", "b", "c"])
    with pytest.raises(ConcurrentModificationError):
        for value in reversed(ring):
            ring.insert(value)

    cursor = ring.iter()
    backward = cursor.rev()
    assert next(backward) == ring.node(ring.node(0).prev).value
    ring.insert("d")
    with pytest.raises(ConcurrentModificationError):
        next(backward)


def test_length_after_insert_is_stale() -> None:
    """Test that len() reports the creation window and the next step still fails."""
    ring = IndexedCircularList([1, 2, 3])
    cursor = ring.iter()
    next(cursor)
    ring.insert(4)

    assert len(cursor) == 2
    assert cursor
    with pytest.raises(ConcurrentModificationError):
        next(cursor)


def test_modification_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    """Test that the mutation guard logs at ERROR before raising."""
    ring = IndexedCircularList([1, 2])
    cursor = ring.iter()
    ring.insert(3)
    with caplog.at_level(logging.ERROR, logger="idxring.cursor"):
        with pytest.raises(ConcurrentModificationError):
            cursor.next_back()

    messages = [record.getMessage() for record in caplog.records if record.name == "idxring.cursor"]
    assert messages == ["List modified during traversal (cursor version 2, list version 3)"]


def test_concurrent_modification_is_runtime_error() -> None:
    """Test the exception hierarchy of the mutation guard."""
    assert issubclass(ConcurrentModificationError, RuntimeError)
    assert issubclass(ConcurrentModificationError, IndexedRingError)


def test_exhausted_cursor_ignores_later_inserts() -> None:
    """Test that a finished cursor stays finished after the list grows."""
    ring = IndexedCircularList([1])
    cursor = ring.iter()
    assert list(cursor) == [1]

    ring.insert(2)

    assert next(cursor, None) is None
    assert cursor.next_back(None) is None

    empty = IndexedCircularList[int]()
    cursor = empty.iter()
    empty.insert(1)
    assert list(cursor) == []


def test_copy_keeps_creation_version() -> None:
    """Test that a copied cursor is stale if its original was."""
    ring = IndexedCircularList([1, 2])
    cursor = ring.iter()
    ring.insert(3)
    clone = cursor.copy()
    with pytest.raises(ConcurrentModificationError):
        next(clone)


def test_new_cursor_after_insert_sees_everything() -> None:
    """Test that cursors created after an insert cover the new node."""
    ring = IndexedCircularList([1, 2])
    list(ring)
    ring.insert(3)
    assert list(ring) == [1, 2, 3]


def test_insert_with_dangling_tail_link() -> None:
    """Test that insertion refuses to link into a corrupted ring."""
    ring = IndexedCircularList(["a", "b"])
    _relink(ring, 0, prev=42)

    with pytest.raises(RingCorruptedError):
        ring.insert("c")

    # Nothing was linked or counted
    assert len(ring) == 2
    assert ring.next_id == 2
    assert ring.node(1).next == 0


def test_cursor_step_with_dangling_link() -> None:
    """Test that traversal stops on a link to a missing node."""
    ring = IndexedCircularList("abc")
    _relink(ring, 0, next=99)
    cursor = ring.iter()
    assert next(cursor) == "a"
    with pytest.raises(RingCorruptedError):
        next(cursor)


def test_validate_detects_asymmetric_link() -> None:
    """Test that validate() rejects a next link with no matching prev."""
    ring = IndexedCircularList("abc")
    _relink(ring, 0, next=2)
    with pytest.raises(RingCorruptedError, match="does not link back"):
        ring.validate()


def test_validate_detects_disjoint_rings() -> None:
    """Test that validate() rejects two separate closed rings."""
    ring = IndexedCircularList("abcd")
    for left, right in ((0, 1), (2, 3)):
        _relink(ring, left, prev=right, next=right)
        _relink(ring, right, prev=left, next=left)

    with pytest.raises(RingCorruptedError, match="covers 2 of 4"):
        ring.validate()


def test_corruption_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    """Test that invariant violations are logged at ERROR before raising."""
    ring = IndexedCircularList("ab")
    _relink(ring, 0, prev=7)
    with caplog.at_level(logging.ERROR, logger="idxring.ring"):
        with pytest.raises(RingCorruptedError):
            ring.validate()
    assert any("missing node 7" in record.getMessage() for record in caplog.records)

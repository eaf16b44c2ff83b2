"""Basic usage example for idxring."""

import logging

from idxring import IndexedCircularList


def main() -> None:
    """Demonstrate insertion and double-ended traversal."""
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    print("=== Building a ring ===\n")
    ring = IndexedCircularList[str]()
    for word in ("hello", "world", "foobar"):
        ring.insert(word)

    print(f"Size: {len(ring)}, head id: {ring.head}")
    for node_id, node in sorted(ring.nodes.items()):
        print(f"  node {node_id}: {node.value!r} prev={node.prev} next={node.next}")

    print(f"\nForward:  {list(ring)}")
    print(f"Backward: {list(reversed(ring))}\n")

    print("=== Consuming from both ends ===\n")
    numbers = IndexedCircularList(range(1, 7))
    cursor = numbers.iter()
    print(f"  front -> {next(cursor)}")
    print(f"  back  -> {cursor.next_back()}")
    print(f"  back  -> {cursor.next_back()}")
    print(f"  rest  -> {list(cursor)}")
    print(f"  front -> {next(cursor, None)} (exhausted)")


if __name__ == "__main__":
    main()

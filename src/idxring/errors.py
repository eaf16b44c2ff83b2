"""Exception classes for idxring."""


class IndexedRingError(Exception):
    """Base exception for all idxring errors."""


class RingCorruptedError(IndexedRingError):
    """Raised when a link or the head refers to an identifier missing from the arena.

    This signals a programming error. The ring can no longer be trusted, so callers
    should let it propagate.
    """


class ConcurrentModificationError(IndexedRingError, RuntimeError):
    """Raised when a cursor is stepped after the list it reads was modified."""


class NodeNotFoundError(IndexedRingError, KeyError):
    """Raised when looking up a node identifier that was never assigned."""

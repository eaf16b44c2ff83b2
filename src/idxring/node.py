"""Arena node record."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from idxring.types import NodeId

T = TypeVar("T")


@dataclass(frozen=True)
class RingNode(Generic[T]):
    """Immutable value plus the identifiers of its neighbours in circular order."""

    value: T
    prev: NodeId
    next: NodeId

    @classmethod
    def singleton(cls, node_id: NodeId, value: T) -> "RingNode[T]":
        """Create a node that is its own predecessor and successor."""
        return cls(value=value, prev=node_id, next=node_id)

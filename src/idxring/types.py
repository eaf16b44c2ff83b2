"""Type definitions for idxring."""

from typing import TypeAlias

# Arena key; links between nodes are stored as these, never as references
NodeId: TypeAlias = int

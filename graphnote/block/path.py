"""
IndexPath - A block's position in the document tree.

Paths are immutable snapshots computed from the tree when requested; they
are never stored on nodes, so they cannot go stale. The top-level block at
position 2 has path "2"; its first child has path "2.0".
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class IndexPath:
    """
    Child indices from the document root down to one block.

    Example:
        path = doc.path(block_id)
        print(path)              # "1.0"
        path.depth               # 2

        if doc.path(a) < doc.path(b):    # a comes first in document order
            ...
    """

    indices: tuple[int, ...]

    def __init__(self, indices: list[int] | tuple[int, ...]):
        # frozen dataclass
        object.__setattr__(self, 'indices', tuple(indices))

    def __lt__(self, other: IndexPath) -> bool:
        """Document order: a parent precedes its children, siblings go left to right."""
        if not isinstance(other, IndexPath):
            return NotImplemented
        return self.indices < other.indices

    def __str__(self) -> str:
        return ".".join(str(i) for i in self.indices)

    def __repr__(self) -> str:
        return f"IndexPath({str(self)!r})"

    @property
    def depth(self) -> int:
        """1 for a top-level block."""
        return len(self.indices)

    @property
    def parent(self) -> IndexPath | None:
        """Path of the enclosing block, None at the top level."""
        if len(self.indices) <= 1:
            return None
        return IndexPath(self.indices[:-1])

    def is_ancestor_of(self, other: IndexPath) -> bool:
        """True if this path is a prefix of (or equal to) other."""
        if len(self.indices) > len(other.indices):
            return False
        return other.indices[:len(self.indices)] == self.indices

    def is_strict_ancestor_of(self, other: IndexPath) -> bool:
        return self.is_ancestor_of(other) and self != other

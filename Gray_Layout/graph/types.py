from __future__ import annotations

"""Small value types shared by the graph and the layout engine."""

from dataclasses import dataclass
from typing import Iterator, Sequence

import numpy as np


@dataclass(frozen=True)
class Vec2:
    """A 2D point or displacement."""

    x: float
    y: float

    @classmethod
    def zero(cls) -> "Vec2":
        return cls(0.0, 0.0)

    @classmethod
    def one(cls) -> "Vec2":
        return cls(1.0, 1.0)

    @classmethod
    def from_seq(cls, seq: Sequence[float]) -> "Vec2":
        """Build a vector from any two-element sequence such as ``[x, y]``."""

        if isinstance(seq, Vec2):
            return seq
        if len(seq) != 2:
            raise ValueError(f"expected two coordinates, got {len(seq)}")
        return cls(float(seq[0]), float(seq[1]))

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def scale(self, factor: float) -> "Vec2":
        return Vec2(self.x * factor, self.y * factor)

    __mul__ = scale

    def length(self) -> float:
        return float(np.hypot(self.x, self.y))

    def as_array(self) -> np.ndarray:
        """Return the vector as a ``float64`` array of shape ``(2,)``."""

        return np.array([self.x, self.y], dtype=np.float64)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Edge:
    """Edge insertion request between two vertex indices.

    Only used when adding edges; the graph itself stores adjacency.
    """

    start: int
    end: int
    directed: bool = False


def edge_u(a: int, b: int) -> Edge:
    """Undirected edge between ``a`` and ``b``."""
    return Edge(a, b, directed=False)


def edge_d(a: int, b: int) -> Edge:
    """Directed edge from ``a`` to ``b``."""
    return Edge(a, b, directed=True)


__all__ = ["Vec2", "Edge", "edge_u", "edge_d"]

from __future__ import annotations

import logging
import operator
from typing import Iterable, List, Tuple

import numpy as np

from .types import Edge

logger = logging.getLogger(__name__)


class Graph:
    """Fixed-size graph stored as a dense boolean adjacency matrix.

    ``adjacency[a, b]`` is ``True`` iff there is an edge from ``a`` to ``b``.
    Undirected edges set both entries. Vertices carry no payload and are
    identified by their index ``0..vertex_count-1``.

    Parameters
    ----------
    vertex_count:
        Number of vertices, at least one.
    """

    def __init__(self, vertex_count: int) -> None:
        if isinstance(vertex_count, bool):
            raise TypeError("vertex_count must be an integer, not bool")
        vertex_count = operator.index(vertex_count)
        if vertex_count < 1:
            raise ValueError("vertex_count must be at least 1")
        self._vertex_count = vertex_count
        self._adjacency: np.ndarray | None = np.zeros(
            (vertex_count, vertex_count), dtype=bool
        )

    @classmethod
    def from_edges(cls, vertex_count: int, edges: Iterable[Edge]) -> "Graph":
        """Create a graph and insert ``edges``.

        Raises ``ValueError`` naming the first out of range edge; no graph is
        returned in that case.
        """

        graph = cls(vertex_count)
        edges = list(edges)
        failed = graph.add_edges(edges)
        if failed is not None:
            graph.destroy()
            raise ValueError(
                f"edge {failed} {edges[failed]} is out of range for "
                f"{vertex_count} vertices"
            )
        return graph

    @classmethod
    def from_adjacency(cls, matrix: np.ndarray) -> "Graph":
        """Create a graph from a square matrix; nonzero entries become edges."""

        matrix = np.asarray(matrix)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ValueError(f"adjacency must be square, got shape {matrix.shape}")
        graph = cls(matrix.shape[0])
        graph._adjacency[:] = matrix != 0
        return graph

    # ---- Queries -------------------------------------------------------------

    @property
    def vertex_count(self) -> int:
        return self._vertex_count

    def __len__(self) -> int:
        return self._vertex_count

    @property
    def destroyed(self) -> bool:
        return self._adjacency is None

    @property
    def adjacency(self) -> np.ndarray:
        """Read-only view of the adjacency matrix."""

        view = self._storage().view()
        view.flags.writeable = False
        return view

    def has_edge(self, a: int, b: int) -> bool:
        """Return whether there is an edge from ``a`` to ``b``."""

        adj = self._storage()
        if not (0 <= a < self._vertex_count and 0 <= b < self._vertex_count):
            return False
        return bool(adj[a, b])

    def edges(self) -> List[Tuple[int, int]]:
        """Return every ``(a, b)`` pair with ``adjacency[a, b]`` set."""

        rows, cols = np.nonzero(self._storage())
        return [(int(a), int(b)) for a, b in zip(rows, cols)]

    # ---- Mutation ------------------------------------------------------------

    def add_edge(self, edge: Edge) -> bool:
        """Insert ``edge``; return ``False`` without mutating if out of range.

        Adding an edge that already exists succeeds and changes nothing.
        """

        adj = self._storage()
        n = self._vertex_count
        if not (0 <= edge.start < n and 0 <= edge.end < n):
            logger.debug("rejected edge %s for %d vertices", edge, n)
            return False
        adj[edge.start, edge.end] = True
        if not edge.directed:
            adj[edge.end, edge.start] = True
        return True

    def add_edges(self, edges: Iterable[Edge]) -> int | None:
        """Insert ``edges`` in order, stopping at the first failure.

        Returns
        -------
        int or None
            The 0-based index of the edge that could not be added, or
            ``None`` when every edge was added. Edges before the failing one
            stay inserted; edges after it are not attempted.
        """

        for index, edge in enumerate(edges):
            if not self.add_edge(edge):
                return index
        return None

    def destroy(self) -> None:
        """Release the adjacency storage. The graph is unusable afterwards."""

        self._adjacency = None

    def _storage(self) -> np.ndarray:
        if self._adjacency is None:
            raise RuntimeError("graph has been destroyed")
        return self._adjacency

    def __repr__(self) -> str:
        if self.destroyed:
            return f"Graph(vertex_count={self._vertex_count}, destroyed)"
        return (
            f"Graph(vertex_count={self._vertex_count}, "
            f"edges={int(np.count_nonzero(self._adjacency))})"
        )


__all__ = ["Graph"]

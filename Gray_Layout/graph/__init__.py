"""Graph storage used by the layout engine."""

from .model import Graph
from .types import Edge, Vec2, edge_d, edge_u

__all__ = ["Graph", "Edge", "Vec2", "edge_u", "edge_d"]

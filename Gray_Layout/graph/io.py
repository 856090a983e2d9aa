"""File IO helpers for :mod:`Gray_Layout.graph`."""

from __future__ import annotations

import json
from typing import Any, Hashable, List, Tuple

from .model import Graph
from .types import Edge


def load_graph(path: str) -> Graph:
    """Load a graph from a JSON or YAML file at ``path``."""
    with open(path) as f:
        if str(path).endswith((".yaml", ".yml")):
            import yaml

            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    return graph_from_dict(data)


def graph_from_dict(data: dict[str, Any]) -> Graph:
    """Build a :class:`Graph` from a ``{"vertices": n, "edges": [...]}`` mapping.

    Edges may be given as ``[a, b]`` (undirected), ``[a, b, directed]`` or
    ``{"start": a, "end": b, "directed": bool}`` objects.
    """
    _validate_graph(data)
    edges = [_parse_edge(e) for e in data["edges"]]
    return Graph.from_edges(data["vertices"], edges)


def from_networkx(g: Any) -> Tuple[Graph, List[Hashable]]:
    """Convert a :mod:`networkx` graph.

    Node labels are mapped to indices in ``g.nodes`` iteration order. Edges of
    directed graphs stay directed; undirected edges set both directions.
    Returns the graph and the label list so positions can be mapped back to
    the original nodes.
    """
    import networkx as nx

    labels = list(g.nodes)
    if not labels:
        raise ValueError("networkx graph has no nodes")
    matrix = nx.to_numpy_array(g, nodelist=labels, dtype=bool, weight=None)
    return Graph.from_adjacency(matrix), labels


def _parse_edge(entry: Any) -> Edge:
    if isinstance(entry, dict):
        return Edge(
            int(entry["start"]), int(entry["end"]), entry.get("directed", False)
        )
    if len(entry) == 2:
        return Edge(int(entry[0]), int(entry[1]))
    return Edge(int(entry[0]), int(entry[1]), entry[2])


def _validate_graph(data: Any) -> None:
    if not isinstance(data, dict):
        raise ValueError("Graph file must contain a mapping")
    if "vertices" not in data or "edges" not in data:
        raise ValueError("Graph file must contain 'vertices' and 'edges'")
    if isinstance(data["vertices"], bool) or not isinstance(data["vertices"], int):
        raise ValueError("'vertices' must be an integer")
    if not isinstance(data["edges"], list):
        raise ValueError("'edges' must be a list")
    for edge in data["edges"]:
        if isinstance(edge, dict):
            if "start" not in edge or "end" not in edge:
                raise ValueError("edge missing 'start' or 'end'")
            directed = edge.get("directed", False)
        elif isinstance(edge, list) and len(edge) in (2, 3):
            directed = edge[2] if len(edge) == 3 else False
        else:
            raise ValueError("edge entries must be objects or 2/3-element lists")
        if not isinstance(directed, bool):
            raise ValueError(
                f"edge 'directed' flag must be true or false, got {directed!r}"
            )

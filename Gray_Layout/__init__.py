"""Gray_Layout package initialization."""

from __future__ import annotations

from typing import Any

_EXPORTS = {
    "Graph": "graph.model",
    "Edge": "graph.types",
    "Vec2": "graph.types",
    "edge_u": "graph.types",
    "edge_d": "graph.types",
    "RenderContext": "engine.context",
    "RenderMethodKind": "engine.methods",
    "Eades": "engine.methods",
    "FruchtermanReingold": "engine.methods",
    "create_method": "engine.methods",
    "default_method": "engine.methods",
}

__all__ = list(_EXPORTS)


def __getattr__(name: str) -> Any:  # pragma: no cover - attribute access
    """Lazily expose the public graph and engine API."""

    module = _EXPORTS.get(name)
    if module is None:
        raise AttributeError(name)
    from importlib import import_module

    return getattr(import_module(f".{module}", __name__), name)

"""Force-directed layout engine."""

from .context import RenderContext
from .methods import (
    Eades,
    FruchtermanReingold,
    RenderMethod,
    RenderMethodKind,
    create_method,
    default_method,
    method_kind,
)
from .stepping import StepStats, run, step, step_for, step_until

__all__ = [
    "RenderContext",
    "RenderMethod",
    "RenderMethodKind",
    "Eades",
    "FruchtermanReingold",
    "create_method",
    "default_method",
    "method_kind",
    "StepStats",
    "step",
    "step_for",
    "step_until",
    "run",
]

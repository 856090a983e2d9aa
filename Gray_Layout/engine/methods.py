"""Force models driving the layout.

A render method is one of two parameterised force laws. Both are plain
mutable dataclasses; Fruchterman–Reingold additionally carries its cooling
state, which the stepper updates in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from ..config import Config
from ..graph.types import Vec2


class RenderMethodKind(Enum):
    EADES = "eades"
    FRUCHTERMAN_REINGOLD = "fruchterman_reingold"

    # Aliases from the spring-embedder literature
    SPRING_1 = "eades"
    SPRING_2 = "fruchterman_reingold"


@dataclass
class Eades:
    """Eades spring embedder.

    ``c1`` and ``c2`` shape the logarithmic spring force along edges (``c2``
    is the rest length), ``c3`` the inverse-square repulsion between
    unconnected vertices and ``c4`` converts the net force into a
    displacement.
    """

    c1: float = 2.0
    c2: float = 1.0
    c3: float = 1.0
    c4: float = 0.1
    gravity_center: Vec2 = field(default_factory=Vec2.zero)


@dataclass
class FruchtermanReingold:
    """Fruchterman–Reingold with a linear cooling schedule.

    The ideal edge length is ``c * sqrt(area / n)``. ``cur_temperature``
    scales each displacement and drops by ``decay`` after every step, never
    below zero. Set ``cur_temperature = 1`` and ``decay = 0`` to disable
    cooling.
    """

    c: float = 0.1
    area: float = 100.0
    cur_temperature: float = 0.1
    decay: float = 0.1 / 100
    gravity_center: Vec2 = field(default_factory=Vec2.zero)

    @property
    def frozen(self) -> bool:
        """``True`` once the temperature is zero and can no longer change."""
        return self.cur_temperature <= 0.0 and self.decay >= 0.0


RenderMethod = Union[Eades, FruchtermanReingold]


def method_kind(method: RenderMethod) -> RenderMethodKind:
    """Return the :class:`RenderMethodKind` tag of ``method``."""

    if isinstance(method, Eades):
        return RenderMethodKind.EADES
    if isinstance(method, FruchtermanReingold):
        return RenderMethodKind.FRUCHTERMAN_REINGOLD
    raise TypeError(f"not a render method: {type(method).__name__}")


def create_method(kind: RenderMethodKind | str) -> RenderMethod:
    """Create the render method for ``kind`` populated with defaults.

    Defaults are read from :class:`Config` so they can be tuned from a
    configuration file. The returned values may be tweaked freely.
    """

    kind = RenderMethodKind(kind)
    if kind is RenderMethodKind.EADES:
        cfg = Config.eades
        return Eades(
            c1=float(cfg["c1"]),
            c2=float(cfg["c2"]),
            c3=float(cfg["c3"]),
            c4=float(cfg["c4"]),
            gravity_center=Vec2.from_seq(cfg["gravity_center"]),
        )
    cfg = Config.fruchterman_reingold
    temperature = float(cfg["temperature"])
    decay = cfg.get("decay")
    if decay is None:
        # zero iterations: drop the whole temperature on the first step
        decay = temperature / max(Config.default_iterations, 1)
    return FruchtermanReingold(
        c=float(cfg["c"]),
        area=float(cfg["area"]),
        cur_temperature=temperature,
        decay=float(decay),
        gravity_center=Vec2.from_seq(cfg["gravity_center"]),
    )


def default_method() -> RenderMethod:
    """Render method used when none is given (Eades unless configured)."""
    return create_method(Config.default_method)


__all__ = [
    "RenderMethodKind",
    "RenderMethod",
    "Eades",
    "FruchtermanReingold",
    "method_kind",
    "create_method",
    "default_method",
]

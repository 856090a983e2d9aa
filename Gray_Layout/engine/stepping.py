"""Force computation and stepping.

Every step visits the vertices in index order. The net force on vertex ``n``
is summed over all vertices ``i`` using the *current* position buffer, so a
vertex sees the positions its predecessors already moved to during the same
pass (Gauss-Seidel ordering). The term for ``i == n`` uses the model's gravity
center in place of ``n`` itself, which acts like an edge to a fixed point.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, assert_never

import numpy as np

from ..config import Config
from .logging.logger import log_record
from .methods import Eades, FruchtermanReingold, method_kind

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from .context import RenderContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepStats:
    """Summary of a single step."""

    iteration: int
    max_displacement: float
    temperature: float | None = None


def _offsets(positions: np.ndarray, n: int, gravity: np.ndarray) -> np.ndarray:
    """Vectors from vertex ``n`` to every vertex, with gravity at index ``n``."""

    delta = positions - positions[n]
    delta[n] = gravity - positions[n]
    return delta


def _step_eades(
    adjacency: np.ndarray, positions: np.ndarray, eades: Eades, eps: float
) -> float:
    gravity = eades.gravity_center.as_array()
    largest = 0.0
    for n in range(len(positions)):
        delta = _offsets(positions, n, gravity)
        dist = np.hypot(delta[:, 0], delta[:, 1])
        d = np.where(dist == 0, eps, dist)
        attract = adjacency[n].copy()
        attract[n] = True
        spring = eades.c1 * np.log(d / eades.c2)
        repel = np.where(dist != 0, -eades.c3 / d**2, 0.0)
        magnitude = np.where(attract, spring, repel)
        move = eades.c4 * ((magnitude / d) @ delta)
        positions[n] += move
        largest = max(largest, math.hypot(move[0], move[1]))
    return largest


def _step_fruchterman_reingold(
    adjacency: np.ndarray,
    positions: np.ndarray,
    fr: FruchtermanReingold,
    eps: float,
) -> float:
    largest = 0.0
    # A zero temperature scales every displacement to zero.
    if fr.cur_temperature != 0:
        count = len(positions)
        k = fr.c * math.sqrt(fr.area / count)
        gravity = fr.gravity_center.as_array()
        for n in range(count):
            delta = _offsets(positions, n, gravity)
            dist_sq = np.einsum("ij,ij->i", delta, delta)
            dist = np.sqrt(dist_sq)
            d = np.where(dist == 0, eps, dist)
            attract = adjacency[n].copy()
            attract[n] = True
            magnitude = np.where(attract, dist_sq / k, -(k**2) / d)
            move = fr.cur_temperature * ((magnitude / d) @ delta)
            positions[n] += move
            largest = max(largest, math.hypot(move[0], move[1]))
    fr.cur_temperature = max(0.0, fr.cur_temperature - fr.decay)
    return largest


def _require_ready(ctx: "RenderContext") -> np.ndarray:
    """Return the position buffer or raise if ``ctx`` cannot be stepped."""

    if ctx.destroyed:
        raise RuntimeError("render context has been destroyed")
    if ctx.graph.destroyed:
        raise RuntimeError("render context graph has been destroyed")
    if ctx.positions is None:
        raise RuntimeError("render context has no position buffer attached")
    return ctx.positions


def _step_unchecked(ctx: "RenderContext", positions: np.ndarray) -> StepStats:
    adjacency = ctx.graph.adjacency
    eps = Config.distance_epsilon
    method = ctx.method
    temperature = None
    match method:
        case Eades():
            largest = _step_eades(adjacency, positions, method, eps)
        case FruchtermanReingold():
            was_hot = method.cur_temperature > 0
            largest = _step_fruchterman_reingold(adjacency, positions, method, eps)
            temperature = method.cur_temperature
            if was_hot and method.frozen:
                logger.info(
                    "fruchterman_reingold temperature reached zero at iteration %d",
                    ctx.iteration_count + 1,
                )
        case _:
            assert_never(method)
    ctx._iteration_count += 1
    stats = StepStats(ctx.iteration_count, largest, temperature)
    logger.debug(
        "step %d (%s): max displacement %.6g",
        stats.iteration,
        method_kind(method).value,
        stats.max_displacement,
    )
    if Config.trace_steps:
        log_record(
            "layout",
            "step",
            frame=stats.iteration,
            value={
                "method": method_kind(method).value,
                "max_displacement": stats.max_displacement,
                "temperature": stats.temperature,
            },
        )
    return stats


def step(ctx: "RenderContext") -> StepStats:
    """Advance ``ctx`` by exactly one full pass over all vertices."""

    positions = _require_ready(ctx)
    return _step_unchecked(ctx, positions)


def step_for(ctx: "RenderContext", iterations: int) -> None:
    """Run exactly ``iterations`` steps."""

    if iterations < 0:
        raise ValueError("iterations must be non-negative")
    positions = _require_ready(ctx)
    for _ in range(iterations):
        _step_unchecked(ctx, positions)


def step_until(ctx: "RenderContext", target_iterations: int) -> None:
    """Step while ``ctx.iteration_count`` is below ``target_iterations``."""

    positions = _require_ready(ctx)
    start = ctx.iteration_count
    while ctx.iteration_count < target_iterations:
        _step_unchecked(ctx, positions)
    if ctx.iteration_count != start:
        logger.debug(
            "stepped %d -> %d iterations", start, ctx.iteration_count
        )


def run(ctx: "RenderContext") -> None:
    """Step until :attr:`Config.default_iterations` is reached."""
    step_until(ctx, Config.default_iterations)


__all__ = ["StepStats", "step", "step_for", "step_until", "run"]

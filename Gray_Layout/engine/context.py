from __future__ import annotations

"""Simulation state binding a graph, a force model and vertex positions."""

import copy
import logging
from typing import Sequence

import numpy as np

from ..config import Config
from ..graph.model import Graph
from ..graph.types import Vec2
from . import stepping as _stepping
from .methods import RenderMethod, default_method

logger = logging.getLogger(__name__)


class RenderContext:
    """Layout state for one graph.

    The context reads ``graph`` but never modifies it, so several contexts
    may share one graph. It keeps its own copy of ``method`` because
    Fruchterman–Reingold cools down as it steps.

    Use :meth:`create` to let the context allocate (and own) a randomly
    initialised position buffer, or :meth:`with_positions` to lay out a
    caller-owned ``(n, 2)`` array in place.
    """

    def __init__(self, graph: Graph, method: RenderMethod | None = None) -> None:
        if graph.destroyed:
            raise ValueError("cannot bind a destroyed graph")
        self.graph = graph
        self.method: RenderMethod = (
            default_method() if method is None else copy.deepcopy(method)
        )
        self._positions: np.ndarray | None = None
        self._owns_positions = False
        self._iteration_count = 0
        self._destroyed = False

    # ---- Construction --------------------------------------------------------

    @classmethod
    def create(
        cls,
        graph: Graph,
        method: RenderMethod | None = None,
        *,
        init_positions: bool = True,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> "RenderContext":
        """Create a context for ``graph``.

        Parameters
        ----------
        graph:
            Graph to lay out. Must outlive the context.
        method:
            Force model; copied. ``None`` selects :func:`default_method`.
        init_positions:
            When ``True`` the context allocates and owns a buffer with x and y
            drawn independently and uniformly from ``[0, 1)``. When ``False``
            no buffer exists until :meth:`attach_positions` is called.
        seed, rng:
            Random source for the initial positions. ``rng`` wins over
            ``seed``; without either :attr:`Config.run_seed` is used.
        """

        ctx = cls(graph, method)
        if init_positions:
            if rng is None:
                rng = _make_rng(Config.run_seed if seed is None else seed)
            ctx._positions = rng.random((graph.vertex_count, 2))
            ctx._owns_positions = True
        logger.debug(
            "created render context for %d vertices (owned positions: %s)",
            graph.vertex_count,
            ctx._owns_positions,
        )
        return ctx

    @classmethod
    def with_positions(
        cls,
        graph: Graph,
        positions: np.ndarray,
        method: RenderMethod | None = None,
    ) -> "RenderContext":
        """Create a context that lays out the caller's ``positions`` in place."""

        ctx = cls(graph, method)
        ctx.attach_positions(positions)
        return ctx

    def attach_positions(self, positions: np.ndarray) -> None:
        """Borrow ``positions`` as the position buffer.

        The array is used as is, without copying, and is never released by
        the context. It must be a floating point array of shape ``(n, 2)``.
        """

        self._require_alive()
        if not isinstance(positions, np.ndarray):
            raise ValueError("positions must be a numpy array")
        expected = (self.graph.vertex_count, 2)
        if positions.shape != expected:
            raise ValueError(
                f"positions must have shape {expected}, got {positions.shape}"
            )
        if not np.issubdtype(positions.dtype, np.floating):
            raise ValueError("positions must have a floating point dtype")
        if not positions.flags.writeable:
            raise ValueError("positions must be writeable")
        self._release_positions()
        self._positions = positions
        self._owns_positions = False

    def destroy(self) -> None:
        """Drop the position buffer; the graph is left untouched."""

        self._release_positions()
        self._destroyed = True

    def __enter__(self) -> "RenderContext":
        return self

    def __exit__(self, *exc) -> None:
        self.destroy()

    def _release_positions(self) -> None:
        if self._positions is not None and self._owns_positions:
            logger.debug("releasing owned position buffer")
        self._positions = None
        self._owns_positions = False

    def _require_alive(self) -> None:
        if self._destroyed:
            raise RuntimeError("render context has been destroyed")

    # ---- State ---------------------------------------------------------------

    @property
    def iteration_count(self) -> int:
        """Number of steps taken so far."""
        return self._iteration_count

    @property
    def positions(self) -> np.ndarray | None:
        """The (n, 2) position buffer, or ``None`` when none is attached.

        Replace it through :meth:`attach_positions`.
        """
        return self._positions

    @property
    def owns_positions(self) -> bool:
        return self._owns_positions

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    # ---- Stepping ------------------------------------------------------------

    def step(self) -> _stepping.StepStats:
        return _stepping.step(self)

    def step_for(self, iterations: int) -> None:
        _stepping.step_for(self, iterations)

    def step_until(self, target_iterations: int) -> None:
        _stepping.step_until(self, target_iterations)

    def run(self) -> None:
        _stepping.run(self)

    # ---- Normalisation -------------------------------------------------------

    def bounding_box(self) -> tuple[Vec2, Vec2]:
        """Return the per-axis ``(min, max)`` corners of the current layout."""

        positions = self._require_positions()
        lo = positions.min(axis=0)
        hi = positions.max(axis=0)
        return Vec2(float(lo[0]), float(lo[1])), Vec2(float(hi[0]), float(hi[1]))

    def normalize(
        self,
        mins: Vec2 | Sequence[float] | None = None,
        maxs: Vec2 | Sequence[float] | None = None,
    ) -> None:
        """Linearly remap all positions into the rectangle ``[mins, maxs]``.

        Each axis is scaled independently so that the smallest coordinate
        lands on ``mins`` and the largest on ``maxs``. When every vertex
        shares the same coordinate on an axis, that axis is set to the middle
        of the target range. Defaults to :attr:`Config.normalize_mins` and
        :attr:`Config.normalize_maxs`.
        """

        positions = self._require_positions()
        positions[:] = _remap(positions, *_bounds(mins, maxs))

    def normalized(
        self,
        mins: Vec2 | Sequence[float] | None = None,
        maxs: Vec2 | Sequence[float] | None = None,
    ) -> np.ndarray:
        """Return a normalised copy, leaving the simulation buffer untouched."""

        positions = self._require_positions()
        return _remap(positions, *_bounds(mins, maxs))

    def _require_positions(self) -> np.ndarray:
        self._require_alive()
        if self._positions is None:
            raise RuntimeError("render context has no position buffer attached")
        return self._positions

    def __repr__(self) -> str:
        return (
            f"RenderContext(vertices={self.graph.vertex_count}, "
            f"method={type(self.method).__name__}, "
            f"iteration={self._iteration_count})"
        )


def _make_rng(seed: int | None) -> np.random.Generator:
    if seed is not None:
        return np.random.default_rng(seed)
    seq = np.random.SeedSequence()
    # pass this back as ``seed`` to reproduce the layout
    logger.info("initial positions drawn with seed entropy %d", seq.entropy)
    return np.random.default_rng(seq)


def _bounds(
    mins: Vec2 | Sequence[float] | None, maxs: Vec2 | Sequence[float] | None
) -> tuple[np.ndarray, np.ndarray]:
    lo = Vec2.from_seq(Config.normalize_mins if mins is None else mins)
    hi = Vec2.from_seq(Config.normalize_maxs if maxs is None else maxs)
    if not (lo.x < hi.x and lo.y < hi.y):
        raise ValueError(f"normalize bounds must satisfy mins < maxs, got {lo}, {hi}")
    return lo.as_array(), hi.as_array()


def _remap(positions: np.ndarray, lo: np.ndarray, hi: np.ndarray) -> np.ndarray:
    cur_lo = positions.min(axis=0)
    cur_hi = positions.max(axis=0)
    span = cur_hi - cur_lo
    flat = span == 0
    # Degenerate axes divide by one and are overwritten with the midpoint.
    t = (positions - cur_lo) / np.where(flat, 1.0, span)
    out = lo + t * (hi - lo)
    out[:, flat] = (lo[flat] + hi[flat]) / 2
    np.clip(out, lo, hi, out=out)
    # Extremes map exactly onto the target edges.
    for axis in np.flatnonzero(~flat):
        out[positions[:, axis] == cur_lo[axis], axis] = lo[axis]
        out[positions[:, axis] == cur_hi[axis], axis] = hi[axis]
    return out


__all__ = ["RenderContext"]

import logging

import numpy as np
import pytest

from Gray_Layout.config import Config
from Gray_Layout.engine.context import RenderContext
from Gray_Layout.engine.methods import Eades, FruchtermanReingold, create_method
from Gray_Layout.graph import Graph, Vec2, edge_u


def _graph(n: int = 4) -> Graph:
    return Graph.from_edges(n, [edge_u(i, i + 1) for i in range(n - 1)])


def test_create_allocates_owned_positions_in_unit_square():
    ctx = RenderContext.create(_graph(50), seed=0)
    assert ctx.owns_positions
    assert ctx.positions.shape == (50, 2)
    assert np.all(ctx.positions >= 0.0) and np.all(ctx.positions < 1.0)
    assert ctx.iteration_count == 0


def test_create_uses_default_method():
    assert isinstance(RenderContext.create(_graph(), seed=0).method, Eades)


def test_explicit_rng_is_used():
    rng = np.random.default_rng(42)
    expected = np.random.default_rng(42).random((4, 2))
    ctx = RenderContext.create(_graph(), rng=rng)
    assert np.array_equal(ctx.positions, expected)


def test_run_seed_from_config():
    Config.run_seed = 9
    a = RenderContext.create(_graph())
    b = RenderContext.create(_graph())
    assert np.array_equal(a.positions, b.positions)


def test_unseeded_create_logs_reproducible_entropy(caplog):
    caplog.set_level(logging.INFO, logger="Gray_Layout.engine.context")
    ctx = RenderContext.create(_graph())
    [record] = [r for r in caplog.records if "entropy" in r.getMessage()]
    entropy = record.args[0]
    again = RenderContext.create(_graph(), seed=entropy)
    assert np.array_equal(ctx.positions, again.positions)


def test_seeded_create_logs_no_entropy(caplog):
    caplog.set_level(logging.INFO, logger="Gray_Layout.engine.context")
    RenderContext.create(_graph(), seed=3)
    assert not any("entropy" in r.getMessage() for r in caplog.records)


def test_method_is_copied():
    fr = create_method("fruchterman_reingold")
    ctx = RenderContext.create(_graph(), fr, seed=0)
    ctx.step_for(3)
    assert fr.cur_temperature == pytest.approx(0.1)
    assert ctx.method.cur_temperature < fr.cur_temperature


def test_without_init_positions_has_no_buffer():
    ctx = RenderContext.create(_graph(), init_positions=False)
    assert ctx.positions is None
    assert not ctx.owns_positions


def test_borrowed_positions_are_mutated_in_place():
    buf = np.zeros((4, 2))
    buf[:, 0] = [0.0, 1.0, 2.0, 3.0]
    ctx = RenderContext.with_positions(_graph(), buf)
    assert ctx.positions is buf
    assert not ctx.owns_positions
    before = buf.copy()
    ctx.step()
    assert not np.array_equal(buf, before)


def test_positions_cannot_be_reassigned():
    ctx = RenderContext.create(_graph(), seed=0)
    with pytest.raises(AttributeError):
        ctx.positions = np.zeros((2, 2))
    assert ctx.positions.shape == (4, 2)


def test_attach_positions_after_create():
    ctx = RenderContext.create(_graph(), init_positions=False)
    buf = np.random.default_rng(1).random((4, 2))
    ctx.attach_positions(buf)
    ctx.step()
    assert ctx.iteration_count == 1


@pytest.mark.parametrize(
    "buf",
    [
        np.zeros((3, 2)),
        np.zeros((4, 3)),
        np.zeros((4, 2), dtype=int),
        [[0.0, 0.0]] * 4,
    ],
)
def test_attach_positions_rejects_bad_buffers(buf):
    ctx = RenderContext.create(_graph(), init_positions=False)
    with pytest.raises(ValueError):
        ctx.attach_positions(buf)
    assert ctx.positions is None


def test_destroy_leaves_borrowed_buffer_and_graph_alone():
    g = _graph()
    buf = np.ones((4, 2))
    ctx = RenderContext.with_positions(g, buf)
    ctx.destroy()
    assert ctx.positions is None
    assert ctx.destroyed
    assert np.array_equal(buf, np.ones((4, 2)))
    assert not g.destroyed


def test_context_manager_releases_owned_buffer():
    with RenderContext.create(_graph(), seed=0) as ctx:
        assert ctx.positions is not None
    assert ctx.positions is None
    with pytest.raises(RuntimeError):
        ctx.attach_positions(np.zeros((4, 2)))


def test_binding_destroyed_graph_fails():
    g = _graph()
    g.destroy()
    with pytest.raises(ValueError):
        RenderContext.create(g)


def test_normalize_maps_extremes_onto_bounds():
    buf = np.array([[-3.0, 10.0], [1.0, 20.0], [5.0, 15.0], [0.0, 12.0]])
    ctx = RenderContext.with_positions(_graph(), buf)
    ctx.normalize(Vec2(0.0, -1.0), Vec2(2.0, 1.0))
    assert buf[0, 0] == 0.0 and buf[2, 0] == 2.0
    assert buf[0, 1] == -1.0 and buf[1, 1] == 1.0
    assert buf[1, 0] == pytest.approx(1.0)
    assert buf[2, 1] == pytest.approx(0.0)
    assert buf[3, 1] == pytest.approx(-0.6)


def test_normalize_defaults_and_containment():
    ctx = RenderContext.create(_graph(30), seed=3)
    ctx.step_for(10)
    ctx.normalize()
    pos = ctx.positions
    assert np.all(pos >= 0.05) and np.all(pos <= 0.95)
    assert pos[:, 0].min() == 0.05 and pos[:, 0].max() == 0.95
    assert pos[:, 1].min() == 0.05 and pos[:, 1].max() == 0.95


def test_normalize_accepts_sequences():
    ctx = RenderContext.create(_graph(), seed=3)
    ctx.normalize([0, 0], (640, 480))
    lo, hi = ctx.bounding_box()
    assert lo == Vec2(0.0, 0.0)
    assert hi == Vec2(640.0, 480.0)


def test_normalize_degenerate_axis_goes_to_midpoint():
    buf = np.array([[0.0, 2.0], [1.0, 2.0], [3.0, 2.0], [2.0, 2.0]])
    ctx = RenderContext.with_positions(_graph(), buf)
    ctx.normalize(Vec2(0.0, 0.0), Vec2(1.0, 4.0))
    assert np.all(buf[:, 1] == 2.0)
    assert buf[:, 0] == pytest.approx([0.0, 1 / 3, 1.0, 2 / 3])


def test_normalize_single_vertex():
    ctx = RenderContext.with_positions(Graph(1), np.array([[7.0, -7.0]]))
    ctx.normalize()
    assert ctx.positions[0] == pytest.approx([0.5, 0.5])


@pytest.mark.parametrize(
    "mins,maxs",
    [((0.0, 0.0), (0.0, 1.0)), ((0.0, 1.0), (1.0, 1.0)), ((1.0, 0.0), (0.0, 1.0))],
)
def test_normalize_rejects_invalid_bounds(mins, maxs):
    buf = np.random.default_rng(0).random((4, 2))
    before = buf.copy()
    ctx = RenderContext.with_positions(_graph(), buf)
    with pytest.raises(ValueError):
        ctx.normalize(mins, maxs)
    assert np.array_equal(buf, before)


def test_normalized_returns_copy():
    ctx = RenderContext.create(_graph(), FruchtermanReingold(), seed=3)
    raw = ctx.positions.copy()
    out = ctx.normalized()
    assert np.array_equal(ctx.positions, raw)
    assert out.min() == 0.05 and out.max() == 0.95


def test_normalize_without_positions_raises():
    ctx = RenderContext.create(_graph(), init_positions=False)
    with pytest.raises(RuntimeError):
        ctx.normalize()

# config.py

import os


class Config:
    """Global configuration for the layout engine.

    Values can be overridden from ``input/config.json`` (or any JSON/YAML
    file passed to :meth:`load_from_file`) and from the command line.

    Attributes
    ----------
    default_method:
        Force model used when a context is created without an explicit
        method: ``"eades"`` or ``"fruchterman_reingold"``.
    default_iterations:
        Target iteration count used by :func:`Gray_Layout.engine.step.run`.
        Also derives the default Fruchterman–Reingold cooling rate.
    run_seed:
        Seed for random position initialisation. ``None`` draws fresh
        entropy on every context creation.
    distance_epsilon:
        Substitute for an exact zero distance before it is used as a divisor.
    normalize_mins, normalize_maxs:
        Target rectangle used by ``normalize`` when no bounds are passed.
    eades:
        Default spring-embedder constants ``c1``..``c4`` and the
        ``gravity_center`` every vertex is pulled towards.
    fruchterman_reingold:
        Default ``c``, ``area``, starting ``temperature`` and per-step
        ``decay``. A ``decay`` of ``None`` cools linearly to zero over
        ``default_iterations`` steps.
    trace_steps:
        When ``True`` every step appends a JSON line to
        ``output_dir/layout_log.jsonl``.
    """

    # Base directories for package resources
    base_dir = os.path.abspath(os.path.dirname(__file__))
    input_dir = os.path.join(base_dir, "input")
    config_file = os.path.join(input_dir, "config.json")
    graph_file = os.path.join(input_dir, "graph.json")
    output_dir = os.path.join(base_dir, "output")

    @staticmethod
    def input_path(*parts: str) -> str:
        """Return absolute path under the ``input`` directory."""
        return os.path.join(Config.input_dir, *parts)

    default_method = "eades"
    default_iterations = 100
    run_seed: int | None = None
    distance_epsilon = 1e-12

    normalize_mins = [0.05, 0.05]
    normalize_maxs = [0.95, 0.95]

    eades = {
        "c1": 2.0,
        "c2": 1.0,
        "c3": 1.0,
        "c4": 0.1,
        "gravity_center": [0.0, 0.0],
    }
    fruchterman_reingold = {
        "c": 0.1,
        "area": 100.0,
        "temperature": 0.1,
        "decay": None,
        "gravity_center": [0.0, 0.0],
    }

    trace_steps = False

    @classmethod
    def load_from_file(cls, path: str) -> None:
        """Load configuration values from a JSON or YAML file.

        Only keys that already exist as attributes on ``Config`` will be
        assigned. Nested dictionaries are merged when the existing attribute
        is also a ``dict``. Relative ``graph_file`` and ``output_dir`` values
        are resolved relative to the directory containing ``path``.

        Parameters
        ----------
        path:
            Path to the configuration file.
        """

        if not os.path.exists(path):
            raise FileNotFoundError(path)
        data = _read_mapping(path)
        cls.config_file = os.path.abspath(path)
        base_dir = os.path.dirname(cls.config_file)

        for key, value in data.items():
            if key.startswith("_") or not hasattr(cls, key):
                continue
            if key in {"graph_file", "output_dir"} and not os.path.isabs(value):
                value = os.path.abspath(os.path.join(base_dir, value))
            current = getattr(cls, key)
            if callable(current):
                continue
            if isinstance(current, dict) and isinstance(value, dict):
                current.update(value)
            else:
                setattr(cls, key, value)


def _read_mapping(path: str) -> dict:
    """Parse ``path`` as YAML when it has a YAML suffix, else as JSON."""

    with open(path) as f:
        if path.endswith((".yaml", ".yml")):
            import yaml

            data = yaml.safe_load(f) or {}
        else:
            import json

            data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: configuration must be a mapping")
    return data


def load_config(path: str | None = None) -> dict:
    """Load configuration from ``path`` and return the data."""
    if path is None:
        path = Config.input_path("config.json")
    Config.load_from_file(path)
    return _read_mapping(path)

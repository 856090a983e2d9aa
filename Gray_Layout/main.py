# main.py

"""Entry point for running a layout headless from the command line."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import dataclass
from typing import Any

from Gray_Layout.config import Config


# Internal Config attributes that should not be exposed as CLI flags
_PRIVATE_KEYS = {
    "base_dir",
    "input_dir",
    "config_file",
    "graph_file",
}

# Flag types for options whose default is ``None``
_NONE_TYPES = {
    "run_seed": int,
    "fruchterman_reingold.decay": float,
}

_METHOD_CHOICES = ["eades", "fruchterman_reingold"]


def _configure_logging(level: int = logging.WARNING) -> None:
    """Configure logging on stderr and capture uncaught exceptions."""

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    def _log_excepthook(exc_type, exc, tb) -> None:
        logging.getLogger(__name__).exception(
            "Uncaught exception", exc_info=(exc_type, exc, tb)
        )

    sys.excepthook = _log_excepthook


def _add_config_args(
    parser: argparse.ArgumentParser, data: dict[str, Any], prefix: str = ""
) -> None:
    """Recursively add CLI flags based on ``data`` keys."""
    for key, value in data.items():
        if key in _PRIVATE_KEYS:
            continue
        arg_name = f"--{prefix}{key}"
        dest = f"{prefix}{key}".replace(".", "_")
        if isinstance(value, dict):
            _add_config_args(parser, value, prefix=f"{prefix}{key}.")
            continue
        if dest == "default_method":
            parser.add_argument(arg_name, choices=_METHOD_CHOICES, dest=dest)
            continue
        if isinstance(value, bool):
            parser.add_argument(arg_name, type=lambda x: x.lower() == "true", dest=dest)
        elif isinstance(value, (list, tuple)):
            parser.add_argument(
                arg_name, type=float, nargs=len(value), dest=dest, metavar="V"
            )
        elif value is None:
            parser.add_argument(
                arg_name, type=_NONE_TYPES.get(f"{prefix}{key}", str), dest=dest
            )
        else:
            parser.add_argument(arg_name, type=type(value), dest=dest)


def _config_defaults() -> dict[str, Any]:
    """Return a dictionary of all attributes defined on :class:`Config`."""
    defaults: dict[str, Any] = {}
    for key, value in Config.__dict__.items():
        if key.startswith("_") or key in _PRIVATE_KEYS:
            continue
        if callable(value) or isinstance(value, (staticmethod, classmethod)):
            continue
        defaults[key] = value
    return defaults


def _apply_overrides(
    args: argparse.Namespace, data: dict[str, Any], prefix: str = ""
) -> None:
    """Apply CLI overrides back onto :class:`Config`."""
    for key, value in data.items():
        full = f"{prefix}{key}"
        dest = full.replace(".", "_")
        override = getattr(args, dest, None)
        if override is not None:
            parts = full.split(".")
            target = Config
            for part in parts[:-1]:
                target = getattr(target, part)
            if isinstance(target, dict):
                target[parts[-1]] = override
            else:
                setattr(target, parts[-1], override)
        elif isinstance(value, dict):
            _apply_overrides(args, value, prefix=f"{full}.")


@dataclass
class MainService:
    """Handle CLI parsing and run a layout."""

    argv: list[str] | None = None

    def run(self) -> dict[str, Any]:
        args, cfg = self._parse_args()
        _configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
        _apply_overrides(args, cfg)
        result = self._run_layout(normalize=not args.no_normalize)
        json.dump(result, sys.stdout)
        sys.stdout.write("\n")
        return result

    # ------------------------------------------------------------------
    def _parse_args(self) -> tuple[argparse.Namespace, dict[str, Any]]:
        initial = argparse.ArgumentParser(add_help=False)
        initial.add_argument(
            "--config",
            default=Config.input_path("config.json"),
            help="Path to JSON or YAML configuration file",
        )
        initial.add_argument(
            "--graph",
            default=None,
            help="Path to graph JSON or YAML file",
        )
        known, _ = initial.parse_known_args(self.argv)

        if known.config and os.path.exists(known.config):
            Config.load_from_file(known.config)
        if known.graph is not None:
            Config.graph_file = os.path.abspath(known.graph)

        parser = argparse.ArgumentParser(
            parents=[initial], description="Compute a force-directed graph layout"
        )
        defaults = _config_defaults()
        _add_config_args(parser, defaults)
        parser.add_argument(
            "--no-normalize",
            action="store_true",
            help="Print raw simulation coordinates instead of normalised ones",
        )
        parser.add_argument(
            "-v", "--verbose", action="store_true", help="Log every step"
        )
        args = parser.parse_args(self.argv)
        return args, defaults

    # ------------------------------------------------------------------
    @staticmethod
    def _run_layout(normalize: bool = True) -> dict[str, Any]:
        """Load :attr:`Config.graph_file`, lay it out and return the result."""
        from Gray_Layout.engine.context import RenderContext
        from Gray_Layout.engine.methods import default_method
        from Gray_Layout.graph.io import load_graph

        graph = load_graph(Config.graph_file)
        with RenderContext.create(graph, default_method()) as ctx:
            ctx.run()
            if normalize:
                ctx.normalize()
            logging.getLogger(__name__).info(
                "laid out %d vertices in %d iterations",
                graph.vertex_count,
                ctx.iteration_count,
            )
            return {
                "iterations": ctx.iteration_count,
                "positions": ctx.positions.tolist(),
                "edges": [list(e) for e in graph.edges()],
            }


def main(argv: list[str] | None = None) -> None:
    """Console entry point for ``gray-layout``."""
    MainService(argv=argv).run()


if __name__ == "__main__":
    main()

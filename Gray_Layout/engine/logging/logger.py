from __future__ import annotations

"""Lightweight JSON line logger for layout traces."""

import json
from pathlib import Path
from typing import Any

from ...config import Config


def log_record(
    category: str,
    label: str,
    *,
    frame: int | None = None,
    value: dict[str, Any] | None = None,
    metadata: dict[str, Any] | None = None,
    path: Path | None = None,
    **extra: Any,
) -> None:
    """Append a record to a JSON lines log file.

    Records go to ``<Config.output_dir>/<category>_log.jsonl`` unless
    ``path`` is given. ``frame`` is the iteration the record belongs to.
    """

    if path is None:
        path = Path(Config.output_dir) / f"{category}_log.jsonl"
    path.parent.mkdir(parents=True, exist_ok=True)
    data: dict[str, Any] = {"label": label}
    if frame is not None:
        data["frame"] = frame
    if value is not None:
        data.update(value)
    if metadata is not None:
        data["metadata"] = metadata
    if extra:
        data.update(extra)
    with path.open("a") as fh:
        fh.write(json.dumps(data) + "\n")


__all__ = ["log_record"]

import sys
from copy import deepcopy
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from Gray_Layout.config import Config


@pytest.fixture(autouse=True)
def _restore_config(tmp_path) -> None:
    """Snapshot ``Config`` before each test and write traces under ``tmp_path``."""

    saved = {
        key: deepcopy(value)
        for key, value in vars(Config).items()
        if not key.startswith("_") and not callable(value)
        and not isinstance(value, (staticmethod, classmethod))
    }
    Config.output_dir = str(tmp_path / "output")
    yield
    for key, value in saved.items():
        setattr(Config, key, value)

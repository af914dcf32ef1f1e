import sys
from pathlib import Path

import pytest

# Ensure the project root is on sys.path so `hyperplanes` is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import matplotlib

matplotlib.use("Agg")

from hyperplanes import config


@pytest.fixture(autouse=True)
def _default_settings(monkeypatch):
    """Run every test against the built-in defaults, whatever the environment says."""
    for name in ("HYPERPLANES_SETTINGS", "HYPERPLANES_TOLERANCE",
                 "HYPERPLANES_DISPLAY_PRECISION", "HYPERPLANES_GRAPH_THEME",
                 "HYPERPLANES_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    config.reset_settings()
    yield
    config.reset_settings()

"""Configure pytest for shelfscan."""

import os
import sys
from pathlib import Path

import pytest

# Get the project root directory
root_dir = Path(__file__).parent

# Make the src/ layout importable without an editable install
src_path = str(root_dir / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

os.environ["PYTHONPATH"] = src_path


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path_factory, monkeypatch):
    """Keep the user's config file and SHELFSCAN_* variables out of tests."""
    from shelfscan.utils import config as cfg

    for name in list(os.environ):
        if name.startswith("SHELFSCAN_"):
            monkeypatch.delenv(name, raising=False)
    config_dir = tmp_path_factory.mktemp("config") / "shelfscan"
    monkeypatch.setattr(cfg, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(cfg, "CONFIG_FILE", config_dir / "config.toml")
    return config_dir

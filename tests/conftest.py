"""Shared fixtures."""

import pytest

import gomodkit.config
from gomodkit.config import reset_config
from gomodkit.patterns import reset_patterns


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config lookups at an empty directory and clear global state."""
    project_root = tmp_path / "project"
    project_root.mkdir()
    monkeypatch.setattr(gomodkit.config, "PROJECT_ROOT", project_root)
    monkeypatch.delenv("GOMODKIT_VERBOSE", raising=False)
    monkeypatch.delenv("GOMODKIT_MASK", raising=False)
    reset_config()
    reset_patterns()
    yield project_root
    reset_config()
    reset_patterns()

"""Shared test fixtures."""

from __future__ import annotations

import os

import pytest


def _make_file(path, size: int) -> None:
    """Create a file of *size* bytes without writing its contents."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.truncate(size)


@pytest.fixture
def make_file():
    return _make_file


@pytest.fixture
def project(tmp_path, monkeypatch):
    """Empty project directory that is also the working directory."""
    root = tmp_path / "project"
    root.mkdir()
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def junk_project(project):
    """Project with a large node_modules, a log file and source that must survive."""
    _make_file(project / "node_modules" / "left-pad" / "index.js", 500_000_000)
    _make_file(project / "node_modules" / "lodash" / "lodash.js", 50_000_000)
    _make_file(project / "app.log", 2048)
    _make_file(project / "src" / "main.txt", 500)
    return project


@pytest.fixture
def non_root():
    """Skip tests that rely on permission errors when running as root."""
    if hasattr(os, "geteuid") and os.geteuid() == 0:
        pytest.skip("root ignores file permissions")

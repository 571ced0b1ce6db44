"""Pytest configuration and fixtures."""

import os

import pytest


@pytest.fixture(autouse=True)
def isolate_environment():
    """Isolate environment variables for each test.

    This prevents test pollution where one test's environment
    changes affect other tests.
    """
    original_env = os.environ.copy()

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point XDG_CONFIG_HOME and the working directory at a temp dir."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ASYNCSTORE_BACKEND", raising=False)
    monkeypatch.delenv("ASYNCSTORE_LOG_LEVEL", raising=False)
    return tmp_path

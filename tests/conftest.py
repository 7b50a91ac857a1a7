"""Shared fixtures for cmdkit tests."""

import io

import pytest

from cmdkit.config import reset_config


@pytest.fixture
def stdout():
    return io.StringIO()


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    """Keep the global config and prompt overrides out of every test."""
    monkeypatch.delenv("CMDKIT_PROMPT", raising=False)
    monkeypatch.delenv("CMDKIT_CONFIG_DIR", raising=False)
    reset_config()
    yield
    reset_config()

"""Shared test fixtures for reqcov tests."""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_reqcov_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove REQCOV_* variables so the host environment cannot leak in."""
    for key in list(os.environ):
        if key.startswith("REQCOV_"):
            monkeypatch.delenv(key)

"""Common test fixtures."""

import os

import pytest


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Run every test without DOCEXAMPLE_* variables from the outer environment."""
    for name in list(os.environ):
        if name.startswith("DOCEXAMPLE_"):
            monkeypatch.delenv(name)

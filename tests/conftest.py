"""Pytest configuration for wiki_sanitizer tests."""

import pytest

from wiki_sanitizer.policy import reset_policy


@pytest.fixture(autouse=True)
def fresh_policy(monkeypatch):
    """Every test starts without a cached policy and with default settings."""
    monkeypatch.delenv("WIKI_SANITIZER_STRIP", raising=False)
    monkeypatch.delenv("WIKI_SANITIZER_STRIP_COMMENTS", raising=False)
    reset_policy()
    yield
    reset_policy()

"""Shared fixtures for extension-gallery tests."""

import pytest

from extgallery.core.config import DEFAULTS


@pytest.fixture(autouse=True)
def isolated_build_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's build variables out of every test."""
    for name in DEFAULTS:
        monkeypatch.delenv(name, raising=False)

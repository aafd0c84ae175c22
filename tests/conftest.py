"""Pytest configuration and fixtures for AMP Hero Preload tests."""

import pytest

from optimizer.transformers.force_preload_hero_image import ForcePreloadHeroImage


@pytest.fixture
def transformer() -> ForcePreloadHeroImage:
    """Create a transformer instance for testing."""
    return ForcePreloadHeroImage()


@pytest.fixture(autouse=True)
def _clear_toggle_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the env kill switch never leaks in from the host environment."""
    monkeypatch.delenv("AMP_DISABLE_FORCE_PRELOAD_HERO_IMAGE", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_JSON", raising=False)

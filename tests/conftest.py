"""Pytest configuration and shared fixtures for configurator tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

import pytest

from configurator.application.config import SceneConfiguration, load_config_from_dict
from configurator.application.factory import reset_factory
from configurator.application.session import ConfiguratorSession

SCENES_PATH = Path(__file__).parent / "fixtures" / "scenes"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: end-to-end tests through the CLI or REST API"
    )
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


@pytest.fixture(autouse=True)
def _reset_service_factory():
    """Make sure a test that swaps the service factory does not leak it."""
    yield
    reset_factory()


@pytest.fixture
def scenes_path() -> Path:
    """Directory holding the JSON scene fixtures."""
    return SCENES_PATH


@pytest.fixture
def kitchen_data() -> dict[str, Any]:
    """Raw kitchen scene: two views, a drawer cabinet, a locked tall cabinet.

    View A holds c1 and c2 (600 wide, at x=0 and x=600). View B holds the
    450 wide drawer cabinet c3 at x=1200 with three 240mm drawers. c4 is a
    tall cabinet with both edges locked. View B's width is bound to
    ``viewGd('A', 'gd-width') + 50``.
    """
    return json.loads((SCENES_PATH / "kitchen.json").read_text(encoding="utf-8"))


@pytest.fixture
def kitchen_config(kitchen_data: dict[str, Any]) -> SceneConfiguration:
    return load_config_from_dict(kitchen_data)


@pytest.fixture
def kitchen_session(kitchen_config: SceneConfiguration) -> Iterator[ConfiguratorSession]:
    session = ConfiguratorSession.from_config(kitchen_config)
    yield session
    session.close()

"""Pytest configuration and shared fixtures for tray layout tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Mapping

import pytest

from traylayout.domain.value_objects import Cable, CableCategory, Tray

FIXTURES_PATH = Path(__file__).parent / "fixtures" / "configs"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "scenario: end-to-end layout scenarios with known geometry"
    )
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared domain fixtures
# =============================================================================


@pytest.fixture
def standard_tray() -> Tray:
    """400 mm x 300 mm tray with the default 15 mm rung (285 mm usable)."""
    return Tray(name="T1", width=400, height=300, rung_height=15)


@pytest.fixture
def make_cable() -> Callable[..., Cable]:
    """Factory for cables with sequential ids."""
    counter = {"next": 1}

    def factory(
        diameter: float | None = 10.0,
        category: CableCategory | None = CableCategory.POWER,
        **kwargs: object,
    ) -> Cable:
        cable_id = kwargs.pop("id", None) or f"C{counter['next']:03d}"
        counter["next"] += 1
        return Cable(id=cable_id, diameter=diameter, category=category, **kwargs)

    return factory


class TraceRecorder:
    """Trace callback that records every event for assertions."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, object]]] = []

    def __call__(self, event: str, payload: Mapping[str, object]) -> None:
        self.events.append((event, dict(payload)))

    def named(self, event: str) -> list[dict[str, object]]:
        return [payload for name, payload in self.events if name == event]


@pytest.fixture
def trace() -> TraceRecorder:
    """Recording trace callback."""
    return TraceRecorder()


@pytest.fixture
def fixtures_path() -> Path:
    """Directory holding the JSON layout request fixtures."""
    return FIXTURES_PATH

"""Unit tests for the text and JSON layout formatters."""

from __future__ import annotations

import json

import pytest

from traylayout.domain.services.bundle_map import build_bundle_map
from traylayout.domain.services.free_space import FreeSpaceLevel
from traylayout.domain.services.tray_layout import TrayLayoutResult, compute_tray_layout
from traylayout.domain.value_objects import Cable, CableCategory, Tray
from traylayout.infrastructure.formatters import LayoutJsonFormatter, LayoutSummaryFormatter


@pytest.fixture
def result(standard_tray: Tray) -> TrayLayoutResult:
    cables = [
        Cable(id="P-001", diameter=20, category=CableCategory.POWER),
        Cable(id="C-001", diameter=10, category=CableCategory.CONTROL),
    ]
    return compute_tray_layout(standard_tray, cables, build_bundle_map(cables), 1.0)


class TestLayoutSummaryFormatter:
    def test_report(self, result: TrayLayoutResult) -> None:
        text = LayoutSummaryFormatter().format(
            result.summary, tray_name="T1", free_percent=85.0, level=FreeSpaceLevel.NORMAL
        )
        lines = text.splitlines()

        assert lines[0] == "TRAY LAYOUT SUMMARY: T1"
        assert lines[1] == "=" * 50
        assert "Total cable width:" in text
        assert "30.0 mm" in text
        assert "Bottom-row segments:" in text
        assert lines[-1].endswith("85.0 % (normal)")

    def test_without_free_space(self, result: TrayLayoutResult) -> None:
        text = LayoutSummaryFormatter().format(result.summary)
        assert text.startswith("TRAY LAYOUT SUMMARY\n")
        assert "Free space" not in text

    def test_missing_summary(self) -> None:
        text = LayoutSummaryFormatter().format(None, tray_name="T-NEW")
        assert text.splitlines()[-1] == "No layout: tray width and height are required."


class TestLayoutJsonFormatter:
    def test_to_dict(self, result: TrayLayoutResult) -> None:
        data = LayoutJsonFormatter().to_dict(
            result, free_percent=85.0, level=FreeSpaceLevel.NORMAL
        )

        assert data["tray"] == "T1"
        assert data["stage"] == "separators-drawn"
        assert data["canvas"] == {"width": 500.0, "height": 400.0}
        assert data["placed_cables"] == {"power": 1, "control": 1}
        assert data["separator"]["kind"] == "line"
        assert data["separator"]["categories"] == ["power", "control"]
        assert data["summary"]["segment_count"] == 2
        assert data["free_space_level"] == "normal"

    def test_format_is_valid_json(self, result: TrayLayoutResult) -> None:
        text = LayoutJsonFormatter(indent=4).format(result)
        data = json.loads(text)
        assert data["free_space_percent"] is None
        assert data["free_space_level"] is None
        assert '\n    "tray"' in text

    def test_missing_dimensions(self) -> None:
        result = compute_tray_layout(Tray(name="T-NEW"), [], {}, 1.0)
        data = LayoutJsonFormatter().to_dict(result)

        assert data["stage"] == "missing-dimensions"
        assert data["summary"] is None
        assert data["separator"] is None
        assert data["placed_cables"] == {}

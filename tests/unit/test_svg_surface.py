"""Unit tests for SvgDrawingSurface."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from traylayout.contracts import DrawingSurface
from traylayout.infrastructure.svg_surface import SvgDrawingSurface

SVG_NS = {"svg": "http://www.w3.org/2000/svg"}


@pytest.fixture
def surface() -> SvgDrawingSurface:
    surface = SvgDrawingSurface()
    surface.resize(200, 100)
    return surface


class TestSvgDrawingSurface:
    """Tests for SVG serialisation."""

    def test_satisfies_drawing_surface_protocol(self, surface: SvgDrawingSurface) -> None:
        assert isinstance(surface, DrawingSurface)

    def test_document_root(self, surface: SvgDrawingSurface) -> None:
        root = ET.fromstring(surface.to_svg())
        assert root.tag == "{http://www.w3.org/2000/svg}svg"
        assert root.get("width") == "200"
        assert root.get("height") == "100"
        assert root.get("viewBox") == "0 0 200 100"

    def test_resize_discards_drawing(self, surface: SvgDrawingSurface) -> None:
        surface.draw_line(0, 0, 10, 10)
        surface.resize(50, 50)
        assert surface.elements == []
        assert (surface.width, surface.height) == (50, 50)

    def test_clear_paints_background(self, surface: SvgDrawingSurface) -> None:
        surface.draw_line(0, 0, 10, 10)
        surface.clear("#ffffff")
        (background,) = surface.elements
        assert 'fill="#ffffff"' in background

    def test_shapes(self, surface: SvgDrawingSurface) -> None:
        surface.stroke_rect(1, 2, 30, 40, color="#000000")
        surface.fill_rect(1, 2, 30, 5, color="#d3d3d3")
        surface.stroke_circle(50.5, 60, 12.25, color="#111111", line_width=2)
        surface.draw_line(5, 6, 5, 90, line_width=2)

        root = ET.fromstring(surface.to_svg())
        rects = root.findall("svg:rect", SVG_NS)
        assert [r.get("fill") for r in rects] == ["none", "#d3d3d3"]
        (circle,) = root.findall("svg:circle", SVG_NS)
        assert (circle.get("cx"), circle.get("cy"), circle.get("r")) == ("50.5", "60", "12.25")
        assert circle.get("stroke-width") == "2"
        (line,) = root.findall("svg:line", SVG_NS)
        assert (line.get("y1"), line.get("y2")) == ("6", "90")

    def test_text_is_escaped(self, surface: SvgDrawingSurface) -> None:
        surface.draw_text("Tray <A&B>", 10, 20, font_size=12)
        root = ET.fromstring(surface.to_svg())
        (text,) = root.findall("svg:text", SVG_NS)
        assert text.text == "Tray <A&B>"
        assert text.get("font-size") == "12"
        assert text.get("transform") is None

    def test_rotated_text(self, surface: SvgDrawingSurface) -> None:
        surface.draw_text("height", 40, 60, rotation=90)
        (text,) = ET.fromstring(surface.to_svg()).findall("svg:text", SVG_NS)
        assert text.get("transform") == "rotate(90 40 60)"

    def test_save(self, surface: SvgDrawingSurface, tmp_path: Path) -> None:
        target = surface.save(tmp_path / "tray.svg")
        assert target.read_text(encoding="utf-8") == surface.to_svg()

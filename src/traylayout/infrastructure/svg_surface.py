"""SVG implementation of the drawing surface.

Drawing calls are accumulated as SVG elements and serialised on demand, so
the same renderer can target a browser canvas or a file.
"""

from __future__ import annotations

from pathlib import Path
from xml.sax.saxutils import escape, quoteattr

_FONT_FAMILY = "Arial, sans-serif"


def _fmt(value: float) -> str:
    """Format a coordinate without trailing zeros."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


class SvgDrawingSurface:
    """Drawing surface that renders to an SVG document.

    Attributes:
        width: Surface width in px.
        height: Surface height in px.
    """

    def __init__(self, width: float = 0.0, height: float = 0.0) -> None:
        self._width = float(width)
        self._height = float(height)
        self._elements: list[str] = []

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def elements(self) -> list[str]:
        """Serialised elements drawn so far, in drawing order."""
        return list(self._elements)

    def resize(self, width: float, height: float) -> None:
        self._width = float(width)
        self._height = float(height)
        self._elements.clear()

    def clear(self, fill: str = "#ffffff") -> None:
        self._elements.clear()
        self._elements.append(
            f'<rect x="0" y="0" width="{_fmt(self._width)}" '
            f'height="{_fmt(self._height)}" fill="{fill}"/>'
        )

    def stroke_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        color: str = "#000000",
        line_width: float = 1.0,
    ) -> None:
        self._elements.append(
            f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="{_fmt(width)}" '
            f'height="{_fmt(height)}" fill="none" stroke="{color}" '
            f'stroke-width="{_fmt(line_width)}"/>'
        )

    def fill_rect(
        self, x: float, y: float, width: float, height: float, *, color: str
    ) -> None:
        self._elements.append(
            f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="{_fmt(width)}" '
            f'height="{_fmt(height)}" fill="{color}"/>'
        )

    def stroke_circle(
        self,
        cx: float,
        cy: float,
        radius: float,
        *,
        color: str = "#000000",
        line_width: float = 1.0,
    ) -> None:
        self._elements.append(
            f'<circle cx="{_fmt(cx)}" cy="{_fmt(cy)}" r="{_fmt(radius)}" '
            f'fill="none" stroke="{color}" stroke-width="{_fmt(line_width)}"/>'
        )

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        *,
        color: str = "#000000",
        line_width: float = 1.0,
    ) -> None:
        self._elements.append(
            f'<line x1="{_fmt(x1)}" y1="{_fmt(y1)}" x2="{_fmt(x2)}" y2="{_fmt(y2)}" '
            f'stroke="{color}" stroke-width="{_fmt(line_width)}"/>'
        )

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        font_size: float = 16.0,
        color: str = "#000000",
        anchor: str = "middle",
        rotation: float = 0.0,
    ) -> None:
        transform = ""
        if rotation:
            transform = f' transform="rotate({_fmt(rotation)} {_fmt(x)} {_fmt(y)})"'
        self._elements.append(
            f'<text x="{_fmt(x)}" y="{_fmt(y)}" text-anchor="{anchor}" '
            f'dominant-baseline="middle" font-family={quoteattr(_FONT_FAMILY)} '
            f'font-size="{_fmt(font_size)}" fill="{color}"{transform}>'
            f"{escape(text)}</text>"
        )

    def to_svg(self) -> str:
        """Serialise the surface as a standalone SVG document."""
        width = _fmt(self._width)
        height = _fmt(self._height)
        parts = [
            f'<svg width="{width}" height="{height}" '
            f'viewBox="0 0 {width} {height}" xmlns="http://www.w3.org/2000/svg">',
        ]
        parts.extend(f"  {element}" for element in self._elements)
        parts.append("</svg>")
        return "\n".join(parts)

    def save(self, path: Path | str) -> Path:
        """Write the SVG document to ``path`` and return the path."""
        target = Path(path)
        target.write_text(self.to_svg(), encoding="utf-8")
        return target

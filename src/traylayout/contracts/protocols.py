"""Protocols crossing the layout, rendering and application layers.

The layout engine never draws directly: it computes placements, and a
renderer issues drawing calls against a ``DrawingSurface``. Diagnostics go
through a ``TraceCallback`` so the engine does not depend on a logging sink.
"""

from __future__ import annotations

from typing import Callable, Mapping, Protocol, runtime_checkable

TraceCallback = Callable[[str, Mapping[str, object]], None]
"""Receives an event name and its structured payload."""


@runtime_checkable
class DrawingSurface(Protocol):
    """A 2D raster or vector surface in pixel coordinates (y grows downward).

    The renderer owns the surface for the duration of one call: it resizes
    and clears it before drawing. Colors are CSS color strings.

    Example:
        ```python
        surface = SvgDrawingSurface()
        TrayDrawingService().draw_tray_layout(surface, tray, cables, bundles, 2.0)
        surface.save("tray.svg")
        ```
    """

    @property
    def width(self) -> float:
        """Current surface width in px (0 when never sized)."""
        ...

    @property
    def height(self) -> float:
        """Current surface height in px (0 when never sized)."""
        ...

    def resize(self, width: float, height: float) -> None:
        """Resize the surface, discarding its content."""
        ...

    def clear(self, fill: str = "#ffffff") -> None:
        """Fill the whole surface with a background color."""
        ...

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
        ...

    def fill_rect(
        self, x: float, y: float, width: float, height: float, *, color: str
    ) -> None:
        ...

    def stroke_circle(
        self,
        cx: float,
        cy: float,
        radius: float,
        *,
        color: str = "#000000",
        line_width: float = 1.0,
    ) -> None:
        ...

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
        ...

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
        """Draw text vertically centred on (x, y).

        Args:
            text: Text to draw.
            x: Anchor x position.
            y: Anchor y position.
            font_size: Font size in px.
            color: Fill color.
            anchor: Horizontal anchor: "start", "middle" or "end".
            rotation: Clockwise rotation in degrees around (x, y).
        """
        ...

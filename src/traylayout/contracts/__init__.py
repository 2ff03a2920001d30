"""Contracts module - protocols shared across layers.

Example:
    ```python
    from traylayout.contracts import DrawingSurface, TraceCallback

    def render(surface: DrawingSurface) -> None:
        ...
    ```
"""

from .protocols import (
    DrawingSurface as DrawingSurface,
    TraceCallback as TraceCallback,
)

__all__ = [
    "DrawingSurface",
    "TraceCallback",
]

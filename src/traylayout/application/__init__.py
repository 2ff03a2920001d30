"""Application layer - use cases and layout request handling."""

from .commands import RenderTrayLayoutCommand
from .dtos import TrayLayoutOutput

__all__ = [
    "RenderTrayLayoutCommand",
    "TrayLayoutOutput",
]

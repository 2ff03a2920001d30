"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from traylayout.domain.services.free_space import FreeSpaceLevel
from traylayout.domain.services.tray_layout import TrayLayoutResult
from traylayout.domain.value_objects import Cable, LayoutSummary


@dataclass
class TrayLayoutOutput:
    """Output DTO of a tray layout render.

    Attributes:
        result: Computed layout geometry.
        cables_on_tray: Cables laid out, in display order.
        svg: Rendered SVG document.
        free_space_percent: Free width percentage, if computable.
        free_space_level: Threshold band of the free space.
        errors: Error messages; non-empty means nothing was rendered.
    """

    result: TrayLayoutResult | None
    cables_on_tray: list[Cable] = field(default_factory=list)
    svg: str = ""
    free_space_percent: float | None = None
    free_space_level: FreeSpaceLevel = FreeSpaceLevel.UNKNOWN
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def summary(self) -> LayoutSummary | None:
        return self.result.summary if self.result is not None else None

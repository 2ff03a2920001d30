"""Validation structures and layout advisory checks.

Schema validation is handled by Pydantic when the request is loaded. The
checks here flag requests that are valid but will not lay out as the user
probably expects.
"""

from dataclasses import dataclass, field
from typing import Any

from traylayout.application.config.schema import TrayLayoutConfiguration
from traylayout.domain.services.cable_classification import (
    match_cable_category,
    routing_contains_tray,
)
from traylayout.domain.services.separator import MAX_SEPARATED_CATEGORIES


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "cables[0].id")
        message: Human-readable description of the error
        value: The invalid value
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Errors and warnings collected while validating a request."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 clean, 1 errors, 2 warnings only."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self


def validate_config(config: TrayLayoutConfiguration) -> ValidationResult:
    """Run the advisory checks on a loaded layout request.

    Errors:
        - Duplicate cable ids

    Warnings:
        - Tray width or height missing (placeholder only)
        - Cables without a diameter (laid out at 1 mm)
        - Cables whose category cannot be determined (not laid out)
        - More categories on the tray than can be separated
        - Phase rotation enabled without trefoil (no effect)
        - Routing filter that leaves no cables on the tray

    Args:
        config: A configuration already validated by Pydantic.

    Returns:
        The collected errors and warnings.
    """
    result = ValidationResult()
    tray = config.tray

    if not tray.width or not tray.height:
        result.add_warning(
            path="tray",
            message="Tray width and height are required to lay out cables",
            suggestion="Set tray.width and tray.height to positive values in mm",
        )

    cables = list(enumerate(config.cables))
    if config.filter_by_routing:
        cables = [
            (index, cable)
            for index, cable in cables
            if routing_contains_tray(cable.routing, tray.name)
        ]
        if config.cables and not cables:
            result.add_warning(
                path="filter_by_routing",
                message=f"No cable routing passes through tray '{tray.name}'",
                suggestion="Check the tray name against the cables' routing values",
            )

    seen: dict[str, int] = {}
    categories = set()
    for index, cable in cables:
        if cable.id in seen:
            result.add_error(
                path=f"cables[{index}].id",
                message=f"Duplicate cable id (first used by cables[{seen[cable.id]}])",
                value=cable.id,
            )
        else:
            seen[cable.id] = index

        if not cable.diameter:
            result.add_warning(
                path=f"cables[{index}].diameter",
                message=f"Cable '{cable.id}' has no diameter; drawn at 1 mm",
            )

        category = cable.category or match_cable_category(cable.purpose)
        if category is None:
            result.add_warning(
                path=f"cables[{index}].purpose",
                message=f"Cannot determine the category of cable '{cable.id}'; it will not be laid out",
                suggestion="Set 'category' to power, control, mv or vfd",
            )
        else:
            categories.add(category)

    if len(categories) > MAX_SEPARATED_CATEGORIES:
        names = ", ".join(sorted(category.value for category in categories))
        result.add_warning(
            path="cables",
            message=f"Too many cable types on the tray ({names})",
            suggestion=f"Keep at most {MAX_SEPARATED_CATEGORIES} categories per tray",
        )

    for name in ("power", "control", "mv", "vfd"):
        schema = getattr(config.layout, name)
        if schema is not None and schema.phase_rotation and not schema.trefoil:
            result.add_warning(
                path=f"layout.{name}.phase_rotation",
                message="Phase rotation has no effect unless trefoil is enabled",
            )

    return result

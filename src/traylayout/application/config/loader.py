"""Layout request loader.

Reads JSON layout requests and validates them against
``TrayLayoutConfiguration``. File system problems, malformed JSON and schema
violations are all reported as ``ConfigError`` with a machine-readable
``error_type`` and per-field details.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from traylayout.application.config.schema import TrayLayoutConfiguration

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a layout request cannot be loaded or validated.

    Attributes:
        message: Primary error message.
        error_type: One of file_not_found, permission_denied, file_read_error,
            json_parse, validation.
        path: Path of the request file, if loaded from disk.
        details: Per-field details (path/message/value/error_type for
            validation errors, line/column/message for JSON errors).
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Render a Pydantic location as a JSON path.

    Examples:
        >>> _format_json_path(("tray", "width"))
        'tray.width'
        >>> _format_json_path(("cables", 2, "diameter"))
        'cables[2].diameter'
    """
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        elif path:
            path += f".{segment}"
        else:
            path = str(segment)
    return path


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    return [
        {
            "path": _format_json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _format_validation_error_message(details: list[dict[str, Any]]) -> str:
    lines = ["Layout request validation failed:"]
    for detail in details:
        value = detail.get("value")
        suffix = f" (got: {value!r})" if value is not None else ""
        lines.append(f"  - {detail['path']}: {detail['message']}{suffix}")
    return "\n".join(lines)


def _validate(data: Any, path: Path | None = None) -> TrayLayoutConfiguration:
    try:
        return TrayLayoutConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        logger.debug(f"Layout request failed validation with {len(details)} error(s)")
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            path=path,
            details=details,
        ) from e


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise ConfigError(
            message=f"Layout request not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            message=f"Permission denied reading layout request: {path}",
            error_type="permission_denied",
            path=path,
        ) from e
    except OSError as e:
        raise ConfigError(
            message=f"Error reading layout request: {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in layout request: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e


def load_config(path: Path) -> TrayLayoutConfiguration:
    """Load and validate a layout request from a JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If the file is missing, unreadable, not valid JSON, or
            does not match the schema.

    Example:
        >>> try:
        ...     config = load_config(Path("tray-t1.json"))
        ... except ConfigError as e:
        ...     for detail in e.details:
        ...         print(f"{detail['path']}: {detail['message']}")
    """
    data = _read_json(path)
    logger.debug(f"Loaded layout request from {path}")
    return _validate(data, path)


def load_config_from_dict(data: dict[str, Any]) -> TrayLayoutConfiguration:
    """Validate a layout request given as a dictionary.

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(data)

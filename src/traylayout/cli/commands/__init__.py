"""CLI command implementations for the traylayout application.

This package contains subcommands for the traylayout CLI, including:
- validate: Validate a layout request file
"""

from traylayout.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]

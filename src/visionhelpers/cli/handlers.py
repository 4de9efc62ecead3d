"""
Error handling for the CLI.

Maps library exceptions to exit codes and user-facing messages.
"""

import sys
from collections.abc import Callable

import click

from visionhelpers import (
    ConfigurationError,
    ImageProcessingError,
    ValidationError,
    VisionHelpersError,
)
from visionhelpers.cli import progress
from visionhelpers.cli.utils import EXIT_UNEXPECTED, EXIT_VALIDATION_OR_CONFIG


def map_exception_to_exit(exc: BaseException) -> tuple[int, str]:
    """Map library and known exceptions to (exit_code, user_message)."""
    if isinstance(exc, ValidationError):
        msg = exc.args[0] if exc.args else "Validation failed."
        if getattr(exc, "field", None):
            msg = f"{msg} (field: {exc.field})"
        return (EXIT_VALIDATION_OR_CONFIG, msg)
    if isinstance(exc, ConfigurationError):
        return (EXIT_VALIDATION_OR_CONFIG, exc.args[0] if exc.args else "Invalid configuration.")
    if isinstance(exc, ImageProcessingError):
        return (EXIT_VALIDATION_OR_CONFIG, exc.args[0] if exc.args else "Image could not be read.")
    if isinstance(exc, VisionHelpersError):
        return (EXIT_UNEXPECTED, exc.args[0] if exc.args else "An error occurred.")
    return (EXIT_UNEXPECTED, str(exc) if exc.args else "An unexpected error occurred.")


def run_with_error_handling(
    fn: Callable[[], None],
    *,
    quiet: bool = False,
    debug: bool = False,
) -> None:
    """
    Run fn(); on exception map to exit code and message, print and sys.exit.
    Keeps command bodies free of try/except for known errors.
    """
    try:
        fn()
    except VisionHelpersError as e:
        code, msg = map_exception_to_exit(e)
        if quiet:
            click.echo(msg, err=True)
        else:
            progress.print_error(msg)
        sys.exit(code)
    except Exception as e:
        if debug:
            raise
        _code, msg = map_exception_to_exit(e)
        if quiet:
            click.echo(msg, err=True)
        else:
            progress.print_error(msg)
        sys.exit(EXIT_UNEXPECTED)


__all__ = [
    "map_exception_to_exit",
    "run_with_error_handling",
]

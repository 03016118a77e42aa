# topmark:header:start
#
#   project      : Tristat
#   file         : errors.py
#   file_relpath : src/tristat/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the Tristat CLI.

Usage:
    Commands never let a core `tristat.core.errors.TristatError` escape; they
    convert it with `cli_error_from` and raise the result. Click prints the
    message once to stderr and exits with `ExitCode.ERROR`.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any, cast

import click

from tristat.core.errors import (
    ArgumentError,
    ConfigError,
    RenderError,
    StateReadError,
    TristatError,
)
from tristat.core.exit_codes import ExitCode

if TYPE_CHECKING:
    from tristat.cli.console_api import ConsoleLike


class TristatCliError(click.ClickException):
    """Base class for all Tristat CLI errors."""

    exit_code = ExitCode.ERROR

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text.

        Notes:
            - Unlike Click's default, this method does not add color.
            - Colorization is applied in `show()` when a project console is present.
        """
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx: click.Context | None = click.get_current_context(silent=True)
        obj: object = getattr(ctx, "obj", None)
        console: ConsoleLike | None = (
            cast("dict[str, Any]", obj).get("console") if isinstance(obj, dict) else None
        )
        if console is not None and file is None:
            console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
            return
        super().show(file)


class TristatUsageError(TristatCliError):
    """Invalid or contradictory command-line arguments."""


class TristatStateError(TristatCliError):
    """The repository state could not be read."""


class TristatConfigError(TristatCliError):
    """Missing, malformed or invalid configuration."""


class TristatRenderError(TristatCliError):
    """Internal failure while building or rendering the report."""


_ERROR_MAP: dict[type[TristatError], type[TristatCliError]] = {
    ArgumentError: TristatUsageError,
    StateReadError: TristatStateError,
    ConfigError: TristatConfigError,
    RenderError: TristatRenderError,
}


def cli_error_from(exc: TristatError) -> TristatCliError:
    """Return the CLI exception matching a core exception.

    Args:
        exc (TristatError): The core exception.

    Returns:
        TristatCliError: An exception carrying the same message and exit code 2.
    """
    for core_cls, cli_cls in _ERROR_MAP.items():
        if isinstance(exc, core_cls):
            return cli_cls(str(exc))
    return TristatCliError(str(exc))

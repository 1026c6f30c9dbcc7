"""Exit codes and console helpers for the gitconf commands.

Every command ends by raising ``SystemExit`` through one of the helpers
below, so the exit status always comes from ``ExitCode``.
"""

from enum import IntEnum, StrEnum
from typing import Never

from rich.console import Console
from rich.markup import escape

__all__ = [
    "ExitCode",
    "OutputFormat",
    "exit_with_error",
    "exit_with_success",
    "get_error_console",
]


class ExitCode(IntEnum):
    """Process exit statuses of the gitconf CLI."""

    SUCCESS = 0
    LOAD_ERROR = 1  # settings file or configuration document unreadable
    VALIDATION_ERROR = 2
    NOT_FOUND = 3  # configuration file absent from the default branch
    IO_ERROR = 4  # clone or authentication failure
    INTERNAL_ERROR = 5


class OutputFormat(StrEnum):
    """How ``fetch`` prints the retrieved entries."""

    TABLE = "table"
    TOML = "toml"


def get_error_console() -> Console:
    """Return a console writing to stderr."""
    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Report ``message`` as an error and exit with ``code``.

    The message is printed literally: brackets in URIs or paths are not
    read as Rich markup.
    """
    target = console if console is not None else get_error_console()
    target.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    raise SystemExit(code)


def exit_with_success(
    message: str | None = None,
    *,
    console: Console | None = None,
) -> Never:
    """Print ``message`` if given, then exit with ``ExitCode.SUCCESS``."""
    if message is not None:
        target = console if console is not None else Console()
        target.print(message)
    raise SystemExit(ExitCode.SUCCESS)

"""The command-line interface for gitconf."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
# pyright: reportUnusedFunction=false

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from gitconf.entries import FileEntry
from gitconf.exceptions import (
    AuthenticationError,
    ConfigFileNotFoundError,
    ConfigurationError,
    FetchError,
    ParseError,
    SettingsLoadError,
)
from gitconf.provider import (
    PROVIDER_NAME,
    GitProvider,
    TomlDocumentSink,
    get_provider_version,
)
from gitconf.settings import (
    load_logging_config,
    load_settings,
    read_settings_file,
    read_toml_file,
)
from gitconf.utils import create_logger

from ._shared import ExitCode, OutputFormat, exit_with_error, exit_with_success

_HELP = "Fetch configuration from a file in a Git repository."

ConfigOption = Annotated[
    Path,
    Parameter(name=["--config", "-c"], help="Path to the TOML settings file"),
]
SectionOption = Annotated[
    str,
    Parameter(name="--section", help="Table holding the provider settings"),
]


def _read_section(
    config: Path, section: str, error_console: Console
) -> dict[str, object]:
    try:
        return read_settings_file(config, section=section)
    except FileNotFoundError:
        exit_with_error(
            f"Settings file not found: {config}",
            ExitCode.LOAD_ERROR,
            console=error_console,
        )
    except SettingsLoadError as e:
        exit_with_error(str(e), ExitCode.LOAD_ERROR, console=error_console)


def _render_table(sink: TomlDocumentSink) -> Table:
    table = Table(title=f"{len(sink.entries)} entries")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Value")
    for entry in sink.entries:
        kind = "file" if isinstance(entry, FileEntry) else "value"
        table.add_row(Text(entry.key), kind, Text(entry.value))
    return table


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Build the CLI application.

    Args:
        console: Console for regular output (stdout if None).
        error_console: Console for errors (stderr if None).
        exit_on_error: Exit on argument parsing errors.

    Returns:
        The configured cyclopts App.
    """
    out = console if console is not None else Console()
    err = error_console if error_console is not None else Console(stderr=True)

    app = App(
        name="gitconf",
        help=_HELP,
        help_on_error=True,
        console=out,
        error_console=err,
        exit_on_error=exit_on_error,
    )

    @app.command(name="check")
    def _check(
        config: ConfigOption = Path("gitconf.toml"),
        section: SectionOption = "git",
    ) -> None:
        """Validate the provider settings without touching the network."""
        values = _read_section(config, section, err)
        try:
            settings = load_settings(values)
        except ConfigurationError as e:
            exit_with_error(str(e), ExitCode.VALIDATION_ERROR, console=err)

        exit_with_success(
            f"[green]Settings OK[/green] mode={settings.mode} "
            f"uri={escape(settings.uri)} filepath={escape(settings.filepath)}",
            console=out,
        )

    @app.command(name="fetch")
    def _fetch(
        config: ConfigOption = Path("gitconf.toml"),
        section: SectionOption = "git",
        output: Annotated[
            OutputFormat,
            Parameter(name=["--format", "-f"], help="Output format"),
        ] = OutputFormat.TABLE,
    ) -> None:
        """Clone the repository and print the configuration entries."""
        values = _read_section(config, section, err)
        try:
            logging_config = load_logging_config(read_toml_file(config))
        except ConfigurationError as e:
            exit_with_error(str(e), ExitCode.VALIDATION_ERROR, console=err)

        logger = create_logger(
            level=logging_config.level.value,
            log_format=logging_config.format.value,  # type: ignore[arg-type]
            log_file=logging_config.file,
            command="fetch",
        )
        provider = GitProvider(logger=logger)
        sink = TomlDocumentSink()

        try:
            _ = provider.load_data(values, sink)
        except ConfigurationError as e:
            exit_with_error(str(e), ExitCode.VALIDATION_ERROR, console=err)
        except ConfigFileNotFoundError as e:
            exit_with_error(str(e), ExitCode.NOT_FOUND, console=err)
        except (AuthenticationError, FetchError) as e:
            exit_with_error(str(e), ExitCode.IO_ERROR, console=err)
        except ParseError as e:
            exit_with_error(str(e), ExitCode.LOAD_ERROR, console=err)

        if output is OutputFormat.TOML:
            out.print(
                sink.dumps(), end="", markup=False, highlight=False, soft_wrap=True
            )
        else:
            out.print(_render_table(sink))
        exit_with_success()

    @app.command(name="version")
    def _version() -> None:
        """Show the provider name and version."""
        exit_with_success(f"{PROVIDER_NAME} {get_provider_version()}", console=out)

    return app


app = create_app()


def main() -> None:
    """Run the gitconf CLI."""
    app()

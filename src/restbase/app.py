"""Typer application and CLI entry point for restbase.

This module wires together the root Typer application and registers the
built-in commands (``get``, ``cats``, ``swapi``, ``cache``, ``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.  It installs a SIGINT handler, invokes the Typer app and
maps :class:`~restbase.exceptions.RestBaseError` to its exit code.

See Also:
    :mod:`restbase.config`: Configuration resolution.
    :mod:`restbase.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler

from restbase import __version__
from restbase.commands.cache import cache_app
from restbase.commands.config import config_app
from restbase.commands.request import cats_command, get_command, swapi_app
from restbase.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="restbase",
    help="Cached GET requests against JSON REST APIs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("get")(get_command)
app.command("cats")(cats_command)
app.add_typer(swapi_app, name="swapi", help="The Star Wars API.")
app.add_typer(cache_app, name="cache", help="Response cache management.")
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"restbase {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Send ``restbase`` log records to stderr through Rich when verbose."""
    logger = logging.getLogger("restbase")
    if not verbose:
        logger.setLevel(logging.WARNING)
        return
    logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(
            RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
        )


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output, including cache hits and misses."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~restbase.output.OutputManager` built from
    the CLI flags and configures logging for the ``restbase`` package.
    """
    from restbase.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet))
    _configure_logging(verbose)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``restbase`` console script.

    Commands report their own API and connection errors.  Any
    :class:`~restbase.exceptions.RestBaseError` that still escapes causes a
    clean exit with the error's ``exit_code``.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from restbase.exceptions import RestBaseError
        from restbase.output import error

        if isinstance(exc, RestBaseError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)

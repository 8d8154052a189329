"""Typer application and CLI entry point for meshclient.

The CLI is a thin probe around the client factories: it lets an operator
send a request to a service exactly the way a service's own factory-built
client would (same redirect policy, same classification, same wiretap),
and inspect how a status code is classified.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler, invokes the Typer app, and
maps :class:`~meshclient.exceptions.MeshClientError` to its exit code.
"""

from __future__ import annotations

import signal
import sys
from typing import Any

import typer

from meshclient import __version__
from meshclient.commands.config import config_app
from meshclient.commands.request import classify_command, request_command
from meshclient.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="meshclient",
    help="Call services through pre-configured, error-classifying HTTP clients.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("request")(request_command)
app.command("classify")(classify_command)
app.add_typer(config_app, name="config", help="Show client configuration.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"meshclient {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
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
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~meshclient.output.OutputManager` from
    CLI flags and stores shared options in ``ctx.obj``.
    """
    from meshclient.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``meshclient`` console script.

    Unhandled :class:`~meshclient.exceptions.MeshClientError` instances cause
    a clean exit with the error's ``exit_code``; anything else is reported
    and exits with :data:`~meshclient.exit_codes.EXIT_GENERIC_FAILURE`.

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
        from meshclient.exceptions import MeshClientError
        from meshclient.output import error

        if isinstance(exc, MeshClientError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {type(exc).__name__}: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)


if __name__ == "__main__":
    main()

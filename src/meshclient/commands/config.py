"""Config commands -- view the effective client defaults.

Provides the ``meshclient config`` sub-command group. Values are resolved
through :func:`~meshclient.config.load_defaults`, so the output reflects
the config file and any ``MESHCLIENT_*`` environment variables.
"""

from __future__ import annotations

import typer

from meshclient.exceptions import ConfigError
from meshclient.output import error, format_response, info, print_data


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the effective client defaults.

    Example::

        meshclient config show
        MESHCLIENT_TIMEOUT=5 meshclient --json config show
    """
    from meshclient.config import config_file_path, load_defaults

    path = config_file_path()
    try:
        defaults = load_defaults()
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code)

    info(f"Config file: {path}{'' if path.is_file() else ' (not found, using defaults)'}")
    format_response(defaults.model_dump(mode="json"))


@config_app.command("path")
def config_path() -> None:
    """Print the path of the config file that would be read."""
    from meshclient.config import config_file_path

    print_data(str(config_file_path()))

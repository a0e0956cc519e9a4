"""Config commands -- view and modify the config file.

Provides the ``pexels config`` sub-command group. Supported keys are
``token`` (alias ``api_key``), ``host``, ``locale``, ``timeout`` and
``max_retries``; values are validated by
:class:`~pexels_cli.models.PexelsConfig` before being saved.
"""

from __future__ import annotations

import typer

from pexels_cli.commands._common import emit_payload, reporting_errors
from pexels_cli.output import print_data

config_app = typer.Typer(no_args_is_help=True, help="Read and write the config file.")


@config_app.command("set")
def config_set(
    ctx: typer.Context,
    key: str = typer.Argument(help="Config key (token, host, locale, timeout, max_retries)."),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    Raises:
        typer.Exit: With code 2 for an unknown key or an invalid value.

    Example::

        pexels config set timeout 30
        pexels config set locale fr-FR
    """
    from pexels_cli.config import canonical_key, set_config_value

    with reporting_errors():
        set_config_value(key, value)
        emit_payload(ctx, {"status": "ok", "key": canonical_key(key)})


@config_app.command("get")
def config_get(
    key: str = typer.Argument(help="Config key to read."),
) -> None:
    """Print one configuration value as plain text (empty if unset)."""
    from pexels_cli.config import canonical_key, load_config

    with reporting_errors():
        value = getattr(load_config(), canonical_key(key))
        print_data("" if value is None else str(value))


@config_app.command("path")
def config_path_cmd() -> None:
    """Print the path of the config file."""
    from pexels_cli.config import config_path

    print_data(str(config_path()))


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the stored configuration with the token masked.

    Example::

        pexels config show
        pexels --json config show
    """
    from pexels_cli.config import config_path, load_config, mask_secret

    with reporting_errors():
        data = load_config().model_dump(mode="json")
        data["token"] = mask_secret(data.get("token"))
        emit_payload(ctx, {"path": str(config_path()), "config": data})

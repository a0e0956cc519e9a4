"""Auth commands -- manage the Pexels API token.

Provides the ``pexels auth`` sub-command group. The token is stored in the
config file (``0o600``); the ``PEXELS_TOKEN`` and ``PEXELS_API_KEY``
environment variables take precedence over it at request time.

Typical workflow::

    pexels auth login <token>    # store the token
    pexels auth status           # where is the active token coming from?
    pexels auth logout           # forget the stored token
"""

from __future__ import annotations

import os
from typing import Optional

import typer

from pexels_cli.commands._common import emit_payload, reporting_errors
from pexels_cli.output import suggest, warning

auth_app = typer.Typer(no_args_is_help=True, help="Manage the API token.")


@auth_app.command("login")
def auth_login(
    ctx: typer.Context,
    token: Optional[str] = typer.Argument(
        None, help="API token. Defaults to $PEXELS_TOKEN or $PEXELS_API_KEY."
    ),
) -> None:
    """Store an API token in the config file.

    When *token* is omitted the value of ``PEXELS_TOKEN`` (then
    ``PEXELS_API_KEY``) is stored instead.

    Raises:
        typer.Exit: With code 2 if no token is given or found.

    Example::

        pexels auth login 563492ad6f91700001000001abcd
        PEXELS_TOKEN=... pexels auth login
    """
    from pexels_cli.config import TOKEN_ENV_VARS, load_config, save_config
    from pexels_cli.exceptions import InvalidUsageError

    with reporting_errors():
        source = "argument"
        if not token:
            for var in TOKEN_ENV_VARS:
                if os.environ.get(var):
                    token, source = os.environ[var], f"env {var}"
                    break
        if not token:
            raise InvalidUsageError(
                "No token given. Pass it as an argument or set PEXELS_TOKEN."
            )

        config = load_config()
        config.token = token.strip()
        save_config(config)
        emit_payload(ctx, {"status": "ok", "message": f"token saved from {source}"})
        suggest("Check it: pexels auth status")


@auth_app.command("status")
def auth_status(ctx: typer.Context) -> None:
    """Report whether a token is configured and where it comes from.

    The token itself is never printed.

    Example::

        pexels auth status
        pexels --json auth status
    """
    from pexels_cli.config import token_status

    with reporting_errors():
        emit_payload(ctx, token_status())


@auth_app.command("token-source")
def auth_token_source(ctx: typer.Context) -> None:
    """Print only the active token source: ``env``, ``config`` or ``none``."""
    from pexels_cli.config import resolve_token

    with reporting_errors():
        _token, source = resolve_token()
        emit_payload(ctx, {"source": source.value})


@auth_app.command("logout")
def auth_logout(ctx: typer.Context) -> None:
    """Remove the stored token from the config file.

    Environment variables are left untouched; a warning is printed if one
    of them still provides a token.

    Example::

        pexels auth logout
    """
    from pexels_cli.config import load_config, resolve_token, save_config
    from pexels_cli.models import TokenSource

    with reporting_errors():
        config = load_config()
        had_token = config.token is not None
        config.token = None
        save_config(config)

        _token, source = resolve_token(config)
        if source is TokenSource.ENV:
            warning("A token is still set in the environment and will keep being used.")
        emit_payload(
            ctx,
            {"status": "ok", "message": "token removed" if had_token else "no stored token"},
        )

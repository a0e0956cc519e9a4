"""Utility commands -- inspect effective settings and check connectivity."""

from __future__ import annotations

import typer

from pexels_cli.commands._common import emit_payload, open_client, reporting_errors

util_app = typer.Typer(no_args_is_help=True, help="Diagnostics.")


@util_app.command("inspect")
def util_inspect(ctx: typer.Context) -> None:
    """Show the effective request settings after flags, env and config are merged.

    Works without a token; ``authenticated`` tells whether one was found.
    """
    from pexels_cli.config import config_path, resolve_token

    with reporting_errors():
        client = open_client(ctx, authenticated=False)
        payload = client.describe()
        payload["token_source"] = resolve_token()[1].value
        payload["config_path"] = str(config_path())
        emit_payload(ctx, payload)


@util_app.command("ping")
def util_ping(ctx: typer.Context) -> None:
    """Check that the API is reachable and the token is accepted.

    Sends ``HEAD /v1/curated``; exits non-zero with the mapped error code
    when the request fails.
    """
    with reporting_errors():
        with open_client(ctx) as client:
            client.ping()
            host = client.config.host
        emit_payload(ctx, {"ok": True, "host": host})

"""Quota command -- show the API rate-limit counters."""

from __future__ import annotations

import typer

from pexels_cli.commands._common import emit_payload, open_client, reporting_errors

quota_app = typer.Typer(no_args_is_help=True, help="Show the API rate-limit quota.")


@quota_app.command("view")
def quota_view(ctx: typer.Context) -> None:
    """Show the monthly request limit, remaining requests and reset time.

    Sends one minimal ``GET /v1/curated?per_page=1`` request and reads the
    ``X-Ratelimit-*`` response headers. Counters the API did not send are
    reported as null.

    Example::

        pexels quota view
    """
    with reporting_errors():
        with open_client(ctx) as client:
            payload = client.quota()
        emit_payload(ctx, payload)

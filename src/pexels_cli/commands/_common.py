"""Plumbing shared by the API command groups.

Every API command follows the same path: parse ``--fields`` for the
command's resource kind (before any request is sent, so a bad selector
never produces partial output), fetch one page or several, project and
wrap the body, then render it. In ``--raw`` mode the body bytes are
printed as received; ``--fields`` is neither parsed nor applied.
"""

from __future__ import annotations

import enum
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import typer

from pexels_cli.client import PexelsClient, parse_body, request_id
from pexels_cli.config import load_config, require_token, resolve_request_config, resolve_token
from pexels_cli.exceptions import InvalidUsageError, PexelsError
from pexels_cli.models import Cardinality, ResourceKind
from pexels_cli.output import emit, emit_raw, error, get_output, warning
from pexels_cli.projection import build_envelope, merge_envelopes, parse_selectors
from pexels_cli.projection.envelope import ITEM_KEYS


class Orientation(str, enum.Enum):
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"
    SQUARE = "square"


class MinSize(str, enum.Enum):
    LARGE = "large"
    MEDIUM = "medium"
    SMALL = "small"


@contextmanager
def reporting_errors() -> Iterator[None]:
    """Turn a :class:`PexelsError` into an stderr message and its exit code."""
    try:
        yield
    except PexelsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def options(ctx: typer.Context) -> dict[str, Any]:
    """Global options stored by the root callback."""
    return ctx.obj or {}


def open_client(ctx: typer.Context, authenticated: bool = True) -> PexelsClient:
    """Build a client from CLI flags, environment and config file.

    Raises:
        AuthError: If *authenticated* and no token is configured.
    """
    opts = options(ctx)
    config = load_config()
    request_config = resolve_request_config(
        cli_host=opts.get("host"),
        cli_timeout=opts.get("timeout"),
        cli_max_retries=opts.get("max_retries"),
        cli_retry_after=opts.get("retry_after"),
        cli_locale=opts.get("locale"),
        config=config,
    )
    token = require_token(config) if authenticated else resolve_token(config)[0]
    return PexelsClient(request_config, token)


def search_query(positional: Optional[str], option: Optional[str]) -> str:
    """Pick the search query from the QUERY argument or ``-q/--query``.

    Raises:
        InvalidUsageError: If neither is given or the query is blank.
    """
    query = (option or positional or "").strip()
    if not query:
        raise InvalidUsageError("A search query is required (QUERY or --query).")
    return query


def _paginating(opts: dict[str, Any]) -> bool:
    return bool(opts.get("all")) or opts.get("limit") is not None or opts.get("max_pages") is not None


def emit_list(
    ctx: typer.Context,
    path: str,
    kind: ResourceKind,
    params: Optional[dict[str, Any]] = None,
) -> None:
    """Fetch a list endpoint (one page, or several with ``--all``) and print it."""
    opts = options(ctx)
    query = {**(params or {}), "page": opts.get("page"), "per_page": opts.get("per_page")}

    if get_output().is_raw:
        if _paginating(opts):
            warning("--all, --limit and --max-pages are ignored with --raw")
        with open_client(ctx) as client:
            emit_raw(client.get(path, params=query).content)
        return

    selectors = parse_selectors(opts.get("fields"), kind)
    with open_client(ctx) as client:
        if _paginating(opts):
            limit = opts.get("limit")
            pages = client.paginate(
                path,
                query,
                item_key=ITEM_KEYS[kind],
                limit=limit,
                max_pages=opts.get("max_pages"),
            )
            envelope = merge_envelopes(
                (
                    build_envelope(parse_body(r), kind, Cardinality.LIST, selectors, request_id(r))
                    for r in pages
                ),
                limit=limit,
            )
        else:
            response = client.get(path, params=query)
            envelope = build_envelope(
                parse_body(response), kind, Cardinality.LIST, selectors, request_id(response)
            )
    emit(envelope)


def emit_single(
    ctx: typer.Context,
    path: str,
    kind: ResourceKind,
    params: Optional[dict[str, Any]] = None,
) -> None:
    """Fetch a single-resource endpoint and print it."""
    if get_output().is_raw:
        with open_client(ctx) as client:
            emit_raw(client.get(path, params=params).content)
        return

    selectors = parse_selectors(options(ctx).get("fields"), kind)
    with open_client(ctx) as client:
        response = client.get(path, params=params)
        envelope = build_envelope(parse_body(response), kind, Cardinality.SINGLE, selectors)
    emit(envelope)


def emit_payload(ctx: typer.Context, payload: Any) -> None:
    """Print a locally built payload (auth status, quota...) as a single envelope."""
    selectors = parse_selectors(options(ctx).get("fields"), ResourceKind.GENERIC)
    emit(build_envelope(payload, ResourceKind.GENERIC, Cardinality.SINGLE, selectors))

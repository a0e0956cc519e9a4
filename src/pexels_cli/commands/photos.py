"""Photo commands -- search, curated feed, lookup and download.

Provides the ``pexels photos`` sub-command group over the ``/v1`` photo
endpoints. List commands honour the global ``--page``, ``--per-page``,
``--all``, ``--limit`` and ``--max-pages`` options; every command honours
``--fields``, ``--json`` and ``--raw``.

Example::

    pexels photos search nature --orientation landscape
    pexels --fields @ids,@urls photos curated
    pexels photos download 2014422 ./forest.jpg --size large
"""

from __future__ import annotations

import enum
import os
from pathlib import Path
from typing import Any, Optional

import typer

from pexels_cli.client import PHOTOS_PREFIX
from pexels_cli.commands._common import (
    MinSize,
    Orientation,
    emit_list,
    emit_payload,
    emit_single,
    open_client,
    reporting_errors,
    search_query,
)
from pexels_cli.models import ResourceKind

photos_app = typer.Typer(no_args_is_help=True, help="Search and browse photos.")


class PhotoSize(str, enum.Enum):
    """Keys of a photo's ``src`` object."""

    ORIGINAL = "original"
    LARGE2X = "large2x"
    LARGE = "large"
    MEDIUM = "medium"
    SMALL = "small"
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"
    TINY = "tiny"


@photos_app.command("search")
def photos_search(
    ctx: typer.Context,
    query: Optional[str] = typer.Argument(None, help="Search terms."),
    query_opt: Optional[str] = typer.Option(None, "--query", "-q", help="Search terms."),
    orientation: Optional[Orientation] = typer.Option(None, "--orientation"),
    size: Optional[MinSize] = typer.Option(None, "--size", help="Minimum photo size."),
    color: Optional[str] = typer.Option(
        None, "--color", help="Colour name (red, blue...) or hex code (#ffffff)."
    ),
) -> None:
    """Search photos by keyword.

    Example::

        pexels photos search "city at night" --color blue
        pexels photos search -q cats --size large --all --limit 60
    """
    with reporting_errors():
        params: dict[str, Any] = {
            "query": search_query(query, query_opt),
            "orientation": orientation.value if orientation else None,
            "size": size.value if size else None,
            "color": color,
        }
        emit_list(ctx, f"{PHOTOS_PREFIX}/search", ResourceKind.PHOTO, params)


@photos_app.command("curated")
def photos_curated(ctx: typer.Context) -> None:
    """List the curated photo feed, refreshed hourly by Pexels."""
    with reporting_errors():
        emit_list(ctx, f"{PHOTOS_PREFIX}/curated", ResourceKind.PHOTO)


@photos_app.command("get")
def photos_get(
    ctx: typer.Context,
    photo_id: int = typer.Argument(help="Photo id."),
) -> None:
    """Show a single photo."""
    with reporting_errors():
        emit_single(ctx, f"{PHOTOS_PREFIX}/photos/{photo_id}", ResourceKind.PHOTO)


@photos_app.command("url")
def photos_url(
    ctx: typer.Context,
    photo_id: int = typer.Argument(help="Photo id."),
    size: PhotoSize = typer.Option(PhotoSize.ORIGINAL, "--size", help="Image variant."),
) -> None:
    """Print the direct image URL of a photo variant.

    With ``--raw`` only the bare URL is printed, which is handy in shell
    pipelines::

        curl -sO "$(pexels --raw photos url 2014422 --size medium)"
    """
    from pexels_cli.output import get_output, print_data

    with reporting_errors():
        with open_client(ctx) as client:
            url = _source_url(client.get_json(f"{PHOTOS_PREFIX}/photos/{photo_id}"), size)
        if get_output().is_raw:
            print_data(url)
            return
        emit_payload(ctx, {"id": photo_id, "size": size.value, "url": url})


@photos_app.command("download")
def photos_download(
    ctx: typer.Context,
    photo_id: int = typer.Argument(help="Photo id."),
    path: Path = typer.Argument(help="Destination file."),
    size: PhotoSize = typer.Option(PhotoSize.ORIGINAL, "--size", help="Image variant."),
) -> None:
    """Download a photo variant to a local file.

    The file is created with ``0o600`` permissions; parent directories are
    created as needed. A summary of the download is printed on stdout.

    Example::

        pexels photos download 2014422 ./photos/forest.jpg --size large2x
    """
    from pexels_cli.output import info

    with reporting_errors():
        with open_client(ctx) as client:
            url = _source_url(client.get_json(f"{PHOTOS_PREFIX}/photos/{photo_id}"), size)
            info(f"Downloading {url}")
            content = client.download(url)
        _write_file(path, content)
        emit_payload(
            ctx,
            {"id": photo_id, "size": size.value, "url": url, "path": str(path), "bytes": len(content)},
        )


def _source_url(photo: Any, size: PhotoSize) -> str:
    """Return ``photo['src'][size]``.

    Raises:
        MalformedResponseError: If the photo has no such variant.
    """
    from pexels_cli.exceptions import MalformedResponseError

    src = photo.get("src") if isinstance(photo, dict) else None
    url = src.get(size.value) if isinstance(src, dict) else None
    if not isinstance(url, str) or not url:
        raise MalformedResponseError(f"Photo has no '{size.value}' image URL")
    return url


def _write_file(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "wb") as fh:
        fh.write(content)

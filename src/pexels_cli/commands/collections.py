"""Collection commands -- featured and personal collections and their media."""

from __future__ import annotations

import enum
from typing import Optional

import typer

from pexels_cli.client import PHOTOS_PREFIX
from pexels_cli.commands._common import emit_list, emit_single, reporting_errors
from pexels_cli.models import ResourceKind

collections_app = typer.Typer(no_args_is_help=True, help="Browse collections.")


class MediaType(str, enum.Enum):
    PHOTOS = "photos"
    VIDEOS = "videos"


class SortOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


@collections_app.command("list")
def collections_list(ctx: typer.Context) -> None:
    """List the collections of the account owning the token."""
    with reporting_errors():
        emit_list(ctx, f"{PHOTOS_PREFIX}/collections", ResourceKind.COLLECTION)


@collections_app.command("featured")
def collections_featured(ctx: typer.Context) -> None:
    """List collections featured by Pexels."""
    with reporting_errors():
        emit_list(ctx, f"{PHOTOS_PREFIX}/collections/featured", ResourceKind.COLLECTION)


@collections_app.command("get")
def collections_get(
    ctx: typer.Context,
    collection_id: str = typer.Argument(help="Collection id."),
) -> None:
    """Show a single collection."""
    with reporting_errors():
        emit_single(ctx, f"{PHOTOS_PREFIX}/collections/{collection_id}", ResourceKind.COLLECTION)


@collections_app.command("items")
def collections_items(
    ctx: typer.Context,
    collection_id: str = typer.Argument(help="Collection id."),
    media_type: Optional[MediaType] = typer.Option(
        None, "--type", help="Only return photos or only videos."
    ),
    sort: Optional[SortOrder] = typer.Option(None, "--sort", help="Order of the media."),
) -> None:
    """List the photos and videos in a collection.

    Items are mixed; each carries a ``type`` field (``Photo`` or ``Video``).

    Example::

        pexels collections items 9mp14cx --type photos
        pexels --fields @ids,@thumbnails collections items 9mp14cx
    """
    with reporting_errors():
        params = {
            "type": media_type.value if media_type else None,
            "sort": sort.value if sort else None,
        }
        emit_list(
            ctx, f"{PHOTOS_PREFIX}/collections/{collection_id}/media", ResourceKind.MEDIA, params
        )

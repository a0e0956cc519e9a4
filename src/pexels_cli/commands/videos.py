"""Video commands -- search, popular feed and lookup.

Provides the ``pexels videos`` sub-command group over the ``/videos``
endpoints. Output handling matches :mod:`pexels_cli.commands.photos`.
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from pexels_cli.client import VIDEOS_PREFIX
from pexels_cli.commands._common import (
    MinSize,
    Orientation,
    emit_list,
    emit_single,
    reporting_errors,
    search_query,
)
from pexels_cli.models import ResourceKind

videos_app = typer.Typer(no_args_is_help=True, help="Search and browse videos.")


@videos_app.command("search")
def videos_search(
    ctx: typer.Context,
    query: Optional[str] = typer.Argument(None, help="Search terms."),
    query_opt: Optional[str] = typer.Option(None, "--query", "-q", help="Search terms."),
    orientation: Optional[Orientation] = typer.Option(None, "--orientation"),
    size: Optional[MinSize] = typer.Option(None, "--size", help="Minimum video size."),
) -> None:
    """Search videos by keyword.

    Example::

        pexels videos search ocean --orientation portrait
        pexels --fields @files videos search waves
    """
    with reporting_errors():
        params: dict[str, Any] = {
            "query": search_query(query, query_opt),
            "orientation": orientation.value if orientation else None,
            "size": size.value if size else None,
        }
        emit_list(ctx, f"{VIDEOS_PREFIX}/search", ResourceKind.VIDEO, params)


@videos_app.command("popular")
def videos_popular(
    ctx: typer.Context,
    min_width: Optional[int] = typer.Option(None, "--min-width", help="Minimum width in pixels."),
    min_height: Optional[int] = typer.Option(None, "--min-height", help="Minimum height in pixels."),
    min_duration: Optional[int] = typer.Option(None, "--min-duration", help="Minimum seconds."),
    max_duration: Optional[int] = typer.Option(None, "--max-duration", help="Maximum seconds."),
) -> None:
    """List currently popular videos."""
    with reporting_errors():
        params = {
            "min_width": min_width,
            "min_height": min_height,
            "min_duration": min_duration,
            "max_duration": max_duration,
        }
        emit_list(ctx, f"{VIDEOS_PREFIX}/popular", ResourceKind.VIDEO, params)


@videos_app.command("get")
def videos_get(
    ctx: typer.Context,
    video_id: int = typer.Argument(help="Video id."),
) -> None:
    """Show a single video, including its files and preview pictures."""
    with reporting_errors():
        emit_single(ctx, f"{VIDEOS_PREFIX}/videos/{video_id}", ResourceKind.VIDEO)

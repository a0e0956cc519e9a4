"""Typer application and CLI entry point for pexels-cli.

This module wires together the top-level Typer application, registers the
sub-command groups (``auth``, ``config``, ``quota``, ``photos``, ``videos``,
``collections``, ``util``) and parses the global options shared by all of
them.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Unhandled exceptions are written to a crash log under the data directory.

See Also:
    :mod:`pexels_cli.config`: Token and request-setting resolution.
    :mod:`pexels_cli.output`: Output manager initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from pexels_cli import __version__
from pexels_cli.commands.auth import auth_app
from pexels_cli.commands.collections import collections_app
from pexels_cli.commands.config import config_app
from pexels_cli.commands.photos import photos_app
from pexels_cli.commands.quota import quota_app
from pexels_cli.commands.util import util_app
from pexels_cli.commands.videos import videos_app
from pexels_cli.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="pexels",
    help="Search and browse Pexels photos, videos and collections.",
    no_args_is_help=True,
    add_completion=True,
    rich_markup_mode="rich",
)

app.add_typer(auth_app, name="auth", help="Manage the API token.")
app.add_typer(config_app, name="config", help="Read and write the config file.")
app.add_typer(quota_app, name="quota", help="Show the API rate-limit quota.")
app.add_typer(photos_app, name="photos", help="Search and browse photos.")
app.add_typer(videos_app, name="videos", help="Search and browse videos.")
app.add_typer(collections_app, name="collections", help="Browse collections.")
app.add_typer(util_app, name="util", help="Diagnostics.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"pexels-cli {__version__}")
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
    json_output: bool = typer.Option(False, "--json", help="Render output as JSON."),
    raw_output: bool = typer.Option(
        False, "--raw", help="Print the API response body unchanged."
    ),
    fields: Optional[list[str]] = typer.Option(
        None,
        "--fields",
        help="Fields to keep: dot paths or @ids, @urls, @files, @thumbnails, @all. "
        "Comma-separated and repeatable.",
    ),
    page: Optional[int] = typer.Option(None, "--page", min=1, help="Page number."),
    per_page: Optional[int] = typer.Option(
        None, "--per-page", min=1, max=80, help="Results per page (max 80)."
    ),
    all_pages: bool = typer.Option(False, "--all", help="Follow next_page links."),
    limit: Optional[int] = typer.Option(
        None, "--limit", min=1, help="Stop after this many items (implies paging)."
    ),
    max_pages: Optional[int] = typer.Option(
        None, "--max-pages", min=1, help="Stop after this many pages (implies paging)."
    ),
    timeout: Optional[int] = typer.Option(None, "--timeout", min=1, help="Timeout in seconds."),
    max_retries: Optional[int] = typer.Option(
        None, "--max-retries", min=0, help="Retries on 429, 5xx and network errors."
    ),
    retry_after: Optional[int] = typer.Option(
        None, "--retry-after", min=0, help="Fixed delay in seconds between retries."
    ),
    host: Optional[str] = typer.Option(None, "--host", help="API base URL."),
    locale: Optional[str] = typer.Option(
        None, "--locale", help="Locale for search, e.g. en-US or pt-BR."
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output."),
    debug: bool = typer.Option(False, "--debug", help="Log HTTP traffic and internals."),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~pexels_cli.output.OutputManager` and
    logging from CLI flags, and stores the shared request and output
    options in ``ctx.obj`` for the sub-commands.

    Global options go before the sub-command::

        pexels --json --fields @ids,@urls photos search cats
    """
    from pexels_cli.output import OutputManager, set_output
    from pexels_cli.projection import OutputMode

    mode = OutputMode.YAML
    if raw_output:
        mode = OutputMode.RAW
    elif json_output:
        mode = OutputMode.JSON

    output = OutputManager(
        mode=mode,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose or debug,
    )
    set_output(output)
    _configure_logging(output.stderr_console, verbose=verbose, debug=debug)

    ctx.ensure_object(dict)
    ctx.obj.update(
        {
            "fields": ",".join(fields) if fields else None,
            "page": page,
            "per_page": per_page,
            "all": all_pages,
            "limit": limit,
            "max_pages": max_pages,
            "timeout": timeout,
            "max_retries": max_retries,
            "retry_after": retry_after,
            "host": host,
            "locale": locale,
        }
    )


def _configure_logging(console: Any, verbose: bool, debug: bool) -> None:
    """Route the ``pexels_cli`` loggers (and ``httpx`` with --debug) to stderr."""
    from rich.logging import RichHandler

    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    handler = RichHandler(console=console, show_time=False, show_path=False, markup=False)

    for name in ("pexels_cli", "httpx"):
        logger = logging.getLogger(name)
        logger.handlers = [handler]
        logger.propagate = False
        logger.setLevel(level if name == "pexels_cli" or debug else logging.WARNING)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from pexels_cli.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(f"{exc!r}\n{traceback.format_exc()}")
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``pexels`` console script.

    Unhandled :class:`~pexels_cli.exceptions.PexelsError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions produce
    a crash log and a generic failure exit.
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
        from pexels_cli.exceptions import PexelsError
        from pexels_cli.output import error

        if isinstance(exc, PexelsError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)

"""Built-in CLI sub-commands for pexels-cli.

Each module exports a :class:`typer.Typer` sub-application registered on
the root app in :mod:`pexels_cli.app`:

* :mod:`~pexels_cli.commands.auth` -- store, inspect and remove the API token.
* :mod:`~pexels_cli.commands.config` -- read and write the config file.
* :mod:`~pexels_cli.commands.quota` -- show the current rate-limit quota.
* :mod:`~pexels_cli.commands.photos` -- search, browse and download photos.
* :mod:`~pexels_cli.commands.videos` -- search and browse videos.
* :mod:`~pexels_cli.commands.collections` -- browse collections and their media.
* :mod:`~pexels_cli.commands.util` -- connectivity and settings diagnostics.

Shared fetch/project/render plumbing lives in :mod:`._common`.
"""

"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~pexels_cli.exceptions.PexelsError` subclass.
Agents and shell wrappers can inspect the exit code to tell a bad request
apart from an API that changed shape without parsing stderr.

Example::

    $ pexels --fields @bogus photos curated
    $ echo $?
    2   # EXIT_INVALID_USAGE -- the selector was rejected
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or an invalid ``--fields`` selector."""

EXIT_AUTH_FAILURE = 3
"""No API token is configured, or the API rejected it."""

EXIT_NOT_FOUND = 4
"""The requested resource was not found (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The API returned an HTTP 5xx error, or an unexpected 4xx."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_MALFORMED_RESPONSE = 7
"""The API body did not have the shape expected for the endpoint."""

EXIT_RATE_LIMITED = 8
"""The API kept answering HTTP 429 after all retries."""

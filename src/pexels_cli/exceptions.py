"""Exception hierarchy for pexels-cli.

All exceptions inherit from :class:`PexelsError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`pexels_cli.exit_codes`.
Command handlers catch ``PexelsError``, print it to stderr and exit with the
matching code, while unexpected exceptions reaching :func:`pexels_cli.app.main`
produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    PexelsError (exit 1)
    +-- InvalidUsageError       (exit 2)
    |   +-- InvalidSelectorError (exit 2)
    +-- AuthError               (exit 3)
    +-- NotFoundError           (exit 4)
    +-- ServerError             (exit 5)
    +-- ConnectionError_        (exit 6)
    +-- MalformedResponseError  (exit 7)
    +-- RateLimitError          (exit 8)
    +-- ConfigError             (exit 1)
"""

from pexels_cli.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_MALFORMED_RESPONSE,
    EXIT_NOT_FOUND,
    EXIT_RATE_LIMITED,
    EXIT_SERVER_ERROR,
)


class PexelsError(Exception):
    """Base exception for all pexels-cli errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`pexels_cli.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(PexelsError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


class InvalidSelectorError(InvalidUsageError):
    """Raised when a ``--fields`` token cannot be parsed.

    Args:
        token: The offending token, exactly as the user typed it (after
            trimming).
        reason: Short explanation of what is wrong with the token.
    """

    def __init__(self, token: str, reason: str):
        super().__init__(f"Invalid field selector '{token}': {reason}")
        self.token = token
        self.reason = reason


class AuthError(PexelsError):
    """Raised when no token is configured or the API rejects it (401/403)."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(PexelsError):
    """Raised when the API returns HTTP 404 (resource not found)."""

    exit_code = EXIT_NOT_FOUND


class ServerError(PexelsError):
    """Raised when the API returns an HTTP 5xx error or an unexpected 4xx."""

    exit_code = EXIT_SERVER_ERROR


class ConnectionError_(PexelsError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class MalformedResponseError(PexelsError):
    """Raised when a response body does not match the endpoint's declared cardinality.

    Kept distinct from :class:`InvalidSelectorError` so that callers can
    tell "my request was malformed" apart from "the API changed shape".
    """

    exit_code = EXIT_MALFORMED_RESPONSE


class RateLimitError(PexelsError):
    """Raised when the API keeps returning HTTP 429 after all retries."""

    exit_code = EXIT_RATE_LIMITED


class ConfigError(PexelsError):
    """Raised when the config file cannot be read or fails validation."""

    exit_code = EXIT_GENERIC_FAILURE

"""Synchronous Pexels API client with auth, retry, and pagination.

This module provides :class:`PexelsClient`, the blocking HTTP client used by
every API command. It wraps :class:`httpx.Client` and layers on:

- **Auth injection** -- the API key is sent as a bare ``Authorization``
  header (Pexels does not use the ``Bearer`` scheme). It is only attached to
  API requests, never to media downloads from the CDN.
- **Retry with backoff** -- retries on 429, 5xx and network errors. The
  delay is the ``--retry-after`` override, else the ``Retry-After`` header,
  else exponential backoff with jitter (100 ms base, 5 s cap).
- **Error mapping** -- final failures become typed
  :class:`~pexels_cli.exceptions.PexelsError` subclasses.
- **Pagination** -- :meth:`PexelsClient.paginate` follows ``next_page``
  links for ``--all`` / ``--limit`` / ``--max-pages``.
"""

from __future__ import annotations

import logging
import platform
import random
import time
from typing import Any, Iterator, Optional

import httpx

from pexels_cli import __version__
from pexels_cli.client.response import parse_body, rate_limit_info, request_id
from pexels_cli.exceptions import (
    AuthError,
    ConnectionError_,
    NotFoundError,
    RateLimitError,
    ServerError,
)
from pexels_cli.models import RequestConfig
from pexels_cli.output import get_output

logger = logging.getLogger(__name__)

PHOTOS_PREFIX = "/v1"
VIDEOS_PREFIX = "/videos"

_BACKOFF_BASE_MS = 100
_BACKOFF_CAP_MS = 5_000


def backoff_delay(attempt: int) -> float:
    """Return the delay in seconds before retry number *attempt* (1-based)."""
    exp = _BACKOFF_BASE_MS * (2 ** attempt)
    jitter = random.uniform(0, exp / 2)
    return min(exp + jitter, _BACKOFF_CAP_MS) / 1000


class PexelsClient:
    """Synchronous HTTP client for the Pexels API.

    Must be used as a context manager so that the underlying transport is
    properly opened and closed.

    Args:
        config: Effective request settings (host, timeout, retries, locale).
        token: API key. ``None`` sends unauthenticated requests, which the
            API answers with 401.
        transport: Optional httpx transport, used by tests to plug in
            :class:`httpx.MockTransport`.

    Example::

        with PexelsClient(config, token) as client:
            response = client.get("/v1/curated", params={"per_page": 5})
    """

    def __init__(
        self,
        config: RequestConfig,
        token: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config
        self._token = token
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def config(self) -> RequestConfig:
        return self._config

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> PexelsClient:
        headers = {
            "Accept": "application/json",
            "User-Agent": f"pexels-cli/{__version__} ({platform.system().lower()})",
        }
        if self._config.locale:
            headers["Accept-Language"] = self._config.locale
        self._client = httpx.Client(
            base_url=self._config.host,
            timeout=self._config.timeout,
            headers=headers,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        """Send an authenticated API request with retry and error mapping.

        Args:
            method: HTTP method (GET or HEAD).
            path: Path relative to the host, or an absolute ``next_page`` URL.
            params: Query parameters; ``None`` values are dropped.

        Returns:
            The successful :class:`httpx.Response`.

        Raises:
            AuthError: On 401 / 403.
            NotFoundError: On 404.
            RateLimitError: On 429 after all retries.
            ServerError: On 5xx after all retries, or another 4xx.
            ConnectionError_: On network / timeout errors after all retries.
        """
        headers: dict[str, str] = {}
        if self._token:
            headers["Authorization"] = self._token
        query = {k: v for k, v in (params or {}).items() if v is not None}

        get_output().debug(f"{method.upper()} {path} {query or ''}".rstrip())
        response = self._execute_with_retry(method, path, headers, query)
        self._map_response_error(response)
        return response

    def get(self, path: str, params: Optional[dict[str, Any]] = None) -> httpx.Response:
        """Send a GET request."""
        return self.request("GET", path, params=params)

    def get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """Send a GET request and decode the JSON body."""
        return parse_body(self.get(path, params=params))

    def paginate(
        self,
        path: str,
        params: Optional[dict[str, Any]],
        item_key: str,
        limit: Optional[int] = None,
        max_pages: Optional[int] = None,
    ) -> Iterator[httpx.Response]:
        """Yield successive list pages by following ``next_page`` links.

        Stops when a page has no ``next_page``, when *limit* items have been
        seen, or after *max_pages* pages. Later pages are requested with the
        ``next_page`` URL as-is, since it already carries the query.

        Args:
            path: Path of the first page.
            params: Query parameters for the first page.
            item_key: Body key holding the items (``photos``, ``videos``...).
            limit: Stop once this many items were fetched.
            max_pages: Stop after this many pages.
        """
        url: str = path
        query = params
        pages = 0
        collected = 0
        while max_pages is None or pages < max_pages:
            response = self.get(url, params=query)
            yield response
            pages += 1

            body = parse_body(response)
            items = body.get(item_key) if isinstance(body, dict) else None
            collected += len(items) if isinstance(items, list) else 0
            if limit is not None and collected >= limit:
                break

            next_page = body.get("next_page") if isinstance(body, dict) else None
            if not isinstance(next_page, str) or not next_page:
                break
            logger.info("Fetching page %d: %s", pages + 1, next_page)
            url, query = next_page, None

    def ping(self) -> None:
        """Check reachability and credentials with ``HEAD /v1/curated``."""
        self.request("HEAD", f"{PHOTOS_PREFIX}/curated")

    def quota(self) -> dict[str, Any]:
        """Return the rate-limit headers of a minimal curated request."""
        response = self.get(f"{PHOTOS_PREFIX}/curated", params={"per_page": 1})
        return rate_limit_info(response)

    def download(self, url: str) -> bytes:
        """Fetch a media file from the CDN without sending the API key."""
        assert self._client is not None, "Client not initialised -- use as context manager"
        try:
            response = self._client.get(url)
        except (httpx.ConnectError, httpx.TimeoutException, httpx.NetworkError) as exc:
            raise ConnectionError_(f"Download failed: {exc}") from exc
        self._map_response_error(response)
        return response.content

    def describe(self) -> dict[str, Any]:
        """Effective settings, as shown by ``pexels util inspect``."""
        return {
            "host": self._config.host,
            "timeout": self._config.timeout,
            "locale": self._config.locale,
            "max_retries": self._config.max_retries,
            "retry_after": self._config.retry_after,
            "authenticated": bool(self._token),
        }

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _execute_with_retry(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        params: dict[str, Any],
    ) -> httpx.Response:
        """Execute the HTTP request, retrying 429, 5xx and network errors."""
        assert self._client is not None, "Client not initialised -- use as context manager"

        max_retries = self._config.max_retries
        for attempt in range(max_retries + 1):
            try:
                # An empty dict would replace the query already carried by a
                # next_page URL.
                response = self._client.request(
                    method, path, headers=headers, params=params or None
                )
            except (httpx.ConnectError, httpx.TimeoutException, httpx.NetworkError) as exc:
                if attempt < max_retries:
                    delay = self._config.retry_after or backoff_delay(attempt + 1)
                    logger.warning(
                        "Connection error: %s, retrying in %.1fs (attempt %d/%d)",
                        exc, delay, attempt + 1, max_retries,
                    )
                    time.sleep(delay)
                    continue
                raise ConnectionError_(
                    f"Connection failed after {max_retries + 1} attempts: {exc}"
                ) from exc

            retryable = response.status_code == 429 or response.status_code >= 500
            if retryable and attempt < max_retries:
                delay = self._retry_delay(response, attempt + 1)
                logger.warning(
                    "HTTP %d, retrying in %.1fs (attempt %d/%d)",
                    response.status_code, delay, attempt + 1, max_retries,
                )
                time.sleep(delay)
                continue

            return response

        raise ServerError("Request failed after all retries")  # pragma: no cover

    def _retry_delay(self, response: httpx.Response, attempt: int) -> float:
        if self._config.retry_after is not None:
            return float(self._config.retry_after)
        header = response.headers.get("retry-after")
        if header is not None:
            try:
                return float(int(header))
            except ValueError:
                pass
        return backoff_delay(attempt)

    def _map_response_error(self, response: httpx.Response) -> None:
        """Raise a typed exception for error HTTP status codes."""
        status = response.status_code
        if status < 400:
            return

        details: list[str] = []
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            for key in ("error", "message", "type", "hint"):
                if body.get(key):
                    details.append(str(body[key]))
        elif response.text:
            details.append(response.text[:200])
        rid = request_id(response)
        if rid:
            details.append(f"request id {rid}")

        message = f"HTTP {status} {response.reason_phrase or ''}".rstrip()
        if details:
            message = f"{message}: {'; '.join(details)}"

        if status in (401, 403):
            raise AuthError(message)
        if status == 404:
            raise NotFoundError(message)
        if status == 429:
            raise RateLimitError(message)
        raise ServerError(message)

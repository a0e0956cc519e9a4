"""Helpers for reading :class:`httpx.Response` objects returned by the API."""

from __future__ import annotations

from typing import Any, Optional

import httpx

from pexels_cli.exceptions import MalformedResponseError

REQUEST_ID_HEADER = "x-request-id"
RATE_LIMIT_HEADERS = ("x-ratelimit-limit", "x-ratelimit-remaining", "x-ratelimit-reset")


def parse_body(response: httpx.Response) -> Any:
    """Decode the JSON body of a successful response.

    Raises:
        MalformedResponseError: If the body is empty or not valid JSON.
    """
    if not response.content:
        raise MalformedResponseError(
            f"Empty response body from {response.request.method} {response.request.url.path}"
        )
    try:
        return response.json()
    except ValueError as exc:
        raise MalformedResponseError(
            f"Response from {response.request.url.path} is not valid JSON: {exc}"
        ) from exc


def request_id(response: httpx.Response) -> Optional[str]:
    """Return the ``X-Request-Id`` header, if the API sent one."""
    return response.headers.get(REQUEST_ID_HEADER)


def rate_limit_info(response: httpx.Response) -> dict[str, Any]:
    """Collect the rate-limit headers as ints where possible.

    Keys are the header names without the ``x-ratelimit-`` prefix; missing
    headers map to ``None``.
    """
    info: dict[str, Any] = {}
    for header in RATE_LIMIT_HEADERS:
        name = header.removeprefix("x-ratelimit-")
        value = response.headers.get(header)
        if value is None:
            info[name] = None
            continue
        try:
            info[name] = int(value)
        except ValueError:
            info[name] = value
    return info

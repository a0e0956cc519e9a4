"""HTTP client module for pexels-cli.

Provides :class:`PexelsClient`, a blocking client that wraps :mod:`httpx`
with API-key injection, retry with backoff, error mapping and ``next_page``
pagination, plus small helpers for reading responses.

Example::

    from pexels_cli.client import PexelsClient

    with PexelsClient(request_config, token) as client:
        body = client.get_json("/v1/curated")
"""

from pexels_cli.client.response import parse_body, rate_limit_info, request_id
from pexels_cli.client.sync_client import PHOTOS_PREFIX, VIDEOS_PREFIX, PexelsClient

__all__ = [
    "PHOTOS_PREFIX",
    "PexelsClient",
    "VIDEOS_PREFIX",
    "parse_body",
    "rate_limit_info",
    "request_id",
]

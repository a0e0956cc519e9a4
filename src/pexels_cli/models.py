"""Canonical Pydantic models shared across all pexels-cli modules.

The models fall into two groups:

**Configuration models** -- persisted or resolved per invocation:
    :class:`PexelsConfig` (the ``config.json`` file), :class:`RequestConfig`
    (effective HTTP settings after precedence resolution) and
    :class:`TokenSource`.

**Output models** -- the shapes produced by the projection pipeline:
    :class:`ResourceKind`, :class:`Cardinality`, :class:`MetaInfo` and
    :class:`Envelope`.

All models use Pydantic v2.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_HOST = "https://api.pexels.com"
DEFAULT_TIMEOUT = 15
DEFAULT_MAX_RETRIES = 3


# --- Configuration ---


class PexelsConfig(BaseModel):
    """User configuration persisted at ``~/.config/pexels/config.json``.

    Loaded and saved by :func:`~pexels_cli.config.load_config` and
    :func:`~pexels_cli.config.save_config`. Every field is optional so that
    an empty file (or no file at all) means "use the defaults". See
    :func:`~pexels_cli.config.resolve_request_config` for how these values
    are layered under environment variables and CLI flags.
    """

    token: Optional[str] = Field(default=None, description="Pexels API key")
    host: Optional[str] = Field(
        default=None, description="API host override (e.g. a local mock server)"
    )
    locale: Optional[str] = Field(
        default=None, description="Locale sent as Accept-Language (e.g. en-US)"
    )
    timeout: Optional[int] = Field(default=None, description="Request timeout in seconds")
    max_retries: Optional[int] = Field(
        default=None, description="Max retry attempts on 429/5xx/network errors"
    )


class RequestConfig(BaseModel):
    """Effective HTTP settings for one invocation."""

    host: str = Field(default=DEFAULT_HOST)
    timeout: int = Field(default=DEFAULT_TIMEOUT, description="Request timeout in seconds")
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, description="Max retry attempts")
    retry_after: Optional[int] = Field(
        default=None, description="Fixed retry delay in seconds, overriding Retry-After"
    )
    locale: Optional[str] = None


class TokenSource(str, enum.Enum):
    """Where the active API token came from."""

    ENV = "env"
    CONFIG = "config"
    NONE = "none"


# --- Output ---


class ResourceKind(str, enum.Enum):
    """Kind of resource a command returns.

    Declared by the command handler and used to pick named-set expansions,
    default field sets and the item key of list bodies. Never inferred from
    the response shape.
    """

    PHOTO = "photo"
    VIDEO = "video"
    COLLECTION = "collection"
    MEDIA = "media"
    GENERIC = "generic"


class Cardinality(str, enum.Enum):
    """Whether an endpoint returns a list of items or a single resource."""

    LIST = "list"
    SINGLE = "single"


class MetaInfo(BaseModel):
    """Pagination and tracing metadata attached to list envelopes.

    Every field is ``None`` when the API did not provide it; a literal ``0``
    from the API stays ``0``.
    """

    model_config = ConfigDict(frozen=True)

    total_results: Optional[int] = None
    next_page: Optional[int] = None
    prev_page: Optional[int] = None
    request_id: Optional[str] = None


class Envelope(BaseModel):
    """The ``{data, meta}`` wrapper applied to all structured command output.

    ``meta`` is ``None`` for single resources and is then left out of
    :meth:`to_dict` entirely rather than serialised as ``null``.
    """

    model_config = ConfigDict(frozen=True)

    data: Any = None
    meta: Optional[MetaInfo] = None

    def to_dict(self) -> dict[str, Any]:
        """Return the serialisable form with ``data`` always ahead of ``meta``."""
        out: dict[str, Any] = {"data": self.data}
        if self.meta is not None:
            out["meta"] = self.meta.model_dump()
        return out

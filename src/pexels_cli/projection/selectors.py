"""Parsing of the ``--fields`` selector mini-language.

A selector string is a comma-separated list of tokens. Tokens starting with
``@`` name one of the reserved sets (``@ids``, ``@urls``, ``@files``,
``@thumbnails``, ``@all``); every other token is a dot path such as
``src.original`` or ``video_files[*].link``. Whitespace around tokens is
ignored and an empty string selects the default field set of the resource
kind.

Named sets expand through :data:`NAMED_SETS`, a constant table keyed by
resource kind, so the same ``@urls`` means different concrete paths for
photos and videos.

Example::

    >>> sel = parse_selectors("id, @urls", ResourceKind.PHOTO)
    >>> sel.to_string()
    'id,url,photographer_url'
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Optional

from pexels_cli.exceptions import InvalidSelectorError
from pexels_cli.models import ResourceKind

WILDCARD = "[*]"


class NamedSet(str, enum.Enum):
    """Reserved ``@name`` selectors."""

    IDS = "ids"
    URLS = "urls"
    FILES = "files"
    THUMBNAILS = "thumbnails"
    ALL = "all"


@dataclass(frozen=True)
class Path:
    """A dot path into a response item.

    Each segment names an object key. A segment ending in ``[*]`` (or equal
    to ``[*]``) marks explicit traversal of an array; arrays are also
    traversed implicitly when a path runs into one.
    """

    segments: tuple[str, ...]

    @classmethod
    def parse(cls, text: str) -> Path:
        """Build a path from its dotted form, rejecting empty segments."""
        segments = tuple(text.split("."))
        for segment in segments:
            if not segment.strip():
                raise InvalidSelectorError(text, "empty path segment")
            if segment != WILDCARD and not segment.removesuffix(WILDCARD).strip():
                raise InvalidSelectorError(text, "empty path segment")
        return cls(segments)

    def __str__(self) -> str:
        return ".".join(self.segments)


@dataclass(frozen=True)
class SelectorSet:
    """Ordered, duplicate-free collection of resolved paths.

    When ``select_all`` is true the set is the "select everything" sentinel
    produced by ``@all`` and ``paths`` is empty.
    """

    paths: tuple[Path, ...] = ()
    select_all: bool = False

    @classmethod
    def everything(cls) -> SelectorSet:
        return cls(paths=(), select_all=True)

    @classmethod
    def of(cls, paths: Iterable[Path]) -> SelectorSet:
        """Build a set from *paths*, keeping the first occurrence of each."""
        seen: dict[Path, None] = {}
        for path in paths:
            seen.setdefault(path, None)
        return cls(paths=tuple(seen))

    def to_string(self) -> str:
        """Canonical selector string that parses back to an equal set."""
        if self.select_all:
            return "@" + NamedSet.ALL.value
        return ",".join(str(p) for p in self.paths)

    def __len__(self) -> int:
        return len(self.paths)


def _paths(*dotted: str) -> tuple[Path, ...]:
    return tuple(Path(tuple(d.split("."))) for d in dotted)


NAMED_SETS: dict[ResourceKind, dict[NamedSet, tuple[Path, ...]]] = {
    ResourceKind.PHOTO: {
        NamedSet.IDS: _paths("id"),
        NamedSet.URLS: _paths("url", "photographer_url"),
        NamedSet.FILES: _paths(
            "src.original",
            "src.large2x",
            "src.large",
            "src.medium",
            "src.small",
            "src.portrait",
            "src.landscape",
        ),
        NamedSet.THUMBNAILS: _paths("src.tiny"),
    },
    ResourceKind.VIDEO: {
        NamedSet.IDS: _paths("id", "user.id"),
        NamedSet.URLS: _paths("url", "user.url"),
        NamedSet.FILES: _paths("video_files"),
        NamedSet.THUMBNAILS: _paths("image", "video_pictures"),
    },
    ResourceKind.COLLECTION: {
        NamedSet.IDS: _paths("id"),
        NamedSet.URLS: _paths("url"),
        NamedSet.FILES: _paths("media"),
        NamedSet.THUMBNAILS: _paths("media.src.tiny", "media.image"),
    },
    ResourceKind.MEDIA: {
        NamedSet.IDS: _paths("type", "id"),
        NamedSet.URLS: _paths("url", "photographer_url", "user.url"),
        NamedSet.FILES: _paths("src", "video_files"),
        NamedSet.THUMBNAILS: _paths("src.tiny", "image", "video_pictures"),
    },
    ResourceKind.GENERIC: {
        NamedSet.IDS: _paths("id"),
        NamedSet.URLS: _paths("url"),
        NamedSet.FILES: _paths("files"),
        NamedSet.THUMBNAILS: _paths("thumbnail"),
    },
}
"""Expansion of each named set per resource kind, in output order."""

DEFAULT_FIELDS: dict[ResourceKind, SelectorSet] = {
    ResourceKind.PHOTO: SelectorSet.of(
        _paths("id", "photographer", "alt", "width", "height", "avg_color")
    ),
    ResourceKind.VIDEO: SelectorSet.of(_paths("id", "duration", "width", "height")),
    ResourceKind.COLLECTION: SelectorSet.of(
        _paths("id", "title", "description", "media_count")
    ),
    ResourceKind.MEDIA: SelectorSet.of(_paths("type", "id", "width", "height", "url")),
    ResourceKind.GENERIC: SelectorSet.everything(),
}
"""Field set used when ``--fields`` is absent or empty."""


def parse_selectors(text: Optional[str], kind: ResourceKind) -> SelectorSet:
    """Parse a ``--fields`` string into a :class:`SelectorSet` for *kind*.

    Args:
        text: Comma-separated selector tokens. ``None``, ``""`` or a
            whitespace-only string select the default set for *kind*.
        kind: The resource kind declared by the calling command.

    Returns:
        The resolved selector set. If any token is ``@all`` the result is
        the :meth:`SelectorSet.everything` sentinel.

    Raises:
        InvalidSelectorError: If a token is empty, names an unknown set, or
            contains an empty path segment. Every token is validated even
            when ``@all`` is present.
    """
    if text is None or not text.strip():
        return DEFAULT_FIELDS[kind]

    paths: list[Path] = []
    select_all = False
    for raw in text.split(","):
        token = raw.strip()
        if not token:
            raise InvalidSelectorError(raw, "empty selector")
        if token.startswith("@"):
            named = _named_set(token)
            if named is NamedSet.ALL:
                select_all = True
            else:
                paths.extend(NAMED_SETS[kind][named])
        else:
            paths.append(Path.parse(token))

    if select_all:
        return SelectorSet.everything()
    return SelectorSet.of(paths)


def _named_set(token: str) -> NamedSet:
    name = token[1:]
    try:
        return NamedSet(name)
    except ValueError:
        known = ", ".join("@" + n.value for n in NamedSet)
        raise InvalidSelectorError(token, f"unknown named set (expected one of {known})") from None

"""Field projection -- extract the selected paths from one response item.

Projection is best-effort: a path that does not exist in an item is simply
left out, so small schema differences between resource kinds never break
output. The source tree is never mutated; every result is a fresh tree.

Keys in the result follow the order of the selector set, not the order of
the source object. When a path runs into an array the rest of the path is
applied to every element and positions are kept, so ``video_files.link``
and ``video_files.quality`` merge into one list of two-key objects.

Two entry points encode the emptiness policy:

* :func:`project_items` -- list endpoints. An item may project to ``{}``.
* :func:`project_single` -- single-resource endpoints. An empty projection
  falls back to the full item so ``data`` is never a bare ``{}``.
"""

from __future__ import annotations

import copy
from typing import Any

from pexels_cli.projection.selectors import WILDCARD, Path, SelectorSet

_MISSING = object()


def project(item: Any, selectors: SelectorSet) -> Any:
    """Return a new tree holding only the paths in *selectors*.

    Args:
        item: One parsed response item (usually a dict).
        selectors: The resolved selector set.

    Returns:
        A deep copy of *item* for the ``@all`` sentinel, otherwise a dict
        containing the selected paths that exist in *item* (possibly empty).
        An item that is not an object has no named paths and yields ``{}``.
    """
    if selectors.select_all:
        return copy.deepcopy(item)

    out: dict[str, Any] = {}
    for path in selectors.paths:
        found = _extract(item, path.segments)
        if isinstance(found, dict):
            _merge(out, found)
    return out


def project_items(items: list[Any], selectors: SelectorSet) -> list[Any]:
    """Project each list item independently, keeping source order."""
    return [project(item, selectors) for item in items]


def project_single(item: Any, selectors: SelectorSet) -> Any:
    """Project a single-resource root, falling back to the full item when empty.

    The fallback is a usability rule for single resources only: asking for
    ``--fields src.original`` on a video should still show the video rather
    than ``{}``.
    """
    projected = project(item, selectors)
    if isinstance(projected, dict) and not projected:
        return copy.deepcopy(item)
    return projected


def _extract(value: Any, segments: tuple[str, ...]) -> Any:
    """Return the nested structure reaching *segments* in *value*, or ``_MISSING``."""
    if not segments:
        return copy.deepcopy(value)

    if isinstance(value, list):
        rest = segments[1:] if segments[0] == WILDCARD else segments
        return _extract_each(value, rest)

    if not isinstance(value, dict):
        return _MISSING

    head, rest = segments[0], segments[1:]
    if head == WILDCARD:
        return _MISSING
    key = head.removesuffix(WILDCARD)
    if key not in value:
        return _MISSING

    child = value[key]
    if head.endswith(WILDCARD):
        if not isinstance(child, list):
            return _MISSING
        sub = _extract_each(child, rest)
    else:
        sub = _extract(child, rest)
    if sub is _MISSING:
        return _MISSING
    return {key: sub}


def _extract_each(elements: list[Any], segments: tuple[str, ...]) -> Any:
    """Apply *segments* to every element, keeping positions.

    Elements lacking the path project to ``{}``. The whole array counts as
    missing only when no element has the path.
    """
    results = []
    any_found = False
    for element in elements:
        sub = _extract(element, segments)
        if sub is _MISSING:
            results.append({})
        else:
            any_found = True
            results.append(sub)
    if not any_found and elements:
        return _MISSING
    return results


def _merge(dst: dict[str, Any], src: dict[str, Any]) -> None:
    """Deep-merge *src* into *dst* in place, appending new keys at the end."""
    for key, value in src.items():
        if key not in dst:
            dst[key] = value
            continue
        dst[key] = _merge_element(dst[key], value)


def _merge_element(a: Any, b: Any) -> Any:
    """Merge two projections of the same source value, whichever came first."""
    if isinstance(a, dict) and isinstance(b, dict):
        _merge(a, b)
        return a
    if isinstance(a, list) and isinstance(b, list) and len(a) == len(b):
        return [_merge_element(x, y) for x, y in zip(a, b)]
    # {} stands in for an array element that lacked a deeper path; a whole
    # copy of that element replaces it.
    if isinstance(a, dict) and not a:
        return b
    return a

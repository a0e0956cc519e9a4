"""Envelope construction -- wrap projected items into ``{data, meta}``.

List endpoints produce ``data`` as an array with a :class:`MetaInfo` built
from the pagination fields of the body. Single-resource endpoints produce
``data`` as one object and no ``meta`` at all.

The Pexels API reports ``next_page`` / ``prev_page`` as full URLs; they are
reduced to the integer value of their ``page`` query parameter. The request
parameters ``page`` and ``per_page`` are never copied into ``meta``.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional
from urllib.parse import parse_qs, urlparse

from pexels_cli.exceptions import MalformedResponseError
from pexels_cli.models import Cardinality, Envelope, MetaInfo, ResourceKind
from pexels_cli.projection.projector import project_items, project_single
from pexels_cli.projection.selectors import SelectorSet

ITEM_KEYS: dict[ResourceKind, str] = {
    ResourceKind.PHOTO: "photos",
    ResourceKind.VIDEO: "videos",
    ResourceKind.COLLECTION: "collections",
    ResourceKind.MEDIA: "media",
}
"""Key holding the item array in list bodies, per resource kind."""


def build_envelope(
    body: Any,
    kind: ResourceKind,
    cardinality: Cardinality,
    selectors: SelectorSet,
    request_id: Optional[str] = None,
) -> Envelope:
    """Project *body* and wrap it for rendering.

    Args:
        body: The parsed JSON response body.
        kind: Resource kind declared by the command.
        cardinality: Whether the endpoint returns a list or one resource.
        selectors: Resolved field selectors.
        request_id: Request id from the response headers, used when the
            body does not carry one itself.

    Returns:
        The envelope; ``meta`` is set for lists and ``None`` for single
        resources.

    Raises:
        MalformedResponseError: If *body* does not have the shape expected
            for *cardinality*.
    """
    if cardinality is Cardinality.LIST:
        items = list_items(body, kind)
        return Envelope(
            data=project_items(items, selectors),
            meta=extract_meta(body, request_id),
        )

    if kind is not ResourceKind.GENERIC and not isinstance(body, dict):
        raise MalformedResponseError(
            f"Expected a {kind.value} object, got {_type_name(body)}"
        )
    return Envelope(data=project_single(body, selectors))


def list_items(body: Any, kind: ResourceKind) -> list[Any]:
    """Return the item array of a list body, or raise :class:`MalformedResponseError`."""
    key = ITEM_KEYS.get(kind)
    if key is None:
        raise MalformedResponseError(f"{kind.value} responses have no item list")
    if not isinstance(body, dict):
        raise MalformedResponseError(
            f"Expected an object with a '{key}' array, got {_type_name(body)}"
        )
    items = body.get(key)
    if not isinstance(items, list):
        raise MalformedResponseError(
            f"Expected a '{key}' array in the response, got {_type_name(items)}"
        )
    return items


def extract_meta(body: dict[str, Any], request_id: Optional[str] = None) -> MetaInfo:
    """Build :class:`MetaInfo` from the pagination fields of a list body."""
    total = body.get("total_results")
    body_request_id = body.get("request_id")
    return MetaInfo(
        total_results=total if _is_int(total) else None,
        next_page=page_number(body.get("next_page")),
        prev_page=page_number(body.get("prev_page")),
        request_id=str(body_request_id) if body_request_id is not None else request_id,
    )


def page_number(value: Any) -> Optional[int]:
    """Convert a ``next_page``/``prev_page`` value to a page number.

    Accepts an integer or a URL whose query string carries ``page``.

    Example::

        >>> page_number("https://api.pexels.com/v1/search?page=2&per_page=5")
        2
    """
    if _is_int(value):
        return value
    if not isinstance(value, str):
        return None
    pages = parse_qs(urlparse(value).query).get("page")
    if not pages:
        return None
    try:
        return int(pages[0])
    except ValueError:
        return None


def merge_envelopes(envelopes: Iterable[Envelope], limit: Optional[int] = None) -> Envelope:
    """Concatenate paginated list envelopes in page order.

    ``total_results`` and ``prev_page`` come from the first page,
    ``next_page`` and ``request_id`` from the last, so the merged meta still
    points at where fetching stopped.
    """
    pages = list(envelopes)
    if not pages:
        return Envelope(data=[], meta=MetaInfo())

    data: list[Any] = []
    for page in pages:
        data.extend(page.data)
    if limit is not None:
        data = data[:limit]

    first = pages[0].meta or MetaInfo()
    last = pages[-1].meta or MetaInfo()
    meta = MetaInfo(
        total_results=first.total_results,
        next_page=last.next_page,
        prev_page=first.prev_page,
        request_id=last.request_id,
    )
    return Envelope(data=data, meta=meta)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _type_name(value: Any) -> str:
    if value is None:
        return "nothing"
    if isinstance(value, dict):
        return "an object"
    if isinstance(value, list):
        return "an array"
    return type(value).__name__

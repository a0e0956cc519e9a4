"""Serialisation of envelopes to YAML or JSON, and raw passthrough.

Both structured modes keep insertion order: ``data`` ahead of ``meta`` and,
inside ``data``, the order produced by the projector. Nothing is sorted, so
identical envelopes always render to identical text.
"""

from __future__ import annotations

import enum
import json

import yaml

from pexels_cli.models import Envelope

_YAML_WIDTH = 4096


class OutputMode(str, enum.Enum):
    """How command results are written to stdout."""

    YAML = "yaml"
    JSON = "json"
    RAW = "raw"


def render(envelope: Envelope, mode: OutputMode = OutputMode.YAML) -> str:
    """Serialise *envelope* without a trailing newline.

    Raises:
        ValueError: If *mode* is :attr:`OutputMode.RAW`; raw output is the
            untouched response body and never goes through an envelope.
    """
    payload = envelope.to_dict()
    if mode is OutputMode.YAML:
        text = yaml.safe_dump(
            payload,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
            width=_YAML_WIDTH,
        )
        return text.rstrip("\n")
    if mode is OutputMode.JSON:
        return json.dumps(payload, indent=2, ensure_ascii=False)
    raise ValueError("raw output bypasses envelope rendering; use render_raw()")


def render_raw(body: bytes) -> bytes:
    """Return the response body bytes exactly as received."""
    return body

"""Response projection pipeline.

Turns a parsed API body into the text printed on stdout::

    parse_selectors --> project_items / project_single --> build_envelope --> render

Submodules:
    :mod:`~pexels_cli.projection.selectors` -- ``--fields`` parsing.
    :mod:`~pexels_cli.projection.projector` -- path extraction.
    :mod:`~pexels_cli.projection.envelope` -- ``{data, meta}`` construction.
    :mod:`~pexels_cli.projection.renderer` -- YAML / JSON / raw output.
"""

from pexels_cli.projection.envelope import build_envelope, merge_envelopes, page_number
from pexels_cli.projection.projector import project, project_items, project_single
from pexels_cli.projection.renderer import OutputMode, render, render_raw
from pexels_cli.projection.selectors import (
    DEFAULT_FIELDS,
    NAMED_SETS,
    NamedSet,
    Path,
    SelectorSet,
    parse_selectors,
)

__all__ = [
    "DEFAULT_FIELDS",
    "NAMED_SETS",
    "NamedSet",
    "OutputMode",
    "Path",
    "SelectorSet",
    "build_envelope",
    "merge_envelopes",
    "page_number",
    "parse_selectors",
    "project",
    "project_items",
    "project_single",
    "render",
    "render_raw",
]

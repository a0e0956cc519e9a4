"""Tests for YAML/JSON rendering of envelopes."""

from __future__ import annotations

import json

import pytest
import yaml

from pexels_cli.models import Envelope, MetaInfo
from pexels_cli.projection.renderer import OutputMode, render, render_raw


@pytest.fixture
def envelope() -> Envelope:
    return Envelope(
        data=[{"id": 1, "alt": "Café at dusk", "src": {"tiny": "https://x/t.jpg"}}],
        meta=MetaInfo(total_results=10, next_page=2),
    )


class TestYaml:
    def test_parses_back_to_envelope(self, envelope: Envelope) -> None:
        assert yaml.safe_load(render(envelope, OutputMode.YAML)) == envelope.to_dict()

    def test_keys_in_insertion_order(self, envelope: Envelope) -> None:
        text = render(envelope, OutputMode.YAML)
        assert text.index("data:") < text.index("meta:")
        assert text.index("id:") < text.index("alt:") < text.index("src:")

    def test_block_style_and_unicode(self, envelope: Envelope) -> None:
        text = render(envelope, OutputMode.YAML)
        assert "{" not in text
        assert "Café" in text

    def test_no_trailing_newline(self, envelope: Envelope) -> None:
        assert not render(envelope).endswith("\n")

    def test_single_resource_has_no_meta(self) -> None:
        text = render(Envelope(data={"id": 1}), OutputMode.YAML)
        assert text == "data:\n  id: 1"

    def test_deterministic(self, envelope: Envelope) -> None:
        assert render(envelope) == render(envelope.model_copy(deep=True))


class TestJson:
    def test_two_space_indent(self, envelope: Envelope) -> None:
        text = render(envelope, OutputMode.JSON)
        assert text.startswith('{\n  "data": [')
        assert json.loads(text) == envelope.to_dict()

    def test_null_meta_fields_are_kept(self, envelope: Envelope) -> None:
        meta = json.loads(render(envelope, OutputMode.JSON))["meta"]
        assert meta == {
            "total_results": 10,
            "next_page": 2,
            "prev_page": None,
            "request_id": None,
        }

    def test_non_ascii_is_not_escaped(self, envelope: Envelope) -> None:
        assert "Café" in render(envelope, OutputMode.JSON)


class TestRaw:
    def test_raw_mode_refuses_envelopes(self, envelope: Envelope) -> None:
        with pytest.raises(ValueError):
            render(envelope, OutputMode.RAW)

    def test_raw_body_passthrough(self) -> None:
        body = b'{"photos":[],  "page":1}\n'
        assert render_raw(body) is body

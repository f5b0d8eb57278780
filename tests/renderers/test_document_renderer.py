"""Tests for the JSON renderer and the renderer registry."""

import json

import pytest

from fresha_style_guide.guidelines.registry import load_registry
from fresha_style_guide.guidelines.serializer import guide_from_dict
from fresha_style_guide.models import OutputFormat
from fresha_style_guide.renderers import (
    HtmlGuideRenderer,
    JsonGuideRenderer,
    MarkdownGuideRenderer,
    create_renderer,
)


def test_json_render_round_trip() -> None:
    registry = load_registry()
    files = JsonGuideRenderer().render(registry)

    assert list(files) == ["guide.json"]
    assert files["guide.json"].endswith("}\n")
    assert guide_from_dict(json.loads(files["guide.json"])) == registry.guide


def test_json_render_is_deterministic() -> None:
    registry = load_registry()
    assert JsonGuideRenderer().render(registry) == JsonGuideRenderer().render(registry)


@pytest.mark.parametrize(
    ("output_format", "renderer_class"),
    [
        (OutputFormat.HTML, HtmlGuideRenderer),
        (OutputFormat.MARKDOWN, MarkdownGuideRenderer),
        (OutputFormat.JSON, JsonGuideRenderer),
    ],
)
def test_create_renderer(output_format: OutputFormat, renderer_class) -> None:
    assert isinstance(create_renderer(output_format), renderer_class)

"""Render the guide as its JSON intermediate representation."""

from __future__ import annotations

from fresha_style_guide.guidelines.registry import GuideRegistry
from fresha_style_guide.guidelines.serializer import guide_to_dict
from fresha_style_guide.models import OutputFormat
from fresha_style_guide.renderers.base import (
    IGuideRenderer,
    RenderedFiles,
    check_renderable,
)
from fresha_style_guide.utils import dump_json

DOCUMENT_FILENAME = "guide.json"


class JsonGuideRenderer(IGuideRenderer):
    FORMAT = OutputFormat.JSON

    def render(self, registry: GuideRegistry) -> RenderedFiles:
        check_renderable(registry)
        return {DOCUMENT_FILENAME: dump_json(guide_to_dict(registry.guide))}

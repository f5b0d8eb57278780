from fresha_style_guide.models import OutputFormat
from fresha_style_guide.renderers.base import IGuideRenderer, RenderedFiles
from fresha_style_guide.renderers.document import JsonGuideRenderer
from fresha_style_guide.renderers.html import HtmlGuideRenderer
from fresha_style_guide.renderers.markdown import MarkdownGuideRenderer

RENDERERS: dict[OutputFormat, type[IGuideRenderer]] = {
    renderer.FORMAT: renderer
    for renderer in (HtmlGuideRenderer, MarkdownGuideRenderer, JsonGuideRenderer)
}


def create_renderer(output_format: OutputFormat) -> IGuideRenderer:
    renderer_class = RENDERERS.get(output_format)
    if renderer_class is None:
        raise KeyError(f"No renderer registered for: {output_format.value}")
    return renderer_class()


__all__ = [
    "HtmlGuideRenderer",
    "IGuideRenderer",
    "JsonGuideRenderer",
    "MarkdownGuideRenderer",
    "RENDERERS",
    "RenderedFiles",
    "create_renderer",
]

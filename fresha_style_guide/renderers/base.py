"""Per-format guide renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from fresha_style_guide.errors import MalformedContentError
from fresha_style_guide.guidelines.markup import validate_text
from fresha_style_guide.guidelines.registry import GuideRegistry
from fresha_style_guide.models import OutputFormat

RenderedFiles = dict[str, str]


class IGuideRenderer(ABC):
    FORMAT: ClassVar[OutputFormat]

    @abstractmethod
    def render(self, registry: GuideRegistry) -> RenderedFiles:
        """Return relative filename -> content for every generated file."""


def _check_text(text: str, where: str) -> None:
    try:
        validate_text(text)
    except MalformedContentError as exc:
        raise MalformedContentError(f"{where}: {exc.detail}") from exc


def check_renderable(registry: GuideRegistry) -> None:
    """Fail before any output is produced if some text cannot be rendered."""
    _check_text(registry.guide.overview, "guide overview")
    for category in registry.list_categories():
        _check_text(category.overview, category.name)
        for rule in category.rules:
            _check_text(rule.description, f"{category.name}.{rule.name}")
            _check_text(rule.rationale, f"{category.name}.{rule.name}")


def category_filename(slug: str, suffix: str) -> str:
    return f"{slug}{suffix}"

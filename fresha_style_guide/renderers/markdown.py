"""Render the guide as a set of Markdown pages."""

from __future__ import annotations

from fresha_style_guide.guidelines.markup import (
    Block,
    BulletList,
    CodeBlock,
    Heading,
    Paragraph,
    Quote,
    fence_for,
    parse_blocks,
)
from fresha_style_guide.guidelines.models import Category, Example, Rule
from fresha_style_guide.guidelines.registry import GuideRegistry
from fresha_style_guide.models import OutputFormat
from fresha_style_guide.renderers.base import (
    IGuideRenderer,
    RenderedFiles,
    category_filename,
    check_renderable,
)

INDEX_FILENAME = "README.md"
_SUFFIX = ".md"


def blocks_to_markdown(blocks: list[Block], heading_offset: int = 0) -> str:
    parts: list[str] = []
    for block in blocks:
        if isinstance(block, Heading):
            parts.append(f"{'#' * (block.level + heading_offset)} {block.text}")
        elif isinstance(block, Paragraph):
            parts.append(block.text)
        elif isinstance(block, BulletList):
            parts.append("\n".join(f"- {item}" for item in block.items))
        elif isinstance(block, CodeBlock):
            marker = fence_for(block.code)
            parts.append(f"{marker}{block.language or ''}\n{block.code}\n{marker}")
        elif isinstance(block, Quote):
            parts.append(f"> {block.text}")
    return "\n\n".join(parts)


def _example_caption(example: Example) -> str:
    if example.is_preferred:
        if example.caption:
            return f"**Preferred** ({example.caption}):"
        return "**Preferred:**"
    return f"*{example.caption or 'Discouraged'}:*"


class MarkdownGuideRenderer(IGuideRenderer):
    """One README index plus one page per category."""

    FORMAT = OutputFormat.MARKDOWN

    def render(self, registry: GuideRegistry) -> RenderedFiles:
        check_renderable(registry)
        files: RenderedFiles = {INDEX_FILENAME: self._render_index(registry)}
        for category in registry.list_categories():
            files[category_filename(category.slug, _SUFFIX)] = self._render_category(
                registry, category
            )
        return files

    def _render_index(self, registry: GuideRegistry) -> str:
        parts = [f"# {registry.title}", f"Version {registry.version}"]
        if registry.guide.overview:
            parts.append(blocks_to_markdown(parse_blocks(registry.guide.overview)))
        for category in registry.list_categories():
            page = category_filename(category.slug, _SUFFIX)
            parts.append(f"## [{category.name}]({page})")
            if category.overview:
                parts.append(blocks_to_markdown(parse_blocks(category.overview), 1))
            parts.append(self._summary_list(registry, category, page=page))
        return "\n\n".join(parts) + "\n"

    def _render_category(self, registry: GuideRegistry, category: Category) -> str:
        parts = [f"# {category.name}"]
        if category.overview:
            parts.append(blocks_to_markdown(parse_blocks(category.overview)))
        parts.append("## Summary")
        parts.append(self._summary_list(registry, category))
        for rule in category.rules:
            parts.append(self._render_rule(registry, rule))
        return "\n\n".join(parts) + "\n"

    def _summary_list(
        self, registry: GuideRegistry, category: Category, page: str = ""
    ) -> str:
        return "\n".join(
            f"- [`{rule.name}`]({page}#{rule.name}): {registry.get_summary(rule)}"
            for rule in category.rules
        )

    def _render_rule(self, registry: GuideRegistry, rule: Rule) -> str:
        parts = [f"## {rule.name}", f"{registry.get_summary(rule)}."]
        if rule.description:
            parts.append(blocks_to_markdown(parse_blocks(rule.description), 1))
        parts.append("### Reasoning")
        parts.append(blocks_to_markdown(parse_blocks(rule.rationale), 2))
        parts.append("### Examples")
        for example in rule.examples:
            parts.append(_example_caption(example))
            marker = fence_for(example.code)
            parts.append(f"{marker}{example.language}\n{example.code}\n{marker}")
            if example.note:
                parts.append(f"> {example.note}")
        return "\n\n".join(parts)

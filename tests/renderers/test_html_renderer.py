"""Tests for the static HTML renderer."""

from pathlib import Path

from fresha_style_guide.guidelines.models import (
    Category,
    Example,
    ExampleLabel,
    Guide,
    Rule,
)
from fresha_style_guide.guidelines.registry import GuideRegistry, load_registry
from fresha_style_guide.renderers.html import HtmlGuideRenderer


def _registry(rule: Rule) -> GuideRegistry:
    return GuideRegistry(
        Guide(
            title="Guide <beta>",
            version="1.0.0",
            overview="Read **this** first.",
            categories=(
                Category(name="CodeStyle", slug="code_style", overview="", rules=(rule,)),
            ),
        )
    )


def test_render_files(content_root: Path) -> None:
    files = HtmlGuideRenderer().render(load_registry(content_root))
    assert list(files) == ["index.html", "code_style.html", "style.css", "pygments.css"]


def test_index_links_categories_and_rules(content_root: Path) -> None:
    index = HtmlGuideRenderer().render(load_registry(content_root))["index.html"]

    assert "<title>Test Guide</title>" in index
    assert '<a href="code_style.html">CodeStyle</a>' in index
    assert '<a href="code_style.html#inline_block_usage"><code>inline_block_usage</code></a>' in index
    assert 'href="pygments.css"' in index
    assert "v2.0.0" in index


def test_category_page_has_rule_sections(content_root: Path) -> None:
    page = HtmlGuideRenderer().render(load_registry(content_root))["code_style.html"]

    assert "<title>CodeStyle - Test Guide</title>" in page
    assert '<section class="rule" id="inline_block_usage">' in page
    assert "<h3>Reasoning</h3>" in page
    assert '<figure class="example preferred">' in page
    assert '<div class="highlight">' in page
    assert "add_two" in page


def test_text_is_escaped_and_formatted() -> None:
    rule = Rule(
        name="comparison_rule",
        summary="Compare with `a < b`",
        rationale="Prefer *strict* comparison.",
        examples=(
            Example(
                label=ExampleLabel.DISCOURAGED,
                code="a <= b",
                caption="Loose <comparison>",
            ),
            Example(label=ExampleLabel.PREFERRED, code="a < b"),
        ),
    )
    files = HtmlGuideRenderer().render(_registry(rule))

    assert "<title>Guide &lt;beta&gt;</title>" in files["index.html"]
    assert "<p>Read <strong>this</strong> first.</p>" in files["index.html"]
    page = files["code_style.html"]
    assert "Compare with <code>a &lt; b</code>." in page
    assert "<p>Prefer <em>strict</em> comparison.</p>" in page
    assert "<em>Loose &lt;comparison&gt;</em>:" in page


def test_unknown_language_falls_back_to_plain_text() -> None:
    rule = Rule(
        name="plain_rule",
        summary="Plain",
        rationale="Text.",
        examples=(
            Example(
                label=ExampleLabel.PREFERRED,
                code="whatever <here>",
                language="no-such-language",
            ),
        ),
    )
    page = HtmlGuideRenderer().render(_registry(rule))["code_style.html"]
    assert "whatever &lt;here&gt;" in page


def test_highlight_css() -> None:
    css = HtmlGuideRenderer().render(load_registry())["pygments.css"]
    assert ".highlight" in css


def test_render_is_deterministic() -> None:
    registry = load_registry()
    renderer = HtmlGuideRenderer()
    assert renderer.render(registry) == renderer.render(registry)

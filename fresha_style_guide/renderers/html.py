"""Render the guide as a static HTML site."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined
from markupsafe import Markup
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound

from fresha_style_guide.guidelines.markup import inline_html, parse_blocks
from fresha_style_guide.guidelines.registry import GuideRegistry
from fresha_style_guide.models import OutputFormat
from fresha_style_guide.renderers.base import (
    IGuideRenderer,
    RenderedFiles,
    category_filename,
    check_renderable,
)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

INDEX_FILENAME = "index.html"
HIGHLIGHT_CSS_FILENAME = "pygments.css"
SITE_CSS_FILENAME = "style.css"
HIGHLIGHT_CSS_CLASS = "highlight"
_SUFFIX = ".html"


def _highlight(code: str, language: str | None) -> Markup:
    try:
        lexer = get_lexer_by_name(language) if language else TextLexer()
    except ClassNotFound:
        lexer = TextLexer()
    formatter = HtmlFormatter(cssclass=HIGHLIGHT_CSS_CLASS)
    return Markup(highlight(code, lexer, formatter))


def _block_kind(block: object) -> str:
    return type(block).__name__.lower()


def create_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=True,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["inline"] = inline_html
    env.filters["highlight"] = _highlight
    env.filters["blocks"] = parse_blocks
    env.filters["block_kind"] = _block_kind
    return env


class HtmlGuideRenderer(IGuideRenderer):
    """Index page, one page per category and the stylesheets they link to."""

    FORMAT = OutputFormat.HTML

    def __init__(self, highlight_style: str = "default") -> None:
        self.highlight_style = highlight_style
        self.env = create_environment()

    def render(self, registry: GuideRegistry) -> RenderedFiles:
        check_renderable(registry)
        categories = registry.list_categories()
        pages = {
            category.slug: category_filename(category.slug, _SUFFIX)
            for category in categories
        }
        common = {
            "guide": registry.guide,
            "registry": registry,
            "categories": categories,
            "pages": pages,
            "index_page": INDEX_FILENAME,
            "stylesheets": [SITE_CSS_FILENAME, HIGHLIGHT_CSS_FILENAME],
        }

        files: RenderedFiles = {
            INDEX_FILENAME: self.env.get_template("index.html.j2").render(**common)
        }
        category_template = self.env.get_template("category.html.j2")
        for category in categories:
            files[pages[category.slug]] = category_template.render(
                category=category, **common
            )
        files[SITE_CSS_FILENAME] = (TEMPLATES_DIR / SITE_CSS_FILENAME).read_text(
            encoding="utf-8"
        )
        files[HIGHLIGHT_CSS_FILENAME] = self._highlight_css()
        return files

    def _highlight_css(self) -> str:
        formatter = HtmlFormatter(style=self.highlight_style)
        return formatter.get_style_defs(f".{HIGHLIGHT_CSS_CLASS}") + "\n"

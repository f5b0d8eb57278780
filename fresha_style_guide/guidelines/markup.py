"""Structured text blocks for rule descriptions, rationale and examples.

Guide text is written in ExDoc-friendly Markdown: paragraphs separated by a
blank line, headings starting from the 2nd level, dash bullet lists with
continuation lines indented by 2 spaces, code blocks (fenced or indented by
4 spaces) and block quotes.
Anything outside of that subset is reported as malformed instead of being
rendered in a mangled form.
"""

from __future__ import annotations

import re
import textwrap
from dataclasses import dataclass
from typing import Optional, Union

from markupsafe import Markup, escape

from fresha_style_guide.errors import MalformedContentError

_HEADING_RE = re.compile(r"^(#+)(?:\s+(.*))?$")
_FENCE_RE = re.compile(r"^(`{3,})(.*)$")
_FENCE_RUN_RE = re.compile(r"^\s*(`{3,})", re.MULTILINE)
_LIST_MARKER = "- "
_LIST_INDENT = "  "
_CODE_INDENT = "    "
_QUOTE_MARKER = ">"

_INLINE_CODE_RE = re.compile(r"`([^`]+)`")
_STRONG_RE = re.compile(r"\*\*([^*]+)\*\*")
_EMPHASIS_RE = re.compile(r"(?<![*\w])\*([^*\s][^*]*?)\*(?![*\w])")

MIN_HEADING_LEVEL = 2
MAX_HEADING_LEVEL = 4


@dataclass(frozen=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True)
class Paragraph:
    text: str


@dataclass(frozen=True)
class BulletList:
    items: tuple[str, ...]


@dataclass(frozen=True)
class CodeBlock:
    code: str
    language: Optional[str] = None


@dataclass(frozen=True)
class Quote:
    text: str


Block = Union[Heading, Paragraph, BulletList, CodeBlock, Quote]


def fence_marker(line: str) -> Optional[str]:
    match = _FENCE_RE.match(line.strip())
    return match.group(1) if match else None


def closes_fence(line: str, marker: str) -> bool:
    stripped = line.strip()
    return len(stripped) >= len(marker) and set(stripped) == {"`"}


def fence_for(code: str) -> str:
    """Shortest backtick fence that cannot be closed from inside ``code``."""
    longest = max((len(run) for run in _FENCE_RUN_RE.findall(code)), default=0)
    return "`" * max(3, longest + 1)


def _starts_block(line: str) -> bool:
    # Indented code cannot interrupt a paragraph.
    if line.startswith(_CODE_INDENT):
        return False
    stripped = line.lstrip()
    return (
        fence_marker(line) is not None
        or stripped.startswith("#")
        or line.startswith(_LIST_MARKER)
        or stripped.startswith(_QUOTE_MARKER)
    )


def _join(lines: list[str]) -> str:
    return " ".join(line.strip() for line in lines if line.strip())


def parse_blocks(text: str) -> list[Block]:
    lines = text.splitlines()
    blocks: list[Block] = []
    index = 0

    while index < len(lines):
        line = lines[index]
        if not line.strip():
            index += 1
            continue

        if line.startswith(_CODE_INDENT):
            block, index = _parse_indented_code(lines, index)
        elif fence_marker(line) is not None:
            block, index = _parse_fence(lines, index)
        elif line.lstrip().startswith("#"):
            block = _parse_heading(line)
            index += 1
        elif line.startswith(_LIST_MARKER):
            block, index = _parse_list(lines, index)
        elif line.lstrip().startswith(_QUOTE_MARKER):
            block, index = _parse_quote(lines, index)
        else:
            block, index = _parse_paragraph(lines, index)
        blocks.append(block)

    return blocks


def validate_text(text: str) -> None:
    parse_blocks(text)


def _parse_fence(lines: list[str], start: int) -> tuple[CodeBlock, int]:
    opening = lines[start].strip()
    marker = fence_marker(opening) or ""
    language = opening[len(marker) :].strip() or None
    body: list[str] = []
    index = start + 1
    while index < len(lines):
        if closes_fence(lines[index], marker):
            code = textwrap.dedent("\n".join(body))
            return CodeBlock(code=code, language=language), index + 1
        body.append(lines[index])
        index += 1
    raise MalformedContentError(f"unclosed code fence at line {start + 1}")


def _parse_indented_code(lines: list[str], start: int) -> tuple[CodeBlock, int]:
    body: list[str] = []
    index = start
    while index < len(lines):
        line = lines[index]
        if line.startswith(_CODE_INDENT):
            body.append(line[len(_CODE_INDENT) :])
        elif not line.strip():
            body.append("")
        else:
            break
        index += 1
    while not body[-1].strip():
        body.pop()
    return CodeBlock(code="\n".join(body)), index


def _parse_heading(line: str) -> Heading:
    match = _HEADING_RE.match(line.strip())
    if match is None:
        raise MalformedContentError(f"invalid heading: {line.strip()}")
    level = len(match.group(1))
    text = (match.group(2) or "").strip()
    if not text:
        raise MalformedContentError("empty heading")
    if level < MIN_HEADING_LEVEL:
        raise MalformedContentError(
            f"headings must start from level {MIN_HEADING_LEVEL}: {text}"
        )
    if level > MAX_HEADING_LEVEL:
        raise MalformedContentError(f"heading nested too deep: {text}")
    return Heading(level=level, text=text)


def _parse_list(lines: list[str], start: int) -> tuple[BulletList, int]:
    items: list[str] = []
    current: list[str] = []
    index = start
    while index < len(lines):
        line = lines[index]
        if line.startswith(_LIST_MARKER):
            if current:
                items.append(_join(current))
            current = [line[len(_LIST_MARKER) :]]
        elif not line.strip():
            following = index + 1
            while following < len(lines) and not lines[following].strip():
                following += 1
            if following < len(lines) and lines[following].startswith(_LIST_MARKER):
                index = following
                continue
            break
        elif line.startswith(_LIST_INDENT) and not line.startswith(_LIST_INDENT + " "):
            current.append(line)
        elif _starts_block(line):
            break
        else:
            raise MalformedContentError(
                f"list item continuation must be indented by 2 spaces at line {index + 1}"
            )
        index += 1

    if current:
        items.append(_join(current))
    return BulletList(items=tuple(items)), index


def _parse_quote(lines: list[str], start: int) -> tuple[Quote, int]:
    parts: list[str] = []
    index = start
    while index < len(lines):
        line = lines[index]
        stripped = line.strip()
        if not stripped:
            break
        if stripped.startswith(_QUOTE_MARKER):
            parts.append(stripped[len(_QUOTE_MARKER) :])
        elif line.startswith(" "):
            parts.append(stripped)
        else:
            break
        index += 1
    return Quote(text=_join(parts)), index


def _parse_paragraph(lines: list[str], start: int) -> tuple[Paragraph, int]:
    parts: list[str] = []
    index = start
    while index < len(lines):
        line = lines[index]
        if not line.strip():
            break
        if parts and _starts_block(line):
            break
        parts.append(line)
        index += 1
    return Paragraph(text=_join(parts)), index


def _emphasis_html(text: str) -> str:
    rendered = _STRONG_RE.sub(r"<strong>\1</strong>", str(escape(text)))
    return _EMPHASIS_RE.sub(r"<em>\1</em>", rendered)


def inline_html(text: str) -> Markup:
    """Escape ``text`` and turn code spans, bold and italics into HTML."""
    parts: list[str] = []
    last = 0
    for match in _INLINE_CODE_RE.finditer(text):
        parts.append(_emphasis_html(text[last : match.start()]))
        parts.append(f"<code>{escape(match.group(1))}</code>")
        last = match.end()
    parts.append(_emphasis_html(text[last:]))
    return Markup("".join(parts))

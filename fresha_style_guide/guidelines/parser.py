"""Parse and serialize rules with YAML frontmatter."""

from __future__ import annotations

import dataclasses
import re
from pathlib import Path
from typing import Optional

import yaml

from fresha_style_guide.constants import (
    DEFAULT_EXAMPLE_LANGUAGE,
    EXAMPLES_HEADING,
    PREFERRED_CAPTION,
    REASONING_HEADING,
    RULE_SUFFIX,
    SUMMARY_MAX_LENGTH,
)
from fresha_style_guide.errors import MalformedContentError
from fresha_style_guide.guidelines.markup import (
    CodeBlock,
    Paragraph,
    Quote,
    closes_fence,
    fence_for,
    fence_marker,
    parse_blocks,
    validate_text,
)
from fresha_style_guide.guidelines.models import Example, ExampleLabel, Rule
from fresha_style_guide.guidelines.schema import RULE_SCHEMA, validate_payload

_FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n", re.DOTALL)
_SECTION_PREFIX = "## "
_DISCOURAGED_CAPTION = "Discouraged"


def normalize_summary(text: str) -> str:
    """Strip trailing periods the way ExDoc does for summary listings."""
    summary = text.strip()
    if "\n" in summary:
        raise MalformedContentError("summary must be a single line")
    summary = summary.rstrip(". ")
    if not summary:
        raise MalformedContentError("missing required summary line")
    if len(summary) > SUMMARY_MAX_LENGTH:
        raise MalformedContentError(
            f"summary longer than {SUMMARY_MAX_LENGTH} characters: {summary}"
        )
    return summary


def parse_rule(path: Path) -> Rule:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedContentError(f"not valid UTF-8: {exc.reason}", path=path) from exc
    name = path.name[: -len(RULE_SUFFIX)] if path.name.endswith(RULE_SUFFIX) else path.stem
    return parse_rule_text(name, text, path=path)


def parse_rule_text(name: str, text: str, path: Optional[Path] = None) -> Rule:
    match = _FRONTMATTER_RE.match(text)
    if match is None:
        raise MalformedContentError("missing frontmatter with summary line", path=path)

    try:
        raw = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as exc:
        raise MalformedContentError(f"invalid frontmatter: {exc}", path=path) from exc
    validate_payload(raw, RULE_SCHEMA, path=path)

    language = str(raw.get("language", DEFAULT_EXAMPLE_LANGUAGE))
    body = text[match.end() :]

    try:
        summary = normalize_summary(str(raw["summary"]))
        description, sections = _split_sections(body)
        rationale = sections.get(REASONING_HEADING)
        if not rationale:
            raise MalformedContentError(f"missing '{REASONING_HEADING}' section")
        examples_text = sections.get(EXAMPLES_HEADING)
        if not examples_text:
            raise MalformedContentError(f"missing '{EXAMPLES_HEADING}' section")

        validate_text(description)
        validate_text(rationale)
        examples = _parse_examples(examples_text, default_language=language)
    except MalformedContentError as exc:
        if exc.path is not None or path is None:
            raise
        raise MalformedContentError(exc.detail, path=path) from exc

    return Rule(
        name=name,
        summary=summary,
        rationale=rationale,
        examples=examples,
        description=description,
    )


def _split_sections(body: str) -> tuple[str, dict[str, str]]:
    preamble: list[str] = []
    sections: dict[str, list[str]] = {}
    current = preamble
    fence: Optional[str] = None

    for line in body.splitlines():
        if fence is None:
            fence = fence_marker(line)
        elif closes_fence(line, fence):
            fence = None
            current.append(line)
            continue
        if fence is None and line.startswith(_SECTION_PREFIX):
            title = line[len(_SECTION_PREFIX) :].strip()
            if title not in (REASONING_HEADING, EXAMPLES_HEADING):
                raise MalformedContentError(f"unexpected section: {title}")
            if title in sections:
                raise MalformedContentError(f"duplicate section: {title}")
            sections[title] = []
            current = sections[title]
            continue
        current.append(line)

    if fence is not None:
        raise MalformedContentError("unclosed code fence")

    return "\n".join(preamble).strip(), {
        title: "\n".join(lines).strip() for title, lines in sections.items()
    }


def _parse_caption(text: str) -> tuple[ExampleLabel, Optional[str]]:
    if not text.endswith(":"):
        raise MalformedContentError(f"example caption must end with a colon: {text}")
    text = text[:-1].strip()

    if text == PREFERRED_CAPTION:
        return ExampleLabel.PREFERRED, None
    if text.startswith(f"{PREFERRED_CAPTION} (") and text.endswith(")"):
        remark = text[len(PREFERRED_CAPTION) + 2 : -1].strip()
        return ExampleLabel.PREFERRED, remark or None

    if text == _DISCOURAGED_CAPTION:
        return ExampleLabel.DISCOURAGED, None
    return ExampleLabel.DISCOURAGED, text


def _parse_examples(text: str, default_language: str) -> tuple[Example, ...]:
    examples: list[Example] = []
    caption: Optional[Paragraph] = None

    for block in parse_blocks(text):
        if isinstance(block, Paragraph):
            if caption is not None:
                raise MalformedContentError(f"caption without example: {caption.text}")
            caption = block
        elif isinstance(block, CodeBlock):
            if caption is None:
                raise MalformedContentError("example without caption")
            label, caption_text = _parse_caption(caption.text)
            examples.append(
                Example(
                    label=label,
                    code=block.code,
                    caption=caption_text,
                    language=block.language or default_language,
                )
            )
            caption = None
        elif isinstance(block, Quote):
            if caption is not None or not examples or examples[-1].note is not None:
                raise MalformedContentError("note must directly follow an example")
            examples[-1] = dataclasses.replace(examples[-1], note=block.text)
        else:
            raise MalformedContentError(
                f"unexpected {type(block).__name__.lower()} in examples"
            )

    if caption is not None:
        raise MalformedContentError(f"caption without example: {caption.text}")
    if not any(example.is_preferred for example in examples):
        raise MalformedContentError("at least one preferred example is required")
    return tuple(examples)


def _caption_line(example: Example) -> str:
    if example.is_preferred:
        line = (
            f"{PREFERRED_CAPTION} ({example.caption}):"
            if example.caption
            else f"{PREFERRED_CAPTION}:"
        )
    else:
        line = f"{example.caption or _DISCOURAGED_CAPTION}:"
    # Written captions must read back as the same label and text.
    if parse_blocks(line) != [Paragraph(line)] or _parse_caption(line) != (
        example.label,
        example.caption,
    ):
        raise MalformedContentError(
            f"{example.label.value} example caption cannot be written back: "
            f"{example.caption!r}"
        )
    return line


def serialize_rule(rule: Rule) -> str:
    fm: dict = {"summary": f"{rule.summary}."}

    parts: list[str] = []
    parts.append("---")
    parts.append(
        yaml.dump(
            fm, default_flow_style=False, sort_keys=False, allow_unicode=True, width=1000
        ).rstrip()
    )
    parts.append("---")
    parts.append("")

    if rule.description:
        parts.append(rule.description)
        parts.append("")

    parts.append(f"{_SECTION_PREFIX}{REASONING_HEADING}")
    parts.append("")
    parts.append(rule.rationale)
    parts.append("")
    parts.append(f"{_SECTION_PREFIX}{EXAMPLES_HEADING}")
    parts.append("")

    for example in rule.examples:
        parts.append(_caption_line(example))
        parts.append("")
        marker = fence_for(example.code)
        parts.append(f"{marker}{example.language}")
        parts.append(example.code)
        parts.append(marker)
        parts.append("")
        if example.note:
            parts.append(f"> {example.note}")
            parts.append("")

    return "\n".join(parts)

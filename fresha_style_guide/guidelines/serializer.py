"""Convert a guide to and from its JSON-compatible intermediate representation."""

from __future__ import annotations

from typing import Any

from fresha_style_guide.errors import MalformedContentError
from fresha_style_guide.guidelines.markup import validate_text
from fresha_style_guide.guidelines.models import (
    Category,
    Example,
    ExampleLabel,
    Guide,
    Rule,
)
from fresha_style_guide.guidelines.schema import DOCUMENT_SCHEMA, validate_payload


def example_to_dict(example: Example) -> dict[str, Any]:
    return {
        "label": example.label.value,
        "code": example.code,
        "caption": example.caption,
        "language": example.language,
        "note": example.note,
    }


def rule_to_dict(rule: Rule) -> dict[str, Any]:
    return {
        "name": rule.name,
        "summary": rule.summary,
        "description": rule.description,
        "rationale": rule.rationale,
        "examples": [example_to_dict(example) for example in rule.examples],
    }


def category_to_dict(category: Category) -> dict[str, Any]:
    return {
        "name": category.name,
        "slug": category.slug,
        "overview": category.overview,
        "rules": [rule_to_dict(rule) for rule in category.rules],
    }


def guide_to_dict(guide: Guide) -> dict[str, Any]:
    return {
        "title": guide.title,
        "version": guide.version,
        "overview": guide.overview,
        "categories": [category_to_dict(category) for category in guide.categories],
    }


def guide_from_dict(payload: Any) -> Guide:
    """Build a guide from its IR, enforcing the invariants of loaded content."""
    validate_payload(payload, DOCUMENT_SCHEMA)
    _check_unique(
        [key for item in payload["categories"] for key in (item["name"], item["slug"])],
        "category",
    )
    for category in payload["categories"]:
        _check_unique(
            [rule["name"] for rule in category["rules"]],
            f"rule in {category['name']}",
        )
    validate_text(payload["overview"])

    return Guide(
        title=payload["title"],
        version=payload["version"],
        overview=payload["overview"],
        categories=tuple(
            Category(
                name=category["name"],
                slug=category["slug"],
                overview=_checked_text(category["overview"]),
                rules=tuple(_rule_from_dict(rule) for rule in category["rules"]),
            )
            for category in payload["categories"]
        ),
    )


def _check_unique(keys: list[str], kind: str) -> None:
    seen: set[str] = set()
    for key in keys:
        if key in seen:
            raise MalformedContentError(f"duplicate {kind}: {key}")
        seen.add(key)


def _checked_text(text: str) -> str:
    validate_text(text)
    return text


def _rule_from_dict(payload: dict[str, Any]) -> Rule:
    return Rule(
        name=payload["name"],
        summary=payload["summary"],
        description=_checked_text(payload["description"]),
        rationale=_checked_text(payload["rationale"]),
        examples=tuple(
            Example(
                label=ExampleLabel(example["label"]),
                code=example["code"],
                caption=example["caption"],
                language=example["language"],
                note=example["note"],
            )
            for example in payload["examples"]
        ),
    )

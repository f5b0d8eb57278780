"""Guideline data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from fresha_style_guide.constants import DEFAULT_EXAMPLE_LANGUAGE


class ExampleLabel(str, Enum):
    PREFERRED = "preferred"
    DISCOURAGED = "discouraged"


@dataclass(frozen=True)
class Example:
    label: ExampleLabel
    code: str
    caption: Optional[str] = None
    language: str = DEFAULT_EXAMPLE_LANGUAGE
    note: Optional[str] = None

    @property
    def is_preferred(self) -> bool:
        return self.label == ExampleLabel.PREFERRED


@dataclass(frozen=True)
class Rule:
    name: str
    summary: str
    rationale: str
    examples: tuple[Example, ...] = ()
    description: str = ""

    @property
    def preferred_examples(self) -> tuple[Example, ...]:
        return tuple(example for example in self.examples if example.is_preferred)

    @property
    def discouraged_examples(self) -> tuple[Example, ...]:
        return tuple(example for example in self.examples if not example.is_preferred)


@dataclass(frozen=True)
class Category:
    name: str
    slug: str
    overview: str
    rules: tuple[Rule, ...] = field(default_factory=tuple)

    def rule_names(self) -> list[str]:
        return [rule.name for rule in self.rules]


@dataclass(frozen=True)
class Guide:
    title: str
    version: str
    overview: str
    categories: tuple[Category, ...] = field(default_factory=tuple)

"""Read-only traversal over a loaded style guide."""

from __future__ import annotations

import functools
from pathlib import Path
from typing import Union

from fresha_style_guide.errors import CategoryNotFoundError, RuleNotFoundError
from fresha_style_guide.guidelines.models import Category, Guide, Rule
from fresha_style_guide.guidelines.repository import GuideRepository

CategoryRef = Union[Category, str]


class GuideRegistry:
    """Categories and rules of a guide, in authored order.

    Categories can be referenced by their ``Category`` record, their name
    (``CodeStyle``) or their slug (``code_style``).
    """

    def __init__(self, guide: Guide) -> None:
        self._guide = guide
        self._categories: dict[str, Category] = {}
        for category in guide.categories:
            self._categories[category.name] = category
            self._categories[category.slug] = category

    @property
    def guide(self) -> Guide:
        return self._guide

    @property
    def version(self) -> str:
        return self._guide.version

    @property
    def title(self) -> str:
        return self._guide.title

    def list_categories(self) -> list[Category]:
        return list(self._guide.categories)

    def get_category(self, category: CategoryRef) -> Category:
        key = category.name if isinstance(category, Category) else category
        found = self._categories.get(key)
        if found is None:
            raise CategoryNotFoundError(key)
        return found

    def list_rules(self, category: CategoryRef) -> list[Rule]:
        return list(self.get_category(category).rules)

    def get_rule(self, category: CategoryRef, name: str) -> Rule:
        found = self.get_category(category)
        for rule in found.rules:
            if rule.name == name:
                return rule
        raise RuleNotFoundError(name, category=found.name)

    def find_rule(self, name: str) -> tuple[Category, Rule]:
        for category in self._guide.categories:
            for rule in category.rules:
                if rule.name == name:
                    return category, rule
        raise RuleNotFoundError(name)

    def get_summary(self, rule: Rule) -> str:
        return rule.summary

    def summaries(
        self, category: CategoryRef | None = None
    ) -> list[tuple[Category, Rule, str]]:
        categories = (
            [self.get_category(category)]
            if category is not None
            else self._guide.categories
        )
        return [
            (item, rule, self.get_summary(rule))
            for item in categories
            for rule in item.rules
        ]


@functools.lru_cache(maxsize=None)
def _bundled_registry() -> GuideRegistry:
    return GuideRegistry(GuideRepository().load())


def load_registry(content_dir: Path | None = None) -> GuideRegistry:
    if content_dir is None:
        return _bundled_registry()
    return GuideRegistry(GuideRepository(content_dir).load())

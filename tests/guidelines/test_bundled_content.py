"""Properties every rule of the bundled guide must hold."""

import pytest

from fresha_style_guide import __version__
from fresha_style_guide.constants import SUMMARY_MAX_LENGTH
from fresha_style_guide.guidelines.parser import parse_rule_text, serialize_rule
from fresha_style_guide.guidelines.registry import load_registry
from fresha_style_guide.guidelines.repository import GuideRepository
from fresha_style_guide.renderers.base import check_renderable

REGISTRY = load_registry()
ALL_RULES = [
    pytest.param(rule, id=f"{category.name}.{rule.name}")
    for category in REGISTRY.list_categories()
    for rule in category.rules
]


def test_categories() -> None:
    assert [category.name for category in REGISTRY.list_categories()] == [
        "CodeStyle",
        "SoftwareDesign",
    ]


def test_version_matches_package() -> None:
    assert REGISTRY.version == "2.0.0"
    assert REGISTRY.version == __version__


def test_code_style_rule_order() -> None:
    names = [rule.name for rule in REGISTRY.list_rules("CodeStyle")]
    assert names[:4] == [
        "inline_block_usage",
        "moduledoc_spacing",
        "doc_spacing",
        "reuse_directive_scope",
    ]
    assert names[-1] == "typespec_alias_usage"
    assert len(names) == 16


def test_every_category_has_rules() -> None:
    for category in REGISTRY.list_categories():
        rules = REGISTRY.list_rules(category)
        assert rules
        assert rules == REGISTRY.list_rules(category.slug)


def test_rule_names_unique_within_category() -> None:
    for category in REGISTRY.list_categories():
        names = category.rule_names()
        assert len(names) == len(set(names))


@pytest.mark.parametrize("rule", ALL_RULES)
def test_summary_is_one_short_line(rule) -> None:
    summary = REGISTRY.get_summary(rule)
    assert summary
    assert "\n" not in summary
    assert len(summary) <= SUMMARY_MAX_LENGTH
    assert not summary.endswith(".")


@pytest.mark.parametrize("rule", ALL_RULES)
def test_has_preferred_example(rule) -> None:
    assert rule.preferred_examples
    assert rule.rationale


@pytest.mark.parametrize("rule", ALL_RULES)
def test_serialize_round_trip(rule) -> None:
    assert parse_rule_text(rule.name, serialize_rule(rule)) == rule


def test_content_has_no_errors() -> None:
    assert GuideRepository().load_errors() == []
    check_renderable(REGISTRY)


def test_controller_action_order_note() -> None:
    rule = REGISTRY.get_rule("CodeStyle", "controller_action_order")
    discouraged = rule.discouraged_examples
    assert len(discouraged) == 1
    assert discouraged[0].note.startswith("The issue with CRUD order")


def test_nested_fence_example_kept_verbatim() -> None:
    rule = REGISTRY.get_rule("CodeStyle", "doc_content_format")
    assert "- Headings starting from 2nd level heading (`## Biggest heading`)" in (
        rule.description
    )
    assert "  ```\n  defmodule MyProject.Accounts.User do" in rule.examples[1].code


def test_preferred_caption_remark() -> None:
    rule = REGISTRY.get_rule("CodeStyle", "reuse_directive_scope")
    assert rule.examples[0].is_preferred
    assert rule.examples[0].caption


def test_software_design_is_marked_illustrative() -> None:
    overview = REGISTRY.get_category("SoftwareDesign").overview
    assert overview.startswith("Higher level application design")
    assert "illustrative drafts" in overview
    assert "not part\nof the published Fresha guide" in overview

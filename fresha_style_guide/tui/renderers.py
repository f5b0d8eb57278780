from typing import Optional

from rich.console import Console, Group
from rich.markdown import Markdown
from rich.markup import escape
from rich.syntax import Syntax

from fresha_style_guide.guidelines.models import Category, Example, Rule
from fresha_style_guide.guidelines.registry import GuideRegistry
from fresha_style_guide.models import BuildPlan, BuildResult
from fresha_style_guide.tui.enums import EXAMPLE_LABEL_STYLE, UIStyle
from fresha_style_guide.tui.sections import UISection
from fresha_style_guide.tui.tables import (
    ApplyTable,
    CategoryTable,
    PlanTable,
    RuleTable,
)
from fresha_style_guide.utils import compact_home_path, compact_home_paths_in_text


def _example_title(example: Example) -> str:
    style = EXAMPLE_LABEL_STYLE[example.label]
    title = f"[{style}]{example.label.value}[/{style}]"
    if example.caption:
        title = f"{title}: {escape(example.caption)}"
    return title


def _first_paragraph(text: str) -> str:
    return " ".join(text.strip().split("\n\n", 1)[0].split())


class GuideConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_categories(self, registry: GuideRegistry) -> None:
        self.console.print(
            UISection.wrap(
                escape(f"{registry.title} v{registry.version}"),
                CategoryTable.categories_table(registry.list_categories()),
                style=UIStyle.BLUE.value,
            )
        )

    def render_rules(self, registry: GuideRegistry, category: Category) -> None:
        self.console.print(
            UISection.wrap(
                category.name,
                RuleTable.rules_table(registry, category),
                style=UIStyle.CYAN.value,
                subtitle=escape(_first_paragraph(category.overview)) or None,
            )
        )

    def render_rule(self, registry: GuideRegistry, category: Category, rule: Rule) -> None:
        body: list = [UISection.heading(f"{registry.get_summary(rule)}.")]
        if rule.description:
            body.append(Markdown(rule.description))
        self.console.print(
            UISection.wrap(
                f"{category.name}.{rule.name}", Group(*body), style=UIStyle.BLUE.value
            )
        )
        self.console.print(
            UISection.wrap("reasoning", Markdown(rule.rationale), style=UIStyle.CYAN.value)
        )
        for example in rule.examples:
            parts: list = [Syntax(example.code, example.language, word_wrap=True)]
            if example.note:
                parts.append(Markdown(f"> {example.note}"))
            self.console.print(
                UISection.wrap(
                    _example_title(example),
                    Group(*parts),
                    style=EXAMPLE_LABEL_STYLE[example.label],
                )
            )

    def render_summary(
        self, registry: GuideRegistry, category: Optional[Category] = None
    ) -> None:
        categories = [category] if category is not None else registry.list_categories()
        for item in categories:
            self.console.print(
                UISection.wrap(
                    item.name,
                    RuleTable.summary_grid(registry, item),
                    style=UIStyle.CYAN.value,
                )
            )

    def render_check(self, errors: list[Exception], content_root: str) -> None:
        if not errors:
            self.console.print(
                UISection.note(
                    "check",
                    f"Content is valid: {compact_home_path(content_root)}",
                    style=UIStyle.GREEN.value,
                )
            )
            return
        self.render_errors(errors)

    def render_errors(self, errors: list[Exception]) -> None:
        errors_text = "\n".join(
            f"- {escape(compact_home_paths_in_text(str(item)))}" for item in errors
        )
        self.console.print(UISection.note("errors", errors_text, style=UIStyle.RED.value))

    def render_plan(self, plan: BuildPlan, mode: str) -> None:
        writes, removals = PlanTable.split_actions(plan)

        self.console.print(
            UISection.wrap(
                "build overview",
                PlanTable.summary_block(plan, mode=mode),
                style=UIStyle.BLUE.value,
            )
        )
        if writes:
            self.console.print(
                UISection.wrap(
                    "pages",
                    PlanTable.actions_table(writes, plan.output_dir),
                    style=UIStyle.CYAN.value,
                )
            )
        if removals:
            self.console.print(
                UISection.wrap(
                    "stale pages",
                    PlanTable.actions_table(removals, plan.output_dir),
                    style=UIStyle.MAGENTA.value,
                )
            )
        if not plan.has_changes():
            self.console.print(
                UISection.note("actions", "No actions required.", style=UIStyle.DIM.value)
            )
        if plan.errors:
            self.render_errors(plan.errors)
        if plan.skipped:
            skipped_text = "\n".join(
                f"- {escape(compact_home_paths_in_text(item))}" for item in plan.skipped
            )
            self.console.print(
                UISection.note("skipped", skipped_text, style=UIStyle.YELLOW.value)
            )

    def render_build_result(self, result: BuildResult) -> None:
        self.console.print(
            UISection.wrap(
                "build",
                ApplyTable.stats_table(applied=result.applied, failed=result.failed),
                style=UIStyle.GREEN.value if result.failed == 0 else UIStyle.RED.value,
            )
        )
        if result.failures:
            failure_text = "\n".join(
                f"- {escape(compact_home_paths_in_text(item))}"
                for item in result.failures
            )
            self.console.print(
                UISection.note("failures", failure_text, style=UIStyle.RED.value)
            )

    def render_export_saved(self, path: str) -> None:
        self.console.print(
            UISection.note(
                "export",
                f"Guide exported to [bold]{escape(compact_home_path(path))}[/bold]",
                style=UIStyle.GREEN.value,
            )
        )

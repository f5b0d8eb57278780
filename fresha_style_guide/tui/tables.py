from collections import Counter

from rich.markup import escape
from rich.table import Column, Table

from fresha_style_guide.guidelines.models import Category
from fresha_style_guide.guidelines.registry import GuideRegistry
from fresha_style_guide.models import Action, ActionKind, BuildPlan
from fresha_style_guide.tui.enums import ACTION_STATUS_STYLE, UIStyle


class CategoryTable:
    @staticmethod
    def categories_table(categories: list[Category]) -> Table:
        table = Table(
            Column(header="Category", width=18),
            Column(header="Slug", width=18),
            Column(header="Rules", width=6, justify="right"),
            Column(header="Overview", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for category in categories:
            table.add_row(
                category.name,
                category.slug,
                str(len(category.rules)),
                escape(category.overview),
            )
        return table


class RuleTable:
    @staticmethod
    def rules_table(registry: GuideRegistry, category: Category) -> Table:
        table = Table(
            Column(header="#", width=3, justify="right"),
            Column(header="Rule", width=28, overflow="fold"),
            Column(header="Summary", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for index, rule in enumerate(category.rules, start=1):
            table.add_row(str(index), rule.name, escape(registry.get_summary(rule)))
        return table

    @staticmethod
    def summary_grid(registry: GuideRegistry, category: Category) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style=UIStyle.CYAN.value, no_wrap=True)
        table.add_column(overflow="fold")
        for rule in category.rules:
            table.add_row(rule.name, escape(registry.get_summary(rule)))
        return table


class PlanTable:
    @staticmethod
    def summary_block(plan: BuildPlan, mode: str):
        counts = Counter(action.status.value for action in plan.actions)
        chips = [f"{key}={value}" for key, value in sorted(counts.items()) if value > 0]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Mode", mode)
        table.add_row("Output", escape(str(plan.output_dir)))
        table.add_row("Actions", str(len(plan.actions)))
        table.add_row("Statuses", "  ".join(chips))
        return table

    @staticmethod
    def split_actions(plan: BuildPlan) -> tuple[list[Action], list[Action]]:
        writes: list[Action] = []
        removals: list[Action] = []
        for action in plan.actions:
            if action.kind == ActionKind.REMOVE_FILE:
                removals.append(action)
            else:
                writes.append(action)
        return writes, removals

    @staticmethod
    def actions_table(actions: list[Action], output_dir) -> Table:
        table = Table(
            Column(header="Status", width=10),
            Column(header="File", overflow="ellipsis", max_width=58),
            Column(header="Reason", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )

        for action in actions:
            status_style = ACTION_STATUS_STYLE.get(action.status, UIStyle.WHITE.value)
            status_text = f"[{status_style}]{action.status.value}[/{status_style}]"
            table.add_row(
                status_text,
                escape(action.path.relative_to(output_dir).as_posix()),
                escape(action.detail),
            )
        return table


class ApplyTable:
    @staticmethod
    def stats_table(applied: int, failed: int) -> Table:
        table = Table(show_header=False, box=None)
        for key, value in (("applied", applied), ("failed", failed)):
            table.add_row(f"[bold]{key}[/bold]", str(value))
        return table

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from fresha_style_guide import __version__
from fresha_style_guide.errors import NotFoundError, StyleGuideError
from fresha_style_guide.executor import BuildExecutor
from fresha_style_guide.guidelines.registry import GuideRegistry, load_registry
from fresha_style_guide.guidelines.repository import GuideRepository
from fresha_style_guide.guidelines.serializer import guide_to_dict
from fresha_style_guide.models import BuildPlan, OutputFormat
from fresha_style_guide.planner import BuildPlanner
from fresha_style_guide.renderers import create_renderer
from fresha_style_guide.renderers.base import check_renderable
from fresha_style_guide.settings import Settings, SettingsRepository
from fresha_style_guide.tui import GuideConsoleUI
from fresha_style_guide.utils import dump_json, write_text

logger = logging.getLogger(__name__)

FORMAT_VALUES = [output_format.value for output_format in OutputFormat]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _build_options(func: Callable) -> Callable:
    func = click.option(
        "--output",
        "-o",
        "output_dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Output directory (defaults to settings, then ./site).",
    )(func)
    func = click.option(
        "--format",
        "-f",
        "output_format",
        type=click.Choice(FORMAT_VALUES, case_sensitive=False),
        default=None,
        help="Output format (defaults to settings, then html).",
    )(func)
    return func


def _settings_from_obj(obj: Dict[str, Any]) -> Settings:
    try:
        settings = SettingsRepository().load()
    except StyleGuideError as exc:
        raise click.ClickException(str(exc))
    return settings.merged(content_dir=obj.get("content_dir"))


def _load_registry(settings: Settings) -> GuideRegistry:
    try:
        return load_registry(settings.content_dir)
    except StyleGuideError as exc:
        raise click.ClickException(f"Fatal: {exc}")


def _registry_from_obj(obj: Dict[str, Any]) -> GuideRegistry:
    return _load_registry(_settings_from_obj(obj))


def _plan_build(
    obj: Dict[str, Any], output_format: Optional[str], output_dir: Optional[Path]
) -> tuple[GuideRegistry, Settings, BuildPlan]:
    settings = _settings_from_obj(obj).merged(
        output_dir=output_dir, output_format=output_format
    )
    registry = _load_registry(settings)
    renderer = create_renderer(settings.output_format)
    try:
        files = renderer.render(registry)
    except StyleGuideError as exc:
        raise click.ClickException(f"Fatal: {exc}")
    plan = BuildPlanner(output_dir=settings.output_dir).build(files)
    return registry, settings, plan


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--content",
    "content_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Guide content directory (defaults to the bundled guide).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(__version__, prog_name="fresha-style-guide")
@click.pass_context
def cli(ctx: click.Context, content_dir: Optional[Path], verbose: bool) -> None:
    """Official style guide for Elixir and Phoenix projects at Fresha."""
    _configure_logging(verbose)
    ctx.obj = {"content_dir": content_dir}


@cli.command(help="List guideline categories.")
@click.pass_obj
def categories(obj: Dict[str, Any]) -> None:
    ui = GuideConsoleUI(Console())
    ui.render_categories(_registry_from_obj(obj))


@cli.command(help="List rules of a category with their summaries.")
@click.argument("category")
@click.pass_obj
def rules(obj: Dict[str, Any], category: str) -> None:
    ui = GuideConsoleUI(Console())
    registry = _registry_from_obj(obj)
    try:
        found = registry.get_category(category)
    except NotFoundError as exc:
        raise click.ClickException(str(exc))
    ui.render_rules(registry, found)


@cli.command(help="Show a rule with its reasoning and examples.")
@click.argument("category")
@click.argument("rule")
@click.pass_obj
def show(obj: Dict[str, Any], category: str, rule: str) -> None:
    ui = GuideConsoleUI(Console())
    registry = _registry_from_obj(obj)
    try:
        found_category = registry.get_category(category)
        found_rule = registry.get_rule(found_category, rule)
    except NotFoundError as exc:
        raise click.ClickException(str(exc))
    ui.render_rule(registry, found_category, found_rule)


@cli.command(help="Print one-line summaries of every rule (code review cheat sheet).")
@click.argument("category", required=False)
@click.pass_obj
def summary(obj: Dict[str, Any], category: Optional[str]) -> None:
    ui = GuideConsoleUI(Console())
    registry = _registry_from_obj(obj)
    found = None
    if category is not None:
        try:
            found = registry.get_category(category)
        except NotFoundError as exc:
            raise click.ClickException(str(exc))
    ui.render_summary(registry, found)


@cli.command(help="Validate guide content.")
@click.pass_obj
def check(obj: Dict[str, Any]) -> None:
    ui = GuideConsoleUI(Console())
    settings = _settings_from_obj(obj)
    repository = GuideRepository(settings.content_dir)

    errors = repository.load_errors()
    if not errors:
        try:
            check_renderable(load_registry(settings.content_dir))
        except StyleGuideError as exc:
            errors.append(exc)

    ui.render_check(errors, str(repository.root))
    if errors:
        raise click.exceptions.Exit(1)


@cli.command(help="Build and print a dry-run plan of the rendered guide.")
@_build_options
@click.pass_obj
def plan(
    obj: Dict[str, Any], output_format: Optional[str], output_dir: Optional[Path]
) -> None:
    ui = GuideConsoleUI(Console())
    _, settings, plan_result = _plan_build(obj, output_format, output_dir)
    ui.render_plan(plan_result, mode=f"plan:{settings.output_format.value}")

    if plan_result.errors:
        raise click.exceptions.Exit(1)


@cli.command(help="Render the guide into the output directory.")
@_build_options
@click.pass_obj
def build(
    obj: Dict[str, Any], output_format: Optional[str], output_dir: Optional[Path]
) -> None:
    ui = GuideConsoleUI(Console())
    registry, settings, plan_result = _plan_build(obj, output_format, output_dir)
    ui.render_plan(plan_result, mode=f"build:{settings.output_format.value}")

    if plan_result.errors:
        raise click.ClickException("Build aborted due to errors above.")

    result = BuildExecutor().execute(
        plan_result, version=registry.version, output_format=settings.output_format
    )
    ui.render_build_result(result)

    if result.failed:
        raise click.exceptions.Exit(1)


@cli.command(help="Export the guide as JSON.")
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write to a file instead of stdout.",
)
@click.pass_obj
def export(obj: Dict[str, Any], output_path: Optional[Path]) -> None:
    registry = _registry_from_obj(obj)
    payload = dump_json(guide_to_dict(registry.guide))
    if output_path is None:
        click.echo(payload, nl=False)
        return
    write_text(output_path, payload)
    logger.info("Exported guide %s to %s", registry.version, output_path)
    GuideConsoleUI(Console()).render_export_saved(str(output_path))


def main() -> int:
    try:
        # Non-standalone click returns the exit code of click.exceptions.Exit.
        code = cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return code if isinstance(code, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())

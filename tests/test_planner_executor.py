from pathlib import Path
import json

from fresha_style_guide.executor import BuildExecutor
from fresha_style_guide.guidelines.registry import load_registry
from fresha_style_guide.models import ActionKind, ActionStatus, OutputFormat
from fresha_style_guide.planner import BuildPlanner
from fresha_style_guide.renderers import MarkdownGuideRenderer
from fresha_style_guide.state import BuildStateRepository


def _build(output_dir: Path, files: dict[str, str]):
    plan = BuildPlanner(output_dir=output_dir).build(files)
    result = BuildExecutor().execute(
        plan, version="2.0.0", output_format=OutputFormat.MARKDOWN
    )
    return plan, result


def _statuses(plan) -> dict[str, ActionStatus]:
    return {
        action.path.relative_to(plan.output_dir).as_posix(): action.status
        for action in plan.actions
    }


def test_first_build_creates_every_file(tmp_path: Path) -> None:
    output_dir = tmp_path / "site"
    files = MarkdownGuideRenderer().render(load_registry())

    plan, result = _build(output_dir, files)

    assert set(_statuses(plan).values()) == {ActionStatus.CREATE}
    assert result.applied == len(files)
    assert result.failed == 0
    for name, content in files.items():
        assert (output_dir / name).read_text(encoding="utf-8") == content


def test_second_build_is_noop(tmp_path: Path) -> None:
    output_dir = tmp_path / "site"
    files = MarkdownGuideRenderer().render(load_registry())
    _build(output_dir, files)

    plan = BuildPlanner(output_dir=output_dir).build(
        MarkdownGuideRenderer().render(load_registry())
    )

    assert plan.actions
    assert all(action.status == ActionStatus.NOOP for action in plan.actions)
    assert not plan.has_changes()


def test_changed_file_is_updated(tmp_path: Path) -> None:
    output_dir = tmp_path / "site"
    _build(output_dir, {"README.md": "old\n"})

    plan, result = _build(output_dir, {"README.md": "new\n"})

    assert _statuses(plan) == {"README.md": ActionStatus.UPDATE}
    assert result.applied == 1
    assert (output_dir / "README.md").read_text(encoding="utf-8") == "new\n"


def test_state_file_lists_managed_files(tmp_path: Path) -> None:
    output_dir = tmp_path / "site"
    _build(output_dir, {"b.md": "b\n", "a.md": "a\n"})

    state = json.loads((output_dir / ".style-guide-build.json").read_text(encoding="utf-8"))

    assert state == {
        "version": "2.0.0",
        "format": "markdown",
        "managed_files": ["a.md", "b.md"],
    }


def test_stale_managed_file_is_removed(tmp_path: Path) -> None:
    output_dir = tmp_path / "site"
    _build(output_dir, {"a.md": "a\n", "b.md": "b\n"})

    plan, result = _build(output_dir, {"a.md": "a\n"})

    assert _statuses(plan) == {"a.md": ActionStatus.NOOP, "b.md": ActionStatus.REMOVE}
    removal = [action for action in plan.actions if action.kind == ActionKind.REMOVE_FILE]
    assert len(removal) == 1
    assert result.applied == 1
    assert not (output_dir / "b.md").exists()
    assert BuildStateRepository(output_dir).managed_files() == ["a.md"]


def test_unmanaged_files_are_never_touched(tmp_path: Path) -> None:
    output_dir = tmp_path / "site"
    output_dir.mkdir()
    (output_dir / "CNAME").write_text("guide.example.com\n", encoding="utf-8")

    plan, _ = _build(output_dir, {"index.html": "<html></html>\n"})

    assert "CNAME" not in _statuses(plan)
    assert (output_dir / "CNAME").exists()


def test_already_deleted_stale_file_is_ignored(tmp_path: Path) -> None:
    output_dir = tmp_path / "site"
    _build(output_dir, {"a.md": "a\n", "b.md": "b\n"})
    (output_dir / "b.md").unlink()

    plan = BuildPlanner(output_dir=output_dir).build({"a.md": "a\n"})

    assert _statuses(plan) == {"a.md": ActionStatus.NOOP}


def test_paths_outside_output_dir_are_skipped(tmp_path: Path) -> None:
    output_dir = tmp_path / "site"

    plan = BuildPlanner(output_dir=output_dir).build(
        {"../escape.md": "x\n", "/etc/passwd": "x\n"}
    )

    assert plan.actions == []
    assert len(plan.skipped) == 2
    assert not (tmp_path / "escape.md").exists()


def test_directory_in_place_of_file_is_conflict(tmp_path: Path) -> None:
    output_dir = tmp_path / "site"
    (output_dir / "README.md").mkdir(parents=True)

    plan, result = _build(output_dir, {"README.md": "# Guide\n"})

    assert _statuses(plan) == {"README.md": ActionStatus.CONFLICT}
    assert result.failed == 1
    assert "Conflict" in result.failures[0]
    assert BuildStateRepository(output_dir).managed_files() == []


def test_corrupt_state_file_is_treated_as_empty(tmp_path: Path) -> None:
    output_dir = tmp_path / "site"
    output_dir.mkdir()
    (output_dir / ".style-guide-build.json").write_text("{broken", encoding="utf-8")

    assert BuildStateRepository(output_dir).managed_files() == []


def test_plan_summary_counts(tmp_path: Path) -> None:
    output_dir = tmp_path / "site"
    _build(output_dir, {"a.md": "a\n", "b.md": "b\n"})

    plan = BuildPlanner(output_dir=output_dir).build({"a.md": "changed\n", "c.md": "c\n"})
    summary = plan.summary()

    assert summary["update"] == 1
    assert summary["create"] == 1
    assert summary["remove"] == 1
    assert summary["actions"] == 3
    assert plan.is_valid()


def test_existing_non_utf8_file_is_updated(tmp_path: Path) -> None:
    output_dir = tmp_path / "site"
    output_dir.mkdir()
    (output_dir / "README.md").write_bytes(b"caf\xe9\n")

    plan, result = _build(output_dir, {"README.md": "café\n"})

    assert _statuses(plan) == {"README.md": ActionStatus.UPDATE}
    assert result.failed == 0
    assert (output_dir / "README.md").read_text(encoding="utf-8") == "café\n"

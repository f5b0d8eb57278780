import logging
from typing import Optional, Protocol

from fresha_style_guide.models import (
    Action,
    ActionKind,
    ActionStatus,
    BuildPlan,
    BuildResult,
    OutputFormat,
)
from fresha_style_guide.state import BuildStateRepository
from fresha_style_guide.utils import write_text

logger = logging.getLogger(__name__)


class ActionHandler(Protocol):
    def handle(self, action: Action) -> tuple[bool, Optional[str]]: ...


class WriteTextHandler:
    def handle(self, action: Action) -> tuple[bool, Optional[str]]:
        if action.status == ActionStatus.NOOP:
            return False, None
        if action.status == ActionStatus.CONFLICT:
            return False, f"Conflict (not overwritten): {action.path}"
        if not isinstance(action.payload, str):
            return False, f"Missing text payload for write action: {action.path}"

        write_text(action.path, action.payload)
        return True, None


class RemoveFileHandler:
    def handle(self, action: Action) -> tuple[bool, Optional[str]]:
        if action.status == ActionStatus.NOOP:
            return False, None
        if action.status == ActionStatus.CONFLICT:
            return False, f"Stale cleanup conflict (not a file): {action.path}"
        if action.path.is_file() or action.path.is_symlink():
            action.path.unlink()
            return True, None
        return False, None


class BuildExecutor:
    def __init__(self, state: Optional[BuildStateRepository] = None) -> None:
        self.state = state
        self.handlers: dict[ActionKind, ActionHandler] = {
            ActionKind.WRITE_TEXT: WriteTextHandler(),
            ActionKind.REMOVE_FILE: RemoveFileHandler(),
        }

    def execute(
        self, plan: BuildPlan, version: str, output_format: OutputFormat
    ) -> BuildResult:
        applied = 0
        failed = 0
        failures: list[str] = []

        for action in plan.actions:
            try:
                handler = self.handlers.get(action.kind)
                if handler is None:
                    failed += 1
                    failures.append(f"Unknown action kind: {action.kind.value}")
                    continue

                changed, failure = handler.handle(action)
                if failure is not None:
                    failed += 1
                    failures.append(failure)
                    continue
                if changed:
                    applied += 1
                    logger.info("%s %s", action.status.value, action.path)
            except Exception as exc:
                failed += 1
                failures.append(f"{action.kind.value} failed for {action.path}: {exc}")

        state = self.state or BuildStateRepository(plan.output_dir)
        state.save(plan.managed_files(), version=version, output_format=output_format.value)
        return BuildResult(applied=applied, failed=failed, failures=failures)

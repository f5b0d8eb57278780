import logging
from pathlib import Path, PurePosixPath
from typing import Optional

from fresha_style_guide.models import Action, ActionKind, ActionStatus, BuildPlan
from fresha_style_guide.renderers.base import RenderedFiles
from fresha_style_guide.state import BuildStateRepository
from fresha_style_guide.utils import is_under

logger = logging.getLogger(__name__)


class BuildPlanner:
    def __init__(
        self,
        output_dir: Path,
        state: Optional[BuildStateRepository] = None,
    ) -> None:
        self.output_dir = output_dir
        self.state = state or BuildStateRepository(output_dir)

        self.actions: list[Action] = []
        self.errors: list[Exception] = []
        self.skipped: list[str] = []

    def build(self, files: RenderedFiles) -> BuildPlan:
        self.actions = []
        self.errors = []
        self.skipped = []

        for name, content in files.items():
            target = self._resolve(name)
            if target is None:
                continue
            self._plan_write(target, content)
        self._plan_stale_cleanup(set(files))

        plan = BuildPlan(
            output_dir=self.output_dir,
            actions=self.actions,
            errors=self.errors,
            skipped=self.skipped,
        )
        logger.debug("Planned build into %s: %s", self.output_dir, plan.summary())
        return plan

    def _resolve(self, name: str) -> Optional[Path]:
        relative = PurePosixPath(name)
        target = self.output_dir.joinpath(*relative.parts)
        if relative.is_absolute() or ".." in relative.parts or not is_under(
            target, self.output_dir
        ):
            self.skipped.append(f"Outside of output directory: {name}")
            return None
        return target

    def _plan_write(self, target: Path, content: str) -> None:
        if target.is_dir():
            self.actions.append(
                Action(
                    kind=ActionKind.WRITE_TEXT,
                    path=target,
                    status=ActionStatus.CONFLICT,
                    detail="target is a directory",
                    payload=content,
                )
            )
            return
        if not target.exists():
            status, detail = ActionStatus.CREATE, "new page"
        elif target.read_bytes() == content.encode("utf-8"):
            status, detail = ActionStatus.NOOP, "up to date"
        else:
            status, detail = ActionStatus.UPDATE, "content changed"
        self.actions.append(
            Action(
                kind=ActionKind.WRITE_TEXT,
                path=target,
                status=status,
                detail=detail,
                payload=content,
            )
        )

    def _plan_stale_cleanup(self, current: set[str]) -> None:
        for name in self.state.managed_files():
            if name in current:
                continue
            target = self._resolve(name)
            if target is None or not (target.exists() or target.is_symlink()):
                continue
            if target.is_dir():
                self.actions.append(
                    Action(
                        kind=ActionKind.REMOVE_FILE,
                        path=target,
                        status=ActionStatus.CONFLICT,
                        detail="stale entry is a directory",
                    )
                )
                continue
            self.actions.append(
                Action(
                    kind=ActionKind.REMOVE_FILE,
                    path=target,
                    status=ActionStatus.REMOVE,
                    detail="no longer generated",
                )
            )

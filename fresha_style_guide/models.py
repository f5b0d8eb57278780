from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class OutputFormat(str, Enum):
    HTML = "html"
    MARKDOWN = "markdown"
    JSON = "json"


class ActionKind(str, Enum):
    WRITE_TEXT = "write_text"
    REMOVE_FILE = "remove_file"


class ActionStatus(str, Enum):
    NOOP = "noop"
    CREATE = "create"
    UPDATE = "update"
    REMOVE = "remove"
    CONFLICT = "conflict"


@dataclass
class Action:
    kind: ActionKind
    path: Path
    status: ActionStatus
    detail: str
    payload: Optional[str] = None


@dataclass
class BuildPlan:
    output_dir: Path
    actions: list[Action]
    errors: list[Exception] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    def is_valid(self) -> bool:
        return not self.errors

    def has_changes(self) -> bool:
        return any(action.status != ActionStatus.NOOP for action in self.actions)

    def managed_files(self) -> list[str]:
        return sorted(
            action.path.relative_to(self.output_dir).as_posix()
            for action in self.actions
            if action.kind == ActionKind.WRITE_TEXT
            and action.status != ActionStatus.CONFLICT
        )

    def summary(self) -> dict[str, int]:
        counts = {status.value: 0 for status in ActionStatus}
        for action in self.actions:
            counts[action.status.value] += 1
        counts["actions"] = len(self.actions)
        counts["errors"] = len(self.errors)
        counts["skipped"] = len(self.skipped)
        return counts


@dataclass(frozen=True)
class BuildResult:
    applied: int
    failed: int
    failures: list[str]

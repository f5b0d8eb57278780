from pathlib import Path
from typing import Any

from fresha_style_guide.constants import BUILD_STATE_FILENAME
from fresha_style_guide.utils import read_json_safe, write_json


class BuildStateRepository:
    """Tracks which files in an output directory were produced by a build."""

    def __init__(self, output_dir: Path) -> None:
        self._output_dir = output_dir

    @property
    def state_path(self) -> Path:
        return self._output_dir / BUILD_STATE_FILENAME

    def load(self) -> dict[str, Any]:
        payload, error = read_json_safe(self.state_path)
        if error is not None or not isinstance(payload, dict):
            return {"managed_files": []}
        managed = payload.get("managed_files")
        if not isinstance(managed, list):
            payload["managed_files"] = []
        else:
            payload["managed_files"] = [item for item in managed if isinstance(item, str)]
        return payload

    def managed_files(self) -> list[str]:
        return self.load()["managed_files"]

    def save(self, managed_files: list[str], version: str, output_format: str) -> None:
        write_json(
            self.state_path,
            {
                "version": version,
                "format": output_format,
                "managed_files": sorted(set(managed_files)),
            },
        )

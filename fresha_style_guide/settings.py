import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fresha_style_guide.constants import (
    APP_NAME,
    DEFAULT_OUTPUT_DIRNAME,
    SETTINGS_FILENAME,
)
from fresha_style_guide.errors import InvalidContentSchemaError, InvalidSettingsError
from fresha_style_guide.guidelines.schema import SETTINGS_SCHEMA, validate_payload
from fresha_style_guide.models import OutputFormat
from fresha_style_guide.utils import read_json_safe

logger = logging.getLogger(__name__)


def default_config_dir() -> Path:
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_config) if xdg_config else Path.home() / ".config"
    return base / APP_NAME


@dataclass(frozen=True)
class Settings:
    content_dir: Optional[Path] = None
    output_dir: Path = Path(DEFAULT_OUTPUT_DIRNAME)
    output_format: OutputFormat = OutputFormat.HTML

    def merged(
        self,
        content_dir: Optional[Path] = None,
        output_dir: Optional[Path] = None,
        output_format: Optional[str] = None,
    ) -> "Settings":
        return Settings(
            content_dir=content_dir or self.content_dir,
            output_dir=output_dir or self.output_dir,
            output_format=(
                OutputFormat(output_format.lower())
                if output_format
                else self.output_format
            ),
        )


class SettingsRepository:
    def __init__(self, root: Optional[Path] = None) -> None:
        self._root = root or default_config_dir()

    @property
    def root(self) -> Path:
        return self._root

    @property
    def settings_path(self) -> Path:
        return self._root / SETTINGS_FILENAME

    def load(self) -> Settings:
        payload, error = read_json_safe(self.settings_path)
        if error is not None:
            raise InvalidSettingsError(self.settings_path, f"invalid JSON: {error}")
        if payload is None:
            return Settings()

        try:
            validate_payload(payload, SETTINGS_SCHEMA, path=self.settings_path)
        except InvalidContentSchemaError as exc:
            raise InvalidSettingsError(self.settings_path, exc.detail) from exc

        logger.debug("Loaded settings from %s", self.settings_path)
        defaults = Settings()
        content_dir = payload.get("content_dir")
        output_dir = payload.get("output_dir")
        output_format = payload.get("format")
        return Settings(
            content_dir=Path(content_dir).expanduser() if content_dir else None,
            output_dir=Path(output_dir).expanduser() if output_dir else defaults.output_dir,
            output_format=(
                OutputFormat(output_format) if output_format else defaults.output_format
            ),
        )

import sys
import json
from pathlib import Path
from typing import Any

from click.testing import CliRunner
import pytest
import yaml


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


INLINE_BLOCK_RULE = """---
summary: "Inline blocks should be preferred for simple code that fits one line."
---

## Reasoning

In case of simple and small functions the inline variant of block keeps code compact.

## Examples

Preferred:

```elixir
def add_two(number), do: number + 2
```
"""


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def write_json():
    def _write(path: Path, payload: dict) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")

    return _write


@pytest.fixture
def config_root(tmp_path: Path) -> Path:
    return tmp_path / ".config" / "fresha-style-guide"


@pytest.fixture
def inline_rule_text() -> str:
    return INLINE_BLOCK_RULE


@pytest.fixture
def write_content():
    def _write(
        root: Path,
        rules: dict[str, str],
        name: str = "CodeStyle",
        slug: str = "code_style",
        version: str = "2.0.0",
    ) -> Path:
        manifest = {
            "title": "Test Guide",
            "version": version,
            "overview": "Guide used in tests.",
            "categories": [
                {
                    "name": name,
                    "slug": slug,
                    "overview": "Basic code style and formatting guidelines.",
                    "rules": list(rules),
                }
            ],
        }
        (root / slug).mkdir(parents=True, exist_ok=True)
        (root / "guide.yaml").write_text(
            yaml.safe_dump(manifest, sort_keys=False), encoding="utf-8"
        )
        for rule_name, text in rules.items():
            (root / slug / f"{rule_name}.md").write_text(text, encoding="utf-8")
        return root

    return _write


@pytest.fixture
def content_root(tmp_path: Path, write_content, inline_rule_text: str) -> Path:
    return write_content(tmp_path / "content", {"inline_block_usage": inline_rule_text})


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            env.setdefault("XDG_CONFIG_HOME", str(tmp_path / ".config"))
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()

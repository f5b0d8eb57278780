import functools
import json
from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft202012Validator

from fresha_style_guide.errors import InvalidContentSchemaError

SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"

GUIDE_SCHEMA = "guide.schema.json"
RULE_SCHEMA = "rule.schema.json"
DOCUMENT_SCHEMA = "document.schema.json"
SETTINGS_SCHEMA = "settings.schema.json"


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


@functools.lru_cache(maxsize=None)
def schema_validator(name: str) -> Draft202012Validator:
    schema = json.loads((SCHEMAS_DIR / name).read_text(encoding="utf-8"))
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def schema_errors(payload: Any, name: str) -> list[str]:
    validator = schema_validator(name)
    errors = sorted(
        validator.iter_errors(payload), key=lambda item: [str(p) for p in item.path]
    )
    return [format_schema_error(error) for error in errors]


def validate_payload(payload: Any, name: str, path: Optional[Path] = None) -> None:
    errors = schema_errors(payload, name)
    if errors:
        raise InvalidContentSchemaError(path=path, detail=errors[0])

from pathlib import Path
from typing import Optional


class StyleGuideError(Exception):
    """Base user-facing style guide error."""


class NotFoundError(StyleGuideError):
    def __init__(self, kind: str, identifier: str) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} not found: {identifier}")


class CategoryNotFoundError(NotFoundError):
    def __init__(self, identifier: str) -> None:
        super().__init__(kind="Category", identifier=identifier)


class RuleNotFoundError(NotFoundError):
    def __init__(self, identifier: str, category: Optional[str] = None) -> None:
        self.category = category
        label = f"{category}.{identifier}" if category else identifier
        super().__init__(kind="Rule", identifier=label)


class ContentFileError(StyleGuideError):
    def __init__(self, path: Optional[Path], message: str) -> None:
        self.path = path
        self.message = message
        if path is None:
            super().__init__(message)
        else:
            super().__init__(f"{message}: {path}")


class MalformedContentError(ContentFileError):
    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(path=path, message=f"Malformed content ({message})")
        self.detail = message


class MissingContentError(ContentFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="Missing content file")


class InvalidContentSchemaError(ContentFileError):
    def __init__(self, path: Optional[Path], detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid content schema ({detail})")


class InvalidSettingsError(ContentFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid settings ({detail})")

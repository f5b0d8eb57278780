from typing import Final


APP_NAME: Final[str] = "fresha-style-guide"

GUIDE_MANIFEST_FILENAME: Final[str] = "guide.yaml"
RULE_SUFFIX: Final[str] = ".md"
BUILD_STATE_FILENAME: Final[str] = ".style-guide-build.json"
SETTINGS_FILENAME: Final[str] = "config.json"

SUMMARY_MAX_LENGTH: Final[int] = 100
DEFAULT_EXAMPLE_LANGUAGE: Final[str] = "elixir"
DEFAULT_OUTPUT_DIRNAME: Final[str] = "site"

REASONING_HEADING: Final[str] = "Reasoning"
EXAMPLES_HEADING: Final[str] = "Examples"
PREFERRED_CAPTION: Final[str] = "Preferred"

from fresha_style_guide.guidelines.models import (
    Category,
    Example,
    ExampleLabel,
    Guide,
    Rule,
)
from fresha_style_guide.guidelines.registry import GuideRegistry, load_registry

__all__ = [
    "Category",
    "Example",
    "ExampleLabel",
    "Guide",
    "GuideRegistry",
    "Rule",
    "load_registry",
]

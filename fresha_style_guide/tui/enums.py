from enum import Enum

from fresha_style_guide.guidelines.models import ExampleLabel
from fresha_style_guide.models import ActionStatus


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


ACTION_STATUS_STYLE = {
    ActionStatus.CREATE: UIStyle.GREEN.value,
    ActionStatus.UPDATE: UIStyle.CYAN.value,
    ActionStatus.REMOVE: UIStyle.MAGENTA.value,
    ActionStatus.NOOP: UIStyle.DIM.value,
    ActionStatus.CONFLICT: UIStyle.RED.value,
}

EXAMPLE_LABEL_STYLE = {
    ExampleLabel.PREFERRED: UIStyle.GREEN.value,
    ExampleLabel.DISCOURAGED: UIStyle.RED.value,
}

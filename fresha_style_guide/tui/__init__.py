from fresha_style_guide.tui.renderers import GuideConsoleUI

__all__ = ["GuideConsoleUI"]

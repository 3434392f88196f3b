"""Terminal output helpers."""

from claude_notify.display.colors import Colors, disable_colors, init_colors, supports_color

__all__ = ["Colors", "disable_colors", "init_colors", "supports_color"]

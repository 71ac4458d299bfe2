"""Environment configuration for the Better Thinking server"""

import os

SERVER_NAME = "better-thinking-server"
TOOL_NAME = "better_thinking"


def color_enabled() -> bool:
    """Whether rendered thoughts carry ANSI colour codes.

    ``NO_COLOR`` (any non-empty value) wins over ``BETTER_THINKING_COLOR``.
    """
    if os.getenv("NO_COLOR"):
        return False
    return os.getenv("BETTER_THINKING_COLOR", "1").strip().lower() not in ("0", "false", "no", "off")

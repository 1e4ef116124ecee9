import os
import sys

PROGRAM_NAME = "myshell"

# Prompt colors
COLOR_GREEN_BOLD = "\033[1;32m"
COLOR_BLUE_BOLD = "\033[1;34m"
COLOR_RESET = "\033[0m"
CLEAR_SCREEN = "\033[H\033[2J"

DEFAULT_MAX_LINE = 4096


def _platform_max_line():
    """Maximum command-line length reported by the OS"""
    try:
        value = os.sysconf("SC_ARG_MAX")
    except (ValueError, OSError, AttributeError):
        return DEFAULT_MAX_LINE
    return value if value > 0 else DEFAULT_MAX_LINE


def _max_line_from_env():
    raw = os.environ.get("MYSHELL_MAX_LINE")
    if not raw:
        return _platform_max_line()
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value <= 0:
        print(f"Warning: ignoring invalid MYSHELL_MAX_LINE={raw!r}", file=sys.stderr)
        return _platform_max_line()
    return value


MAX_LINE = _max_line_from_env()

# Echo "Command:" / "Arg:" lines before dispatch
TRACE_COMMANDS = os.environ.get("MYSHELL_TRACE", "") not in ("", "0")

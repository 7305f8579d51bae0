"""Coloured terminal logger for Dataset Sorter.

Prints module-prefixed, ANSI-coloured lines so a long sort run stays
readable.  Falls back to plain text when stdout is not a terminal or when
``SORTER_NO_COLOR=1`` / ``NO_COLOR`` is set.
"""

from __future__ import annotations

import os
import sys


# ---------------------------------------------------------------------------
# ANSI colour codes
# ---------------------------------------------------------------------------

_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"

_FG_RED = "\033[31m"
_FG_GREEN = "\033[32m"
_FG_YELLOW = "\033[33m"
_FG_BLUE = "\033[34m"
_FG_CYAN = "\033[36m"
_FG_WHITE = "\033[37m"
_FG_BRIGHT_GREEN = "\033[92m"


def _supports_color() -> bool:
    """Heuristic check for ANSI colour support."""
    if os.getenv("SORTER_NO_COLOR", "").strip().lower() in {"1", "true", "yes"}:
        return False
    if os.getenv("NO_COLOR"):
        return False
    if os.name == "nt":
        # Windows Terminal and VS Code render ANSI; plain conhost may not
        return bool(os.getenv("WT_SESSION") or os.getenv("TERM_PROGRAM") == "vscode")
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


_COLOR_ENABLED = _supports_color()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class SorterLogger:
    """Simple coloured logger with module prefix."""

    _MODULE_COLORS: dict[str, str] = {
        "Pipeline": _FG_CYAN,
        "Resolver": _FG_BLUE,
        "Writer": _FG_GREEN,
        "CLI": _FG_BRIGHT_GREEN,
    }

    def __init__(self, module: str) -> None:
        self.module = module
        self._prefix_color = self._MODULE_COLORS.get(module, _FG_WHITE)

    def _format(self, level_color: str, level: str, message: str) -> str:
        if _COLOR_ENABLED:
            return (
                f"{self._prefix_color}{_BOLD}[{self.module}]{_RESET} "
                f"{level_color}{level}{_RESET} {message}"
            )
        return f"[{self.module}] {level} {message}"

    def info(self, message: str) -> None:
        print(self._format(_FG_GREEN, ">", message))

    def success(self, message: str) -> None:
        print(self._format(_FG_BRIGHT_GREEN, "+", message))

    def warn(self, message: str) -> None:
        print(self._format(_FG_YELLOW, "!", message))

    def error(self, message: str) -> None:
        print(self._format(_FG_RED, "X", message), file=sys.stderr)

    def status(self, message: str) -> None:
        """Dimmed status line for per-file events."""
        if _COLOR_ENABLED:
            print(f"{self._prefix_color}{_BOLD}[{self.module}]{_RESET} {_DIM}{message}{_RESET}")
        else:
            print(f"[{self.module}] {message}")

    def highlight(self, message: str) -> None:
        """Bold bright message (run start, mode banner)."""
        if _COLOR_ENABLED:
            print(f"{self._prefix_color}{_BOLD}[{self.module}] * {message}{_RESET}")
        else:
            print(f"[{self.module}] * {message}")

from __future__ import annotations

import os
import sys
from typing import TextIO


BRIGHT_GREEN = "\033[92m"
RESET = "\033[0m"


def color_enabled(mode: str, stream: TextIO) -> bool:
    if mode == "always":
        return True
    if mode == "never":
        return False
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class Console:
    """Status lines on ``out`` (optionally bright green), errors on ``err``."""

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None, *, color: str = "auto") -> None:
        self._out = out if out is not None else sys.stdout
        self._err = err if err is not None else sys.stderr
        self._color = color_enabled(color, self._out)

    def info(self, line: str) -> None:
        if self._color:
            line = f"{BRIGHT_GREEN}{line}{RESET}"
        print(line, file=self._out, flush=True)

    def error(self, line: str) -> None:
        print(line, file=self._err, flush=True)

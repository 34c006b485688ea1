#!/usr/bin/env python3
# orbit/ui/utils/console.py
from __future__ import annotations

import os
import sys
import threading

# Single shared print mutex for shell output and logging.
PRINT_MUTEX = threading.Lock()


def print_line(text: str = "", *, file=None, flush: bool = False) -> None:
    """Thread-safe single-line print shared by the shell and log handlers."""
    target = file if file is not None else sys.stdout
    with PRINT_MUTEX:
        target.write(f"{text}\n")
        if flush:
            target.flush()


def set_terminal_title(title_text: str) -> None:
    """Set the terminal window title (xterm escape; `title` on Windows)."""
    if os.name == "nt":
        os.system(f"title {title_text}")
    elif sys.stdout.isatty():
        sys.stdout.write(f"\x1b]2;{title_text}\x07")
        sys.stdout.flush()

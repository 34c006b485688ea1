#!/usr/bin/env python3
# orbit/plugins/echo.py
from __future__ import annotations

"""
Echo plugin. It only has a default command, so `echo <words...>` runs `say`.
"""

from orbit.commands import PatternKind, arguments, command, flag, option, plugin, register_plugin


@command(
    arguments("words"),
    flag("upper", short="u", description="Shout it."),
    option("times", short="t", pattern=PatternKind.INTEGER, default="1"),
    example="echo hello world -u -t 3",
)
def say(words, upper, times) -> str:
    """Print the words back."""
    text = " ".join(words) if isinstance(words, tuple) else (words or "")
    if upper:
        text = text.upper()
    try:
        count = int(times)
    except ValueError:
        return f"Not a number: {times}"
    return "\n".join([text] * count)


ECHO_PLUGIN = register_plugin(
    plugin("echo", default=say, description="Repeat text back to the console.")
)

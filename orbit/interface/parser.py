#!/usr/bin/env python3
# orbit/interface/parser.py
from __future__ import annotations

"""
Tokenizing helpers for command lines.

Responsibilities:
- Tokenize a command line into shell-like tokens.
- Recognize flag-shaped tokens (`--name`, `-x`).
- Render compact Usage strings from command metadata.
"""

import re
import shlex

from orbit.commands import CommandMetadata, OptionKind

# `--name` or `-x`; a dash followed by a digit is a value (e.g. "-5")
_FLAG_RE = re.compile(r"--[A-Za-z][\w-]*|-[A-Za-z]")


def tokenize(command_line: str) -> list[str]:
    """Split a raw command line into tokens using POSIX rules."""
    if not command_line.strip():
        return []
    return shlex.split(command_line, posix=True)


def is_flag(token: str) -> bool:
    """True when `token` is shaped like a named option."""
    return _FLAG_RE.fullmatch(token) is not None


def build_usage(command_obj: CommandMetadata, prefix: str = "") -> str:
    """
    Render a compact usage string based on command metadata.

    Examples:
        'ws create <name> [--force] --template <value> [files...]'
        'ws create <name> [--tags <values...>]'
    """
    usage_parts: list[str] = []

    for opt in command_obj.options:
        if opt.kind is OptionKind.NAMED_BOOLEAN:
            token = opt.flag
        elif opt.kind is OptionKind.NAMED_VALUE:
            token = f"{opt.flag} <value>"
        elif opt.kind is OptionKind.NAMED_VALUE_VARARG:
            token = f"{opt.flag} <values...>"
        elif opt.kind is OptionKind.ORDERED_VALUE_VARARG:
            token = f"{opt.name}..."
        else:
            token = opt.name

        if not opt.required:
            token = f"[{token}]"
        elif not opt.kind.is_named:
            token = f"<{token}>"
        usage_parts.append(token)

    head = f"{prefix} {command_obj.name}".strip()
    return f"{head} " + " ".join(usage_parts) if usage_parts else head

#!/usr/bin/env python3
# orbit/interface/completion.py
from __future__ import annotations

"""
Command line completion utilities.

This module offers token-aware suggestions for:
- First token: built-in commands + all registered plugin names.
- 'help <partial>': plugin names.
- Second token: command names of the plugin (plus flags when it has a default command).
- Subsequent tokens: long flags of the command the line resolves to.
"""

import shlex

from orbit.commands import CommandMetadata, PluginMetadata, PluginRegistry

# Built-in verbs always available
BUILT_IN_COMMANDS: tuple[str, ...] = (
    "help", "exit", "quit", "clear", "cls")


def _split_current_token(raw_input: str) -> tuple[list[str], str]:
    """
    Return (parts, current_prefix).

    Behavior:
      - Use shlex.split for shell-like parsing (POSIX).
      - If trailing whitespace exists, append an empty token to signal a new one.
      - On malformed quotes, fall back to whitespace splitting.
    """
    if not raw_input:
        return [], ""

    try:
        parts = shlex.split(raw_input, posix=True)
    except ValueError:
        parts = raw_input.split()
    if raw_input[-1].isspace():
        parts.append("")
    current_prefix = parts[-1] if parts else ""
    return parts, current_prefix


def _flags(command_obj: CommandMetadata | None) -> list[str]:
    if command_obj is None:
        return []
    return [opt.flag for opt in command_obj.named_options()]


def _target_command(plugin_obj: PluginMetadata, second: str) -> CommandMetadata | None:
    """Same precedence as resolution: the default command wins."""
    if plugin_obj.has_default_command:
        return plugin_obj.default_command
    return plugin_obj.get_command(second)


def suggest(text_before_cursor: str, registry: PluginRegistry) -> list[str]:
    """
    Produce suggestions based on the current buffer content.

    Strategy:
      1) If entering the first token, suggest built-ins and all plugin names.
      2) If the first token is 'help', suggest plugin names for the second token.
      3) Second token of a known plugin: its command names (and default-command flags).
      4) Later tokens: flags of the resolved command starting with the current prefix.
    """
    raw_buffer = text_before_cursor.lstrip()
    parts, current_prefix = _split_current_token(raw_buffer)

    # First token: propose built-ins and plugins.
    if len(parts) <= 1:
        universe = [*BUILT_IN_COMMANDS, *registry.names()]
        return sorted([w for w in universe if w.startswith(current_prefix)])

    first_token = parts[0]
    if first_token == "help":
        target_prefix = parts[1] if len(parts) >= 2 else ""
        return sorted([w for w in registry.names() if w.startswith(target_prefix)])

    plugin_obj = registry.get(first_token)
    if plugin_obj is None:
        return []

    if len(parts) == 2:
        universe = plugin_obj.command_names() + _flags(plugin_obj.default_command)
        return sorted({w for w in universe if w.startswith(current_prefix)})

    if not current_prefix.startswith("-"):
        return []
    command_obj = _target_command(plugin_obj, parts[1])
    return sorted([w for w in _flags(command_obj) if w.startswith(current_prefix)])

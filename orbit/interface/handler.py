#!/usr/bin/env python3
# orbit/interface/handler.py
from __future__ import annotations

"""
Line dispatch and help formatting.

Built-ins:
  help            - list plugins
  help <plugin>   - list commands of a plugin with usage
  clear / cls     - clear the screen
  exit / quit     - leave the shell

Anything else is resolved by ExecutionParser and invoked.
"""

import difflib
import logging

from orbit.commands import (
    CommandResolutionError,
    OptionParseError,
    PluginRegistry,
    ShellError,
)
from orbit.interface.execution import ExecutionParser
from orbit.interface.parser import build_usage, tokenize
from orbit.ui import clear_screen, format_table

logger = logging.getLogger(__name__)

# Short hint shown at startup and used in unknown command errors
HELP_TEXT = "Type 'help <plugin>' for more information on a specific plugin."


def _suggest_similar_names(name: str, registry: PluginRegistry) -> str:
    """Return a short suggestion string for misspelled plugins."""
    universe = registry.names() + ["help", "exit", "quit"]
    matches = difflib.get_close_matches(name, universe, n=3, cutoff=0.6)
    return f" Did you mean: {', '.join(matches)}?" if matches else ""


def list_plugins(registry: PluginRegistry) -> str:
    """Render the plugins overview table."""
    plugins = registry.all()
    if not plugins:
        return "No plugins loaded."

    rows = []
    for plugin_obj in sorted(plugins, key=lambda p: p.name.lower()):
        command_count = len(plugin_obj.commands)
        default_name = plugin_obj.default_command.name if plugin_obj.default_command else "-"
        rows.append(
            [plugin_obj.name,
             f"{command_count} command{'s' if command_count != 1 else ''}",
             default_name,
             plugin_obj.description]
        )
    return format_table(rows, headers=["Plugin", "Commands", "Default", "Description"])


def format_plugin_help(name: str, registry: PluginRegistry) -> str:
    """Render the commands table for a specific plugin."""
    plugin_obj = registry.get(name)
    if plugin_obj is None:
        return f"No such plugin: {name}"

    commands = dict(plugin_obj.commands)
    if plugin_obj.default_command is not None:
        commands.setdefault(plugin_obj.default_command.name, plugin_obj.default_command)

    rows = []
    for command_obj in sorted(commands.values(), key=lambda c: c.name.lower()):
        is_default = command_obj is plugin_obj.default_command
        # A default command is typed without its own name
        usage = build_usage(command_obj, prefix=plugin_obj.name)
        if is_default:
            usage = usage.replace(f"{plugin_obj.name} {command_obj.name}", plugin_obj.name, 1)
        rows.append([command_obj.name + (" (default)" if is_default else ""),
                     usage, command_obj.description or "-"])

    return format_table(rows, headers=["Command", "Usage", "Description"])


def handle_line(input_line: str, parser: ExecutionParser) -> str | None:
    """
    Parse and execute one input line.

    Returns:
        - None if nothing should be printed.
        - A printable string (command output or an [error] message).
    """
    line = input_line.strip()
    if not line:
        return None

    lowered = line.lower()
    if lowered in {"exit", "quit"}:
        raise SystemExit()

    if lowered in {"clear", "cls"}:
        clear_screen()
        return None

    if lowered == "help":
        return list_plugins(parser.registry)

    if lowered.startswith("help "):
        _, _, target = line.partition(" ")
        return format_plugin_help(target.strip(), parser.registry)

    try:
        execution = parser.parse(line)
    except ValueError as exc:
        # shlex reports unbalanced quotes as ValueError
        return f"[error] {exc}"
    except (CommandResolutionError, OptionParseError) as exc:
        return f"[error] {exc}"

    if not execution.resolved:
        name = tokenize(line)[0]
        return f"Unknown command: {name}.{_suggest_similar_names(name, parser.registry)} {HELP_TEXT}"

    try:
        result = execution.invoke()
    except (SystemExit, KeyboardInterrupt):
        raise
    except ShellError as exc:
        return f"[error] {exc}"
    except Exception as exc:
        logger.debug("command %s failed", execution.command.name, exc_info=True)
        return f"[error] {type(exc).__name__}: {exc}"

    return None if result is None else str(result)

#!/usr/bin/env python3
# orbit/commands/exceptions.py
from __future__ import annotations

"""Exceptions raised while building metadata and resolving command lines."""

import difflib
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from orbit.commands.command_types import CommandMetadata, PluginMetadata


class ShellError(Exception):
    """Base class for every error raised by the shell core."""


class MetadataError(ShellError, ValueError):
    """Plugin, command or option metadata is inconsistent."""


class CommandResolutionError(ShellError):
    """A plugin was found but no command could be selected for it."""

    def __init__(self, plugin: "PluginMetadata", attempted: str | None = None) -> None:
        self.plugin = plugin
        self.attempted = attempted
        self.available = plugin.command_names()
        message = f"Missing command for plugin [{plugin.name}], available commands: {self.available}"
        if attempted:
            matches = difflib.get_close_matches(attempted, self.available, n=3, cutoff=0.6)
            if matches:
                message += f" Did you mean: {', '.join(matches)}?"
        super().__init__(message)


class OptionParseError(ShellError):
    """One or more tokens matched no option of the resolved command."""

    def __init__(self, command: "CommandMetadata", tokens: Sequence[str]) -> None:
        self.command = command
        self.tokens = tuple(tokens)
        rendered = ", ".join(repr(t) for t in self.tokens)
        super().__init__(f"Unexpected input for command [{command.name}]: {rendered}")

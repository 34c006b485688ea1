#!/usr/bin/env python3
# orbit/commands/__init__.py
from __future__ import annotations

"""
Package for plugin and command metadata.

Provides:
- Metadata structures (`PluginMetadata`, `CommandMetadata`, `OptionMetadata`) and their enums.
- In-memory registry (`REGISTRY`, `PluginRegistry`) and declarative builders.
- Exceptions raised while building metadata or resolving command lines.

This package re-exports public APIs from:
- exceptions.py
- command_types.py
- commands.py
"""


# Re-export from submodules
from .exceptions import (
    ShellError,
    MetadataError,
    CommandResolutionError,
    OptionParseError,
)
from .command_types import (
    OptionKind,
    ValueType,
    PatternKind,
    OptionMetadata,
    CommandMetadata,
    PluginMetadata,
)
from .commands import (
    REGISTRY,
    PluginRegistry,
    OptionSpec,
    flag,
    option,
    values,
    argument,
    arguments,
    command,
    plugin,
    register_plugin,
)

__all__ = [
    "ShellError",
    "MetadataError",
    "CommandResolutionError",
    "OptionParseError",
    "OptionKind",
    "ValueType",
    "PatternKind",
    "OptionMetadata",
    "CommandMetadata",
    "PluginMetadata",
    "REGISTRY",
    "PluginRegistry",
    "OptionSpec",
    "flag",
    "option",
    "values",
    "argument",
    "arguments",
    "command",
    "plugin",
    "register_plugin",
]

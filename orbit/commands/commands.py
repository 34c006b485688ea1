#!/usr/bin/env python3
# orbit/commands/commands.py
from __future__ import annotations

"""
Plugin registry and declarative metadata builders.

This module provides:
- PluginRegistry: in-memory registry of plugins keyed by name.
- option/flag/values/argument/arguments: option templates, indexed by declaration order.
- command: decorator turning a function plus option templates into CommandMetadata.
- plugin / register_plugin: assemble and register PluginMetadata.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from orbit.commands.command_types import (
    CommandMetadata,
    OptionKind,
    OptionMetadata,
    PatternKind,
    PluginMetadata,
    ValueType,
)


class PluginRegistry:
    """Holds all plugin definitions and provides lookup utilities."""

    def __init__(self) -> None:
        # Plugin name -> PluginMetadata
        self._plugins_by_name: Dict[str, PluginMetadata] = {}

    # ---------------- Registration ----------------

    def register(self, plugin_obj: PluginMetadata) -> None:
        """Register a plugin, ensuring no name collisions."""
        if plugin_obj.name.lower() in (key.lower() for key in self._plugins_by_name):
            raise ValueError(f"Plugin '{plugin_obj.name}' already registered.")
        self._plugins_by_name[plugin_obj.name] = plugin_obj

    # ---------------- Lookup ----------------

    def get(self, name: str) -> Optional[PluginMetadata]:
        """Return the plugin registered under `name`, or None."""
        return self._plugins_by_name.get(name)

    def get_plugins(self) -> Mapping[str, PluginMetadata]:
        """Return a read-only snapshot of name -> plugin."""
        return MappingProxyType(dict(self._plugins_by_name))

    def all(self) -> list[PluginMetadata]:
        return list(self._plugins_by_name.values())

    def names(self) -> list[str]:
        """Return all plugin names for completion."""
        return list(self._plugins_by_name.keys())


# Global registry used across the app
REGISTRY = PluginRegistry()


# ---------------- Option templates ----------------

@dataclass(frozen=True, slots=True)
class OptionSpec:
    """An option declaration waiting for its index."""

    name: str
    kind: OptionKind
    value_type: ValueType
    required: bool = False
    default: str | None = None
    pattern: PatternKind = PatternKind.ANY
    short_name: str | None = None
    description: str = ""

    def build(self, index: int) -> OptionMetadata:
        return OptionMetadata(
            name=self.name,
            kind=self.kind,
            index=index,
            value_type=self.value_type,
            required=self.required,
            default=self.default,
            pattern=self.pattern,
            short_name=self.short_name,
            description=self.description,
        )


def _value_type(pattern: PatternKind, path: bool) -> ValueType:
    if path:
        return ValueType.FILE_PATH
    if pattern is not PatternKind.ANY:
        return ValueType.PATTERN
    return ValueType.TEXT


def flag(name: str, *, short: str | None = None, required: bool = False,
         default: str | None = None, description: str = "") -> OptionSpec:
    """Presence-only switch written as `--name`; the callback receives True, False or None when unset."""
    return OptionSpec(name, OptionKind.NAMED_BOOLEAN, ValueType.BOOLEAN, required=required,
                      default=default, short_name=short, description=description)


def option(name: str, *, short: str | None = None, required: bool = False,
           default: str | None = None, pattern: PatternKind = PatternKind.ANY,
           path: bool = False, description: str = "") -> OptionSpec:
    """Named option taking exactly one value: `--name value`."""
    return OptionSpec(name, OptionKind.NAMED_VALUE, _value_type(pattern, path), required=required,
                      default=default, pattern=pattern, short_name=short, description=description)


def values(name: str, *, short: str | None = None, required: bool = False,
           default: str | None = None, pattern: PatternKind = PatternKind.ANY,
           path: bool = False, description: str = "") -> OptionSpec:
    """Named option collecting every value up to the next flag: `--name a b c`."""
    return OptionSpec(name, OptionKind.NAMED_VALUE_VARARG, _value_type(pattern, path), required=required,
                      default=default, pattern=pattern, short_name=short, description=description)


def argument(name: str, *, required: bool = False, default: str | None = None,
             pattern: PatternKind = PatternKind.ANY, path: bool = False,
             description: str = "") -> OptionSpec:
    """Positional option holding a single value."""
    return OptionSpec(name, OptionKind.ORDERED_VALUE, _value_type(pattern, path), required=required,
                      default=default, pattern=pattern, description=description)


def arguments(name: str, *, required: bool = False, default: str | None = None,
              pattern: PatternKind = PatternKind.ANY, path: bool = False,
              description: str = "") -> OptionSpec:
    """Trailing positional option collecting the remaining values."""
    return OptionSpec(name, OptionKind.ORDERED_VALUE_VARARG, _value_type(pattern, path), required=required,
                      default=default, pattern=pattern, description=description)


# ---------------- Commands and plugins ----------------

def command(
    *specs: OptionSpec,
    name: str | None = None,
    description: str | None = None,
    example: str | None = None,
) -> Callable[[Callable[..., Any]], CommandMetadata]:
    """
    Decorator building CommandMetadata for a function.

    - Option indices follow the order of `specs`, matching the function's parameters.
    - Function name is transformed from snake_case to kebab-case for `name` if not provided.
    """

    def wrapper(func: Callable[..., Any]) -> CommandMetadata:
        return CommandMetadata(
            name=(name or func.__name__).replace("_", "-"),
            options=tuple(spec.build(index) for index, spec in enumerate(specs)),
            description=(description or (func.__doc__ or "")).strip(),
            callback=func,
            example=example or "",
        )

    return wrapper


def plugin(
    name: str,
    *commands: CommandMetadata,
    default: CommandMetadata | None = None,
    description: str = "",
) -> PluginMetadata:
    """Group commands under a plugin name; `default` may be one of them or standalone."""
    return PluginMetadata(
        name=name,
        commands={cmd.name: cmd for cmd in commands},
        default_command=default,
        description=description.strip(),
    )


def register_plugin(plugin_obj: PluginMetadata, registry: PluginRegistry | None = None) -> PluginMetadata:
    """Explicit API for modules that construct PluginMetadata objects directly."""
    (registry or REGISTRY).register(plugin_obj)
    return plugin_obj

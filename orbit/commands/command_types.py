#!/usr/bin/env python3
# orbit/commands/command_types.py
from __future__ import annotations

"""
Command metadata structures.

This module defines:
- OptionKind / ValueType / PatternKind: closed sets resolved once when metadata is built.
- OptionMetadata: one declared parameter of a command.
- CommandMetadata: a named, invocable unit with an ordered list of options.
- PluginMetadata: a named group of commands with an optional default command.

All structures are frozen; resolution reads them and never writes.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping

from orbit.commands.exceptions import MetadataError


class OptionKind(Enum):
    """Syntax shape an option accepts on the command line."""

    NAMED_BOOLEAN = "named-boolean"
    NAMED_VALUE = "named-value"
    NAMED_VALUE_VARARG = "named-value-vararg"
    ORDERED_VALUE = "ordered-value"
    ORDERED_VALUE_VARARG = "ordered-value-vararg"

    @property
    def is_named(self) -> bool:
        return self in (OptionKind.NAMED_BOOLEAN, OptionKind.NAMED_VALUE, OptionKind.NAMED_VALUE_VARARG)

    @property
    def is_vararg(self) -> bool:
        return self in (OptionKind.NAMED_VALUE_VARARG, OptionKind.ORDERED_VALUE_VARARG)


class ValueType(Enum):
    """Semantic type of an option value; drives prompt selection."""

    BOOLEAN = "boolean"
    FILE_PATH = "file-path"
    TEXT = "text"
    PATTERN = "pattern"


class PatternKind(Enum):
    """Validation patterns an option value must fully match."""

    ANY = r".*"
    BOOLEAN = r"(?i:true|false|yes|no|y|n|on|off|1|0)"
    INTEGER = r"-?\d+"
    IDENTIFIER = r"[A-Za-z_][A-Za-z0-9_]*"
    DOTTED_NAME = r"[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*"
    FILE_PATH = r"[^\x00]+"

    @property
    def regex(self) -> re.Pattern[str]:
        return re.compile(self.value, re.DOTALL)

    def matches(self, text: str) -> bool:
        """True when the whole of `text` matches this pattern."""
        return self.regex.fullmatch(text) is not None


@dataclass(frozen=True, slots=True)
class OptionMetadata:
    """
    A declared parameter of a command.

    Important fields:
        name: Long name; named options are written as `--name`.
        kind: Syntax shape (see OptionKind).
        index: Position in the parameter array handed to the command.
        value_type: Semantic type used to pick a prompt.
        required: Whether a value must exist before invocation.
        default: Default string used as-is when nothing was supplied.
        pattern: Validation pattern for supplied values.
        short_name: Optional single-letter alias written as `-x`.
    """

    name: str
    kind: OptionKind
    index: int
    value_type: ValueType = ValueType.TEXT
    required: bool = False
    default: str | None = None
    pattern: PatternKind = PatternKind.ANY
    short_name: str | None = None
    description: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise MetadataError("Option name must not be empty.")
        if self.index < 0:
            raise MetadataError(f"Option '{self.name}' has a negative index.")
        if self.kind is OptionKind.NAMED_BOOLEAN and self.value_type is not ValueType.BOOLEAN:
            raise MetadataError(f"Named boolean option '{self.name}' must have a boolean value type.")
        if self.value_type is ValueType.PATTERN and self.pattern is PatternKind.ANY:
            raise MetadataError(f"Pattern-typed option '{self.name}' needs a concrete pattern.")
        if self.short_name is not None and len(self.short_name) != 1:
            raise MetadataError(f"Short name of option '{self.name}' must be one character.")

    @property
    def flag(self) -> str:
        return f"--{self.name}"

    @property
    def short_flag(self) -> str | None:
        return f"-{self.short_name}" if self.short_name else None

    @property
    def has_default(self) -> bool:
        return self.default is not None

    @property
    def descriptor(self) -> str:
        """Human-readable label used in prompts and usage strings."""
        if self.kind.is_named:
            return self.flag
        if self.kind is OptionKind.ORDERED_VALUE_VARARG:
            return f"<{self.name}...>"
        return f"<{self.name}>"


@dataclass(frozen=True, slots=True)
class CommandMetadata:
    """
    A named command and its declared options.

    Options are kept sorted by index; indices are unique and contiguous
    from 0, so `options[i].index == i` always holds.
    """

    name: str
    options: tuple[OptionMetadata, ...] = ()
    description: str = field(default="", compare=False)
    callback: Callable[..., Any] | None = field(default=None, compare=False, repr=False)
    example: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.options, key=lambda o: o.index))
        indices = [o.index for o in ordered]
        if indices != list(range(len(ordered))):
            raise MetadataError(
                f"Command '{self.name}' option indices must be unique and contiguous from 0, got {indices}."
            )

        seen: set[str] = set()
        for opt in ordered:
            for key in (opt.flag, opt.short_flag):
                if key is None:
                    continue
                if key in seen:
                    raise MetadataError(f"Command '{self.name}' declares '{key}' twice.")
                seen.add(key)

        positional = [o for o in ordered if not o.kind.is_named]
        varargs = [o for o in positional if o.kind is OptionKind.ORDERED_VALUE_VARARG]
        if len(varargs) > 1:
            raise MetadataError(f"Command '{self.name}' declares more than one ordered vararg option.")
        if varargs and positional[-1] is not varargs[0]:
            raise MetadataError(f"Ordered vararg option '{varargs[0].name}' must be the last ordered option.")

        object.__setattr__(self, "options", ordered)

    def option(self, name: str) -> OptionMetadata | None:
        """Return the option declared with `name`, or None."""
        for opt in self.options:
            if opt.name == name:
                return opt
        return None

    def find_flag(self, token: str) -> OptionMetadata | None:
        """Return the named option spelled by `token` (`--name` or `-x`), or None."""
        for opt in self.options:
            if opt.kind.is_named and token in (opt.flag, opt.short_flag):
                return opt
        return None

    def ordered_options(self) -> list[OptionMetadata]:
        return [o for o in self.options if not o.kind.is_named]

    def named_options(self) -> list[OptionMetadata]:
        return [o for o in self.options if o.kind.is_named]


@dataclass(frozen=True, slots=True)
class PluginMetadata:
    """A named group of commands, optionally with a default command."""

    name: str
    commands: Mapping[str, CommandMetadata] = field(default_factory=dict)
    default_command: CommandMetadata | None = None
    description: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        for key, cmd in self.commands.items():
            if key != cmd.name:
                raise MetadataError(f"Plugin '{self.name}' maps '{key}' to command '{cmd.name}'.")
        # Freeze the mapping so callers cannot mutate the snapshot
        object.__setattr__(self, "commands", MappingProxyType(dict(self.commands)))

    def get_command(self, name: str) -> CommandMetadata | None:
        return self.commands.get(name)

    @property
    def has_default_command(self) -> bool:
        return self.default_command is not None

    def command_names(self) -> list[str]:
        return sorted(self.commands)

#!/usr/bin/env python3
# orbit/interface/resolver.py
from __future__ import annotations

"""
Parameter resolution and interactive completion.

Every declared option of the resolved command produces exactly one slot of
the parameter array, in ascending index order:

    UNRESOLVED -> VALID          value present and matching its pattern
               -> INVALID_RETRY  value fails its pattern; one pattern-validated prompt
               -> PROMPTING      required, absent, no default; loop until non-empty
               -> DEFAULTED      absent with a default; default used as-is
               -> RESOLVED

No option goes back to UNRESOLVED. An empty vararg sequence counts as absent,
and boolean options are handed to the callback as bool (or None when unset).
"""

import logging
from typing import Any, Mapping

from orbit.commands import CommandMetadata, OptionMetadata, PatternKind, ValueType
from orbit.interface.cli import Shell
from orbit.interface.option_parsers import RawValue

logger = logging.getLogger(__name__)

REQUIRED_MESSAGE = "The option is required to execute this command."

_TRUTHY = {"true", "yes", "y", "on", "1"}


def _is_valid(opt: OptionMetadata, value: RawValue) -> bool:
    """Check a raw value (or each element of a vararg sequence) against the option pattern."""
    if isinstance(value, tuple):
        return all(opt.pattern.matches(item) for item in value)
    return opt.pattern.matches(str(value))


def _is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def _as_flag(value: Any) -> Any:
    """Boolean options reach callbacks as bool whether typed, prompted or defaulted."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return value


class ParameterResolver:
    """Reconciles parsed values against metadata, prompting through `shell` when needed."""

    def __init__(self, shell: Shell) -> None:
        self.shell = shell

    def resolve(self, command_obj: CommandMetadata, values: Mapping[OptionMetadata, RawValue]) -> tuple[Any, ...]:
        parameters: list[Any] = [None] * len(command_obj.options)

        for opt in command_obj.options:
            value: Any = values.get(opt)
            if value == ():
                # bare `--files` carries no values
                value = None

            if value is not None and not _is_valid(opt, value):
                logger.debug("option %s: INVALID_RETRY (%r)", opt.name, value)
                self.shell.println(f"Could not parse [{self._render(value)}]... please try again...")
                value = self.shell.prompt_common(self._label(opt), opt.pattern)
            elif value is None and opt.required and not opt.has_default:
                logger.debug("option %s: PROMPTING", opt.name)
                value = self._prompt_until_present(opt)
            elif value is None and opt.has_default:
                logger.debug("option %s: DEFAULTED (%r)", opt.name, opt.default)
                value = opt.default
            else:
                logger.debug("option %s: VALID (%r)", opt.name, value)

            if opt.value_type is ValueType.BOOLEAN:
                value = _as_flag(value)
            parameters[opt.index] = value

        return tuple(parameters)

    # ---------------- prompting ----------------

    def _prompt_until_present(self, opt: OptionMetadata) -> Any:
        while True:
            value = self._prompt_for(opt)
            if not _is_blank(value):
                return value
            self.shell.println(REQUIRED_MESSAGE)

    def _prompt_for(self, opt: OptionMetadata) -> Any:
        """Issue exactly one prompt, picked by the option's declared type."""
        label = self._label(opt)
        if opt.value_type is ValueType.BOOLEAN:
            return self.shell.prompt_boolean(label)
        if opt.value_type is ValueType.FILE_PATH:
            return self.shell.prompt_file(label)
        if opt.pattern is not PatternKind.ANY:
            return self.shell.prompt_common(label, opt.pattern)
        return self.shell.prompt(label)

    @staticmethod
    def _label(opt: OptionMetadata) -> str:
        return f"{opt.descriptor}: "

    @staticmethod
    def _render(value: RawValue) -> str:
        if isinstance(value, tuple):
            return " ".join(value)
        return str(value)


__all__ = ["ParameterResolver", "REQUIRED_MESSAGE"]

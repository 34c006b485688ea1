#!/usr/bin/env python3
# orbit/interface/execution.py
from __future__ import annotations

"""
Resolution of a raw command line into an Execution.

Grammar accepted:
    <plugin> [<command>] ( <flag> <value>... | <value> )*

Resolution order:
    1) Empty line or unknown plugin -> Execution with no command (not an error).
    2) Second token names a command of the plugin -> consume it.
    3) A plugin default command always replaces the step 2 match.
    4) Still no command -> CommandResolutionError.
    5) Remaining tokens -> composite option parser -> parameter resolver.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from orbit.commands import (
    CommandMetadata,
    CommandResolutionError,
    OptionParseError,
    PluginMetadata,
    PluginRegistry,
    ShellError,
)
from orbit.interface.cli import Shell
from orbit.interface.option_parsers import CompositeOptionParser, TokenCursor, default_option_parser
from orbit.interface.parser import tokenize
from orbit.interface.resolver import ParameterResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Execution:
    """
    A resolved, ready-to-dispatch command line.

    Attributes:
        original_statement: The raw line exactly as typed.
        command: Resolved command, or None when nothing matched.
        parameters: One slot per option, index-aligned to OptionMetadata.index.
        plugin: Plugin the command was resolved from, or None.
    """

    original_statement: str
    command: CommandMetadata | None = None
    parameters: tuple[Any, ...] = ()
    plugin: PluginMetadata | None = None

    @property
    def resolved(self) -> bool:
        return self.command is not None

    def invoke(self) -> Any:
        """Call the command's callback with the resolved parameter array."""
        if self.command is None:
            raise ShellError(f"No command resolved for [{self.original_statement}]")
        if self.command.callback is None:
            raise ShellError(f"Command [{self.command.name}] has no implementation")
        return self.command.callback(*self.parameters)


class ExecutionParser:
    """Turns raw lines into Executions using the registry, option parser and shell."""

    def __init__(
        self,
        registry: PluginRegistry,
        shell: Shell,
        *,
        tokenizer: Callable[[str], Sequence[str]] = tokenize,
        option_parser: CompositeOptionParser | None = None,
    ) -> None:
        self.registry = registry
        self.tokenizer = tokenizer
        self.option_parser = option_parser or default_option_parser()
        self.resolver = ParameterResolver(shell)

    def parse(self, line: str) -> Execution:
        cursor = TokenCursor.of(self.tokenizer(line))
        plugins = self.registry.get_plugins()

        if cursor.exhausted:
            return Execution(original_statement=line)

        first = cursor.peek()
        cursor = cursor.advance(1)
        plugin_obj = plugins.get(first)
        if plugin_obj is None:
            logger.debug("no plugin named %r; leaving line unresolved", first)
            return Execution(original_statement=line)

        command_obj: CommandMetadata | None = None
        second = cursor.peek()
        if second is not None:
            command_obj = plugin_obj.get_command(second)
            if command_obj is not None:
                cursor = cursor.advance(1)

        if plugin_obj.has_default_command:
            # The default wins even over a matched command name
            command_obj = plugin_obj.default_command

        if command_obj is None:
            raise CommandResolutionError(plugin_obj, attempted=second)

        logger.debug("resolved %r to %s:%s", line, plugin_obj.name, command_obj.name)
        parameters = self._parse_parameters(command_obj, cursor.remaining)
        return Execution(
            original_statement=line,
            command=command_obj,
            parameters=parameters,
            plugin=plugin_obj,
        )

    def _parse_parameters(self, command_obj: CommandMetadata, tokens: Sequence[str]) -> tuple[Any, ...]:
        result = self.option_parser.parse(command_obj, tokens)
        if not result.ok:
            raise OptionParseError(command_obj, result.errors)
        return self.resolver.resolve(command_obj, result.values)

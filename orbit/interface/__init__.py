#!/usr/bin/env python3
# orbit/interface/__init__.py
from __future__ import annotations

"""
Package for command line resolution and the interactive console.

Provides:
- Tokenizer and usage rendering.
- Composite option parser and its strategies.
- Parameter resolver that validates, defaults or prompts per option.
- ExecutionParser turning raw lines into Executions.
- Shell primitives and line-reading frontends (prompt_toolkit).
- Token-aware completion and line dispatch / help formatting.
"""


# Parser utilities FIRST (strategies depend on them)
from .parser import tokenize, is_flag, build_usage

# Shell before resolver (resolver prompts through it)
from .cli import (
    Shell,
    PromptToolkitShell,
    BaseCLI,
    PromptToolkitCLI,
    make_cli,
    HISTORY_FILE_PATH,
)

from .option_parsers import (
    TokenCursor,
    Claim,
    ParseResult,
    OptionParser,
    NamedBooleanOptionParser,
    NamedValueOptionParser,
    NamedValueVarargsOptionParser,
    OrderedValueOptionParser,
    OrderedValueVarargsOptionParser,
    ParseErrorParser,
    CompositeOptionParser,
    default_option_parser,
)
from .resolver import ParameterResolver, REQUIRED_MESSAGE
from .execution import Execution, ExecutionParser
from .completion import suggest, BUILT_IN_COMMANDS
from .handler import handle_line, HELP_TEXT, list_plugins, format_plugin_help

__all__ = [
    # parser
    "tokenize",
    "is_flag",
    "build_usage",
    # cli
    "Shell",
    "PromptToolkitShell",
    "BaseCLI",
    "PromptToolkitCLI",
    "make_cli",
    "HISTORY_FILE_PATH",
    # option parsing
    "TokenCursor",
    "Claim",
    "ParseResult",
    "OptionParser",
    "NamedBooleanOptionParser",
    "NamedValueOptionParser",
    "NamedValueVarargsOptionParser",
    "OrderedValueOptionParser",
    "OrderedValueVarargsOptionParser",
    "ParseErrorParser",
    "CompositeOptionParser",
    "default_option_parser",
    # resolution
    "ParameterResolver",
    "REQUIRED_MESSAGE",
    "Execution",
    "ExecutionParser",
    # completion
    "suggest",
    "BUILT_IN_COMMANDS",
    # handler
    "handle_line",
    "HELP_TEXT",
    "list_plugins",
    "format_plugin_help",
]

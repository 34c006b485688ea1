#!/usr/bin/env python3
# orbit/interface/cli.py
from __future__ import annotations

"""
Interactive terminal primitives.

Two roles live here:
    - Shell: blocking print/prompt calls used while completing parameters.
      Each call asks once; retry policy belongs to the resolver.
    - CLI frontends: read whole command lines with history and completion.
"""

import getpass
import platform
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from orbit.commands import PatternKind
from orbit.ui import print_line

if TYPE_CHECKING:  # pragma: no cover
    from orbit.commands import PluginRegistry

# History location in the user home directory (readable name across OSes)
HISTORY_FILE_PATH = Path.home() / ".orbit_history"


@runtime_checkable
class Shell(Protocol):
    """Capability the resolver prompts through."""

    def println(self, text: str) -> None:  # pragma: no cover - signature only
        ...

    def prompt(self, label: str) -> str:  # pragma: no cover - signature only
        ...

    def prompt_boolean(self, label: str) -> bool:  # pragma: no cover - signature only
        ...

    def prompt_file(self, label: str) -> Path | str:  # pragma: no cover - signature only
        ...

    def prompt_common(self, label: str, pattern: PatternKind) -> str:  # pragma: no cover - signature only
        ...


class PromptToolkitShell:
    """Shell backed by prompt_toolkit; output goes through print_line."""

    def __init__(self) -> None:
        from prompt_toolkit import prompt
        from prompt_toolkit.completion import PathCompleter
        from prompt_toolkit.shortcuts import confirm

        self._prompt = prompt
        self._confirm = confirm
        self._path_completer = PathCompleter(expanduser=True)

    def println(self, text: str) -> None:
        print_line(text, flush=True)

    def prompt(self, label: str) -> str:
        return self._prompt(label)

    def prompt_boolean(self, label: str) -> bool:
        return bool(self._confirm(label, suffix="(y/n) "))

    def prompt_file(self, label: str) -> Path | str:
        text = self._prompt(label, completer=self._path_completer, complete_while_typing=True)
        # Blank stays blank so the caller can insist on a value
        return Path(text.strip()).expanduser() if text.strip() else ""

    def prompt_common(self, label: str, pattern: PatternKind) -> str:
        from prompt_toolkit.validation import Validator

        validator = Validator.from_callable(
            pattern.matches,
            error_message=f"Value must match {pattern.name.lower().replace('_', ' ')}",
            move_cursor_to_end=True,
        )
        return self._prompt(label, validator=validator, validate_while_typing=False)


class BaseCLI:
    """
    Base interface for line-reading frontends.

    Subclasses may override:
        - setup()
        - get_line()
        - teardown()

    This base reads with plain input() and provides context manager support
    to guarantee teardown.
    """

    prompt_text = "orbit> "

    def setup(self) -> None:
        ...

    def get_line(self) -> str:
        return input(self.prompt_text)

    def teardown(self) -> None:
        ...

    # Context manager helpers
    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()


class PromptToolkitCLI(BaseCLI):
    """Line editor with history and live completion of plugins, commands and flags."""

    def __init__(
        self,
        registry: "PluginRegistry",
        *,
        history_path: Path = HISTORY_FILE_PATH,
        prompt_text: str | None = None,
        enable_completion: bool = True,
    ) -> None:
        from prompt_toolkit import prompt
        from prompt_toolkit.completion import Completer, Completion
        from prompt_toolkit.history import FileHistory

        # reuse the same token logic as completion.suggest uses
        from orbit.interface.completion import _split_current_token, suggest

        self._prompt = prompt
        self._history_path = history_path
        self._history = FileHistory(str(history_path))
        self.username_display = getpass.getuser() or "user"
        if prompt_text:
            self.prompt_text = prompt_text
        else:
            self.prompt_text = f"[{self.username_display}@{platform.node()}]$ "

        class _Completer(Completer):
            def get_completions(self, document, complete_event):
                text_before_cursor = document.text_before_cursor
                _, current_prefix = _split_current_token(text_before_cursor)
                replace_len = len(current_prefix)
                for word in suggest(text_before_cursor, registry):
                    # replace exactly the current token
                    yield Completion(word, start_position=-replace_len)

        self._completer = _Completer() if enable_completion else None

    def setup(self) -> None:
        self._history_path.touch(exist_ok=True)

    def get_line(self) -> str:
        return self._prompt(
            self.prompt_text,
            history=self._history,
            completer=self._completer,
            complete_while_typing=self._completer is not None,
        )


def make_cli(registry: "PluginRegistry", **kwargs) -> BaseCLI:
    """Factory for the line-reading frontend."""
    return PromptToolkitCLI(registry, **kwargs)

"""Shared fixtures: a scripted shell and a small plugin registry."""

from collections import defaultdict, deque

import pytest

from orbit.commands import (
    PatternKind,
    PluginRegistry,
    argument,
    arguments,
    command,
    flag,
    option,
    plugin,
    values,
)
from orbit.interface import ExecutionParser


class ScriptedShell:
    """Shell double answering prompts from per-method queues and recording every call."""

    def __init__(self, **responses):
        self.responses = defaultdict(deque)
        for method, answers in responses.items():
            self.responses[method].extend(answers)
        self.calls = []
        self.printed = []

    def _answer(self, method, label, *extra):
        self.calls.append((method, label, *extra))
        if not self.responses[method]:
            raise AssertionError(f"unexpected {method}({label!r})")
        return self.responses[method].popleft()

    def println(self, text):
        self.printed.append(text)

    def prompt(self, label):
        return self._answer("prompt", label)

    def prompt_boolean(self, label):
        return self._answer("prompt_boolean", label)

    def prompt_file(self, label):
        return self._answer("prompt_file", label)

    def prompt_common(self, label, pattern):
        return self._answer("prompt_common", label, pattern)

    def count(self, method):
        return sum(1 for call in self.calls if call[0] == method)


@command(option("flag"), argument("target"))
def cmd1(flag_value, target):
    """Echo a flag and a target."""
    return f"{flag_value}:{target}"


@command(values("files"), option("other"))
def cmd2(files, other):
    return f"{len(files or ())} files, other={other}"


@command(argument("subject"), arguments("rest"), flag("verbose", short="v"))
def run(subject, rest, verbose):
    """Default action of plugin-b."""
    return f"run {subject} {list(rest or ())} verbose={verbose}"


@command(argument("subject"))
def named(subject):
    return f"named {subject}"


@command(
    flag("force", required=True),
    option("count", pattern=PatternKind.INTEGER),
    option("mode", default="fast"),
    argument("path", path=True, required=True),
    option("label", required=True),
    option("name", pattern=PatternKind.IDENTIFIER, required=True),
)
def settings(force, count, mode, path, label, name):
    return None


@pytest.fixture
def registry():
    reg = PluginRegistry()
    reg.register(plugin("pluginA", cmd1, cmd2, description="Sample plugin."))
    reg.register(plugin("pluginB", named, default=run))
    reg.register(plugin("pluginC", settings))
    return reg


@pytest.fixture
def shell():
    return ScriptedShell()


@pytest.fixture
def make_parser(registry):
    def _make(shell):
        return ExecutionParser(registry, shell)

    return _make


@pytest.fixture
def parser(make_parser, shell):
    return make_parser(shell)

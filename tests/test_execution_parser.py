"""Tests for plugin/command resolution and Execution assembly."""

import dataclasses

import pytest

from orbit.commands import CommandResolutionError, OptionParseError, ShellError
from orbit.interface import Execution, ExecutionParser

from conftest import ScriptedShell


class TestUnresolvedLines:
    def test_empty_line_is_not_an_error(self, parser):
        execution = parser.parse("")
        assert execution.original_statement == ""
        assert execution.command is None
        assert not execution.resolved

    def test_whitespace_only_line(self, parser):
        execution = parser.parse("   ")
        assert execution.original_statement == "   "
        assert execution.command is None

    def test_unknown_plugin_returns_unresolved_execution(self, parser):
        execution = parser.parse("doesnotexist arg1")
        assert execution.original_statement == "doesnotexist arg1"
        assert execution.command is None
        assert execution.parameters == ()
        assert execution.plugin is None


class TestCommandSelection:
    def test_named_command(self, parser):
        execution = parser.parse("pluginA cmd1 --flag value positional1")
        assert execution.plugin.name == "pluginA"
        assert execution.command.name == "cmd1"
        assert execution.parameters == ("value", "positional1")

    def test_flag_and_positional_order_does_not_matter(self, parser):
        execution = parser.parse("pluginA cmd1 positional1 --flag value")
        assert execution.parameters == ("value", "positional1")

    def test_default_command_used_when_second_token_is_not_a_command(self, parser):
        execution = parser.parse("pluginB somethingElse")
        assert execution.command.name == "run"
        # The unmatched token stays in the queue and becomes an option value
        assert execution.parameters == ("somethingElse", None, None)

    def test_default_command_overrides_a_matched_command_name(self, parser):
        execution = parser.parse("pluginB named arg")
        assert execution.command.name == "run"
        assert execution.parameters == ("arg", None, None)

    def test_default_command_without_extra_tokens(self, parser):
        shell = ScriptedShell()
        execution = ExecutionParser(parser.registry, shell).parse("pluginB")
        assert execution.command.name == "run"
        assert execution.parameters == (None, None, None)
        assert shell.calls == []

    def test_missing_command_raises_with_available_names(self, parser):
        with pytest.raises(CommandResolutionError) as excinfo:
            parser.parse("pluginA nope")
        err = excinfo.value
        assert err.plugin.name == "pluginA"
        assert err.available == ["cmd1", "cmd2"]
        assert "pluginA" in str(err)
        assert "cmd1" in str(err) and "cmd2" in str(err)

    def test_missing_command_suggests_close_names(self, parser):
        with pytest.raises(CommandResolutionError, match="Did you mean: cmd"):
            parser.parse("pluginA cmd3")

    def test_plugin_alone_without_default_raises(self, parser):
        with pytest.raises(CommandResolutionError):
            parser.parse("pluginA")

    def test_plugin_lookup_is_case_sensitive(self, parser):
        assert not parser.parse("plugina cmd1").resolved


class TestParameters:
    def test_named_vararg_stops_before_next_flag(self, parser):
        execution = parser.parse("pluginA cmd2 --files a b c --other x")
        assert execution.parameters == (("a", "b", "c"), "x")

    def test_bare_named_vararg_is_treated_as_absent(self, parser):
        execution = parser.parse("pluginA cmd2 --files --other x")
        assert execution.parameters == (None, "x")

    def test_ordered_vararg_collects_tail(self, parser):
        execution = parser.parse("pluginB first second third -v")
        assert execution.parameters == ("first", ("second", "third"), True)

    def test_ordered_vararg_continues_after_a_flag(self, parser):
        execution = parser.parse("pluginB first second --verbose third")
        assert execution.parameters == ("first", ("second", "third"), True)

    def test_quoted_tokens_stay_whole(self, parser):
        execution = parser.parse("pluginA cmd1 --flag 'two words' \"a b\"")
        assert execution.parameters == ("two words", "a b")

    def test_parameter_array_is_index_aligned(self, parser, registry):
        for line in ("pluginA cmd1 --flag v t", "pluginA cmd2", "pluginB x y z"):
            execution = parser.parse(line)
            options = execution.command.options
            assert len(execution.parameters) == len(options)
            for i, opt in enumerate(options):
                assert opt.index == i

    def test_unknown_flag_is_a_parse_error(self, parser):
        with pytest.raises(OptionParseError) as excinfo:
            parser.parse("pluginA cmd1 --nope t")
        assert excinfo.value.tokens == ("--nope",)
        assert excinfo.value.command.name == "cmd1"

    def test_surplus_positional_is_a_parse_error(self, parser):
        with pytest.raises(OptionParseError) as excinfo:
            parser.parse("pluginA cmd1 one two")
        assert excinfo.value.tokens == ("two",)

    def test_parse_error_happens_before_any_prompt(self, registry):
        shell = ScriptedShell()
        with pytest.raises(OptionParseError):
            ExecutionParser(registry, shell).parse("pluginC settings --bogus")
        assert shell.calls == []


class TestExecution:
    def test_execution_is_immutable(self, parser):
        execution = parser.parse("pluginA cmd1 --flag v t")
        with pytest.raises(dataclasses.FrozenInstanceError):
            execution.command = None

    def test_invoke_calls_callback_with_parameters(self, parser):
        execution = parser.parse("pluginA cmd1 --flag v t")
        assert execution.invoke() == "v:t"

    def test_invoke_unresolved_raises(self):
        with pytest.raises(ShellError):
            Execution(original_statement="nothing").invoke()

    def test_custom_tokenizer_is_used(self, registry):
        shell = ScriptedShell()
        parser = ExecutionParser(registry, shell, tokenizer=lambda line: line.split(","))
        execution = parser.parse("pluginA,cmd1,--flag,v,t")
        assert execution.parameters == ("v", "t")

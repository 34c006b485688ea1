"""Tests for metadata structures, builders and the plugin registry."""

import pytest

from orbit.commands import (
    CommandMetadata,
    CommandResolutionError,
    MetadataError,
    OptionKind,
    OptionMetadata,
    PatternKind,
    PluginMetadata,
    PluginRegistry,
    ValueType,
    argument,
    arguments,
    command,
    flag,
    option,
    plugin,
    register_plugin,
    values,
)


class TestOptionMetadata:
    def test_descriptors(self):
        assert OptionMetadata("name", OptionKind.NAMED_VALUE, 0).descriptor == "--name"
        assert OptionMetadata("src", OptionKind.ORDERED_VALUE, 0).descriptor == "<src>"
        assert OptionMetadata("rest", OptionKind.ORDERED_VALUE_VARARG, 0).descriptor == "<rest...>"

    def test_short_flag(self):
        opt = OptionMetadata("verbose", OptionKind.NAMED_BOOLEAN, 0, value_type=ValueType.BOOLEAN, short_name="v")
        assert opt.flag == "--verbose"
        assert opt.short_flag == "-v"

    def test_boolean_kind_requires_boolean_type(self):
        with pytest.raises(MetadataError):
            OptionMetadata("x", OptionKind.NAMED_BOOLEAN, 0)

    def test_pattern_type_requires_pattern(self):
        with pytest.raises(MetadataError):
            OptionMetadata("x", OptionKind.NAMED_VALUE, 0, value_type=ValueType.PATTERN)

    def test_options_are_hashable_keys(self):
        opt = OptionMetadata("x", OptionKind.NAMED_VALUE, 0)
        assert {opt: "v"}[opt] == "v"


class TestPatternKind:
    @pytest.mark.parametrize(
        "pattern,text,expected",
        [
            (PatternKind.ANY, "", True),
            (PatternKind.INTEGER, "42", True),
            (PatternKind.INTEGER, "4x2", False),
            (PatternKind.IDENTIFIER, "snake_case1", True),
            (PatternKind.IDENTIFIER, "1abc", False),
            (PatternKind.DOTTED_NAME, "org.example.app", True),
            (PatternKind.DOTTED_NAME, "org..app", False),
            (PatternKind.BOOLEAN, "Yes", True),
        ],
    )
    def test_full_match(self, pattern, text, expected):
        assert pattern.matches(text) is expected


class TestCommandMetadata:
    def test_options_sorted_by_index(self):
        cmd = CommandMetadata("c", (
            OptionMetadata("b", OptionKind.ORDERED_VALUE, 1),
            OptionMetadata("a", OptionKind.ORDERED_VALUE, 0),
        ))
        assert [o.name for o in cmd.options] == ["a", "b"]

    @pytest.mark.parametrize("indices", [(0, 0), (0, 2), (1,)])
    def test_indices_must_be_contiguous_and_unique(self, indices):
        options = tuple(OptionMetadata(f"o{i}", OptionKind.ORDERED_VALUE, index) for i, index in enumerate(indices))
        with pytest.raises(MetadataError):
            CommandMetadata("c", options)

    def test_duplicate_flags_rejected(self):
        with pytest.raises(MetadataError):
            command(option("x", short="a"), option("y", short="a"))(lambda x, y: None)

    def test_ordered_vararg_must_be_last_positional(self):
        with pytest.raises(MetadataError):
            command(arguments("rest"), argument("after"))(lambda rest, after: None)

    def test_named_options_may_follow_ordered_vararg(self):
        cmd = command(arguments("rest"), flag("quiet"))(lambda rest, quiet: None)
        assert [o.kind for o in cmd.options] == [OptionKind.ORDERED_VALUE_VARARG, OptionKind.NAMED_BOOLEAN]

    def test_find_flag(self):
        cmd = command(flag("verbose", short="v"), option("name"))(lambda verbose, name: None)
        assert cmd.find_flag("-v").name == "verbose"
        assert cmd.find_flag("--name").name == "name"
        assert cmd.find_flag("--other") is None


class TestBuilders:
    def test_command_decorator(self):
        @command(argument("target", required=True), values("tags", pattern=PatternKind.IDENTIFIER), example="x y")
        def deploy_all(target, tags):
            """Deploy everything."""

        assert isinstance(deploy_all, CommandMetadata)
        assert deploy_all.name == "deploy-all"
        assert deploy_all.description == "Deploy everything."
        assert deploy_all.example == "x y"
        target, tags = deploy_all.options
        assert (target.index, target.kind, target.required) == (0, OptionKind.ORDERED_VALUE, True)
        assert (tags.index, tags.kind, tags.value_type) == (1, OptionKind.NAMED_VALUE_VARARG, ValueType.PATTERN)

    def test_path_options_are_file_typed(self):
        cmd = command(option("out", path=True))(lambda out: None)
        assert cmd.options[0].value_type is ValueType.FILE_PATH

    def test_plugin_builder(self):
        a = command(name="a")(lambda: None)
        b = command(name="b")(lambda: None)
        plugin_obj = plugin("p", a, default=b, description="  Something.  ")
        assert plugin_obj.command_names() == ["a"]
        assert plugin_obj.default_command is b
        assert plugin_obj.description == "Something."
        with pytest.raises(TypeError):
            plugin_obj.commands["c"] = a

    def test_plugin_rejects_mismatched_keys(self):
        a = command(name="a")(lambda: None)
        with pytest.raises(MetadataError):
            PluginMetadata("p", {"b": a})


class TestRegistry:
    def test_register_and_lookup(self):
        registry = PluginRegistry()
        plugin_obj = register_plugin(plugin("tools"), registry)
        assert registry.get("tools") is plugin_obj
        assert registry.names() == ["tools"]
        assert registry.all() == [plugin_obj]

    def test_duplicate_names_rejected_case_insensitively(self):
        registry = PluginRegistry()
        registry.register(plugin("tools"))
        with pytest.raises(ValueError):
            registry.register(plugin("TOOLS"))

    def test_snapshot_is_read_only(self):
        registry = PluginRegistry()
        registry.register(plugin("tools"))
        snapshot = registry.get_plugins()
        with pytest.raises(TypeError):
            snapshot["x"] = plugin("x")
        registry.register(plugin("later"))
        assert "later" not in snapshot


class TestErrors:
    def test_command_resolution_error_message(self):
        plugin_obj = plugin("tools", command(name="build")(lambda: None), command(name="test")(lambda: None))
        err = CommandResolutionError(plugin_obj)
        assert str(err) == "Missing command for plugin [tools], available commands: ['build', 'test']"

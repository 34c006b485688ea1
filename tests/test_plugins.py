"""Tests for the bundled fs and echo plugins, driven through handle_line."""

import pytest

from orbit.commands import REGISTRY, PluginRegistry
from orbit.interface import ExecutionParser, handle_line
from orbit.plugins.echo import ECHO_PLUGIN
from orbit.plugins.fs import FS_PLUGIN

from conftest import ScriptedShell


@pytest.fixture
def run(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    registry = PluginRegistry()
    registry.register(FS_PLUGIN)
    registry.register(ECHO_PLUGIN)

    def _run(line, **responses):
        return handle_line(line, ExecutionParser(registry, ScriptedShell(**responses)))

    return _run


def test_import_registers_globally():
    assert REGISTRY.get("fs") is FS_PLUGIN
    assert REGISTRY.get("echo") is ECHO_PLUGIN


class TestEcho:
    def test_words_go_to_default_command(self, run):
        assert run("echo hello world") == "hello world"

    def test_flags_and_repeat(self, run):
        assert run("echo hi -u -t 2") == "HI\nHI"

    def test_bad_count_gets_one_correction(self, run):
        assert run("echo hi -t lots", prompt_common=["3"]) == "hi\nhi\nhi"

    def test_nothing_to_say(self, run):
        assert run("echo") == ""


class TestFs:
    def test_ls_hides_dotfiles_unless_asked(self, run, tmp_path):
        (tmp_path / "visible.txt").write_text("x", encoding="utf-8")
        (tmp_path / ".hidden").write_text("x", encoding="utf-8")
        assert "visible.txt" in run("fs ls")
        assert ".hidden" not in run("fs ls")
        assert ".hidden" in run("fs ls -a")

    def test_ls_missing_path(self, run):
        assert run("fs ls nowhere") == "Not found: nowhere"

    def test_cat_with_line_limit(self, run, tmp_path):
        (tmp_path / "notes.txt").write_text("one\ntwo\nthree\n", encoding="utf-8")
        assert run("fs cat notes.txt -n 2") == "one\ntwo"
        assert run("fs cat notes.txt") == "one\ntwo\nthree\n"

    def test_cat_prompts_for_missing_path(self, run, tmp_path):
        (tmp_path / "notes.txt").write_text("hello", encoding="utf-8")
        assert run("fs cat", prompt_file=[tmp_path / "notes.txt"]) == "hello"

    def test_mkdir_and_copy(self, run, tmp_path):
        (tmp_path / "a.txt").write_text("data", encoding="utf-8")
        assert run("fs mkdir out/nested -p") == "Created out/nested"
        assert run("fs copy a.txt out/nested") == "Copied a.txt -> out/nested/a.txt"
        assert (tmp_path / "out" / "nested" / "a.txt").read_text(encoding="utf-8") == "data"
        assert "use --force" in run("fs copy a.txt out/nested")
        assert run("fs copy a.txt out/nested -f").startswith("Copied")

    def test_mkdir_existing_without_parents_is_an_error(self, run, tmp_path):
        (tmp_path / "exists").mkdir()
        assert run("fs mkdir exists").startswith("[error] FileExistsError")

"""
Tests for the terminal UI — click prompter and palette.
"""

import click
import pytest

from create_rails_app.core.use_cases.create_app import format_argument
from create_rails_app.core.wizard.answers import BACK, Answer
from create_rails_app.ui.cli.palette import Palette
from create_rails_app.ui.cli.prompter import ClickPrompter, resolve_choice

OPTIONS = ["sqlite3 - file-based (default)", "postgresql - popular", "mysql"]


@pytest.fixture
def replies(monkeypatch):
    """Script ``click.prompt`` answers; records (text, default) per call."""
    scripted: list[str] = []
    calls: list[tuple[str, object]] = []

    def fake_prompt(text, default=None, **kwargs):
        calls.append((text, default))
        value = scripted.pop(0)
        if value == "" and default is not None:
            return default
        return value

    monkeypatch.setattr(click, "prompt", fake_prompt)
    fake_prompt.scripted = scripted
    fake_prompt.calls = calls
    return fake_prompt


class TestResolveChoice:
    def test_number(self):
        assert resolve_choice("2", OPTIONS) == "postgresql - popular"

    def test_number_out_of_range(self):
        assert resolve_choice("0", OPTIONS) is None
        assert resolve_choice("4", OPTIONS) is None

    def test_full_text(self):
        assert resolve_choice("mysql", OPTIONS) == "mysql"

    def test_first_word(self):
        assert resolve_choice("PostgreSQL", OPTIONS) == "postgresql - popular"

    def test_unknown(self):
        assert resolve_choice("oracle", OPTIONS) is None


class TestClickPrompterChoose:
    def test_lists_numbered_options(self, replies, capsys):
        replies.scripted.extend(["2"])
        result = ClickPrompter().choose("Database", OPTIONS, default=OPTIONS[0])
        assert result == Answer("postgresql - popular")
        out = capsys.readouterr().out
        assert "Database" in out
        assert ">  1. sqlite3" in out
        assert "3. mysql" in out

    def test_enter_takes_default(self, replies):
        replies.scripted.extend([""])
        result = ClickPrompter().choose("Database", OPTIONS, default=OPTIONS[1])
        assert result == Answer(OPTIONS[1])
        assert replies.calls[0][1] == "2"

    @pytest.mark.parametrize("key", ["<", "\x02"])
    def test_back(self, replies, key):
        replies.scripted.extend([key])
        assert ClickPrompter().choose("Database", OPTIONS) is BACK

    def test_invalid_reprompts(self, replies, capsys):
        replies.scripted.extend(["9", "mysql"])
        assert ClickPrompter().choose("Database", OPTIONS) == Answer("mysql")
        assert "between 1 and 3" in capsys.readouterr().out

    def test_no_options(self):
        with pytest.raises(ValueError):
            ClickPrompter().choose("Nothing", [])


class TestClickPrompterText:
    def test_value(self, replies):
        replies.scripted.extend(["  myapp "])
        assert ClickPrompter().text("App name:") == Answer("myapp")

    def test_required_reprompts(self, replies, capsys):
        replies.scripted.extend(["", "myapp"])
        assert ClickPrompter().text("App name:", allow_empty=False) == Answer("myapp")
        assert "A value is required" in capsys.readouterr().out

    def test_empty_allowed(self, replies):
        replies.scripted.extend([""])
        assert ClickPrompter().text("Note:") == Answer("")

    def test_back(self, replies):
        replies.scripted.extend(["<"])
        assert ClickPrompter().text("App name:") is BACK


class TestClickPrompterConfirm:
    @pytest.mark.parametrize("raw,expected", [("y", True), ("YES", True), ("n", False), ("no", False)])
    def test_answers(self, replies, raw, expected):
        replies.scripted.extend([raw])
        assert ClickPrompter().confirm("Save?", default=not expected) is expected

    def test_empty_takes_default(self, replies):
        replies.scripted.extend([""])
        assert ClickPrompter().confirm("Save?", default=False) is False

    def test_back_takes_default(self, replies):
        replies.scripted.extend(["\x02"])
        assert ClickPrompter().confirm("Save?", default=True) is True

    def test_suffix_shows_default(self, replies):
        replies.scripted.extend([""])
        ClickPrompter().confirm("Save?", default=False)
        assert replies.calls[0][0] == "Save? [y/N]"

    def test_invalid_reprompts(self, replies):
        replies.scripted.extend(["maybe", "y"])
        assert ClickPrompter().confirm("Save?") is True


class TestClickPrompterOutput:
    def test_say(self, capsys):
        ClickPrompter().say("hello")
        assert capsys.readouterr().out == "hello\n"

    def test_frame_wraps_output(self, capsys):
        prompter = ClickPrompter()
        with prompter.frame("Summary"):
            prompter.say("inside")
        lines = capsys.readouterr().out.splitlines()
        assert "Summary" in lines[0]
        assert lines[1] == "inside"
        assert lines[2].startswith("┗")


class TestPalette:
    def test_no_color(self):
        palette = Palette(env={"NO_COLOR": "1"})
        assert palette.enabled is False
        assert palette.color("arg_name", "--api") == "--api"

    def test_color_enabled(self):
        palette = Palette(env={})
        assert palette.enabled is True
        styled = palette.color("arg_name", "--api")
        assert styled != "--api"
        assert click.unstyle(styled) == "--api"

    def test_unknown_role(self):
        with pytest.raises(KeyError):
            Palette(env={"NO_COLOR": "1"}).color("bogus", "x")

    def test_color_drives_argument_formatting(self):
        palette = Palette(env={})
        styled = format_argument("--database=postgresql", palette.color)
        assert styled != "--database=postgresql"
        assert click.unstyle(styled) == "--database=postgresql"

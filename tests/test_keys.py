"""Tests for translating Textual key events."""

import pytest

from deptui.keys import KeyCode, Modifiers, translate_key


@pytest.mark.parametrize("key, character, expected", [
    ("enter", "\r", (KeyCode.ENTER, Modifiers.NONE)),
    ("escape", "\x1b", (KeyCode.ESCAPE, Modifiers.NONE)),
    ("backspace", "\x08", (KeyCode.BACKSPACE, Modifiers.NONE)),
    ("down", None, (KeyCode.DOWN, Modifiers.NONE)),
    ("pagedown", None, (KeyCode.PAGE_DOWN, Modifiers.NONE)),
    ("slash", "/", ("/", Modifiers.NONE)),
    ("question_mark", "?", ("?", Modifiers.NONE)),
    ("N", "N", ("N", Modifiers.NONE)),
    ("right_square_bracket", "]", ("]", Modifiers.NONE)),
    ("shift+up", None, (KeyCode.UP, Modifiers.SHIFT)),
    ("ctrl+n", "\x0e", ("n", Modifiers.CTRL)),
    ("return", None, (KeyCode.ENTER, Modifiers.NONE)),
])
def test_translate_key(key, character, expected):
    assert translate_key(key, character) == expected


def test_unknown_named_keys_are_dropped():
    assert translate_key("f5") is None
    assert translate_key("ctrl+shift+insert") is None

"""Key event types and translation from Textual key names."""

from __future__ import annotations

from enum import Enum, Flag, auto
from typing import Union


class KeyCode(str, Enum):
    """Named (non-character) keys. Values are Textual's key names."""
    ENTER = "enter"
    ESCAPE = "escape"
    BACKSPACE = "backspace"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "pageup"
    PAGE_DOWN = "pagedown"
    HOME = "home"
    END = "end"
    TAB = "tab"
    DELETE = "delete"


class Modifiers(Flag):
    NONE = 0
    SHIFT = auto()
    CTRL = auto()
    ALT = auto()


# A key is either a named key or a single printable character.
Key = Union[KeyCode, str]

_MODIFIER_PREFIXES = {
    "shift": Modifiers.SHIFT,
    "ctrl": Modifiers.CTRL,
    "alt": Modifiers.ALT,
}

_ALIASES = {
    "return": KeyCode.ENTER,
    "ctrl+m": KeyCode.ENTER,
    "ctrl+h": KeyCode.BACKSPACE,
    "ctrl+i": KeyCode.TAB,
}


def translate_key(key: str, character: str | None = None) -> tuple[Key, Modifiers] | None:
    """Translate a Textual key event into (key, modifiers).

    Printable characters win over the key name, so "slash" becomes "/" and
    "N" stays "N". Returns None for keys deptui has no use for.
    """
    if key in _ALIASES:
        return _ALIASES[key], Modifiers.NONE

    *prefixes, name = key.split("+")
    modifiers = Modifiers.NONE
    for prefix in prefixes:
        modifiers |= _MODIFIER_PREFIXES.get(prefix, Modifiers.NONE)

    if character is not None and len(character) == 1 and character.isprintable():
        return character, modifiers

    try:
        return KeyCode(name), modifiers
    except ValueError:
        pass

    if len(name) == 1 and name.isprintable():
        return name, modifiers
    return None

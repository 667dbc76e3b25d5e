"""Character scanner that splits plist containers into raw element text.

The ASCII plist format has no formal grammar worth tokenising, so container
bodies are cut up by a small state machine that tracks three things:

- an escape pending after ``\\`` (the next character is taken verbatim)
- whether a ``"`` quoted run is open
- the nesting depth of ``(``/``{`` against ``)``/``}``

A separator (``,`` in arrays, ``;`` in dictionaries) only counts outside
quotes at depth 0.  Nothing here ever raises: unbalanced input simply yields
whatever pieces were found.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

_OPENERS = frozenset("({")
_CLOSERS = frozenset(")}")
_WHITESPACE = frozenset(" \t\n\r")


class Mode(Enum):
    KEY = auto()
    VALUE = auto()


@dataclass(slots=True)
class ScanState:
    escape: bool = False
    in_quotes: bool = False
    depth: int = 0

    def step(self, char: str, nest: bool = True) -> bool:
        """Advance over *char*; return True when it may act as syntax.

        Escaped characters, backslashes, quote marks and anything inside
        quotes are plain text.  With *nest* the bracket depth is updated.
        """
        if self.escape:
            self.escape = False
            return False
        if char == "\\":
            self.escape = True
            return False
        if char == '"':
            self.in_quotes = not self.in_quotes
            return False
        if self.in_quotes:
            return False
        if nest:
            if char in _OPENERS:
                self.depth += 1
            elif char in _CLOSERS:
                self.depth -= 1
        return True


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------

def _flush_element(buf: list[str], out: list[str]) -> None:
    text = "".join(buf).strip().removesuffix(";")
    if text:
        out.append(text)


def split_array_elements(content: str) -> list[str]:
    """Split the inside of ``( ... )`` on top-level commas.

    Empty pieces are dropped, so trailing and doubled commas are harmless.
    A single trailing ``;`` on a piece is removed.
    """
    state = ScanState()
    elements: list[str] = []
    current: list[str] = []

    for char in content:
        if state.step(char) and char == "," and state.depth == 0:
            _flush_element(current, elements)
            current = []
            continue
        current.append(char)

    _flush_element(current, elements)
    return elements


# ---------------------------------------------------------------------------
# Dictionaries
# ---------------------------------------------------------------------------

def split_dict_entries(content: str) -> list[tuple[str, str]]:
    """Split the inside of ``{ ... }`` into ``(key, value_text)`` pairs.

    A key ends at ``=`` followed by a space; a value ends at a top-level
    ``;``.  Keys keep their quote marks.  A final pair without ``;`` is
    still returned if both its key and value are non-empty.
    """
    state = ScanState()
    mode = Mode.KEY
    key = ""
    value: list[str] = []
    entries: list[tuple[str, str]] = []

    n = len(content)
    i = 0
    while i < n:
        char = content[i]

        # brackets only nest inside values
        if not state.step(char, nest=mode is Mode.VALUE):
            if mode is Mode.KEY:
                key += char
            else:
                value.append(char)
            i += 1
            continue

        if mode is Mode.KEY:
            if char == "=" and i + 2 < n and content[i + 1] == " ":
                key = key.strip()
                mode = Mode.VALUE
                i += 2
                continue
            key += char
        else:
            if char == ";" and state.depth == 0:
                entries.append((key, "".join(value).strip()))
                key, value = "", []
                mode = Mode.KEY
                i += 1
                while i < n and content[i] in _WHITESPACE:
                    i += 1
                continue
            value.append(char)
        i += 1

    if key and value:
        entries.append((key, "".join(value).strip()))

    return entries

"""Value types for defaults2nix and their Nix rendering."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Union

from .classifiers import (
    is_timestamp_key,
    is_ui_state_key,
    is_uuid_key,
    looks_like_epoch,
    parse_float,
    parse_int,
)
from .config import ParseConfig

logger = logging.getLogger(__name__)

INDENT = "  "

NIX_KEYWORDS = frozenset({
    "with", "let", "in", "if", "then", "else", "assert", "rec",
    "inherit", "or", "and", "import", "builtins", "throw", "abort",
    "true", "false", "null",
})

_DEFAULT_CONFIG = ParseConfig()


# ---------------------------------------------------------------------------
# Scalars and keys
# ---------------------------------------------------------------------------

def format_scalar(s: str) -> str:
    """Render an untyped plist token as a Nix literal.

    ``1``/``0`` become booleans, integers and floats are emitted bare (floats
    with at most 15 significant digits), everything else is a string.
    """
    if s == "1":
        return "true"
    if s == "0":
        return "false"

    n = parse_int(s)
    if n is not None:
        return str(n)
    f = parse_float(s)
    if f is not None:
        return format(f, ".15g")

    # bare identifiers such as Dark or LinkedIn
    if (
        s
        and not any(c in s for c in " /.:")
        and s not in ("true", "false")
    ):
        return f'"{s}"'

    escaped = s.replace("\\", "\\\\").replace('"', '\\"')
    escaped = escaped.replace("${", "$''{")
    return f'"{escaped}"'


def needs_quoting(key: str) -> bool:
    if parse_int(key) is not None:
        return True
    if key[:1].isascii() and key[:1].isdigit():
        return True
    if key in NIX_KEYWORDS:
        return True
    return any(c in key for c in " -.") or key.startswith('"')


def format_key(key: str) -> str:
    """Attribute name as it must appear on the left of ``=``.

    Keys that arrived quoted from the plist are already in Nix form.
    """
    if needs_quoting(key) and not key.startswith('"'):
        return '"' + key.replace('"', '\\"') + '"'
    return key


# ---------------------------------------------------------------------------
# Value variants
# ---------------------------------------------------------------------------

class _Skip:
    """Singleton for values that must not appear in the output."""

    _instance: _Skip | None = None

    def __new__(cls) -> _Skip:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Skip"

    def __bool__(self) -> bool:
        return False

    def to_nix(self, indent: int = 0, config: ParseConfig | None = None) -> str:
        return ""


Skip = _Skip()


@dataclass(slots=True)
class VString:
    value: str

    def to_nix(self, indent: int = 0, config: ParseConfig | None = None) -> str:
        return format_scalar(self.value)


@dataclass(slots=True)
class VArray:
    items: list[Value] = field(default_factory=list)

    def to_nix(self, indent: int = 0, config: ParseConfig | None = None) -> str:
        items = [v for v in self.items if v is not Skip]
        if not items:
            return "[]"

        pad = INDENT * (indent + 1)
        lines = ["["]
        for v in items:
            lines.append(pad + v.to_nix(indent + 1, config))
        lines.append(INDENT * indent + "]")
        return "\n".join(lines)


@dataclass(slots=True)
class VDict:
    """Key → value mapping; ``order`` is the order keys were first seen."""

    entries: dict[str, Value] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)

    def set(self, key: str, value: Value) -> None:
        """Assign *key*; a repeated key keeps its first position, last value wins."""
        if key not in self.entries:
            self.order.append(key)
        self.entries[key] = value

    def keys(self) -> list[str]:
        return self.order or list(self.entries)

    def to_nix(self, indent: int = 0, config: ParseConfig | None = None) -> str:
        config = config or _DEFAULT_CONFIG
        pad = INDENT * (indent + 1)

        lines: list[str] = []
        for key in self.keys():
            if key not in self.entries:
                continue
            value = self.entries[key]
            if value is Skip:
                continue
            reason = _filtered_key_reason(key, value, config)
            if reason:
                logger.debug("dropping %s (%s)", key, reason)
                continue
            lines.append(f"{pad}{format_key(key)} = {value.to_nix(indent + 1, config)};")

        if not lines:
            return "{}"
        return "\n".join(["{", *lines, INDENT * indent + "}"])


def _filtered_key_reason(key: str, value: Value, config: ParseConfig) -> str | None:
    if config.no_state and is_ui_state_key(key):
        return "ui state key"
    if config.no_uuids and is_uuid_key(key):
        return "uuid key"
    if config.no_dates and is_timestamp_key(key):
        # any value under a timestamp-like key goes, epoch-shaped or not
        if isinstance(value, VString) and looks_like_epoch(value.value):
            return "timestamp key with epoch value"
        return "timestamp key"
    return None


Value = Union[VString, VArray, VDict, _Skip]

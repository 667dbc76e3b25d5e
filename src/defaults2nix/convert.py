"""Conversion pipeline: plist text → Value tree → Nix text."""

from __future__ import annotations

from typing import IO

from .config import ParseConfig
from .reader import parse_value
from .values import Skip, Value, VDict


def read_source(source: str | IO[str]) -> str:
    """Return the full text of *source*; read errors propagate unchanged."""
    if isinstance(source, str):
        return source
    return source.read()


def convert_defaults(source: str | IO[str], config: ParseConfig | None = None) -> str:
    """Convert ``defaults read`` output to a Nix attribute set."""
    nix, _ = convert_defaults_with_value(read_source(source), config)
    return nix


def convert_defaults_with_value(
    text: str, config: ParseConfig | None = None
) -> tuple[str, Value]:
    """Like :func:`convert_defaults` but also return the parsed tree.

    Split mode renders each top-level entry from the tree separately.
    """
    config = config or ParseConfig()
    value = parse_value(text.strip(), config)
    return value.to_nix(0, config), value


def extract_bundle_ids(value: Value) -> dict[str, Value]:
    """Top-level domains of a parsed ``defaults read`` dump.

    Every key is kept (bundle ids, ``NSGlobalDomain``, custom domains) except
    those whose value was skipped.  Non-dictionaries yield ``{}``.
    """
    if not isinstance(value, VDict):
        return {}
    return {
        key: value.entries[key]
        for key in value.keys()
        if key in value.entries and value.entries[key] is not Skip
    }


def sanitize_filename(key: str) -> str:
    """``"com.apple.Safari"`` → ``com-apple-Safari``."""
    name = key.strip('"')
    return name.replace(".", "-").replace(" ", "_").replace("/", "_")

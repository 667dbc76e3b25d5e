"""Reader layer: turns ``defaults read`` text into a Value tree."""

from __future__ import annotations

import logging

from .classifiers import (
    is_binary_data_value,
    is_date_string,
    is_hashed_id_string,
    is_ui_state_value,
    is_uuid_string,
)
from .config import ParseConfig
from .scanner import split_array_elements, split_dict_entries
from .values import Skip, Value, VArray, VDict, VString

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = ParseConfig()


# ---------------------------------------------------------------------------
# Literal handling
# ---------------------------------------------------------------------------

def unquote(token: str) -> str:
    """Strip surrounding ``"`` and unescape ``\\"`` and ``\\\\``."""
    inner = token[1:-1]
    return inner.replace('\\"', '"').replace("\\\\", "\\")


def filter_scalar(text: str, config: ParseConfig) -> Value:
    """Wrap *text* as a VString unless an enabled filter rejects it."""
    if config.no_dates and is_date_string(text):
        logger.debug("skipping date value %r", text)
        return Skip
    if config.no_state and is_ui_state_value(text):
        logger.debug("skipping ui state value %r", text)
        return Skip
    if config.no_uuids and (is_uuid_string(text) or is_hashed_id_string(text)):
        logger.debug("skipping identifier value %r", text)
        return Skip
    return VString(text)


# ---------------------------------------------------------------------------
# parse_value
# ---------------------------------------------------------------------------

# Containers nested deeper than this are kept as plain text.
MAX_DEPTH = 128


def parse_value(text: str, config: ParseConfig | None = None, depth: int = 0) -> Value:
    """Parse one plist value.

    Never raises: malformed input degrades to a partial structure or a
    plain string.
    """
    config = config or _DEFAULT_CONFIG
    text = text.strip()

    is_array = text.startswith("(") and text.endswith(")")
    is_dict = text.startswith("{") and text.endswith("}")
    if (is_array or is_dict) and depth >= MAX_DEPTH:
        logger.debug("nesting deeper than %d, keeping value as text", MAX_DEPTH)
        return VString(text)

    if is_array:
        return parse_array(text, config, depth)

    if is_dict:
        if is_binary_data_value(text):
            logger.debug("skipping binary data value")
            return Skip
        return parse_dict(text, config, depth)

    if text.startswith('"') and text.endswith('"') and len(text) > 1:
        return filter_scalar(unquote(text), config)

    return filter_scalar(text, config)


def parse_array(text: str, config: ParseConfig | None = None, depth: int = 0) -> VArray:
    """Parse ``( a, b, ... )``."""
    content = text[1:-1].strip()
    if not content:
        return VArray([])
    return VArray(parse_array_elements(content, config, depth))


def parse_array_elements(
    content: str, config: ParseConfig | None = None, depth: int = 0
) -> list[Value]:
    config = config or _DEFAULT_CONFIG
    return [parse_value(element, config, depth + 1) for element in split_array_elements(content)]


def parse_dict(text: str, config: ParseConfig | None = None, depth: int = 0) -> VDict:
    """Parse ``{ key = value; ... }``.

    A key seen twice keeps its first position and its last value.
    """
    config = config or _DEFAULT_CONFIG
    result = VDict()
    content = text[1:-1].strip()
    if not content:
        return result

    for key, value_text in split_dict_entries(content):
        result.set(key, parse_value(value_text, config, depth + 1))
    return result

"""defaults2nix — convert macOS ``defaults`` output into Nix attribute sets."""

from .config import ParseConfig
from .convert import (
    convert_defaults,
    convert_defaults_with_value,
    extract_bundle_ids,
    sanitize_filename,
)
from .errors import (
    Defaults2NixError,
    DefaultsCommandError,
    UnknownFilterError,
    UnsupportedPlatformError,
    UsageError,
)
from .reader import parse_value
from .values import Skip, Value, VArray, VDict, VString, _Skip

__all__ = [
    "convert_defaults",
    "convert_defaults_with_value",
    "extract_bundle_ids",
    "sanitize_filename",
    "parse_value",
    "ParseConfig",
    "Skip",
    "Value",
    "VArray",
    "VDict",
    "VString",
    "Defaults2NixError",
    "DefaultsCommandError",
    "UnknownFilterError",
    "UnsupportedPlatformError",
    "UsageError",
]

"""Heuristic classifiers for values found in ``defaults read`` output.

Every function here is a pure predicate.  They decide what counts as a
date, an identifier, UI state or an opaque binary blob, and are consulted by
the reader (to turn values into ``Skip``) and by ``VDict.to_nix`` (to drop
whole entries by key).  They are heuristics: a false positive or a miss is a
known limitation, not a parse error.
"""

from __future__ import annotations

import math
import re

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_DIGITS = frozenset("0123456789")

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1

UUID_LENGTH = 36
_UUID_HYPHENS = (8, 13, 18, 23)

UNIX_TIMESTAMP_RANGE = (946684800, 2208988800)     # 2000-01-01 .. 2040-01-01
CF_ABSOLUTE_TIME_RANGE = (100000000, 1230768000)   # seconds since 2001-01-01

TIMESTAMP_KEY_PATTERNS: tuple[str, ...] = (
    "time", "timestamp", "date", "epoch",
    "updated", "created", "modified", "changed",
    "lastused", "lastseen", "lastaccess", "lastconnected",
    "lastunseen", "lastvisit", "lastopen", "lastlaunch",
    "accessed", "visited", "opened", "launched",
    "expiry", "expires", "expired", "expiration",
    "checkedat", "setat", "startedat", "endedat",
    "since", "until", "when", "at",
)

UI_STATE_KEY_PATTERNS: tuple[str, ...] = (
    "NSWindow Frame ",
    "NSSplitView Subview Frames ",
    "NSNavPanelExpandedSize",
    "NSNavPanelFileLastListMode",
    "NSNavPanelFileListMode",
    "NSTableView Columns ",
    "NSTableView Sort Ordering ",
    "NSTableView Supports ",
    "Column Width",
    "UserColumnSortPerTab",
    "UserColumnsPerTab",
    "TB Icon Size Mode",
    "TB Size Mode",
    "image window frame",
    "image window parent frame",
    "NSPreferencesContentSize",
    "NSToolbar Configuration",
    "ExtensionsToolbarConfiguration",
    "CropRect",
    "cache",
    "Cache",
)


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

def parse_int(s: str) -> int | None:
    """Return *s* as an int if it is a plain signed 64-bit decimal integer."""
    if not _INT_RE.fullmatch(s):
        return None
    n = int(s)
    if n < _INT64_MIN or n > _INT64_MAX:
        return None
    return n


def parse_float(s: str) -> float | None:
    """Return *s* as a finite float, or None.

    Only plain decimal and exponent spellings count; ``inf``, ``nan`` and
    ``_`` separators are left to the string paths.
    """
    if not _FLOAT_RE.fullmatch(s):
        return None
    value = float(s)
    if math.isinf(value):
        return None
    return value


def is_unix_timestamp(value: float) -> bool:
    """Seconds since 1970 for a date between 2000 and 2040."""
    low, high = UNIX_TIMESTAMP_RANGE
    return low <= value <= high


def is_cf_absolute_time(value: float) -> bool:
    """Seconds since 2001-01-01 (CFAbsoluteTime) for a date up to 2040."""
    low, high = CF_ABSOLUTE_TIME_RANGE
    return low <= value <= high


def looks_like_epoch(text: str) -> bool:
    """True if *text* is a number in either timestamp range."""
    value = parse_float(text)
    if value is None:
        return False
    return is_unix_timestamp(value) or is_cf_absolute_time(value)


# ---------------------------------------------------------------------------
# Binary data
# ---------------------------------------------------------------------------

def is_binary_data_value(text: str) -> bool:
    """Detect ``{length = N; bytes = 0x...}`` (or comma separated) blobs.

    Exactly the two keys ``length`` and ``bytes`` must be present; any
    other key means it is an ordinary dictionary.
    """
    if "length =" not in text or "bytes = 0x" not in text:
        return False
    if len(text) < 2:
        return False

    content = text[1:-1].strip()
    sep = ";" if ";" in content else ","

    valid = 0
    for part in content.split(sep):
        part = part.strip()
        if not part:
            continue
        if part.startswith("length =") or part.startswith("bytes = 0x"):
            valid += 1
        else:
            return False
    return valid == 2


# ---------------------------------------------------------------------------
# Dates and timestamps
# ---------------------------------------------------------------------------

def _two_digits(s: str, pos: int) -> int | None:
    if s[pos] not in _DIGITS or s[pos + 1] not in _DIGITS:
        return None
    return int(s[pos:pos + 2])


def is_date_string(s: str) -> bool:
    """Recognise ``YYYY-MM-DD``, ``YYYY-MM-DD HH:MM:SS ...`` and ``YYYY-MM-DDT...``.

    The year must lie in 1900..2100, month in 1..12 and day in 1..31 (month
    lengths are not checked).  With a space separator the ``HH:MM:SS`` part,
    when present, must be a valid time of day.
    """
    if len(s) < 10 or s[4] != "-" or s[7] != "-":
        return False

    if any(c not in _DIGITS for c in s[:4]):
        return False
    year = int(s[:4])
    if year < 1900 or year > 2100:
        return False

    month = _two_digits(s, 5)
    if month is None or not 1 <= month <= 12:
        return False

    day = _two_digits(s, 8)
    if day is None or not 1 <= day <= 31:
        return False

    if len(s) == 10:
        return True

    if s[10] not in (" ", "T"):
        return False

    if s[10] == " " and len(s) >= 19:
        clock = s[11:19]
        if clock[2] == ":" and clock[5] == ":":
            if any(clock[i] not in _DIGITS for i in (0, 1, 3, 4, 6, 7)):
                return False
            hours, minutes, seconds = int(clock[0:2]), int(clock[3:5]), int(clock[6:8])
            if hours > 23 or minutes > 59 or seconds > 59:
                return False
    return True


def is_timestamp_key(key: str) -> bool:
    """Key names that usually hold a point in time.

    Also catches per-display keys such as ``lastConnected@Display:2``.
    """
    lower = key.lower()
    if any(pattern in lower for pattern in TIMESTAMP_KEY_PATTERNS):
        return True
    if "@" in key and ("connected" in lower or "seen" in lower or "accessed" in lower):
        return True
    return False


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------

def is_uuid_string(s: str) -> bool:
    """Canonical ``8-4-4-4-12`` UUID, any case."""
    if len(s) != UUID_LENGTH:
        return False
    for i, c in enumerate(s):
        if i in _UUID_HYPHENS:
            if c != "-":
                return False
        elif c not in _HEX_DIGITS:
            return False
    return True


def is_hashed_id_string(s: str) -> bool:
    """``_`` followed by 32 hex digits, e.g. ``_19a3bc4999bddb89e1a44f4b87bdc37c``."""
    if len(s) != 33 or s[0] != "_":
        return False
    return all(c in _HEX_DIGITS for c in s[1:])


def is_uuid_key(key: str) -> bool:
    """The key is a UUID or has one embedded anywhere in it."""
    if is_uuid_string(key):
        return True
    for i in range(len(key) - UUID_LENGTH + 1):
        if is_uuid_string(key[i:i + UUID_LENGTH]):
            return True
    return False


# ---------------------------------------------------------------------------
# UI state
# ---------------------------------------------------------------------------

def is_ui_state_key(key: str) -> bool:
    """Window geometry, table/toolbar layout and cache keys."""
    if any(pattern in key for pattern in UI_STATE_KEY_PATTERNS):
        return True
    # window frames not spelled "NSWindow Frame ..."
    if key.endswith("Frame") and ("Window" in key or "window" in key):
        return True
    return False


def is_ui_state_value(value: str) -> bool:
    """Geometry-shaped strings.

    - ``{{x, y}, {w, h}}``  NSRect
    - ``{w, h}``            NSSize
    - eight numbers         saved window frame
    - six fields ending in ``YES``/``NO``  split view state
    """
    if value.startswith("{{") and value.endswith("}}"):
        return True

    if (
        value.startswith("{")
        and value.endswith("}")
        and value.count(",") == 1
        and "=" not in value
    ):
        return True

    parts = value.split()
    if len(parts) == 8 and all(parse_float(p) is not None for p in parts):
        return True

    stripped = value.strip()
    if value.count(",") == 5 and (stripped.endswith("NO") or stripped.endswith("YES")):
        return True

    return False

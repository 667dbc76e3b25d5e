"""Tests for the heuristic classifiers."""

import pytest

from defaults2nix.classifiers import (
    is_binary_data_value,
    is_cf_absolute_time,
    is_date_string,
    is_hashed_id_string,
    is_timestamp_key,
    is_ui_state_key,
    is_ui_state_value,
    is_unix_timestamp,
    is_uuid_key,
    is_uuid_string,
    looks_like_epoch,
    parse_float,
    parse_int,
)


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

def test_parse_int_plain():
    assert parse_int("42") == 42
    assert parse_int("-42") == -42
    assert parse_int("+7") == 7
    assert parse_int("00123") == 123

def test_parse_int_rejects_non_integers():
    assert parse_int("3.14") is None
    assert parse_int("1_000") is None
    assert parse_int(" 1") is None
    assert parse_int("") is None

def test_parse_int_out_of_int64_range():
    assert parse_int("9223372036854775807") == 9223372036854775807
    assert parse_int("9223372036854775808") is None

def test_parse_float():
    assert parse_float("3.14") == 3.14
    assert parse_float("1.23e10") == 1.23e10
    assert parse_float(".5") == 0.5
    assert parse_float("5.") == 5.0

def test_parse_float_rejects_special_spellings():
    assert parse_float("inf") is None
    assert parse_float("NaN") is None
    assert parse_float("1e400") is None
    assert parse_float("1.2.3") is None


# ---------------------------------------------------------------------------
# Timestamp ranges
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("value, is_unix, is_cf", [
    (1751270386, True, False),
    (1704067200, True, False),
    (774728050.470133, False, True),
    (757382400, False, True),
    (42, False, False),
    (9999999999, False, False),
    (100000001, False, True),
])
def test_timestamp_ranges(value, is_unix, is_cf):
    assert is_unix_timestamp(value) is is_unix
    assert is_cf_absolute_time(value) is is_cf

def test_timestamp_range_bounds_inclusive():
    assert is_unix_timestamp(946684800)
    assert is_unix_timestamp(2208988800)
    assert not is_unix_timestamp(946684799)
    assert not is_unix_timestamp(2208988801)
    assert is_cf_absolute_time(100000000)
    assert is_cf_absolute_time(1230768000)
    assert not is_cf_absolute_time(99999999)
    assert not is_cf_absolute_time(1230768001)

def test_looks_like_epoch():
    assert looks_like_epoch("1753218075")
    assert looks_like_epoch("774728050.470133")
    assert not looks_like_epoch("42")
    assert not looks_like_epoch("soon")


# ---------------------------------------------------------------------------
# Binary data
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("text, expected", [
    ("{length = 256; bytes = 0x89504e47;}", True),
    ("{ length = 32; bytes = 0xdeadbeef; }", True),
    ("{length = 256, bytes = 0x89504e47 0d0a1a0a}", True),
    ("{bytes = 0x89504e47; length = 256;}", True),
    ("{name = \"test\"; value = 42;}", False),
    ("{length = 256; name = \"test\";}", False),
    ("{length = 256; bytes = \"not hex\";}", False),
    ("{length = 256; bytes = 0x1234; extra = \"data\";}", False),
    ("{}", False),
])
def test_is_binary_data_value(text, expected):
    assert is_binary_data_value(text) is expected

def test_binary_data_multiline():
    text = "{\n    length = 4096;\n    bytes = 0x62706c69 73743030;\n}"
    assert is_binary_data_value(text)


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("text, expected", [
    ("2025-06-07 12:01:44 +0000", True),
    ("2025-06-07T12:01:44Z", True),
    ("2025-06-07", True),
    ("2025-06-07T12:01:44+08:00", True),
    ("2025-02-31", True),
    ("not a date", False),
    ("2025 is a year", False),
    ("12:34:56", False),
    ("", False),
    ("2025/06/07", False),
    ("2025-99-99", False),
    ("2025-13-01", False),
    ("2025-01-32", False),
    ("2025-00-10", False),
    ("1800-01-01", False),
    ("2200-01-01", False),
    ("2025-01-01 25:00:00 +0000", False),
    ("2025-01-01 23:60:00 +0000", False),
    ("2025-01-01x", False),
])
def test_is_date_string(text, expected):
    assert is_date_string(text) is expected


@pytest.mark.parametrize("key, expected", [
    ("CKStartupTime", True),
    ("lastConnected@Display:2", True),
    ("lastUnseen@Display:7", True),
    ("lastAggregatedTimestamp", True),
    ("UpdateDate", True),
    ("FileCreated", True),
    ("LastModified", True),
    ("TokenExpiry", True),
    ("StartTime", True),
    ("starttime", True),
    ("Username", False),
    ("Email@domain", False),
    ("Version", False),
])
def test_is_timestamp_key(key, expected):
    assert is_timestamp_key(key) is expected


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("text, expected", [
    ("A8604994-4D31-471E-B7F1-D60AC97A287C", True),
    ("a8604994-4d31-471e-b7f1-d60ac97a287c", True),
    ("A8604994-4d31-471E-b7f1-D60AC97A287C", True),
    ("A8604994-4D31-471E-B7F1", False),
    ("A8604994-4D31-471E-B7F1-D60AC97A287C-EXTRA", False),
    ("A86049944D31471EB7F1D60AC97A287C", False),
    ("A860499-44D31-471E-B7F1-D60AC97A287C", False),
    ("G8604994-4D31-471E-B7F1-D60AC97A287C", False),
    ("", False),
    ("hello-world-this-is-not-a-uuid", False),
])
def test_is_uuid_string(text, expected):
    assert is_uuid_string(text) is expected


@pytest.mark.parametrize("text, expected", [
    ("_19a3bc4999bddb89e1a44f4b87bdc37c", True),
    ("_19A3BC4999BDDB89E1A44F4B87BDC37C", True),
    ("19a3bc4999bddb89e1a44f4b87bdc37c", False),
    ("_19a3bc4999bddb89", False),
    ("_19a3bc4999bddb89e1a44f4b87bdc37c00", False),
    ("_19a3bc4999bddb89e1a44f4b87bdc37g", False),
    ("_", False),
    ("", False),
])
def test_is_hashed_id_string(text, expected):
    assert is_hashed_id_string(text) is expected


@pytest.mark.parametrize("key, expected", [
    ("A8604994-4D31-471E-B7F1-D60AC97A287C", True),
    ("001704-05-0990211b-baa3-496b-a477-18acf2584b74-com.apple.systempreferences", True),
    ("prefix-A8604994-4D31-471E-B7F1-D60AC97A287C-suffix", True),
    ("AccountUUID-3906CAB3-0BD4-41A9-8C1E-80F806043E7D", True),
    ("com.apple.finder", False),
    ("not-a-uuid-4D31-471E-B7F1-D60AC97A287C", False),
    ("", False),
    ("key", False),
])
def test_is_uuid_key(key, expected):
    assert is_uuid_key(key) is expected


# ---------------------------------------------------------------------------
# UI state
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("key, expected", [
    ("NSWindow Frame Main", True),
    ("\"NSWindow Frame SafariWindow\"", True),
    ("NSTableView Columns v2 Bookmarks", True),
    ("NSToolbar Configuration BrowserToolbar", True),
    ("ExtensionsToolbarConfiguration Foo", True),
    ("LastCropRect", True),
    ("PreviewWindowFrame", True),
    ("ThumbnailCache", True),
    ("cacheVersion", True),
    ("ShowStatusBar", False),
    ("FrameRate", False),
])
def test_is_ui_state_key(key, expected):
    assert is_ui_state_key(key) is expected


@pytest.mark.parametrize("value, expected", [
    ("{{0, 0}, {1440, 900}}", True),
    ("{800, 600}", True),
    ("{a = 1, b}", False),
    ("0 0 1440 900 0 0 1440 900", True),
    ("0 0 1440 900 0 0 1440 wide", False),
    ("0 0 1440 900", False),
    ("0.000000, 0.000000, 200.000000, 500.000000, NO, NO", True),
    ("0, 0, 200, 500, YES, YES", True),
    ("a, b, c", False),
    ("Dark", False),
])
def test_is_ui_state_value(value, expected):
    assert is_ui_state_value(value) is expected

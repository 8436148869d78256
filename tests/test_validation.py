from datetime import datetime

from habit_tracker.validation import (
    parse_frequency,
    parse_habit_number,
    parse_identifier,
    parse_name,
    parse_timestamp,
)

from conftest import NOW


def test_parse_timestamp_keeps_offset_and_round_trips():
    result = parse_timestamp(NOW.isoformat())
    assert result.ok
    assert result.value == NOW
    assert result.value.isoformat() == NOW.isoformat()


def test_parse_timestamp_accepts_utc_suffix_and_naive_values():
    utc = parse_timestamp("2026-10-18T08:00:00.000Z")
    assert utc.ok
    assert utc.value.utcoffset().total_seconds() == 0

    naive = parse_timestamp("2026-10-18T08:00:00")
    assert naive.ok
    assert naive.value.tzinfo is not None


def test_parse_timestamp_accepts_datetime_objects():
    assert parse_timestamp(datetime(2026, 1, 2, 3, 4)).value.tzinfo is not None


def test_parse_timestamp_rejects_garbage():
    for bad in (None, "", "yesterday", "2026-13-45", 12345, [], {}):
        result = parse_timestamp(bad)
        assert not result.ok
        assert result.value is None
        assert result.error


def test_parse_frequency():
    assert parse_frequency(3).value == 3
    assert parse_frequency(" 4 ").value == 4
    assert parse_frequency("5.0").value == 5
    assert parse_frequency(2.0).value == 2

    for bad in (None, "", "abc", "2.5", 0, "0", -3, "-1", True, float("nan"), [3]):
        assert not parse_frequency(bad).ok, bad


def test_or_default_uses_fallback_only_on_error():
    assert parse_frequency("abc").or_default(7) == 7
    assert parse_frequency("2").or_default(7) == 2


def test_parse_name_trims_and_rejects_blank():
    assert parse_name("  Exercise ").value == "Exercise"
    assert not parse_name("   ").ok
    assert not parse_name(None).ok


def test_parse_identifier():
    assert parse_identifier("abc-1").value == "abc-1"
    assert parse_identifier(17).value == "17"
    assert not parse_identifier("").ok
    assert not parse_identifier(None).ok


def test_parse_habit_number():
    assert parse_habit_number("2").value == 2
    assert parse_habit_number(" 3 ").value == 3
    assert parse_habit_number(-1).value == -1
    assert not parse_habit_number("two").ok
    assert not parse_habit_number("1.5").ok
    assert not parse_habit_number(1.5).ok
    assert not parse_habit_number(None).ok
    assert not parse_habit_number(True).ok


def test_parse_habit_number_accepts_integral_floats():
    assert parse_habit_number("1.0").value == 1
    assert parse_habit_number(" 2.0 ").value == 2
    assert parse_habit_number(2.0).value == 2
    assert not parse_habit_number("nan").ok
    assert not parse_habit_number(float("inf")).ok

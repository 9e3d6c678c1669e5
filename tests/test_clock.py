import pytest

from scheduly.clock import (
    AnchoredTime,
    TimeOfDay,
    add_minutes,
    anchor_night_boundary,
    later,
    minutes_between,
    parse_time_of_day,
)
from scheduly.errors import InvalidTimeFormat


def tod(text: str) -> TimeOfDay:
    return TimeOfDay.parse(text)


def at(text: str, day: int = 0) -> AnchoredTime:
    return AnchoredTime(time=tod(text), day_offset=day)


@pytest.mark.parametrize(
    ("text", "hour", "minute"),
    [
        ("00:00", 0, 0),
        ("08:05", 8, 5),
        ("7:30", 7, 30),
        ("23:59", 23, 59),
        (" 21:30 ", 21, 30),
    ],
)
def test_parse_valid_clock_text(text, hour, minute):
    parsed = parse_time_of_day(text)
    assert (parsed.hour, parsed.minute) == (hour, minute)


@pytest.mark.parametrize(
    "text", ["", None, "24:00", "12:60", "noon", "1230", "12:3", "-1:00"]
)
def test_parse_rejects_malformed_text(text):
    with pytest.raises(InvalidTimeFormat):
        parse_time_of_day(text)


def test_invalid_time_format_is_a_value_error():
    with pytest.raises(ValueError):
        parse_time_of_day("99:99")


def test_time_of_day_renders_zero_padded():
    assert str(tod("7:05")) == "07:05"
    assert str(at("00:30", day=1)) == "00:30"


def test_time_of_day_validates_from_text():
    assert TimeOfDay.model_validate("23:15") == TimeOfDay(hour=23, minute=15)


def test_minutes_between_with_next_day_flag():
    assert minutes_between(tod("20:00"), tod("00:30"), b_next_day=True) == 270
    assert minutes_between(tod("20:00"), tod("00:30")) == -1170
    assert minutes_between(tod("00:30"), tod("08:00")) == 450


def test_minutes_between_uses_day_offsets():
    assert minutes_between(at("23:30"), at("00:30", day=1)) == 60
    assert minutes_between(at("00:30", day=1), at("08:00", day=1)) == 450
    assert minutes_between(at("00:15", day=1), at("23:55")) == -20


def test_add_minutes_wraps_past_midnight():
    assert add_minutes(tod("23:50"), 20) == at("00:10", day=1)
    assert add_minutes(at("00:15", day=1), -20) == at("23:55")
    assert add_minutes(at("20:00"), 0) == at("20:00")


@pytest.mark.parametrize(
    ("text", "day"),
    [("00:30", 1), ("08:00", 1), ("11:59", 1), ("12:00", 0), ("23:00", 0)],
)
def test_night_boundaries_before_noon_roll_to_next_day(text, day):
    assert anchor_night_boundary(tod(text)) == at(text, day=day)


def test_absolute_minutes_round_trip():
    moment = at("01:45", day=1)
    assert moment.absolute_minutes == 1440 + 105
    assert AnchoredTime.from_absolute(moment.absolute_minutes) == moment


def test_later_picks_the_later_moment():
    assert later(at("00:30", day=1), at("00:00", day=1)) == at("00:30", day=1)
    assert later(at("00:30", day=1), at("00:40", day=1)) == at("00:40", day=1)

import pytest

from yt_digest.errors import TimeFormatError
from yt_digest.timecodes import format_group, format_timestamp, parse_time


@pytest.mark.parametrize(
    "text, expected",
    [
        ("12.5s", 12.5),
        ("0s", 0.0),
        ("00:00:45.000", 45.0),
        ("01:02:05.500", 3725.5),
        ("0:00:01", 1.0),
        ("10:00:00.25", 36000.25),
    ],
)
def test_parse_time_accepts_both_forms(text, expected):
    assert parse_time(text) == pytest.approx(expected)


@pytest.mark.parametrize(
    "text",
    [
        "", "s", "abc", "1:2", "1:2:3:4", "00:xx:01.0", "12.5ms", "1:00",
        "nans", "infs", "-infs", "1_0s", " 5s", "5 s", "nan:00:00", "0:00:inf", "1e3s",
    ],
)
def test_parse_time_rejects_garbage(text):
    with pytest.raises(TimeFormatError):
        parse_time(text)


def test_time_format_error_is_value_error():
    with pytest.raises(ValueError):
        parse_time("nope")


def test_format_timestamp_omits_hours_below_one_hour():
    assert format_timestamp(45) == "(00:45) "
    assert format_timestamp(0) == "(00:00) "
    assert format_timestamp(3599.9) == "(59:59) "


def test_format_timestamp_pads_hours():
    assert format_timestamp(3725) == "(01:02:05) "
    assert format_timestamp(3600) == "(01:00:00) "


def test_format_timestamp_truncates_fractions():
    assert format_timestamp(65.99) == "(01:05) "


def test_format_group_prefixes_text():
    assert format_group(75, "hello world") == "(01:15) hello world"


import pytest

from timeperiod.errors import (
    MissingDigitsError,
    TimePeriodParseError,
    TrailingInputError,
    UnmatchedLiteralError,
)
from timeperiod.format import TimePeriodFormat, parse_period
from timeperiod.period import TimePeriod
from timeperiod.units import UNITS_DESCENDING, TimeUnit

MILLISECOND, SECOND, MINUTE, HOUR, DAY, WEEK = (
    TimeUnit.MILLISECOND,
    TimeUnit.SECOND,
    TimeUnit.MINUTE,
    TimeUnit.HOUR,
    TimeUnit.DAY,
    TimeUnit.WEEK,
)
HH_MM_SS_TIMESTAMP = TimePeriodFormat("hh:mm:ss")
FULL_TIMESTAMP = TimePeriodFormat("hh:mm:ss.zzz")
WITH_PLAIN_TEXT = TimePeriodFormat("h HH 'and' m MM 'and' s SS 'and' z ZZ")
WITH_LITERAL_SINGLE_QUOTE = TimePeriodFormat("'I''m a quantity of' hH, mM, sS, zZ")
FULLY_QUOTED_ASCENDING_UNITS = TimePeriodFormat("''''zZ, sS, mM, hH''''")


def fields(period: TimePeriod) -> tuple[int, ...]:
    return tuple(period.raw(unit) for unit in UNITS_DESCENDING)


@pytest.mark.parametrize(
    "pattern,text,expected",
    (
        ("mm:ss", "1:00", (0, 0, 0, 1, 0, 0)),
        ("hh:mm:ss", "2:34:56", (0, 0, 2, 34, 56, 0)),
        ("hh:mm:ss", "05:12:34", (0, 0, 5, 12, 34, 0)),
        ("hh:mm:ss.zzz", "01:47:32.134", (0, 0, 1, 47, 32, 134)),
        ("hhmm", "1030", (0, 0, 10, 30, 0, 0)),
        ("hhhmm", "12300", (0, 5, 3, 0, 0, 0)),
        ("w", "12345", (12_345, 0, 0, 0, 0, 0)),
        ("w:d", "3:6", (3, 6, 0, 0, 0, 0)),
        ("d", "9", (1, 2, 0, 0, 0, 0)),
        ("mm:ss", "99:99", (0, 0, 1, 40, 39, 0)),
        ("{z}", "{12}", (0, 0, 0, 0, 0, 12)),
        ("[s]", "[30]", (0, 0, 0, 0, 30, 0)),
        ("(m)", "(5)", (0, 0, 0, 5, 0, 0)),
        ("h$m^s*z", "1$2^3*4", (0, 0, 1, 2, 3, 4)),
        ("h+m?s|z\\", "1+2?3|4\\", (0, 0, 1, 2, 3, 4)),
        ("hH", "7h", (0, 0, 7, 0, 0, 0)),
        ("h HH", "1 hour", (0, 0, 1, 0, 0, 0)),
        ("h HH", "2 hours", (0, 0, 2, 0, 0, 0)),
        ("h HH", "2 hour", (0, 0, 2, 0, 0, 0)),
        ("", "", (0, 0, 0, 0, 0, 0)),
    ),
)
def test_parse(pattern: str, text: str, expected: tuple[int, ...]) -> None:
    assert fields(TimePeriodFormat(pattern).parse(text)) == expected


@pytest.mark.parametrize(
    "fmt",
    (WITH_PLAIN_TEXT, WITH_LITERAL_SINGLE_QUOTE, FULLY_QUOTED_ASCENDING_UNITS),
)
def test_wordy_parsing(fmt: TimePeriodFormat) -> None:
    text = fmt.format(TimePeriod(0, 0, 7, 56, 4, 123))
    period = fmt.parse(text)
    assert period.hours == 7
    assert period.minutes == 56
    assert period.seconds == 4
    assert period.milliseconds == 123


def test_wordy_parsing_literals() -> None:
    assert fields(
        WITH_PLAIN_TEXT.parse(
            "7 hours and 56 minutes and 4 seconds and 123 milliseconds"
        )
    ) == (0, 0, 7, 56, 4, 123)
    assert fields(
        WITH_LITERAL_SINGLE_QUOTE.parse("I'm a quantity of 7h, 56m, 4s, 123ms")
    ) == (0, 0, 7, 56, 4, 123)
    assert fields(FULLY_QUOTED_ASCENDING_UNITS.parse("'123ms, 4s, 56m, 7h'")) == (
        0,
        0,
        7,
        56,
        4,
        123,
    )


@pytest.mark.parametrize(
    "fmt,text,error,offset",
    (
        (HH_MM_SS_TIMESTAMP, "100:12:45", UnmatchedLiteralError, 2),
        (HH_MM_SS_TIMESTAMP, "1:123:45", UnmatchedLiteralError, 4),
        (HH_MM_SS_TIMESTAMP, "1::45", MissingDigitsError, 2),
        (HH_MM_SS_TIMESTAMP, "1:13:450", TrailingInputError, 7),
        (HH_MM_SS_TIMESTAMP, "1:13:", MissingDigitsError, 5),
        (HH_MM_SS_TIMESTAMP, "", MissingDigitsError, 0),
        (HH_MM_SS_TIMESTAMP, "1:13", UnmatchedLiteralError, 4),
        # the dot must not become a wildcard
        (FULL_TIMESTAMP, "12:34:56x789", UnmatchedLiteralError, 8),
        (
            WITH_PLAIN_TEXT,
            "7 hours and 56 minnutes and 4 seconds and 123 milliseconds",
            UnmatchedLiteralError,
            18,
        ),
        (TimePeriodFormat("h HH"), "2 hrs", UnmatchedLiteralError, 3),
        (TimePeriodFormat("h HH"), "2 Hours", UnmatchedLiteralError, 2),
        (TimePeriodFormat("h HH"), "2 hoursx", TrailingInputError, 7),
        (TimePeriodFormat("s"), "123", TrailingInputError, 2),
        (TimePeriodFormat("s"), "x", MissingDigitsError, 0),
        (TimePeriodFormat(""), "x", TrailingInputError, 0),
        (TimePeriodFormat("'elapsed: 'ss"), "elapsed 12", UnmatchedLiteralError, 7),
    ),
)
def test_parse_errors(
    fmt: TimePeriodFormat,
    text: str,
    error: type[TimePeriodParseError],
    offset: int,
) -> None:
    with pytest.raises(error) as excinfo:
        fmt.parse(text)
    assert excinfo.value.offset == offset
    assert excinfo.value.text == text
    assert isinstance(excinfo.value, ValueError)


def test_unmatched_literal_expected() -> None:
    with pytest.raises(UnmatchedLiteralError) as excinfo:
        TimePeriodFormat("h HH").parse("2 hrs")
    assert excinfo.value.expected == " (hour|hours)"


@pytest.mark.parametrize(
    "pattern,max_unit,text,expected",
    (
        ("mm:ss", MINUTE, "120:15", (0, 0, 2, 0, 15, 0)),
        ("mmmm:ss", MINUTE, "1212:00", (0, 0, 20, 12, 0, 0)),
        ("hh:mm", HOUR, "36:00", (0, 1, 12, 0, 0, 0)),
        ("s.zzz", SECOND, "60.005", (0, 0, 0, 1, 0, 5)),
        ("z", MILLISECOND, "86400000", (0, 1, 0, 0, 0, 0)),
    ),
)
def test_parse_max_unit(
    pattern: str, max_unit: TimeUnit, text: str, expected: tuple[int, ...]
) -> None:
    assert fields(TimePeriodFormat(pattern, max_unit).parse(text)) == expected
    assert fields(TimePeriodFormat(pattern).parse(text, max_unit)) == expected


def test_parse_max_unit_unlimited_digits() -> None:
    period = TimePeriodFormat("hh:mm", HOUR).parse("123456789:12")
    assert period.total_milliseconds() == (123_456_789 * 60 + 12) * 60_000


def test_parse_max_unit_takes_every_digit() -> None:
    with pytest.raises(MissingDigitsError) as excinfo:
        TimePeriodFormat("hhmm", HOUR).parse("1030")
    assert excinfo.value.offset == 4


def test_parse_period() -> None:
    assert fields(parse_period("1212:00", "mmmm:ss", MINUTE)) == (0, 0, 20, 12, 0, 0)


@pytest.mark.parametrize(
    "pattern,max_unit,period",
    (
        ("hh:mm:ss", None, TimePeriod(hours=5, minutes=12, seconds=34)),
        ("w:d:hh:mm:ss.zzz", None, TimePeriod(3, 6, 23, 59, 59, 999)),
        ("w:d:hh:mm:ss.zzz", None, TimePeriod()),
        ("w:d:hh:mm:ss.zzz", None, TimePeriod(weeks=100, hours=1)),
        ("hh:mm:ss", HOUR, TimePeriod(weeks=2, hours=5, seconds=7)),
        ("mmmm:ss", MINUTE, TimePeriod(hours=2, minutes=30, seconds=10)),
        ("z", MILLISECOND, TimePeriod(1, 2, 3, 4, 5, 6)),
        (
            "w WW, d DD, h HH, m MM, s SS, z ZZ",
            None,
            TimePeriod(1, 1, 1, 1, 1, 1),
        ),
        (
            "w WW, d DD, h HH, m MM, s SS, z ZZ",
            None,
            TimePeriod(2, 0, 12, 30, 0, 250),
        ),
        (
            "'I''m a quantity of' hH, mM, sS, zZ",
            HOUR,
            TimePeriod(0, 0, 7, 56, 4, 123),
        ),
    ),
)
def test_round_trip(
    pattern: str, max_unit: TimeUnit | None, period: TimePeriod
) -> None:
    fmt = TimePeriodFormat(pattern, max_unit)
    parsed = fmt.parse(fmt.format(period))
    assert parsed == period
    assert fields(parsed) == fields(period)

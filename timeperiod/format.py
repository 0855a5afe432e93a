"""Pattern based formatting and parsing of time periods.

Unquoted letters in a pattern are pattern letters, everything else is copied
into the output when formatting and matched against the input when parsing.
Text can be quoted with single quotes, and ``''`` inside a quoted section is a
literal single quote.

======  ======================  ============
letter  component               example
======  ======================  ============
w       weeks                   645
d       days                    5
h       hours                   23
m       minutes                 2
s       seconds                 0
z       milliseconds            0
W       weeks unit name         weeks / w
D       days unit name          days / d
H       hours unit name         hours / h
M       minutes unit name       minutes / m
S       seconds unit name       seconds / s
Z       milliseconds unit name  milliseconds / ms
======  ======================  ============

All other letters are reserved. Repeating a number letter sets the zero padded
width ("mm" formats 2 minutes as "02") and the minimum number of digits read
when parsing; at least as many digits as the largest normalized value needs are
always read (59 for minutes, 999 for milliseconds). A single name letter is the
abbreviation, two or more the full name, pluralized unless the value is 1::

    "hH, mM, sS"           -> "16h, 2m, 1s"
    "hhH, mmM, ssS"        -> "16h, 02m, 01s"
    "h HH, m MM, 'and' s SS" -> "16 hours, 2 minutes, and 1 second"

A max unit makes a format show denormalized values: "hh:mm" with max unit HOUR
formats 1.5 days as "36:00". It also lifts the digit limit for that unit when
parsing, so "hh:mm" reads "123456789:12" but "hhmm" can no longer split
"1030" into hours and minutes.
"""
from __future__ import annotations

import copy
import functools
import itertools
import logging
import re
import typing
from dataclasses import dataclass

from .errors import (
    InvalidPatternError,
    MissingDigitsError,
    TrailingInputError,
    UnmatchedLiteralError,
)
from .helpers.padding import pad_with_zeros
from .period import TimePeriod
from .settings import get_settings, on_reload
from .units import TimeUnit

logger = logging.getLogger(__name__)

NUMBER_LETTERS: typing.Final = {
    "w": TimeUnit.WEEK,
    "d": TimeUnit.DAY,
    "h": TimeUnit.HOUR,
    "m": TimeUnit.MINUTE,
    "s": TimeUnit.SECOND,
    "z": TimeUnit.MILLISECOND,
}
NAME_LETTERS: typing.Final = {
    letter.upper(): unit for letter, unit in NUMBER_LETTERS.items()
}
# digits needed for the largest normalized value, None is unlimited
MAX_DIGITS: typing.Final[dict[TimeUnit, int | None]] = {
    TimeUnit.WEEK: None,
    TimeUnit.DAY: 1,
    TimeUnit.HOUR: 2,
    TimeUnit.MINUTE: 2,
    TimeUnit.SECOND: 2,
    TimeUnit.MILLISECOND: 3,
}


@dataclass(frozen=True)
class LiteralSegment:
    text: str


@dataclass(frozen=True)
class NumericSegment:
    unit: TimeUnit
    width: int


@dataclass(frozen=True)
class NameSegment:
    unit: TimeUnit
    full: bool

    @property
    def names(self) -> tuple[str, ...]:
        if self.full:
            return self.unit.singular_name, self.unit.plural_name
        return (self.unit.abbreviation,)


Segment = LiteralSegment | NumericSegment | NameSegment


@dataclass(frozen=True)
class NumberStep:
    unit: TimeUnit
    width: int


@dataclass(frozen=True)
class TextStep:
    regex: re.Pattern[str]
    accepted: tuple[str, ...]
    description: str

    @property
    def longest(self) -> int:
        return max(len(text) for text in self.accepted)


Step = NumberStep | TextStep


def compile_segments(pattern: str) -> tuple[Segment, ...]:
    segments: list[Segment] = []
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "'":
            text, i = _read_quoted(pattern, i + 1)
            _append_literal(segments, text)
            continue

        run = 1
        while i + run < len(pattern) and pattern[i + run] == char:
            run += 1

        if char in NUMBER_LETTERS:
            segments.append(NumericSegment(NUMBER_LETTERS[char], run))
        elif char in NAME_LETTERS:
            segments.append(NameSegment(NAME_LETTERS[char], run > 1))
        elif char.isalpha():
            raise InvalidPatternError(char, i)
        else:
            _append_literal(segments, char * run)
        i += run
    return tuple(segments)


def _read_quoted(pattern: str, i: int) -> tuple[str, int]:
    # an unterminated quote runs to the end of the pattern
    chars = []
    while i < len(pattern):
        if pattern[i] != "'":
            chars.append(pattern[i])
            i += 1
        elif pattern.startswith("''", i):
            chars.append("'")
            i += 2
        else:
            return "".join(chars), i + 1
    return "".join(chars), i


def _append_literal(segments: list[Segment], text: str) -> None:
    if not text:
        return
    last = segments[-1] if segments else None
    if isinstance(last, LiteralSegment):
        segments[-1] = LiteralSegment(last.text + text)
    else:
        segments.append(LiteralSegment(text))


def compile_steps(segments: typing.Iterable[Segment]) -> tuple[Step, ...]:
    steps: list[Step] = []
    # consecutive non-numeric segments are read as one piece of text
    for is_number, group in itertools.groupby(
        segments, key=lambda segment: isinstance(segment, NumericSegment)
    ):
        if is_number:
            steps.extend(
                NumberStep(segment.unit, segment.width)  # type: ignore
                for segment in group
            )
        else:
            steps.append(_text_step(list(group)))
    return tuple(steps)


def _text_step(segments: list[Segment]) -> TextStep:
    choices = [
        (segment.text,) if isinstance(segment, LiteralSegment) else segment.names
        for segment in typing.cast(list[LiteralSegment | NameSegment], segments)
    ]
    regex = "".join(
        re.escape(options[0])
        if len(options) == 1
        else "(?:" + "|".join(re.escape(option) for option in options) + ")"
        for options in choices
    )
    description = "".join(
        options[0] if len(options) == 1 else "(" + "|".join(options) + ")"
        for options in choices
    )
    return TextStep(
        re.compile(regex),
        tuple("".join(parts) for parts in itertools.product(*choices)),
        description,
    )


class TimePeriodFormat:
    """Formats time periods as text and parses them back, see the module docs.

    A format is compiled once in the constructor and never changes afterwards,
    so one instance can be shared freely. ``format`` temporarily denormalizes the
    period it's given, so a single period must not be formatted concurrently.

    A ``max_unit`` of None given to the constructor, ``format`` or ``parse``
    falls back to the format's max unit, which itself defaults to
    ``Settings.default_max_unit``. ``with_max_unit(None)`` is the way to get a
    format without any max unit when that setting is configured.
    """

    pattern: str
    max_unit: TimeUnit | None
    segments: tuple[Segment, ...]
    steps: tuple[Step, ...]

    def __init__(self, pattern: str, max_unit: TimeUnit | None = None) -> None:
        self.pattern = pattern
        self.max_unit = (
            get_settings().default_max_unit if max_unit is None else max_unit
        )
        self.segments = compile_segments(pattern)
        self.steps = compile_steps(self.segments)
        logger.debug(f"compiled {pattern!r}: {self.segments}")

    def with_max_unit(self, max_unit: TimeUnit | None) -> TimePeriodFormat:
        clone = copy.copy(self)
        clone.max_unit = max_unit
        return clone

    def format(
        self, period: TimePeriod, max_unit: TimeUnit | None = None
    ) -> str:
        if max_unit is None:
            max_unit = self.max_unit

        period.normalize().denormalize(max_unit)
        try:
            return "".join(self._render(segment, period) for segment in self.segments)
        finally:
            period.normalize()

    @staticmethod
    def _render(segment: Segment, period: TimePeriod) -> str:
        if isinstance(segment, LiteralSegment):
            return segment.text
        value = period.raw(segment.unit)
        if isinstance(segment, NumericSegment):
            return pad_with_zeros(value, segment.width)
        if segment.full:
            return segment.unit.name_for(value)
        return segment.unit.abbreviation

    def parse(self, text: str, max_unit: TimeUnit | None = None) -> TimePeriod:
        if max_unit is None:
            max_unit = self.max_unit

        result = TimePeriod()
        position = 0
        for step in self.steps:
            if isinstance(step, TextStep):
                position = self._read_text(step, text, position)
            else:
                position = self._read_number(step, text, position, result, max_unit)

        if position != len(text):
            logger.debug(f"{self.pattern!r} left {text[position:]!r} unread")
            raise TrailingInputError(text, position)
        return result

    @staticmethod
    def _read_text(step: TextStep, text: str, start: int) -> int:
        # grow the candidate until it matches, then until it stops matching
        end = None
        limit = min(len(text), start + step.longest)
        for stop in range(start + 1, limit + 1):
            if step.regex.fullmatch(text, start, stop):
                end = stop
            elif end is not None:
                break

        if end is None:
            offset = start + max(
                _common_prefix_length(text, start, accepted)
                for accepted in step.accepted
            )
            logger.debug(f"expected {step.description!r} in {text!r} at {offset}")
            raise UnmatchedLiteralError(text, offset, step.description)
        return end

    @staticmethod
    def _read_number(
        step: NumberStep,
        text: str,
        start: int,
        result: TimePeriod,
        max_unit: TimeUnit | None,
    ) -> int:
        max_digits = MAX_DIGITS[step.unit]
        limit = (
            None
            if step.unit is max_unit or max_digits is None
            else max(step.width, max_digits)
        )

        end = start
        while (
            end < len(text)
            and (limit is None or end - start < limit)
            and text[end].isdecimal()
        ):
            end += 1

        if end == start:
            logger.debug(f"expected {step.unit.plural_name} in {text!r} at {start}")
            raise MissingDigitsError(text, start)
        result.set(step.unit, int(text[start:end]))
        return end

    def __repr__(self) -> str:
        return f"TimePeriodFormat({self.pattern!r}, max_unit={self.max_unit})"


def _common_prefix_length(text: str, start: int, expected: str) -> int:
    length = 0
    for char, other in zip(text[start:], expected):
        if char != other:
            break
        length += 1
    return length


@functools.cache
def _format_cache() -> typing.Callable[[str], TimePeriodFormat]:
    return functools.lru_cache(maxsize=get_settings().format_cache_size)(
        TimePeriodFormat
    )


on_reload(_format_cache.cache_clear)


def compile_pattern(pattern: str) -> TimePeriodFormat:
    return _format_cache()(pattern)


def format_period(
    period: TimePeriod, pattern: str, max_unit: TimeUnit | None = None
) -> str:
    return compile_pattern(pattern).format(period, max_unit)


def parse_period(
    text: str, pattern: str, max_unit: TimeUnit | None = None
) -> TimePeriod:
    return compile_pattern(pattern).parse(text, max_unit)

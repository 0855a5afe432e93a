from __future__ import annotations

import enum
import functools
import logging
import typing
from datetime import timedelta

from .errors import AmbiguousOrMisspelledUnitError, UnrecognizedUnitWordError
from .helpers.regex import UNIT_WORD
from .helpers.tokenizer import CharType, char_type
from .units import UNITS_DESCENDING, TimeUnit, min_unit, parse_unit_word

logger = logging.getLogger(__name__)

# (finer, coarser, how many finer make one coarser)
CARRIES: typing.Final = (
    (TimeUnit.MILLISECOND, TimeUnit.SECOND, 1_000),
    (TimeUnit.SECOND, TimeUnit.MINUTE, 60),
    (TimeUnit.MINUTE, TimeUnit.HOUR, 60),
    (TimeUnit.HOUR, TimeUnit.DAY, 24),
    (TimeUnit.DAY, TimeUnit.WEEK, 7),
)


class NormalizationState(enum.Enum):
    NORMALIZED = enum.auto()
    PENDING = enum.auto()


class LargestUnit(typing.NamedTuple):
    magnitude: int
    unit: TimeUnit


def _field(unit: TimeUnit) -> property:
    def getter(self: TimePeriod) -> int:
        return self.normalize()._fields[unit]

    def setter(self: TimePeriod, value: int) -> None:
        self.set(unit, value)

    return property(getter, setter, doc=f"Normalized {unit.plural_name}.")


@functools.total_ordering
class TimePeriod:
    """A length of time without a start or end, from weeks down to milliseconds.

    Months and years aren't supported since their length depends on the calendar.
    Fields are kept in normalized form (e.g. hours < 24) except in the window
    between a ``denormalize`` call and the next read, which is how a format shows
    36 hours instead of 1 day 12 hours.
    """

    state: NormalizationState
    _fields: dict[TimeUnit, int]

    weeks = _field(TimeUnit.WEEK)
    days = _field(TimeUnit.DAY)
    hours = _field(TimeUnit.HOUR)
    minutes = _field(TimeUnit.MINUTE)
    seconds = _field(TimeUnit.SECOND)
    milliseconds = _field(TimeUnit.MILLISECOND)

    def __init__(
        self,
        weeks: int = 0,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        milliseconds: int = 0,
    ) -> None:
        self._fields = dict(
            zip(
                UNITS_DESCENDING,
                (weeks, days, hours, minutes, seconds, milliseconds),
            )
        )
        for unit, value in self._fields.items():
            if value < 0:
                raise ValueError(f"{unit.plural_name} must not be negative: {value}")
        self.state = NormalizationState.PENDING
        self.normalize()

    @classmethod
    def of(cls, number: int, unit: TimeUnit) -> TimePeriod:
        period = cls()
        period.set(unit, number)
        return period

    @classmethod
    def from_milliseconds(cls, total: int) -> TimePeriod:
        return cls(milliseconds=total)

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> TimePeriod:
        # sub-millisecond precision is dropped
        return cls.from_milliseconds(delta // timedelta(milliseconds=1))

    @classmethod
    def parse_as_words(cls, text: str) -> TimePeriod:
        return parse_as_words(text)

    def normalize(self) -> TimePeriod:
        if self.state is NormalizationState.PENDING:
            for finer, coarser, divisor in CARRIES:
                carry, self._fields[finer] = divmod(self._fields[finer], divisor)
                self._fields[coarser] += carry
            self.state = NormalizationState.NORMALIZED
        return self

    def denormalize(self, largest: TimeUnit | None) -> TimePeriod:
        """Fold every unit coarser than ``largest`` into ``largest``.

        E.g. 2 days denormalized to HOUR is 48 hours. The period stays in this
        state until something reads a normalized field.
        """
        if largest is not None:
            depth = UNITS_DESCENDING.index(largest)
            for finer, coarser, factor in reversed(CARRIES):
                if UNITS_DESCENDING.index(coarser) >= depth:
                    break
                self._fields[finer] += self._fields[coarser] * factor
                self._fields[coarser] = 0
        self.state = NormalizationState.PENDING
        return self

    def raw(self, unit: TimeUnit) -> int:
        return self._fields[unit]

    def get(self, unit: TimeUnit) -> int:
        return self.normalize()._fields[unit]

    def set(self, unit: TimeUnit, value: int) -> TimePeriod:
        if value < 0:
            logger.debug(f"ignoring negative {unit.plural_name}: {value}")
            return self
        self._fields[unit] = value
        self.state = NormalizationState.PENDING
        return self.normalize()

    def get_largest_unit(self, max_unit: TimeUnit = TimeUnit.WEEK) -> LargestUnit:
        """Express the period as one number of the coarsest possible unit.

        The unit is never coarser than ``max_unit``, and is demoted further when
        a coarser one would hide a finer nonzero field: 3 days 5 hours is
        ``(77, HOUR)`` no matter whether ``max_unit`` is WEEK, DAY or HOUR.
        """
        self.normalize()
        needed = next(
            (unit for unit in reversed(UNITS_DESCENDING[1:]) if self._fields[unit]),
            TimeUnit.WEEK,
        )
        self.denormalize(min_unit(max_unit, needed))
        try:
            for unit in UNITS_DESCENDING:
                if self._fields[unit]:
                    return LargestUnit(self._fields[unit], unit)
            return LargestUnit(0, TimeUnit.SECOND)
        finally:
            self.normalize()

    def total_milliseconds(self) -> int:
        return sum(value * unit.milliseconds for unit, value in self._fields.items())

    def to_timedelta(self) -> timedelta:
        return timedelta(milliseconds=self.total_milliseconds())

    def copy(self) -> TimePeriod:
        period = TimePeriod()
        period._fields = self._fields.copy()
        period.state = self.state
        return period

    def __add__(self, other: object) -> TimePeriod:
        if not isinstance(other, TimePeriod):
            return NotImplemented
        return TimePeriod.from_milliseconds(
            self.total_milliseconds() + other.total_milliseconds()
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimePeriod):
            return NotImplemented
        return self.total_milliseconds() == other.total_milliseconds()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TimePeriod):
            return NotImplemented
        return self.total_milliseconds() < other.total_milliseconds()

    def __bool__(self) -> bool:
        return any(self._fields.values())

    def __str__(self) -> str:
        return ", ".join(
            f"{self._fields[unit]} {unit.singular_name}(s)" for unit in UNITS_DESCENDING
        )

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{unit.plural_name}={self._fields[unit]}" for unit in UNITS_DESCENDING
        )
        return f"TimePeriod({fields})"

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        from .format import compile_pattern

        return compile_pattern(format_spec).format(self)


def parse_as_words(text: str) -> TimePeriod:
    """Parse "<number> <unit>", e.g. "2 weeks", "5 days" or "36 hour".

    On failure the error offset points at the end of the longest prefix that
    still looked like valid input, e.g. offset 4 for "2 daays".
    """
    match = UNIT_WORD.fullmatch(text)
    unit = parse_unit_word(match.group("unit")) if match is not None else None
    if match is not None and unit is not None:
        return TimePeriod.of(int(match.group("number")), unit)

    # 0: reading the number, 1: reading whitespace, 2: found the unit word
    i, state = 0, 0
    while i < len(text) and state < 2:
        kind = char_type(text[i])
        if (state == 0 and kind is CharType.WHITESPACE) or (
            state == 1 and kind is CharType.LETTER
        ):
            state += 1
        elif (state == 0 and kind is CharType.LETTER) or (
            state == 1 and kind is CharType.DIGIT
        ):
            i += 1
            break
        i += 1

    if state < 2:
        logger.debug(f"no unit word in {text!r}")
        raise UnrecognizedUnitWordError(text, max(i - 1, 0))

    start = i - 1
    candidates = {unit.plural_name for unit in TimeUnit}
    end = start + 1
    while end <= len(text):
        prefix = text[start:end].lower()
        candidates = {name for name in candidates if name.startswith(prefix)}
        if not candidates:
            break
        end += 1
    logger.debug(f"unit word of {text!r} diverges at {end - 1}")
    raise AmbiguousOrMisspelledUnitError(text, end - 1)

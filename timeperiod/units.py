from __future__ import annotations

import enum
import typing


class TimeUnit(enum.Enum):
    # finer units must keep smaller ranks, min_unit() depends on it
    MILLISECOND = ("millisecond", "ms", 0, 1)
    SECOND = ("second", "s", 0, 1_000)
    MINUTE = ("minute", "m", 1, 60 * 1_000)
    HOUR = ("hour", "h", 2, 60 * 60 * 1_000)
    DAY = ("day", "d", 3, 24 * 60 * 60 * 1_000)
    WEEK = ("week", "w", 4, 7 * 24 * 60 * 60 * 1_000)

    singular_name: str
    abbreviation: str
    rank: int
    milliseconds: int

    def __init__(
        self, singular_name: str, abbreviation: str, rank: int, milliseconds: int
    ) -> None:
        self.singular_name = singular_name
        self.abbreviation = abbreviation
        self.rank = rank
        self.milliseconds = milliseconds

    @property
    def plural_name(self) -> str:
        return f"{self.singular_name}s"

    def name_for(self, value: int) -> str:
        return self.singular_name if value == 1 else self.plural_name


# coarsest first
UNITS_DESCENDING: typing.Final = (
    TimeUnit.WEEK,
    TimeUnit.DAY,
    TimeUnit.HOUR,
    TimeUnit.MINUTE,
    TimeUnit.SECOND,
    TimeUnit.MILLISECOND,
)

UNIT_WORDS: typing.Final[dict[str, TimeUnit]] = {
    **{unit.singular_name: unit for unit in TimeUnit},
    **{unit.plural_name: unit for unit in TimeUnit},
}


def parse_unit_word(text: str) -> TimeUnit | None:
    return UNIT_WORDS.get(text.lower())


def parse_unit(text: str) -> TimeUnit:
    """Resolve a unit from its enum name ("HOUR"), singular or plural name."""
    text = text.strip()
    try:
        return TimeUnit[text.upper()]
    except KeyError:
        pass
    unit = parse_unit_word(text)
    if unit is None:
        raise ValueError(f"unknown time unit: {text!r}")
    return unit


def min_unit(a: TimeUnit, b: TimeUnit) -> TimeUnit:
    # ties go to the first argument
    return b if b.rank < a.rank else a

import re

from ..units import TimeUnit

# "<digits><whitespace>*<unit word>", singular or plural
UNIT_WORD = re.compile(
    r"(?P<number>\d+)\s*(?P<unit>"
    + "|".join(f"{unit.plural_name}?" for unit in TimeUnit)
    + ")",
    re.IGNORECASE | re.ASCII,
)

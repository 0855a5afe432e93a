class TimePeriodError(ValueError):
    pass


class InvalidPatternError(TimePeriodError):
    def __init__(self, char: str, index: int) -> None:
        super().__init__(f"Illegal pattern character {char!r} at index {index}")
        self.char = char
        self.index = index


class TimePeriodParseError(TimePeriodError):
    """Raised when input text can't be read as a time period.

    ``offset`` is the index into ``text`` at which the failure was detected.
    """

    def __init__(self, message: str, text: str, offset: int) -> None:
        super().__init__(f"{message} (at offset {offset} of {text!r})")
        self.message = message
        self.text = text
        self.offset = offset


class MissingDigitsError(TimePeriodParseError):
    def __init__(self, text: str, offset: int) -> None:
        super().__init__("Missing numeric token", text, offset)


class UnmatchedLiteralError(TimePeriodParseError):
    def __init__(self, text: str, offset: int, expected: str) -> None:
        super().__init__(f"Expected {expected!r}", text, offset)
        self.expected = expected


class TrailingInputError(TimePeriodParseError):
    def __init__(self, text: str, offset: int) -> None:
        super().__init__(
            "Encountered extra characters after expected end of input", text, offset
        )


class UnrecognizedUnitWordError(TimePeriodParseError):
    def __init__(self, text: str, offset: int) -> None:
        super().__init__("Couldn't parse as time units", text, offset)


class AmbiguousOrMisspelledUnitError(TimePeriodParseError):
    def __init__(self, text: str, offset: int) -> None:
        super().__init__("Misspelled/Unrecognized units", text, offset)

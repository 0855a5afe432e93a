import enum
from string import whitespace


class CharType(enum.IntEnum):
    LETTER = 0
    DIGIT = 1
    WHITESPACE = 2
    OTHER = 3


def char_type(char: str) -> CharType:
    if char.isalpha():
        return CharType.LETTER
    elif char.isdigit():
        return CharType.DIGIT
    elif char in whitespace:
        return CharType.WHITESPACE
    return CharType.OTHER

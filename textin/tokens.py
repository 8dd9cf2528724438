from dataclasses import dataclass
from enum import Enum, auto

@dataclass
class Position:
    line: int
    column: int

# --- Line terminators ---

CARRIAGE_RETURN = '\r'
LINE_FEED = '\n'

# \r\n is treated as a single terminator by the reader and the scanner
LINE_TERMINATORS = frozenset({
    LINE_FEED,
    CARRIAGE_RETURN,
    '\u0085',                           # next line
    '\u2028',                           # line separator
    '\u2029',                           # paragraph separator
})

# whitespace to str.isspace() that does not separate tokens; next line still ends a line
NON_DELIMITING_SPACES = frozenset({'\u00a0', '\u2007', '\u202f', '\u0085'})


def is_whitespace(char: str) -> bool:
    return char.isspace() and char not in NON_DELIMITING_SPACES


def is_line_terminator(char: str) -> bool:
    return char in LINE_TERMINATORS

# --- Delimiter Definition ---

class Delimiter(Enum):
    WHITESPACE = auto()                 # one or more whitespace characters
    NOTHING = auto()                    # every character is its own unit

    def splits_on(self, char: str) -> bool:
        if self is Delimiter.WHITESPACE:
            return is_whitespace(char)
        return False

    def __str__(self):
        return self.name

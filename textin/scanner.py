from contextlib import contextmanager
from typing import Iterator, Optional
from textin.reader import SourceReader
from textin.tokens import (
    CARRIAGE_RETURN,
    LINE_FEED,
    Delimiter,
    Position,
    is_line_terminator,
    is_whitespace,
)
from textin.utils import EndOfInputException

# --- Scanner ---

class Scanner:
    """
    Splits the characters of a SourceReader into tokens, lines and single
    characters.

    Tokens are separated by the current delimiter, which is WHITESPACE
    between calls. Switching it is only done through `delimiting`, which
    puts the previous delimiter back on every exit path.

    A token read that leaves nothing but whitespace on its line marks that
    leftover as spent: the following line read starts on the next line
    instead of returning the empty rest.
    """
    def __init__(self, reader: SourceReader):
        self._reader = reader
        self.delimiter: Delimiter = Delimiter.WHITESPACE
        self.token_start: Optional[Position] = None
        self._after_token: bool = False

    @contextmanager
    def delimiting(self, delimiter: Delimiter) -> Iterator['Scanner']:
        previous = self.delimiter
        self.delimiter = delimiter
        try:
            yield self
        finally:
            self.delimiter = previous

    def position(self) -> Position:
        return Position(*self._reader.current_pos())

    # --- Tokens ---

    def has_next(self) -> bool:
        """True if another token remains. Consumes nothing."""
        k = 1
        while True:
            char = self._reader.peek_char(k)
            if char is None:
                return False
            if not self.delimiter.splits_on(char):
                return True
            k += 1

    def next(self, expected: str = "a token") -> str:
        """
        Skips leading delimiters and returns the next token. With the
        NOTHING delimiter every character is a token of its own.
        """
        while True:
            char = self._reader.peek_char()
            if char is None:
                raise EndOfInputException(expected, self.position())
            if not self.delimiter.splits_on(char):
                break
            self._reader.get_char()

        self.token_start = self.position()

        if self.delimiter is Delimiter.NOTHING:
            self._after_token = False
            return self._reader.get_char()

        value = []
        while True:
            char = self._reader.peek_char()
            if char is None or self.delimiter.splits_on(char):
                break
            value.append(self._reader.get_char())

        self._after_token = True
        return ''.join(value)

    # --- Characters ---

    def has_next_char(self) -> bool:
        with self.delimiting(Delimiter.NOTHING):
            return self.has_next()

    def next_char(self, expected: str = "a character") -> str:
        with self.delimiting(Delimiter.NOTHING):
            return self.next(expected)

    # --- Lines ---

    def _spent_line_length(self) -> Optional[int]:
        """
        Number of characters left on the current line (terminator included)
        when they are all whitespace, None otherwise.
        """
        k = 1
        while True:
            char = self._reader.peek_char(k)
            if char is None:
                return k - 1
            if is_line_terminator(char):
                if char == CARRIAGE_RETURN and self._reader.peek_char(k + 1) == LINE_FEED:
                    return k + 1
                return k
            if not is_whitespace(char):
                return None
            k += 1

    def has_next_line(self) -> bool:
        if self._after_token:
            spent = self._spent_line_length()
            if spent is not None:
                return self._reader.peek_char(spent + 1) is not None
        return not self._reader.at_end()

    def next_line(self, expected: str = "a line") -> str:
        """Returns the rest of the current line and consumes its terminator."""
        if self._after_token:
            spent = self._spent_line_length()
            for _ in range(spent or 0):
                self._reader.get_char()
            self._after_token = False

        if self._reader.at_end():
            raise EndOfInputException(expected, self.position())

        self.token_start = self.position()
        value = []
        while True:
            char = self._reader.get_char()
            if char is None:
                break
            if is_line_terminator(char):
                if char == CARRIAGE_RETURN and self._reader.peek_char() == LINE_FEED:
                    self._reader.get_char()
                break
            value.append(char)

        return ''.join(value)

    # --- Remainder ---

    def remaining(self) -> str:
        self._after_token = False
        return self._reader.read_remaining()

    def close(self) -> None:
        self._reader.close()

    def __iter__(self):
        return self

    def __next__(self) -> str:
        if not self.has_next():
            raise StopIteration
        return self.next()

from collections import deque
from typing import Deque, Optional, TextIO, Tuple
from textin.tokens import CARRIAGE_RETURN, LINE_FEED, is_line_terminator

# --- Source Reader ---

class SourceReader:
    """
    Reads characters lazily from a text stream and tracks the current
    position (line, column).

    Characters are handed out exactly as they appear in the stream, so
    reading everything back reproduces the input. Only the position
    bookkeeping treats \\r\\n as a single line break.
    """
    def __init__(self, source: TextIO):
        self._stream = source
        self._peeked_chars: Deque[str] = deque()
        self._eof_reached: bool = False
        self._last_char: Optional[str] = None
        self.line: int = 1
        self.column: int = 0

    def _fill(self, k: int) -> None:
        while len(self._peeked_chars) < k and not self._eof_reached:
            char = self._stream.read(1)
            if char:
                self._peeked_chars.append(char)
            else:
                self._eof_reached = True

    def peek_char(self, k: int = 1) -> Optional[str]:
        """Looks ahead k characters without consuming them. Returns None if EOF."""
        if k <= 0:
            return None

        self._fill(k)

        if len(self._peeked_chars) < k:
            return None
        else:
            return self._peeked_chars[k-1]

    def get_char(self) -> Optional[str]:
        """Consumes the next character and updates the position. Returns None if EOF."""
        self._fill(1)

        if not self._peeked_chars:
            return None

        char = self._peeked_chars.popleft()

        if char == LINE_FEED and self._last_char == CARRIAGE_RETURN:
            # second half of \r\n, the line was already advanced
            pass
        elif is_line_terminator(char):
            self.line += 1
            self.column = 0
        else:
            self.column += 1

        self._last_char = char
        return char

    def at_end(self) -> bool:
        return self.peek_char() is None

    def read_remaining(self) -> str:
        """Consumes everything up to the end of the stream."""
        chars = []
        while True:
            char = self.get_char()
            if char is None:
                break
            chars.append(char)
        return ''.join(chars)

    def current_pos(self) -> Tuple[int, int]:
        """Returns the current (line, column) position."""
        return self.line, self.column

    def close(self) -> None:
        self._peeked_chars.clear()
        self._eof_reached = True
        self._stream.close()

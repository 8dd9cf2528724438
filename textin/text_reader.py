import logging
from typing import Callable, List, Optional, Tuple, TypeVar
from textin.numbers import NumberFormat
from textin.reader import SourceReader
from textin.scanner import Scanner
from textin.sources import adopt_stream, open_name, open_stdin
from textin.utils import (
    ClosedSourceException,
    Config,
    FormatMismatchException,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')

_STDIN = object()


class TextReader:
    """
    Reads strings and numbers from standard input, a file, a URL or an
    already open stream.

    Reading a token consumes the whitespace in front of it, reading a line
    consumes the line terminator after it, and reading a character consumes
    nothing extra. Numbers follow fixed US English conventions ("." as the
    decimal separator, "," for grouping) whatever the platform locale is.

        with TextReader("data.txt") as source:
            while not source.is_empty():
                total += source.read_int()
    """
    def __init__(self, source=_STDIN, config: Optional[Config] = None):
        self._config = config if config else Config()
        self._numbers = NumberFormat.from_config(self._config)
        self._scanner: Optional[Scanner] = None

        if source is _STDIN:
            stream = open_stdin(self._config)
        elif isinstance(source, Scanner):
            logger.debug("Adopting scanner %r", source)
            self._scanner = source
            return
        elif source is None or isinstance(source, (str, bytes)) or hasattr(source, '__fspath__'):
            if isinstance(source, bytes):
                source = source.decode(self._config.encoding)
            stream = open_name(source, self._config)
        else:
            stream = adopt_stream(source, self._config)

        self._scanner = Scanner(SourceReader(stream))

    @property
    def scanner(self) -> Scanner:
        if self._scanner is None:
            raise ClosedSourceException()
        return self._scanner

    # --- Queries ---

    def exists(self) -> bool:
        """True if this input stream is open."""
        return self._scanner is not None

    def is_empty(self) -> bool:
        """True if nothing but whitespace is left."""
        return not self.scanner.has_next()

    def has_next_line(self) -> bool:
        return self.scanner.has_next_line()

    def has_next_char(self) -> bool:
        """True if any input is left, whitespace included."""
        return self.scanner.has_next_char()

    def current_pos(self) -> Tuple[int, int]:
        position = self.scanner.position()
        return position.line, position.column

    # --- Reads ---

    def read_line(self) -> str:
        return self.scanner.next_line()

    def read_char(self) -> str:
        return self.scanner.next_char()

    def read_all(self) -> str:
        """Reads and returns the remainder of the input, unchanged."""
        return self.scanner.remaining()

    def read_string(self) -> str:
        return self.scanner.next("a 'String' value")

    def _read_parsed(self, expected: str, parse: Callable[[str], T]) -> T:
        token = self.scanner.next(expected)
        try:
            return parse(token)
        except ValueError:
            raise FormatMismatchException(expected, token, self.scanner.token_start) from None

    def read_int(self) -> int:
        return self._read_parsed("an 'int' value", lambda t: self._numbers.parse_integer(t, 'int'))

    def read_long(self) -> int:
        return self._read_parsed("a 'long' value", lambda t: self._numbers.parse_integer(t, 'long'))

    def read_short(self) -> int:
        return self._read_parsed("a 'short' value", lambda t: self._numbers.parse_integer(t, 'short'))

    def read_byte(self) -> int:
        return self._read_parsed("a 'byte' value", lambda t: self._numbers.parse_integer(t, 'byte'))

    def read_float(self) -> float:
        return self._read_parsed("a 'float' value", self._numbers.parse_float)

    def read_double(self) -> float:
        return self._read_parsed("a 'double' value", self._numbers.parse_float)

    def read_bool(self) -> bool:
        return self._read_parsed("a 'boolean' value", self._numbers.parse_bool)

    # --- Bulk reads ---

    def read_all_strings(self) -> List[str]:
        return list(self.scanner)

    def read_all_lines(self) -> List[str]:
        lines = []
        while self.has_next_line():
            lines.append(self.read_line())
        return lines

    def read_all_ints(self) -> List[int]:
        return self._read_all_parsed(self.read_int)

    def read_all_longs(self) -> List[int]:
        return self._read_all_parsed(self.read_long)

    def read_all_doubles(self) -> List[float]:
        return self._read_all_parsed(self.read_double)

    def _read_all_parsed(self, read: Callable[[], T]) -> List[T]:
        values = []
        while not self.is_empty():
            values.append(read())
        return values

    # --- Lifecycle ---

    def close(self) -> None:
        """Closes the input stream. Calling it again does nothing."""
        if self._scanner is None:
            return
        scanner, self._scanner = self._scanner, None
        scanner.close()

    def __enter__(self) -> 'TextReader':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __iter__(self):
        while self.has_next_line():
            yield self.read_line()

    def __repr__(self) -> str:
        state = "open" if self.exists() else "closed"
        return f"<TextReader {state}>"

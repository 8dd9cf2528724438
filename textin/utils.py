import io
import json
from dataclasses import dataclass
from typing import List, Optional
from textin.tokens import Position


class InputException(Exception):
    def __init__(self, message, position: Optional[Position] = None):
        self.position: Optional[Position] = position
        self.message = message
        if position is not None:
            super().__init__(f'[{self.position.line}, {self.position.column}] ERROR {message}')
        else:
            super().__init__(message)

# Source Exceptions
class InvalidSourceException(InputException):
    def __init__(self, message, causes: Optional[List[BaseException]] = None):
        self.causes: List[BaseException] = list(causes) if causes else []
        super().__init__(message)

class ClosedSourceException(InvalidSourceException):
    def __init__(self):
        message = "Input stream is closed"
        super().__init__(message)

# Read Exceptions
class EndOfInputException(InputException):
    def __init__(self, expected: str, position: Optional[Position] = None):
        self.expected = expected
        message = f"Attempts to read {expected} from the input stream, but no more input is available"
        super().__init__(message, position)

class FormatMismatchException(InputException):
    def __init__(self, expected: str, token: str, position: Optional[Position] = None):
        self.expected = expected
        self.token = token
        message = f"Attempts to read {expected} from the input stream, but the next token is \"{token}\""
        super().__init__(message, position)


@dataclass(frozen=True)
class Config:
    encoding: str = "utf-8"
    # malformed input decodes to U+FFFD instead of failing the read
    errors: str = "replace"
    decimal_separator: str = "."
    grouping_separator: str = ","
    buffer_size: int = io.DEFAULT_BUFFER_SIZE

    @staticmethod
    def from_json_file(path: str) -> 'Config':
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return Config(**data)

import io
import logging
import os
import sys
from typing import List, Sequence, TextIO, Union
from urllib.parse import urlparse
from urllib.request import url2pathname

import requests

from textin.utils import Config, InvalidSourceException

logger = logging.getLogger(__name__)

# the failures a strategy may report; anything else is a programming error
OPEN_ERRORS = (OSError, ValueError, requests.RequestException)

# --- Name resolution strategies ---

class SourceStrategy:
    """Opens a named source as a text stream, or raises one of OPEN_ERRORS."""
    name = "source"

    def open(self, name: str, config: Config) -> TextIO:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"


class LocalFileStrategy(SourceStrategy):
    name = "local file"

    def open(self, name: str, config: Config) -> TextIO:
        if not os.path.exists(name):
            raise FileNotFoundError(f"No such file: {name}")
        return _open_path(name, config)


class FileUrlStrategy(SourceStrategy):
    name = "file URL"

    def open(self, name: str, config: Config) -> TextIO:
        parsed = urlparse(name)
        if parsed.scheme != 'file':
            raise ValueError(f"Not a file URL: {name}")
        return _open_path(url2pathname(parsed.path), config)


class UrlStrategy(SourceStrategy):
    """Streams the body of a network resource."""
    name = "URL"

    def open(self, name: str, config: Config) -> TextIO:
        response = requests.get(name, stream=True)
        try:
            response.raise_for_status()
            response.raw.decode_content = True
            buffer = io.BufferedReader(response.raw, buffer_size=config.buffer_size)
            return io.TextIOWrapper(buffer, encoding=config.encoding, errors=config.errors, newline='')
        except Exception:
            response.close()
            raise


NAME_STRATEGIES: Sequence[SourceStrategy] = (
    LocalFileStrategy(),
    FileUrlStrategy(),
    UrlStrategy(),
)


def _open_path(path: str, config: Config) -> TextIO:
    # newline='' keeps line terminators exactly as stored
    return open(path, 'r', buffering=config.buffer_size,
                encoding=config.encoding, errors=config.errors, newline='')


def open_name(name: Union[str, os.PathLike], config: Config,
              strategies: Sequence[SourceStrategy] = NAME_STRATEGIES) -> TextIO:
    """
    Tries each strategy in order and returns the first stream that opens.
    When all of them fail, the collected causes travel with the
    InvalidSourceException and the last one is chained.
    """
    if name is None:
        raise InvalidSourceException("Argument is null")

    name = os.fspath(name)
    if not name:
        raise InvalidSourceException("Argument is empty")

    causes: List[BaseException] = []
    for strategy in strategies:
        try:
            stream = strategy.open(name, config)
        except OPEN_ERRORS as e:
            logger.debug("Could not open %s as %s: %s", name, strategy.name, e)
            causes.append(e)
            continue

        logger.debug("Opened %s as %s", name, strategy.name)
        return stream

    raise InvalidSourceException(f"Could not open {name}", causes) from (causes[-1] if causes else None)

# --- Standard input and caller supplied handles ---

class BorrowedTextWrapper(io.TextIOWrapper):
    """Decodes a buffer owned by someone else; closing detaches from it."""
    _released = False

    def close(self) -> None:
        if not self._released:
            self._released = True
            self.detach()


class BorrowedTextStream:
    """Reads from a text stream owned by someone else; closing leaves it open."""
    def __init__(self, stream: TextIO):
        self._stream = stream
        self.closed = False

    def read(self, size: int = -1) -> str:
        if self.closed:
            raise ValueError("I/O operation on closed stream")
        return self._stream.read(size)

    def close(self) -> None:
        self.closed = True


def open_stdin(config: Config) -> TextIO:
    """
    Reads standard input through the configured encoding. Closing the
    returned stream never closes sys.stdin or its buffer.
    """
    buffer = getattr(sys.stdin, 'buffer', None)
    if buffer is None:
        # replaced by an in-memory text stream
        logger.debug("Standard input has no binary buffer, reading %r directly", sys.stdin)
        return BorrowedTextStream(sys.stdin)

    logger.debug("Decoding standard input as %s", config.encoding)
    return BorrowedTextWrapper(buffer, encoding=config.encoding, errors=config.errors, newline='')


def adopt_stream(handle, config: Config) -> TextIO:
    """Takes over an already open stream, decoding binary ones."""
    if handle is None:
        raise InvalidSourceException("Stream argument is null")

    if isinstance(handle, io.RawIOBase):
        handle = io.BufferedReader(handle, buffer_size=config.buffer_size)

    if isinstance(handle, io.BufferedIOBase):
        logger.debug("Decoding binary stream %r as %s", handle, config.encoding)
        return io.TextIOWrapper(handle, encoding=config.encoding, errors=config.errors, newline='')

    if not callable(getattr(handle, 'read', None)):
        raise InvalidSourceException(f"Cannot read from {type(handle).__name__}")

    return handle

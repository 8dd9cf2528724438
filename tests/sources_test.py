import sys
import os
import io
import pathlib
import tempfile
import unittest
from unittest import mock

import requests

current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
sys.path.append(parent_dir)

from textin.sources import (
    FileUrlStrategy,
    LocalFileStrategy,
    UrlStrategy,
    adopt_stream,
    open_name,
    open_stdin,
)
from textin.utils import Config, InvalidSourceException


class FakeRaw(io.BytesIO):
    """Stands in for the urllib3 body of a streamed response."""


def fake_response(body: bytes, error: Exception = None):
    response = mock.Mock()
    response.raw = FakeRaw(body)
    if error is not None:
        response.raise_for_status.side_effect = error
    return response


class TestOpenName(unittest.TestCase):

    def setUp(self):
        self.config = Config()
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def write_file(self, name: str, content: str) -> str:
        path = os.path.join(self.tmp.name, name)
        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
        return path

    # --- Local files ---

    def test_local_file(self):
        path = self.write_file("plain.txt", "zażółć\r\ngęślą\n")
        with open_name(path, self.config) as stream:
            self.assertEqual(stream.read(), "zażółć\r\ngęślą\n")

    def test_local_file_with_malformed_bytes(self):
        path = os.path.join(self.tmp.name, "latin.txt")
        with open(path, 'wb') as f:
            f.write(b"caf\xe9 42\n")
        with open_name(path, self.config) as stream:
            self.assertEqual(stream.read(), "caf\ufffd 42\n")

    def test_path_like_name(self):
        path = self.write_file("path.txt", "content")
        with open_name(pathlib.Path(path), self.config) as stream:
            self.assertEqual(stream.read(), "content")

    def test_file_url(self):
        path = self.write_file("url.txt", "via url")
        with mock.patch('textin.sources.requests.get') as get:
            with open_name(pathlib.Path(path).as_uri(), self.config) as stream:
                self.assertEqual(stream.read(), "via url")
            get.assert_not_called()

    def test_local_file_wins_over_url(self):
        path = self.write_file("local.txt", "local")
        with mock.patch('textin.sources.requests.get') as get:
            with open_name(path, self.config) as stream:
                self.assertEqual(stream.read(), "local")
            get.assert_not_called()

    # --- Network ---

    def test_url_body_is_streamed(self):
        with mock.patch('textin.sources.requests.get', return_value=fake_response("ünïcode 1 2".encode('utf-8'))) as get:
            with open_name("https://example.com/data.txt", self.config) as stream:
                self.assertEqual(stream.read(), "ünïcode 1 2")
            get.assert_called_once_with("https://example.com/data.txt", stream=True)

    def test_http_error_status_fails(self):
        response = fake_response(b"not found", error=requests.HTTPError("404 Client Error"))
        with mock.patch('textin.sources.requests.get', return_value=response):
            with self.assertRaises(InvalidSourceException) as cm:
                open_name("https://example.com/missing.txt", self.config)
        response.close.assert_called_once_with()
        self.assertIsInstance(cm.exception.__cause__, requests.HTTPError)

    def test_unreachable_url_fails_with_all_causes(self):
        error = requests.ConnectionError("Name or service not known")
        with mock.patch('textin.sources.requests.get', side_effect=error):
            with self.assertRaises(InvalidSourceException) as cm:
                open_name("http://unreachable.invalid/x", self.config)

        exception = cm.exception
        self.assertIn("Could not open http://unreachable.invalid/x", str(exception))
        self.assertEqual(len(exception.causes), 3)
        self.assertIsInstance(exception.causes[0], FileNotFoundError)
        self.assertIsInstance(exception.causes[1], ValueError)
        self.assertIs(exception.causes[2], error)
        self.assertIs(exception.__cause__, error)

    def test_name_that_is_neither_file_nor_url(self):
        with self.assertRaises(InvalidSourceException) as cm:
            open_name(os.path.join(self.tmp.name, "no", "such", "file.txt"), self.config)
        self.assertIsInstance(cm.exception.__cause__, requests.RequestException)

    # --- Invalid names ---

    def test_none_name(self):
        with self.assertRaises(InvalidSourceException):
            open_name(None, self.config)

    def test_empty_name(self):
        with self.assertRaises(InvalidSourceException) as cm:
            open_name("", self.config)
        self.assertEqual(cm.exception.causes, [])

    def test_custom_strategy_order(self):
        path = self.write_file("only.txt", "x")
        with self.assertRaises(InvalidSourceException) as cm:
            open_name(path, self.config, strategies=(FileUrlStrategy(),))
        self.assertEqual(len(cm.exception.causes), 1)


class TestStrategies(unittest.TestCase):

    def test_local_file_strategy_missing(self):
        with self.assertRaises(FileNotFoundError):
            LocalFileStrategy().open("definitely-missing.txt", Config())

    def test_file_url_strategy_rejects_other_schemes(self):
        with self.assertRaises(ValueError):
            FileUrlStrategy().open("https://example.com/", Config())

    def test_url_strategy_uses_configured_encoding(self):
        with mock.patch('textin.sources.requests.get', return_value=fake_response("café".encode('latin-1'))):
            with UrlStrategy().open("http://example.com/", Config(encoding='latin-1')) as stream:
                self.assertEqual(stream.read(), "café")


class TestStdinAndHandles(unittest.TestCase):

    def test_stdin_replaced_by_text_stream(self):
        replacement = io.StringIO("typed input")
        with mock.patch('sys.stdin', replacement):
            stream = open_stdin(Config())
        self.assertEqual(stream.read(), "typed input")
        stream.close()
        self.assertFalse(replacement.closed)
        with self.assertRaises(ValueError):
            stream.read()

    def test_stdin_shares_buffer_and_leaves_it_open(self):
        console = io.TextIOWrapper(io.BytesIO("zdanie 1\n".encode('utf-8')), encoding='utf-8')
        with mock.patch('sys.stdin', console):
            stream = open_stdin(Config())
        console.buffer.read(7)
        self.assertEqual(stream.read(), "1\n")
        stream.close()
        stream.close()
        self.assertFalse(console.closed)
        self.assertFalse(console.buffer.closed)

    def test_stdin_replaces_malformed_bytes(self):
        console = io.TextIOWrapper(io.BytesIO(b"a\xfe\xffb"), encoding='utf-8')
        with mock.patch('sys.stdin', console):
            stream = open_stdin(Config())
        self.assertEqual(stream.read(), "a\ufffd\ufffdb")

    def test_adopt_text_stream(self):
        stream = io.StringIO("text")
        self.assertIs(adopt_stream(stream, Config()), stream)

    def test_adopt_binary_stream(self):
        stream = adopt_stream(io.BytesIO("ξ 1".encode('utf-8')), Config())
        self.assertEqual(stream.read(), "ξ 1")

    def test_adopt_binary_stream_with_malformed_bytes(self):
        stream = adopt_stream(io.BytesIO(b"ok \xff bad"), Config())
        self.assertEqual(stream.read(), "ok \ufffd bad")

    def test_strict_errors_from_config(self):
        stream = adopt_stream(io.BytesIO(b"ok \xff bad"), Config(errors='strict'))
        with self.assertRaises(UnicodeDecodeError):
            stream.read()

    def test_adopt_none(self):
        with self.assertRaises(InvalidSourceException):
            adopt_stream(None, Config())

    def test_adopt_unreadable_object(self):
        with self.assertRaises(InvalidSourceException) as cm:
            adopt_stream(42, Config())
        self.assertIn("int", str(cm.exception))


if __name__ == '__main__':
    unittest.main()

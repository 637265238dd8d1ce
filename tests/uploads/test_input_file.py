"""Tests for upload sources."""

import io

import pytest

from baas_client.exceptions import InvalidInputError
from baas_client.uploads.input_file import InputFile


class NonSeekableStream(io.RawIOBase):
  """Stream that can only be read forward."""

  def __init__(self, data):
    self._buffer = io.BytesIO(data)

  def readable(self):
    return True

  def seekable(self):
    return False

  def read(self, size=-1):
    return self._buffer.read(size)


class TestInputFile:
  """Test cases for InputFile."""

  def test_from_path(self, tmp_path):
    path = tmp_path / "report.pdf"
    path.write_bytes(b"0123456789abcdef")

    file = InputFile.from_path(path)

    assert file.filename == "report.pdf"
    assert file.size == 16
    assert file.mime_type == "application/pdf"
    assert file.read_range(10, 6) == b"abcdef"
    assert file.read_range(0, 4) == b"0123"

  def test_from_bytes(self):
    file = InputFile.from_bytes(b"hello world", "hello.txt")

    assert file.size == 11
    assert file.mime_type == "text/plain"
    assert file.read_range(6, 5) == b"world"

  def test_explicit_mime_type(self):
    file = InputFile.from_bytes(b"{}", "blob", mime_type="application/json")

    assert file.mime_type == "application/json"

  def test_unknown_extension_defaults_to_octet_stream(self):
    file = InputFile.from_bytes(b"\x00", "blob")

    assert file.mime_type == "application/octet-stream"

  def test_zero_length_read(self):
    file = InputFile.from_bytes(b"", "empty.bin")

    assert file.size == 0
    assert file.read_range(0, 0) == b""

  def test_seekable_stream(self):
    file = InputFile.from_stream(io.BytesIO(b"abcdefghij"), "s.bin", size=10)

    assert file.read_range(5, 5) == b"fghij"
    assert file.read_range(0, 5) == b"abcde"

  def test_non_seekable_stream_reads_forward(self):
    file = InputFile.from_stream(NonSeekableStream(b"abcdefghij"), "s.bin", size=10)

    assert file.read_range(0, 3) == b"abc"
    assert file.read_range(6, 4) == b"ghij"

  def test_non_seekable_stream_cannot_rewind(self):
    file = InputFile.from_stream(NonSeekableStream(b"abcdefghij"), "s.bin", size=10)
    file.read_range(0, 5)

    with pytest.raises(InvalidInputError, match="rewind"):
      file.read_range(0, 5)

  def test_short_read_raises(self):
    file = InputFile.from_stream(io.BytesIO(b"abc"), "s.bin", size=10)

    with pytest.raises(InvalidInputError, match="Short read"):
      file.read_range(0, 10)

  def test_negative_size_rejected(self):
    with pytest.raises(InvalidInputError):
      InputFile("x.bin", -1, data=b"")

  def test_requires_exactly_one_source(self):
    with pytest.raises(InvalidInputError, match="exactly one"):
      InputFile("x.bin", 3)

    with pytest.raises(InvalidInputError, match="exactly one"):
      InputFile("x.bin", 3, data=b"abc", stream=io.BytesIO(b"abc"))

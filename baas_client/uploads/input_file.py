"""
Upload sources.

An ``InputFile`` knows its size up front and hands out byte ranges in
increasing offset order, which is all the chunked uploader needs from it.
"""

import mimetypes
import os
from pathlib import Path
from typing import BinaryIO, Optional, Union

from baas_client.exceptions import InvalidInputError

DEFAULT_MIME_TYPE = "application/octet-stream"


class InputFile:
  """A file to upload, backed by a path, in-memory bytes or a binary stream."""

  def __init__(
    self,
    filename: str,
    size: int,
    mime_type: Optional[str] = None,
    path: Optional[Path] = None,
    data: Optional[bytes] = None,
    stream: Optional[BinaryIO] = None,
  ):
    if size < 0:
      raise InvalidInputError(f"file size must not be negative, got {size}", size=size)
    sources = [source for source in (path, data, stream) if source is not None]
    if len(sources) != 1:
      raise InvalidInputError(
        f"{filename}: exactly one of path, data or stream is required",
        filename=filename,
      )
    self.filename = filename
    self.size = size
    self.mime_type = (
      mime_type or mimetypes.guess_type(filename)[0] or DEFAULT_MIME_TYPE
    )
    self._path = path
    self._data = data
    self._stream = stream
    self._position = 0

  @classmethod
  def from_path(
    cls, path: Union[str, os.PathLike], mime_type: Optional[str] = None
  ) -> "InputFile":
    path = Path(path)
    return cls(path.name, path.stat().st_size, mime_type, path=path)

  @classmethod
  def from_bytes(
    cls, data: bytes, filename: str, mime_type: Optional[str] = None
  ) -> "InputFile":
    return cls(filename, len(data), mime_type, data=bytes(data))

  @classmethod
  def from_stream(
    cls,
    stream: BinaryIO,
    filename: str,
    size: int,
    mime_type: Optional[str] = None,
  ) -> "InputFile":
    """
    Wrap an open binary stream.

    Non-seekable streams are read sequentially; ranges must then be requested
    in increasing order, and a gap is skipped by reading and discarding it.
    """
    return cls(filename, size, mime_type, stream=stream)

  def read_range(self, start: int, length: int) -> bytes:
    """Read exactly ``length`` bytes starting at ``start``."""
    if length <= 0:
      return b""

    if self._data is not None:
      chunk = self._data[start : start + length]
    elif self._path is not None:
      with open(self._path, "rb") as handle:
        handle.seek(start)
        chunk = handle.read(length)
    else:
      chunk = self._read_stream(self._stream, start, length)

    if len(chunk) != length:
      raise InvalidInputError(
        f"Short read from {self.filename}: expected {length} bytes at {start}, "
        f"got {len(chunk)}",
        filename=self.filename,
        start=start,
      )
    return chunk

  def _read_stream(self, stream: BinaryIO, start: int, length: int) -> bytes:
    if stream.seekable():
      stream.seek(start)
    else:
      if start < self._position:
        raise InvalidInputError(
          f"Cannot rewind non-seekable stream from {self._position} to {start}",
          filename=self.filename,
        )
      if start > self._position:
        stream.read(start - self._position)

    chunk = stream.read(length)
    self._position = start + len(chunk)
    return chunk

  def __repr__(self) -> str:
    return f"InputFile(filename={self.filename!r}, size={self.size}, mime_type={self.mime_type!r})"

"""
Chunk planning.

Splits a file of known size into the ordered byte ranges sent by a chunked
upload. Pure functions, no I/O.
"""

from dataclasses import dataclass
from typing import Tuple

from baas_client.exceptions import InvalidInputError


@dataclass(frozen=True)
class ChunkRange:
  """One contiguous byte range; ``end`` is inclusive."""

  index: int
  start: int
  end: int
  is_final: bool

  @property
  def size(self) -> int:
    return self.end - self.start + 1

  def content_range(self, total_size: int) -> str:
    """Render the ``Content-Range`` header value for this chunk."""
    return f"bytes {self.start}-{self.end}/{total_size}"


UploadPlan = Tuple[ChunkRange, ...]


def plan_chunks(total_size: int, chunk_size: int) -> UploadPlan:
  """
  Plan the byte ranges for a file.

  Range ``i`` spans ``[i * chunk_size, min((i + 1) * chunk_size, total_size) - 1]``.
  An empty file yields a single zero-length final range ``[0, -1]`` so that an
  empty upload still performs exactly one request.

  Args:
      total_size: File size in bytes
      chunk_size: Maximum bytes per chunk

  Returns:
      Ranges in ascending order; only the last one is final

  Raises:
      InvalidInputError: If ``chunk_size`` is not positive or ``total_size`` is negative
  """
  if chunk_size <= 0:
    raise InvalidInputError(
      f"chunk_size must be positive, got {chunk_size}", chunk_size=chunk_size
    )
  if total_size < 0:
    raise InvalidInputError(
      f"total_size must not be negative, got {total_size}", total_size=total_size
    )

  if total_size == 0:
    return (ChunkRange(index=0, start=0, end=-1, is_final=True),)

  count = -(-total_size // chunk_size)
  return tuple(
    ChunkRange(
      index=i,
      start=i * chunk_size,
      end=min((i + 1) * chunk_size, total_size) - 1,
      is_final=i == count - 1,
    )
    for i in range(count)
  )

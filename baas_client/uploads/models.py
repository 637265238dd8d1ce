"""
Upload state and progress models.

``UploadState`` is owned by a single upload call and only ever replaced, never
mutated: each acknowledged chunk produces a new state through ``advance``.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from baas_client.config.constants import ID_FIELD, UNIQUE_ID
from .planner import ChunkRange


@dataclass(frozen=True)
class UploadProgress:
  """Snapshot reported to the caller after each acknowledged chunk."""

  id: str
  progress: float
  size_uploaded: int
  chunks_total: int
  chunks_uploaded: int


@dataclass(frozen=True)
class UploadCheckpoint:
  """Where to pick an interrupted upload back up."""

  resource_id: str
  next_chunk: int


@dataclass(frozen=True)
class UploadState:
  """Per-call bookkeeping linking the chunk requests of one upload."""

  resource_id: str
  id_preset: bool
  total_size: int
  chunks_total: int
  bytes_sent: int = 0
  chunks_sent: int = 0
  last_response: Optional[Dict[str, Any]] = None

  @classmethod
  def start(
    cls,
    total_size: int,
    chunks_total: int,
    resource_id: Optional[str] = None,
  ) -> "UploadState":
    preset = bool(resource_id) and resource_id != UNIQUE_ID
    return cls(
      resource_id=resource_id if preset else UNIQUE_ID,
      id_preset=preset,
      total_size=total_size,
      chunks_total=chunks_total,
    )

  @classmethod
  def resume(
    cls,
    checkpoint: UploadCheckpoint,
    total_size: int,
    chunk_size: int,
    chunks_total: int,
  ) -> "UploadState":
    """
    State as if chunks ``0..next_chunk - 1`` had been sent by this call.

    A checkpoint taken before the server named the resource still holds the
    ``unique()`` sentinel; the id is then captured from the next response.
    """
    preset = bool(checkpoint.resource_id) and checkpoint.resource_id != UNIQUE_ID
    return cls(
      resource_id=checkpoint.resource_id if preset else UNIQUE_ID,
      id_preset=preset,
      total_size=total_size,
      chunks_total=chunks_total,
      bytes_sent=min(checkpoint.next_chunk * chunk_size, total_size),
      chunks_sent=checkpoint.next_chunk,
    )

  @property
  def has_id(self) -> bool:
    return self.resource_id != UNIQUE_ID

  def advance(self, chunk: ChunkRange, response: Dict[str, Any]) -> "UploadState":
    """Fold an acknowledged chunk into a new state."""
    resource_id = self.resource_id
    if not self.id_preset and not self.has_id:
      server_id = response.get(ID_FIELD)
      if server_id:
        resource_id = str(server_id)

    return replace(
      self,
      resource_id=resource_id,
      bytes_sent=self.bytes_sent + max(chunk.size, 0),
      chunks_sent=self.chunks_sent + 1,
      last_response=response,
    )

  def progress(self) -> UploadProgress:
    if self.total_size:
      percent = self.bytes_sent / self.total_size * 100
    else:
      percent = 100.0
    return UploadProgress(
      id=self.resource_id,
      progress=percent,
      size_uploaded=self.bytes_sent,
      chunks_total=self.chunks_total,
      chunks_uploaded=self.chunks_sent,
    )

  def checkpoint(self) -> UploadCheckpoint:
    return UploadCheckpoint(resource_id=self.resource_id, next_chunk=self.chunks_sent)

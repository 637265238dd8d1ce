"""
Custom Exception Types for the storage client.

Upload-level failures carry enough context (failing chunk, byte range and the
resource id known at the time) for a caller to resume from exactly the chunk
that failed instead of restarting the whole file.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
  from .uploads.models import UploadCheckpoint


class BaaSError(Exception):
  """
  Base exception for all client-side errors.

  Attributes:
      message: Human-readable error message
      error_code: Application-specific error code for categorization
      details: Additional error context and metadata
      timestamp: When the error occurred
  """

  def __init__(
    self,
    message: str,
    error_code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
  ):
    super().__init__(message)
    self.message = message
    self.error_code = error_code or self.__class__.__name__
    self.details = details or {}
    self.timestamp = datetime.now(timezone.utc).isoformat()

  def to_dict(self) -> Dict[str, Any]:
    """Convert exception to dictionary for logging or display."""
    return {
      "error": self.error_code,
      "message": self.message,
      "details": self.details,
      "timestamp": self.timestamp,
    }


class InvalidInputError(BaaSError, ValueError):
  """Raised for arguments that can never succeed (bad chunk size, reserved params)."""

  def __init__(self, message: str, **details: Any):
    super().__init__(message, error_code="INVALID_INPUT", details=details)


# ============================================================================
# Upload Exceptions
# ============================================================================


class UploadError(BaaSError):
  """
  Raised when a chunk of a chunked upload fails.

  Chunks acknowledged before the failure stay on the server. ``checkpoint``
  names the resource id and the chunk to send next, so passing it back as
  ``resume_from`` re-sends only the failed chunk and what follows.
  """

  def __init__(
    self,
    chunk_index: int,
    cause: BaseException,
    checkpoint: "UploadCheckpoint",
    start: int,
    end: int,
  ):
    super().__init__(
      f"Upload failed at chunk {chunk_index} (bytes {start}-{end}): {cause}",
      error_code="UPLOAD_CHUNK_FAILED",
      details={
        "chunk_index": chunk_index,
        "resource_id": checkpoint.resource_id,
        "start": start,
        "end": end,
        "cause": type(cause).__name__,
      },
    )
    self.chunk_index = chunk_index
    self.cause = cause
    self.checkpoint = checkpoint
    self.start = start
    self.end = end

  @property
  def resource_id(self) -> str:
    return self.checkpoint.resource_id


class UploadCancelledError(BaaSError):
  """Raised when an upload is cancelled at a chunk boundary."""

  def __init__(self, checkpoint: "UploadCheckpoint"):
    super().__init__(
      f"Upload cancelled before chunk {checkpoint.next_chunk}",
      error_code="UPLOAD_CANCELLED",
      details={
        "resource_id": checkpoint.resource_id,
        "next_chunk": checkpoint.next_chunk,
      },
    )
    self.checkpoint = checkpoint

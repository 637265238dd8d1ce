"""
Caller-level resume policy for chunked uploads.

The uploader itself never retries. This helper layers a retry policy on top:
when a chunk fails with a transient error it waits (exponential backoff with
jitter) and resumes from the failed chunk using the error's checkpoint, so
chunks the server already accepted are not sent again.
"""

import asyncio
from typing import Any, Dict

from baas_client.client.base import backoff_delay
from baas_client.client.exceptions import APIError
from baas_client.config.constants import DEFAULT_RETRY_BACKOFF, DEFAULT_RETRY_DELAY
from baas_client.exceptions import InvalidInputError, UploadError
from baas_client.logger import log_app_error, upload_logger as logger
from .input_file import InputFile
from .orchestrator import ChunkedUploader


def is_resumable(error: UploadError) -> bool:
  """Only transient transport/server failures are worth resuming."""
  return isinstance(error.cause, APIError) and error.cause.is_transient


async def upload_with_resume(
  uploader: ChunkedUploader,
  path: str,
  params: Dict[str, Any],
  file: InputFile,
  *,
  max_attempts: int = 3,
  retry_delay: float = DEFAULT_RETRY_DELAY,
  retry_backoff: float = DEFAULT_RETRY_BACKOFF,
  **kwargs: Any,
) -> Dict[str, Any]:
  """
  Upload ``file``, resuming from the failing chunk on transient errors.

  Args:
      uploader: Uploader to drive
      path: Destination API path
      params: Base form parameters
      file: Source to read from
      max_attempts: Total attempts including the first
      retry_delay: Base delay before the first resume, in seconds
      retry_backoff: Multiplier applied per attempt
      **kwargs: Passed through to ``ChunkedUploader.upload``

  Returns:
      The final resource as returned by the uploader

  Raises:
      UploadError: The last failure, once attempts are exhausted or the
          failure is not transient
      UploadCancelledError: Propagated immediately
      InvalidInputError: ``max_attempts`` is less than 1
  """
  if max_attempts < 1:
    raise InvalidInputError(
      f"max_attempts must be at least 1, got {max_attempts}", max_attempts=max_attempts
    )

  resume_from = kwargs.pop("resume_from", None)

  attempt = 0
  while True:
    try:
      return await uploader.upload(path, params, file, resume_from=resume_from, **kwargs)
    except UploadError as e:
      attempt += 1
      if attempt >= max_attempts or not is_resumable(e):
        log_app_error(
          e, "uploads", "upload_with_resume", error_category="upload", metadata=e.details
        )
        raise

      delay = backoff_delay(attempt - 1, retry_delay, retry_backoff)
      logger.warning(
        f"Upload of {file.filename} failed at chunk {e.chunk_index} "
        f"(attempt {attempt}/{max_attempts}), resuming in {delay:.2f}s",
        extra={"resource_id": e.resource_id, "chunk_index": e.chunk_index},
      )
      await asyncio.sleep(delay)
      resume_from = e.checkpoint

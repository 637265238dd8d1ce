"""
Chunked upload orchestration.

Drives one file through its upload plan as a strictly sequential series of
partial-content requests. The first response names the resource; every later
chunk echoes that id so the server can assemble the pieces. The orchestrator
never retries: a failed chunk stops the upload with an ``UploadError`` whose
checkpoint lets a caller resume at that chunk.
"""

import asyncio
import time
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from baas_client.client.exceptions import APIError, ServerError
from baas_client.config.constants import (
  CHUNK_SIZE,
  CONTENT_RANGE_HEADER,
  FILE_PARAM,
  ID_FIELD,
  MULTIPART_CONTENT_TYPE,
  RESOURCE_ID_HEADER,
)
from baas_client.exceptions import InvalidInputError, UploadCancelledError, UploadError
from baas_client.logger import log_metric, upload_logger as logger
from .input_file import InputFile
from .models import UploadCheckpoint, UploadProgress, UploadState
from .planner import ChunkRange, plan_chunks

ProgressCallback = Callable[[UploadProgress], None]


class Transport(Protocol):
  """Performs one request and returns the decoded JSON body or raises ``APIError``."""

  async def call(
    self,
    method: str,
    path: str,
    headers: Optional[Dict[str, str]] = None,
    params: Optional[Dict[str, Any]] = None,
    files: Optional[Dict[str, Tuple[str, bytes, str]]] = None,
  ) -> Dict[str, Any]: ...


class ChunkedUploader:
  """Uploads files through a transport, chunking anything larger than one chunk."""

  def __init__(self, transport: Transport, chunk_size: int = CHUNK_SIZE):
    if chunk_size <= 0:
      raise InvalidInputError(
        f"chunk_size must be positive, got {chunk_size}", chunk_size=chunk_size
      )
    self.transport = transport
    self.chunk_size = chunk_size

  async def upload(
    self,
    path: str,
    params: Dict[str, Any],
    file: InputFile,
    *,
    headers: Optional[Dict[str, str]] = None,
    id_param: Optional[str] = None,
    param_name: str = FILE_PARAM,
    method: str = "POST",
    on_progress: Optional[ProgressCallback] = None,
    cancel_event: Optional[asyncio.Event] = None,
    resume_from: Optional[UploadCheckpoint] = None,
  ) -> Dict[str, Any]:
    """
    Upload ``file`` to ``path``.

    Args:
        path: Destination API path
        params: Base form parameters sent with every chunk
        file: Source to read from
        headers: Extra headers sent with every chunk
        id_param: Parameter carrying the resource id; a value other than
            ``"unique()"`` is a preset id and always wins over the server's
        param_name: Form field for the binary payload, reserved for this call
        method: HTTP method for every chunk request
        on_progress: Called once per acknowledged chunk, in order
        cancel_event: Checked before each chunk; when set the upload stops
        resume_from: Continue an interrupted upload at ``next_chunk``

    Returns:
        Decoded response of the last request, the final resource

    Raises:
        InvalidInputError: ``params`` already defines ``param_name``, or the
            checkpoint does not fit the plan
        UploadError: A chunk request failed, or the first response of a
            multi-chunk upload did not name the resource
        UploadCancelledError: ``cancel_event`` was set
    """
    if param_name in params:
      raise InvalidInputError(
        f"'{param_name}' is reserved for the file payload", param=param_name
      )

    base_headers = dict(headers or {})
    base_headers["content-type"] = MULTIPART_CONTENT_TYPE

    if file.size <= self.chunk_size and resume_from is None:
      return await self._upload_single(
        path,
        params,
        file,
        base_headers,
        param_name,
        method,
        on_progress,
        cancel_event,
        id_param,
      )

    plan = plan_chunks(file.size, self.chunk_size)
    state = self._initial_state(plan, params, file, id_param, resume_from)

    logger.info(
      f"Starting chunked upload of {file.filename} ({file.size} bytes, "
      f"{len(plan)} chunks) to {path}",
      extra={"path": path, "resource_id": state.resource_id},
    )
    started = time.monotonic()

    for chunk in plan[state.chunks_sent :]:
      if cancel_event is not None and cancel_event.is_set():
        logger.info(
          f"Upload of {file.filename} cancelled before chunk {chunk.index}",
          extra={"resource_id": state.resource_id, "chunk_index": chunk.index},
        )
        raise UploadCancelledError(state.checkpoint())

      response = await self._send_chunk(
        path, params, file, chunk, state, base_headers, id_param, param_name, method
      )
      state = state.advance(chunk, response)
      if not state.has_id and not chunk.is_final:
        # Later chunks cannot be linked to the resource without its id
        missing = ServerError(
          f"Response to chunk {chunk.index} is missing {ID_FIELD}",
          response_data=response,
        )
        raise self._failure(missing, chunk, state)
      self._emit(on_progress, state.progress())

    duration_ms = (time.monotonic() - started) * 1000
    log_metric(
      "upload_duration_ms",
      round(duration_ms, 2),
      unit="ms",
      component="uploads",
      metadata={"resource_id": state.resource_id, "chunks": len(plan)},
    )
    return state.last_response or {}

  def _initial_state(
    self,
    plan,
    params: Dict[str, Any],
    file: InputFile,
    id_param: Optional[str],
    resume_from: Optional[UploadCheckpoint],
  ) -> UploadState:
    if resume_from is None:
      preset = params.get(id_param) if id_param else None
      return UploadState.start(file.size, len(plan), preset)

    if not 0 <= resume_from.next_chunk < len(plan):
      raise InvalidInputError(
        f"Cannot resume at chunk {resume_from.next_chunk} of {len(plan)}",
        next_chunk=resume_from.next_chunk,
      )
    state = UploadState.resume(resume_from, file.size, self.chunk_size, len(plan))
    if state.chunks_sent > 0 and not state.has_id:
      raise InvalidInputError(
        f"Cannot resume at chunk {resume_from.next_chunk} without a resource id",
        next_chunk=resume_from.next_chunk,
      )
    return state

  async def _upload_single(
    self,
    path: str,
    params: Dict[str, Any],
    file: InputFile,
    headers: Dict[str, str],
    param_name: str,
    method: str,
    on_progress: Optional[ProgressCallback],
    cancel_event: Optional[asyncio.Event],
    id_param: Optional[str],
  ) -> Dict[str, Any]:
    state = UploadState.start(file.size, 1, params.get(id_param) if id_param else None)
    if cancel_event is not None and cancel_event.is_set():
      raise UploadCancelledError(state.checkpoint())

    chunk = ChunkRange(index=0, start=0, end=file.size - 1, is_final=True)
    payload = file.read_range(0, file.size)

    logger.debug(f"Uploading {file.filename} ({file.size} bytes) in one request")
    try:
      response = await self.transport.call(
        method,
        path,
        headers=headers,
        params=dict(params),
        files={param_name: (file.filename, payload, file.mime_type)},
      )
    except APIError as e:
      raise self._failure(e, chunk, state) from e

    self._emit(on_progress, state.advance(chunk, response).progress())
    return response

  async def _send_chunk(
    self,
    path: str,
    params: Dict[str, Any],
    file: InputFile,
    chunk: ChunkRange,
    state: UploadState,
    base_headers: Dict[str, str],
    id_param: Optional[str],
    param_name: str,
    method: str,
  ) -> Dict[str, Any]:
    headers = dict(base_headers)
    headers[CONTENT_RANGE_HEADER] = chunk.content_range(file.size)

    request_params = dict(params)
    if chunk.index > 0 and state.has_id:
      headers[RESOURCE_ID_HEADER] = state.resource_id
      if id_param:
        request_params[id_param] = state.resource_id

    payload = file.read_range(chunk.start, chunk.size)

    logger.debug(
      f"Sending chunk {chunk.index + 1}/{state.chunks_total} "
      f"({headers[CONTENT_RANGE_HEADER]})",
      extra={"resource_id": state.resource_id, "chunk_index": chunk.index},
    )
    try:
      return await self.transport.call(
        method,
        path,
        headers=headers,
        params=request_params,
        files={param_name: (file.filename, payload, file.mime_type)},
      )
    except APIError as e:
      raise self._failure(e, chunk, state) from e

  def _failure(self, error: APIError, chunk: ChunkRange, state: UploadState) -> UploadError:
    logger.warning(
      f"Chunk {chunk.index} failed: {error}",
      extra={"resource_id": state.resource_id, "chunk_index": chunk.index},
    )
    return UploadError(
      chunk_index=chunk.index,
      cause=error,
      checkpoint=UploadCheckpoint(resource_id=state.resource_id, next_chunk=chunk.index),
      start=chunk.start,
      end=chunk.end,
    )

  def _emit(self, on_progress: Optional[ProgressCallback], progress: UploadProgress) -> None:
    if on_progress is None:
      return
    try:
      on_progress(progress)
    except Exception:
      logger.warning(
        f"Progress callback failed at chunk {progress.chunks_uploaded}",
        exc_info=True,
        extra={"resource_id": progress.id},
      )

"""
Storage service.

File operations on storage buckets. ``create_file`` is the entry point for
chunked uploads; the remaining calls are single requests.
"""

import asyncio
from typing import List, Optional

from baas_client.client import Client
from baas_client.client.exceptions import ServerError
from baas_client.config.constants import JSON_CONTENT_TYPE, UNIQUE_ID
from baas_client.logger import logger
from baas_client.models import File, FileList
from baas_client.uploads import (
  ChunkedUploader,
  InputFile,
  ProgressCallback,
  UploadCheckpoint,
)


class Storage:
  """Storage bucket file operations."""

  def __init__(self, client: Client, chunk_size: Optional[int] = None):
    self.client = client
    self.uploader = ChunkedUploader(client, chunk_size or client.config.chunk_size)

  @staticmethod
  def _files_path(bucket_id: str) -> str:
    return f"/storage/buckets/{bucket_id}/files"

  async def list_files(
    self,
    bucket_id: str,
    queries: Optional[List[str]] = None,
    search: Optional[str] = None,
  ) -> FileList:
    """List files in a bucket, optionally filtered by queries or a search term."""
    data = await self.client.call(
      "GET",
      self._files_path(bucket_id),
      headers={"content-type": JSON_CONTENT_TYPE},
      params={"queries": queries, "search": search},
    )
    return FileList.from_map(data)

  async def get_file(self, bucket_id: str, file_id: str) -> File:
    data = await self.client.call(
      "GET",
      f"{self._files_path(bucket_id)}/{file_id}",
      headers={"content-type": JSON_CONTENT_TYPE},
    )
    return File.from_map(data)

  async def create_file(
    self,
    bucket_id: str,
    file_id: str,
    file: InputFile,
    permissions: Optional[List[str]] = None,
    on_progress: Optional[ProgressCallback] = None,
    cancel_event: Optional[asyncio.Event] = None,
    resume: bool = False,
    resume_from: Optional[UploadCheckpoint] = None,
  ) -> File:
    """
    Upload a file to a bucket.

    Files larger than one chunk are sent as a series of ``Content-Range``
    requests; the chunking is handled here.

    Args:
        bucket_id: Target bucket
        file_id: File id, or ``"unique()"`` to let the server allocate one
        file: Source to upload
        permissions: Permission strings for the new file
        on_progress: Called once per uploaded chunk
        cancel_event: Set to stop the upload at the next chunk boundary
        resume: With a concrete ``file_id``, ask the server how many chunks it
            already holds and continue from there
        resume_from: Explicit checkpoint from a previous ``UploadError``

    Returns:
        The stored file
    """
    path = self._files_path(bucket_id)

    if resume and resume_from is None and file_id != UNIQUE_ID:
      if file.size > self.uploader.chunk_size:
        existing = await self._existing_upload(bucket_id, file_id)
        if existing is not None:
          if existing.is_complete:
            logger.info(f"File {file_id} already fully uploaded, skipping")
            return existing
          if existing.chunks_uploaded > 0:
            resume_from = UploadCheckpoint(file_id, existing.chunks_uploaded)

    result = await self.uploader.upload(
      path,
      {"fileId": file_id, "permissions": permissions},
      file,
      id_param="fileId",
      on_progress=on_progress,
      cancel_event=cancel_event,
      resume_from=resume_from,
    )
    return File.from_map(result)

  async def _existing_upload(self, bucket_id: str, file_id: str) -> Optional[File]:
    try:
      return await self.get_file(bucket_id, file_id)
    except ServerError as e:
      if e.status_code == 404:
        return None
      raise

  async def update_file(
    self,
    bucket_id: str,
    file_id: str,
    name: Optional[str] = None,
    permissions: Optional[List[str]] = None,
  ) -> File:
    data = await self.client.call(
      "PUT",
      f"{self._files_path(bucket_id)}/{file_id}",
      headers={"content-type": JSON_CONTENT_TYPE},
      params={"name": name, "permissions": permissions},
    )
    return File.from_map(data)

  async def delete_file(self, bucket_id: str, file_id: str) -> None:
    await self.client.call(
      "DELETE",
      f"{self._files_path(bucket_id)}/{file_id}",
      headers={"content-type": JSON_CONTENT_TYPE},
    )

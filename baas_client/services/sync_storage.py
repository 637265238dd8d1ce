"""
Synchronous wrapper for the Storage service.

Runs the async client on a private event loop for use in scripts and other
synchronous contexts.
"""

import asyncio
import concurrent.futures
from typing import List, Optional

from baas_client.client import Client
from baas_client.models import File, FileList
from baas_client.uploads import InputFile, ProgressCallback, UploadCheckpoint
from .storage import Storage


class SyncStorage:
  """Synchronous wrapper around the async Storage service."""

  def __init__(self, endpoint: Optional[str] = None, **kwargs):
    """Initialize with an async client underneath; kwargs go to ``Client``."""
    self._loop = asyncio.new_event_loop()
    chunk_size = kwargs.pop("chunk_size", None)
    self._client = self._run_async(self._create_client(endpoint, **kwargs))
    self._storage = Storage(self._client, chunk_size=chunk_size)

  @staticmethod
  async def _create_client(endpoint: Optional[str], **kwargs) -> Client:
    # httpx binds its connection pool to the loop that first uses it
    return Client(endpoint=endpoint, **kwargs)

  def __enter__(self):
    return self

  def __exit__(self, exc_type, exc_val, exc_tb):
    self.close()

  def _run_async(self, coro):
    """Run a coroutine on the private loop and return the result."""
    try:
      asyncio.get_running_loop()
    except RuntimeError:
      return self._loop.run_until_complete(coro)

    # Already inside an event loop: drive ours from a worker thread
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
      return executor.submit(self._loop.run_until_complete, coro).result()

  def close(self):
    """Close the client and the private loop."""
    if self._loop.is_closed():
      return
    self._run_async(self._client.close())
    self._loop.close()

  def list_files(
    self,
    bucket_id: str,
    queries: Optional[List[str]] = None,
    search: Optional[str] = None,
  ) -> FileList:
    return self._run_async(self._storage.list_files(bucket_id, queries, search))

  def get_file(self, bucket_id: str, file_id: str) -> File:
    return self._run_async(self._storage.get_file(bucket_id, file_id))

  def create_file(
    self,
    bucket_id: str,
    file_id: str,
    file: InputFile,
    permissions: Optional[List[str]] = None,
    on_progress: Optional[ProgressCallback] = None,
    resume: bool = False,
    resume_from: Optional[UploadCheckpoint] = None,
  ) -> File:
    """Upload a file; progress callbacks run on the calling side of the loop."""
    return self._run_async(
      self._storage.create_file(
        bucket_id,
        file_id,
        file,
        permissions=permissions,
        on_progress=on_progress,
        resume=resume,
        resume_from=resume_from,
      )
    )

  def update_file(
    self,
    bucket_id: str,
    file_id: str,
    name: Optional[str] = None,
    permissions: Optional[List[str]] = None,
  ) -> File:
    return self._run_async(
      self._storage.update_file(bucket_id, file_id, name=name, permissions=permissions)
    )

  def delete_file(self, bucket_id: str, file_id: str) -> None:
    self._run_async(self._storage.delete_file(bucket_id, file_id))

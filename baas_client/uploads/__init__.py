"""
Chunked, resumable uploads.

``plan_chunks`` splits a file into byte ranges; ``ChunkedUploader`` sends them
one request at a time, threading the server-assigned id through; and
``upload_with_resume`` adds a transient-failure resume policy on top.
"""

from .input_file import InputFile
from .models import UploadCheckpoint, UploadProgress, UploadState
from .orchestrator import ChunkedUploader, ProgressCallback, Transport
from .planner import ChunkRange, UploadPlan, plan_chunks
from .retry import is_resumable, upload_with_resume

__all__ = [
  "ChunkRange",
  "ChunkedUploader",
  "InputFile",
  "ProgressCallback",
  "Transport",
  "UploadCheckpoint",
  "UploadPlan",
  "UploadProgress",
  "UploadState",
  "is_resumable",
  "plan_chunks",
  "upload_with_resume",
]

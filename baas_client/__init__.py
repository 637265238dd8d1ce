"""
baas-client - storage client with chunked, resumable uploads.
"""

from .client import Client, ClientConfig
from .exceptions import BaaSError, InvalidInputError, UploadCancelledError, UploadError
from .models import File, FileList
from .services import Storage, SyncStorage
from .uploads import ChunkedUploader, InputFile, UploadCheckpoint, UploadProgress

__version__ = "0.1.0"

__all__ = [
  "BaaSError",
  "ChunkedUploader",
  "Client",
  "ClientConfig",
  "File",
  "FileList",
  "InputFile",
  "InvalidInputError",
  "Storage",
  "SyncStorage",
  "UploadCancelledError",
  "UploadCheckpoint",
  "UploadError",
  "UploadProgress",
  "__version__",
]

"""
Storage file models.

Pydantic models for the file resource returned by the storage service. Field
names follow the wire format through aliases (``$id``, ``bucketId``, ...).
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class File(BaseModel):
  """A file stored in a bucket."""

  model_config = ConfigDict(populate_by_name=True, extra="ignore")

  id: str = Field(..., alias="$id", description="File ID")
  bucket_id: str = Field(..., alias="bucketId", description="Bucket ID")
  created_at: str = Field("", alias="$createdAt", description="Creation date in ISO 8601")
  updated_at: str = Field("", alias="$updatedAt", description="Update date in ISO 8601")
  permissions: List[str] = Field(default_factory=list, alias="$permissions")
  name: str = Field("", description="File name")
  signature: str = Field("", description="File MD5 signature")
  mime_type: str = Field("", alias="mimeType", description="File mime type")
  size_original: int = Field(0, alias="sizeOriginal", description="File original size in bytes")
  chunks_total: int = Field(0, alias="chunksTotal", description="Total number of chunks")
  chunks_uploaded: int = Field(0, alias="chunksUploaded", description="Chunks received so far")

  @property
  def is_complete(self) -> bool:
    return self.chunks_total > 0 and self.chunks_uploaded >= self.chunks_total

  @classmethod
  def from_map(cls, data: Dict[str, Any]) -> "File":
    return cls.model_validate(data)

  def to_map(self) -> Dict[str, Any]:
    return self.model_dump(by_alias=True)


class FileList(BaseModel):
  """A page of files."""

  total: int = Field(0, description="Total number of files matching the query")
  files: List[File] = Field(default_factory=list)

  @classmethod
  def from_map(cls, data: Dict[str, Any]) -> "FileList":
    return cls.model_validate(data)

"""Tests for client-side exception types."""

from baas_client.client.exceptions import TransportError
from baas_client.exceptions import (
  BaaSError,
  InvalidInputError,
  UploadCancelledError,
  UploadError,
)
from baas_client.uploads.models import UploadCheckpoint


class TestBaaSError:
  """Test cases for BaaSError."""

  def test_defaults(self):
    error = BaaSError("Something failed")

    assert error.message == "Something failed"
    assert error.error_code == "BaaSError"
    assert error.details == {}

  def test_to_dict(self):
    error = BaaSError("Something failed", error_code="X", details={"a": 1})

    data = error.to_dict()

    assert data["error"] == "X"
    assert data["message"] == "Something failed"
    assert data["details"] == {"a": 1}
    assert "timestamp" in data


class TestInvalidInputError:
  """Test cases for InvalidInputError."""

  def test_is_value_error(self):
    error = InvalidInputError("bad chunk size", chunk_size=0)

    assert isinstance(error, ValueError)
    assert error.error_code == "INVALID_INPUT"
    assert error.details == {"chunk_size": 0}


class TestUploadError:
  """Test cases for UploadError."""

  def test_context(self):
    cause = TransportError("Connection reset")
    error = UploadError(2, cause, UploadCheckpoint("abc123", 2), start=20, end=29)

    assert error.chunk_index == 2
    assert error.resource_id == "abc123"
    assert error.cause is cause
    assert "chunk 2" in str(error)
    assert error.details == {
      "chunk_index": 2,
      "resource_id": "abc123",
      "start": 20,
      "end": 29,
      "cause": "TransportError",
    }


class TestUploadCancelledError:
  """Test cases for UploadCancelledError."""

  def test_distinct_from_upload_error(self):
    error = UploadCancelledError(UploadCheckpoint("abc123", 1))

    assert not isinstance(error, UploadError)
    assert error.checkpoint.next_chunk == 1
    assert error.error_code == "UPLOAD_CANCELLED"

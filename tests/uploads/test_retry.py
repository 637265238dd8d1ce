"""Tests for the caller-level upload resume policy."""

from unittest.mock import AsyncMock, patch

import pytest

from baas_client.client.exceptions import ServerError, TransportError
from baas_client.exceptions import InvalidInputError, UploadError
from baas_client.uploads.models import UploadCheckpoint
from baas_client.uploads.orchestrator import ChunkedUploader
from baas_client.uploads.retry import is_resumable, upload_with_resume

from tests.conftest import TEST_CHUNK_SIZE, FakeTransport

PATH = "/storage/buckets/bucket/files"


def _error(cause):
  return UploadError(1, cause, UploadCheckpoint("abc123", 1), 10, 19)


class TestIsResumable:
  """Test cases for is_resumable."""

  def test_transport_errors_are_resumable(self):
    assert is_resumable(_error(TransportError("Connection reset"))) is True

  def test_gateway_errors_are_resumable(self):
    assert is_resumable(_error(ServerError("Bad gateway", 502))) is True
    assert is_resumable(_error(ServerError("Unavailable", 503))) is True

  def test_client_errors_are_not_resumable(self):
    assert is_resumable(_error(ServerError("Not found", 404))) is False
    assert is_resumable(_error(ServerError("Internal", 500))) is False


class TestUploadWithResume:
  """Test cases for upload_with_resume."""

  @pytest.mark.asyncio
  async def test_resumes_from_failed_chunk(self, make_file):
    transport = FakeTransport(failures={2: TransportError("Connection reset")})
    uploader = ChunkedUploader(transport, chunk_size=TEST_CHUNK_SIZE)

    with patch("baas_client.uploads.retry.asyncio.sleep", new=AsyncMock()) as sleep:
      result = await upload_with_resume(
        uploader, PATH, {"fileId": "unique()"}, make_file(35), id_param="fileId"
      )

    sleep.assert_awaited_once()
    assert result["$id"] == "abc123"
    # chunks 0, 1, failed 2, then 2 and 3 again
    assert [call["headers"]["Content-Range"] for call in transport.calls] == [
      "bytes 0-9/35",
      "bytes 10-19/35",
      "bytes 20-29/35",
      "bytes 20-29/35",
      "bytes 30-34/35",
    ]
    assert transport.calls[3]["headers"]["x-appwrite-id"] == "abc123"
    assert transport.calls[3]["params"]["fileId"] == "abc123"

  @pytest.mark.asyncio
  async def test_first_chunk_failure_then_id_echoed(self, make_file):
    """Resuming before the server named the file still links every later chunk."""
    transport = FakeTransport(failures={0: TransportError("Connection reset")})
    uploader = ChunkedUploader(transport, chunk_size=TEST_CHUNK_SIZE)

    with patch("baas_client.uploads.retry.asyncio.sleep", new=AsyncMock()):
      result = await upload_with_resume(
        uploader, PATH, {"fileId": "unique()"}, make_file(35), id_param="fileId"
      )

    assert result["$id"] == "abc123"
    assert [call["headers"]["Content-Range"] for call in transport.calls] == [
      "bytes 0-9/35",
      "bytes 0-9/35",
      "bytes 10-19/35",
      "bytes 20-29/35",
      "bytes 30-34/35",
    ]
    resent_first = transport.calls[1]
    assert "x-appwrite-id" not in resent_first["headers"]
    assert resent_first["params"]["fileId"] == "unique()"
    for call in transport.calls[2:]:
      assert call["headers"]["x-appwrite-id"] == "abc123"
      assert call["params"]["fileId"] == "abc123"

  @pytest.mark.asyncio
  async def test_gives_up_after_max_attempts(self, make_file):
    cause = TransportError("Connection reset")
    transport = FakeTransport(failures={1: cause, 2: cause, 3: cause})
    uploader = ChunkedUploader(transport, chunk_size=TEST_CHUNK_SIZE)

    with patch("baas_client.uploads.retry.asyncio.sleep", new=AsyncMock()):
      with pytest.raises(UploadError) as exc_info:
        await upload_with_resume(uploader, PATH, {}, make_file(35), max_attempts=3)

    assert exc_info.value.chunk_index == 1
    assert len(transport.calls) == 4

  @pytest.mark.asyncio
  async def test_non_transient_failure_not_retried(self, make_file):
    transport = FakeTransport(failures={1: ServerError("Invalid file", 400)})
    uploader = ChunkedUploader(transport, chunk_size=TEST_CHUNK_SIZE)

    with patch("baas_client.uploads.retry.asyncio.sleep", new=AsyncMock()) as sleep:
      with pytest.raises(UploadError):
        await upload_with_resume(uploader, PATH, {}, make_file(35))

    sleep.assert_not_awaited()
    assert len(transport.calls) == 2

  @pytest.mark.asyncio
  async def test_max_attempts_must_be_positive(self, transport, make_file):
    uploader = ChunkedUploader(transport, chunk_size=TEST_CHUNK_SIZE)

    with pytest.raises(InvalidInputError, match="max_attempts"):
      await upload_with_resume(uploader, PATH, {}, make_file(35), max_attempts=0)

    assert transport.calls == []

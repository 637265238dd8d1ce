import os

os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402

from baas_client.uploads import InputFile  # noqa: E402

# Small chunk size so multi-chunk uploads stay cheap in tests
TEST_CHUNK_SIZE = 10


class FakeTransport:
  """Records every call and answers like the storage service would."""

  def __init__(self, server_id="abc123", failures=None, responses=None):
    self.server_id = server_id
    self.failures = failures or {}
    self.responses = responses or {}
    self.calls = []

  async def call(self, method, path, headers=None, params=None, files=None):
    index = len(self.calls)
    self.calls.append(
      {
        "method": method,
        "path": path,
        "headers": dict(headers or {}),
        "params": dict(params or {}),
        "files": dict(files or {}),
      }
    )
    if index in self.failures:
      raise self.failures[index]
    if index in self.responses:
      return self.responses[index]
    return {
      "$id": self.server_id,
      "bucketId": "bucket",
      "name": "data.bin",
      "chunksUploaded": index + 1,
    }

  def payloads(self):
    return [call["files"]["file"][1] for call in self.calls]


@pytest.fixture
def transport():
  return FakeTransport()


@pytest.fixture
def make_file():
  """Build an in-memory InputFile with deterministic content."""

  def _make(size, filename="data.bin"):
    data = bytes(i % 251 for i in range(size))
    return InputFile.from_bytes(data, filename)

  return _make

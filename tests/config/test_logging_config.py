"""Tests for structured logging configuration."""

import json
import logging

from baas_client.config.logging import StructuredFormatter, get_logging_config


class TestStructuredFormatter:
  """Test cases for StructuredFormatter."""

  def _record(self, level=logging.INFO, **extra):
    record = logging.LogRecord(
      "baas_client.uploads", level, __file__, 1, "Chunk %s sent", (2,), None
    )
    for key, value in extra.items():
      setattr(record, key, value)
    return record

  def test_basic_fields(self):
    entry = json.loads(StructuredFormatter().format(self._record()))

    assert entry["level"] == "INFO"
    assert entry["component"] == "baas_client.uploads"
    assert entry["message"] == "Chunk 2 sent"
    assert "timestamp" in entry

  def test_upload_context(self):
    record = self._record(resource_id="abc123", chunk_index=2, action="chunk_sent")

    entry = json.loads(StructuredFormatter().format(record))

    assert entry["resource_id"] == "abc123"
    assert entry["chunk_index"] == 2
    assert entry["action"] == "chunk_sent"

  def test_error_details(self):
    try:
      raise RuntimeError("boom")
    except RuntimeError:
      import sys

      record = logging.LogRecord(
        "baas_client", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
      )

    entry = json.loads(StructuredFormatter().format(record))

    assert entry["error"]["type"] == "RuntimeError"
    assert entry["error"]["message"] == "boom"


class TestGetLoggingConfig:
  """Test cases for get_logging_config."""

  def test_test_environment_is_quiet(self):
    config = get_logging_config("test")

    assert config["loggers"]["baas_client"]["level"] == "WARNING"
    assert config["loggers"]["baas_client"]["handlers"] == ["structured"]

  def test_prod_uses_structured_output(self):
    config = get_logging_config("prod")

    assert config["loggers"]["baas_client"]["level"] == "INFO"
    assert config["handlers"]["structured"]["formatter"] == "structured"

  def test_dev_uses_console(self):
    config = get_logging_config("dev")

    assert config["loggers"]["baas_client"]["handlers"] == ["console"]

  def test_child_loggers_propagate(self):
    config = get_logging_config("prod")

    assert config["loggers"]["baas_client.uploads"]["propagate"] is True
    assert config["loggers"]["baas_client"]["propagate"] is False

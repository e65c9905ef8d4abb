"""
Unit tests for log redaction and JSON formatting.
"""

import json
import logging

from infrastructure.logging_config import JSONFormatter, SensitiveDataFilter


def _record(msg, args=(), **extra):
    record = logging.LogRecord("articleforge", logging.INFO, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestSensitiveDataFilter:
    def test_redacts_message(self):
        record = _record("Authorization: Bearer abc.def.ghi sent")

        SensitiveDataFilter().filter(record)

        assert "abc.def.ghi" not in record.getMessage()
        assert "[REDACTED]" in record.getMessage()

    def test_redacts_args(self):
        record = _record("calling %s", ("https://newsapi.org/v2/top?apiKey=secretvalue",))

        SensitiveDataFilter().filter(record)

        assert "secretvalue" not in record.getMessage()

    def test_redacts_openai_style_keys(self):
        record = _record("key was sk-abcdefghijklmnopqrstuvwx")

        SensitiveDataFilter().filter(record)

        assert record.getMessage() == "key was [REDACTED_API_KEY]"

    def test_leaves_plain_messages(self):
        record = _record("Generated article %s", ("a1",))

        assert SensitiveDataFilter().filter(record) is True
        assert record.getMessage() == "Generated article a1"


class TestJSONFormatter:
    def test_includes_known_extras(self):
        record = _record("GET /api/health 200", request_id="r-1", status_code=200, unrelated="x")

        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "GET /api/health 200"
        assert entry["level"] == "INFO"
        assert entry["request_id"] == "r-1"
        assert entry["status_code"] == 200
        assert "unrelated" not in entry

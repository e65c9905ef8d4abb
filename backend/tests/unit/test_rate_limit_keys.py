"""
Tests for the rate limiter's client IP key.
"""

from starlette.requests import Request

from api.middleware.rate_limit import RATE_LIMITS, _get_real_ip


def _request(headers=None, client=("198.51.100.7", 1234)):
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
    }
    return Request(scope)


class TestRealIp:
    def test_connection_address(self):
        assert _get_real_ip(_request()) == "198.51.100.7"

    def test_public_forwarded_for(self):
        request = _request({"X-Forwarded-For": "203.0.113.9, 10.0.0.1"})

        assert _get_real_ip(request) == "203.0.113.9"

    def test_private_forwarded_for_ignored(self):
        request = _request({"X-Forwarded-For": "127.0.0.1"})

        assert _get_real_ip(request) == "198.51.100.7"

    def test_garbage_header_ignored(self):
        request = _request({"X-Forwarded-For": "<script>", "X-Real-IP": "203.0.113.20"})

        assert _get_real_ip(request) == "203.0.113.20"


def test_configured_limits():
    assert RATE_LIMITS["login"] == "5/minute"
    assert RATE_LIMITS["register"] == "3/minute"
    assert RATE_LIMITS["generate"] == "10/minute"

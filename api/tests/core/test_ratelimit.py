"""Unit tests for core.ratelimit module.

Tests rate limiting utilities:
- limiter is keyed by client address with the portfolio prefix
- rate_limit_exceeded_handler returns a 429 error envelope
"""

import json
from unittest.mock import MagicMock

import pytest
from fastapi import Request
from slowapi.errors import RateLimitExceeded

from core.ratelimit import CONTACT_SUBMIT_LIMIT, limiter, rate_limit_exceeded_handler


def _make_rate_limit_exc(
    detail: str = "5 per 1 minute", window_seconds: int = 60
) -> RateLimitExceeded:
    """Create a RateLimitExceeded around a mock slowapi Limit."""
    mock_limit = MagicMock()
    mock_limit.error_message = None
    mock_limit.limit.__str__.return_value = detail
    mock_limit.limit.get_expiry.return_value = window_seconds
    return RateLimitExceeded(mock_limit)


@pytest.mark.unit
class TestLimiter:
    def test_contact_limit_comes_from_settings(self):
        assert CONTACT_SUBMIT_LIMIT == "10/minute"

    def test_keys_are_prefixed(self):
        assert limiter._key_prefix == "portfolio:"


@pytest.mark.unit
class TestRateLimitExceededHandler:
    """Test rate_limit_exceeded_handler response."""

    def test_retry_after_is_the_limit_window(self):
        request = MagicMock(spec=Request)
        exc = _make_rate_limit_exc(detail="5 per 30 second", window_seconds=30)

        response = rate_limit_exceeded_handler(request, exc)

        assert response.status_code == 429
        assert response.headers.get("Retry-After") == "30"

    def test_response_body_uses_error_envelope(self):
        request = MagicMock(spec=Request)
        exc = _make_rate_limit_exc(detail="10 per 1 minute")

        response = rate_limit_exceeded_handler(request, exc)

        body = json.loads(response.body)
        assert body["success"] is False
        assert body["error"]["code"] == 429
        assert "Rate limit exceeded" in body["error"]["message"]
        assert body["error"]["details"] == "10 per 1 minute"

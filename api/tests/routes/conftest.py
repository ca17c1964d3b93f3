"""Route test configuration: slowapi is switched off unless a test opts in."""

from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def _disable_rate_limiter():
    """Let tests post the contact form repeatedly without hitting 429s."""
    with patch("core.ratelimit.limiter.enabled", False):
        yield

"""Rate limiting configuration using slowapi.

Only the public contact form is throttled per client IP. The per-email
"three messages a day" rule lives in the contact service.

SCALABILITY NOTES:
- memory:// storage does NOT work with multiple workers/replicas
- Set RATELIMIT_STORAGE_URI="redis://host:port/db" when running more than one
"""

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from core.config import get_settings
from core.logger import get_logger

logger = get_logger(__name__)

settings = get_settings()

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["100/minute"],
    storage_uri=settings.ratelimit_storage_uri,
    key_prefix="portfolio:",
)

CONTACT_SUBMIT_LIMIT = settings.contact_submit_limit

HEALTH_LIMIT = "30/minute"


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Render slowapi's 429 in the API error envelope.

    Retry-After is the length of the exceeded window in seconds.
    """
    logger.warning(
        "ratelimit.exceeded",
        client=get_remote_address(request),
        path=request.url.path,
        limit=exc.detail,
    )
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": {
                "code": 429,
                "message": "Rate limit exceeded. Please slow down.",
                "details": exc.detail,
            },
        },
        headers={"Retry-After": str(exc.limit.limit.get_expiry())},
    )

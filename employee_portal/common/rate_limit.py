"""Per-client request limits (slowapi), keyed on the remote address.

``limiter`` is attached to ``app.state`` in main.py. Endpoints that write
(leave submission, self-assessment, notification broadcast) also carry
``@limiter.limit(WRITE_LIMIT)``. A tripped limit is answered with a
429 problem body like every other portal error.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from employee_portal.common.exceptions import PROBLEM_JSON, problem_body
from employee_portal.config import settings

logger = logging.getLogger(__name__)

WRITE_LIMIT = settings.RATE_LIMIT_WRITE

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit hit on %s by %s: %s", request.url.path, get_remote_address(request), exc.detail)
    return JSONResponse(
        status_code=429,
        content=problem_body(
            request,
            status=429,
            error_type="rate-limited",
            title="Too Many Requests",
            detail=f"Rate limit exceeded: {exc.detail}",
        ),
        media_type=PROBLEM_JSON,
    )

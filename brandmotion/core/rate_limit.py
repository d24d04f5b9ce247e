"""Rate limiting for export submissions using SlowAPI."""

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from brandmotion.config import get_settings

# Exports are keyed by client IP
limiter = Limiter(key_func=get_remote_address)


def export_rate_limit() -> str:
    """Current export limit from settings (e.g. "10/minute")."""
    return get_settings().export_rate_limit


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Return a JSON 429 instead of SlowAPI's plain-text default."""
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many exports. Please try again later."},
    )

# stocktrack/core/rate_limiter.py

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)


def stock_limit_key(request: Request) -> str:
    """Bucket key for stock adjustments.

    Carries the owning app's configured limit and scope, so each app built
    by ``create_app`` counts and limits its own clients.
    """
    state = request.app.state
    return f"{state.settings.STOCK_RATE_LIMIT}|{state.rate_limit_scope}|{get_remote_address(request)}"


def stock_rate_limit(key: str) -> str:
    return key.split("|", 1)[0]


def rate_limit_disabled(request: Request) -> bool:
    return not request.app.state.settings.RATE_LIMIT_ENABLED

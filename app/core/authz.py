"""Role-Based Authorization Guard"""

import functools
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from app.core.logging import get_logger
from app.models.enums import UserRole

logger = get_logger(__name__)

UNAUTHORIZED = {"error": "unauthorized"}


@dataclass(frozen=True)
class CallContext:
    """Authenticated caller, built from the verified short token"""
    user_id: Optional[str] = None
    role: int = UserRole.ANONYMOUS

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None


ANONYMOUS = CallContext()


def authorize(caller_role: int, min_role: int) -> bool:
    """Permit when the caller's role reaches the required minimum."""
    return caller_role >= min_role


def require_role(min_role: int) -> Callable:
    """
    Gate a service coroutine ``(self, ctx, ...)`` on the caller's role.

    Denied calls return ``{"error": "unauthorized"}`` before the wrapped body
    runs, so no validation or store access happens for them.
    """
    def decorator(func: Callable[..., Awaitable[Dict[str, Any]]]):
        @functools.wraps(func)
        async def wrapper(self, ctx: CallContext, *args, **kwargs) -> Dict[str, Any]:
            if not authorize(ctx.role, min_role):
                logger.info(
                    "Operation denied",
                    extra={"operation": func.__name__, "caller_role": ctx.role, "min_role": min_role},
                )
                return dict(UNAUTHORIZED)
            return await func(self, ctx, *args, **kwargs)

        wrapper.min_role = min_role
        return wrapper
    return decorator

"""API Dependencies"""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.authz import ANONYMOUS, CallContext
from app.core.security import verify_short_token
from app.database import get_db
from app.schemas.user import TokenClaims
from app.store import Stores

# Security scheme for bearer token; missing headers are handled below
security = HTTPBearer(auto_error=False)


def _credentials_error(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _context_from_token(token: str) -> CallContext:
    payload = verify_short_token(token)
    if not payload:
        raise _credentials_error("Could not validate credentials")
    try:
        claims = TokenClaims.model_validate(payload)
    except ValidationError:
        raise _credentials_error("Invalid token claims")
    return CallContext(user_id=claims.user_id, role=claims.user_role)


async def get_call_context(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CallContext:
    """
    Build the caller context from a required short token.

    Raises:
        HTTPException: 401 if the token is missing, expired or malformed
    """
    if credentials is None:
        raise _credentials_error("Not authenticated")
    ctx = _context_from_token(credentials.credentials)
    request.state.caller_role = ctx.role
    return ctx


async def get_optional_call_context(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CallContext:
    """Anonymous context when no token is sent; a bad token is still rejected."""
    if credentials is None:
        return ANONYMOUS
    ctx = _context_from_token(credentials.credentials)
    request.state.caller_role = ctx.role
    return ctx


async def get_stores(db: AsyncSession = Depends(get_db)) -> Stores:
    return Stores(db)

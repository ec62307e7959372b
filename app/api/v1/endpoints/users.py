from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status

from app.api import deps
from app.api.render import render
from app.core.authz import CallContext
from app.schemas.responses import ErrorResponse, TokenResponse
from app.services.user_service import UserService
from app.store import Stores

router = APIRouter()


def get_service(stores: Stores = Depends(deps.get_stores)) -> UserService:
    return UserService(stores)


@router.post(
    "/createUser",
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_user(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: UserService = Depends(get_service),
) -> Any:
    """
    Register a new account with the default member role.
    """
    return render(await service.create_user(payload), status.HTTP_201_CREATED)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def login(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: UserService = Depends(get_service),
) -> Any:
    """
    Exchange username and password for a short token.
    """
    return render(await service.login(payload))


@router.get("/me", responses={404: {"model": ErrorResponse}})
async def me(
    ctx: CallContext = Depends(deps.get_call_context),
    service: UserService = Depends(get_service),
) -> Any:
    return render(await service.get_me(ctx))

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status

from app.api import deps
from app.api.render import render
from app.core.authz import CallContext
from app.schemas.responses import ERROR_RESPONSES, MessageResponse
from app.services.class_service import ClassService
from app.store import Stores

router = APIRouter()


def get_service(stores: Stores = Depends(deps.get_stores)) -> ClassService:
    return ClassService(stores)


@router.post("/addClass", status_code=status.HTTP_201_CREATED, responses=ERROR_RESPONSES)
async def add_class(
    payload: Optional[Dict[str, Any]] = Body(None),
    ctx: CallContext = Depends(deps.get_call_context),
    service: ClassService = Depends(get_service),
) -> Any:
    """
    Create a class under a school id. Admin only.
    """
    return render(await service.add_class(ctx, payload), status.HTTP_201_CREATED)


@router.get("/getAllClasses")
async def get_all_classes(
    ctx: CallContext = Depends(deps.get_call_context),
    service: ClassService = Depends(get_service),
) -> Any:
    return render(await service.get_all_classes(ctx))


@router.get("/getClass/{class_id}", responses=ERROR_RESPONSES)
async def get_class(
    class_id: str,
    ctx: CallContext = Depends(deps.get_call_context),
    service: ClassService = Depends(get_service),
) -> Any:
    return render(await service.get_class(ctx, class_id))


@router.put("/assignStudentsToClass/{class_id}", responses=ERROR_RESPONSES)
async def assign_students_to_class(
    class_id: str,
    payload: Optional[Dict[str, Any]] = Body(None),
    ctx: CallContext = Depends(deps.get_call_context),
    service: ClassService = Depends(get_service),
) -> Any:
    """
    Add student ids to a class roster. Admin only.
    """
    return render(await service.assign_students_to_class(ctx, class_id, payload))


@router.delete(
    "/deleteClass/{class_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
)
async def delete_class(
    class_id: str,
    ctx: CallContext = Depends(deps.get_call_context),
    service: ClassService = Depends(get_service),
) -> Any:
    return render(await service.delete_class(ctx, class_id))

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status

from app.api import deps
from app.api.render import render
from app.core.authz import CallContext
from app.schemas.responses import ERROR_RESPONSES, MessageResponse
from app.services.school_service import SchoolService
from app.store import Stores

router = APIRouter()


def get_service(stores: Stores = Depends(deps.get_stores)) -> SchoolService:
    return SchoolService(stores)


@router.post("/addSchool", status_code=status.HTTP_201_CREATED, responses=ERROR_RESPONSES)
async def add_school(
    payload: Optional[Dict[str, Any]] = Body(None),
    ctx: CallContext = Depends(deps.get_call_context),
    service: SchoolService = Depends(get_service),
) -> Any:
    """
    Create a school. Admin only.
    """
    return render(await service.add_school(ctx, payload), status.HTTP_201_CREATED)


@router.get("/getAllSchools")
async def get_all_schools(
    ctx: CallContext = Depends(deps.get_call_context),
    service: SchoolService = Depends(get_service),
) -> Any:
    """
    List all schools with their classes populated.
    """
    return render(await service.get_all_schools(ctx))


@router.get("/getSchool/{school_id}", responses=ERROR_RESPONSES)
async def get_school(
    school_id: str,
    ctx: CallContext = Depends(deps.get_call_context),
    service: SchoolService = Depends(get_service),
) -> Any:
    return render(await service.get_school(ctx, school_id))


@router.put("/assignClassesToSchool/{school_id}", responses=ERROR_RESPONSES)
async def assign_classes_to_school(
    school_id: str,
    payload: Optional[Dict[str, Any]] = Body(None),
    ctx: CallContext = Depends(deps.get_call_context),
    service: SchoolService = Depends(get_service),
) -> Any:
    """
    Add class ids to a school's class set. Admin only.
    """
    return render(await service.assign_classes_to_school(ctx, school_id, payload))


@router.delete(
    "/deleteSchool/{school_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
)
async def delete_school(
    school_id: str,
    ctx: CallContext = Depends(deps.get_call_context),
    service: SchoolService = Depends(get_service),
) -> Any:
    """
    Delete a school. Classes that reference it are kept. Admin only.
    """
    return render(await service.delete_school(ctx, school_id))

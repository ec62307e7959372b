from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status

from app.api import deps
from app.api.render import render
from app.core.authz import CallContext
from app.schemas.responses import ERROR_RESPONSES, MessageResponse
from app.services.student_service import StudentService
from app.store import Stores

router = APIRouter()


def get_service(stores: Stores = Depends(deps.get_stores)) -> StudentService:
    return StudentService(stores)


@router.post("/addStudent", status_code=status.HTTP_201_CREATED, responses=ERROR_RESPONSES)
async def add_student(
    payload: Optional[Dict[str, Any]] = Body(None),
    ctx: CallContext = Depends(deps.get_optional_call_context),
    service: StudentService = Depends(get_service),
) -> Any:
    """
    Enroll a student. Open to anonymous callers unless a minimum role is configured.
    """
    return render(await service.add_student(ctx, payload), status.HTTP_201_CREATED)


@router.get("/getAllStudents")
async def get_all_students(
    ctx: CallContext = Depends(deps.get_call_context),
    service: StudentService = Depends(get_service),
) -> Any:
    return render(await service.get_all_students(ctx))


@router.get("/getStudent/{student_id}", responses=ERROR_RESPONSES)
async def get_student(
    student_id: str,
    ctx: CallContext = Depends(deps.get_call_context),
    service: StudentService = Depends(get_service),
) -> Any:
    return render(await service.get_student(ctx, student_id))


@router.put(
    "/updateStudent/{student_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
)
async def update_student(
    student_id: str,
    payload: Optional[Dict[str, Any]] = Body(None),
    ctx: CallContext = Depends(deps.get_call_context),
    service: StudentService = Depends(get_service),
) -> Any:
    """
    Move a student to another class and school. Admin only.
    """
    return render(await service.update_student(ctx, student_id, payload))


@router.delete(
    "/deleteStudent/{student_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
)
async def delete_student(
    student_id: str,
    ctx: CallContext = Depends(deps.get_call_context),
    service: StudentService = Depends(get_service),
) -> Any:
    return render(await service.delete_student(ctx, student_id))

from typing import Any, Dict, Mapping, Optional

from app.config import settings
from app.core.authz import CallContext, require_role
from app.core.logging import get_logger
from app.core.validation import validate
from app.models.enums import UserRole
from app.schemas.academic import CREATE_STUDENT_RULES, UPDATE_STUDENT_RULES, StudentView
from app.services.base import EntityService, not_found

logger = get_logger(__name__)

POPULATE = ("studentClass", "studentSchool")


class StudentService(EntityService):
    """Service layer for Student operations"""

    entity = "student"
    view = StudentView

    @require_role(settings.STUDENT_CREATE_MIN_ROLE)
    async def add_student(self, ctx: CallContext, payload: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        error = validate(CREATE_STUDENT_RULES, payload)
        if error:
            return error

        doc = await self.store.create(
            {
                "studentName": payload["studentName"],
                "studentClass": payload["studentClass"],
                "studentSchool": payload["studentSchool"],
            }
        )
        logger.info("Student created", extra={"student_id": doc["id"], "user_id": ctx.user_id})
        return {"student": self.render(doc)}

    async def get_all_students(self, ctx: CallContext) -> Dict[str, Any]:
        docs = await self.store.find_all(populate=POPULATE)
        return {"students": [self.render(doc) for doc in docs]}

    async def get_student(self, ctx: CallContext, student_id: str) -> Dict[str, Any]:
        doc, error = await self.load(student_id, populate=POPULATE)
        if error:
            return error
        return {"student": self.render(doc)}

    @require_role(UserRole.ADMIN)
    async def update_student(
        self, ctx: CallContext, student_id: str, payload: Optional[Mapping[str, Any]]
    ) -> Dict[str, Any]:
        """Move a student: class and school are replaced together in one write."""
        _, error = await self.load(student_id)
        if error:
            return error

        error = validate(UPDATE_STUDENT_RULES, payload)
        if error:
            return error

        updated = await self.store.update_by_id(
            student_id,
            {"studentClass": payload["newClass"], "studentSchool": payload["newSchool"]},
        )
        if not updated:
            return not_found(self.entity)
        logger.info("Student updated", extra={"student_id": student_id, "user_id": ctx.user_id})
        return {"message": "student updated"}

    @require_role(UserRole.ADMIN)
    async def delete_student(self, ctx: CallContext, student_id: str) -> Dict[str, Any]:
        _, error = await self.load(student_id)
        if error:
            return error

        await self.store.delete_by_id(student_id)
        logger.info("Student deleted", extra={"student_id": student_id, "user_id": ctx.user_id})
        return {"message": "student deleted"}

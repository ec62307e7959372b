from typing import Any, Dict, Mapping, Optional

from app.core.authz import CallContext, require_role
from app.core.logging import get_logger
from app.core.validation import validate
from app.models.enums import UserRole
from app.schemas.academic import ASSIGN_STUDENTS_RULES, CREATE_CLASS_RULES, ClassView
from app.services.base import EntityService, not_found

logger = get_logger(__name__)

POPULATE = ("students", "school")


class ClassService(EntityService):
    """Service layer for Class operations"""

    entity = "class"
    view = ClassView

    @require_role(UserRole.ADMIN)
    async def add_class(self, ctx: CallContext, payload: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        # the school reference is shape-checked only; it may point nowhere
        error = validate(CREATE_CLASS_RULES, payload)
        if error:
            return error

        doc = await self.store.create(
            {
                "className": payload["className"],
                "students": payload.get("students") or [],
                "school": payload["school"],
            }
        )
        logger.info("Class created", extra={"class_id": doc["id"], "user_id": ctx.user_id})
        return {"class": self.render(doc)}

    async def get_all_classes(self, ctx: CallContext) -> Dict[str, Any]:
        docs = await self.store.find_all(populate=POPULATE)
        return {"classes": [self.render(doc) for doc in docs]}

    async def get_class(self, ctx: CallContext, class_id: str) -> Dict[str, Any]:
        doc, error = await self.load(class_id, populate=POPULATE)
        if error:
            return error
        return {"class": self.render(doc)}

    @require_role(UserRole.ADMIN)
    async def assign_students_to_class(
        self, ctx: CallContext, class_id: str, payload: Optional[Mapping[str, Any]]
    ) -> Dict[str, Any]:
        _, error = await self.load(class_id)
        if error:
            return error

        error = validate(ASSIGN_STUDENTS_RULES, payload)
        if error:
            return error

        if not await self.store.add_to_set(class_id, "students", payload["students"]):
            return not_found(self.entity)

        doc = await self.store.find_by_id(class_id)
        if doc is None:
            return not_found(self.entity)
        logger.info(
            "Students assigned to class",
            extra={"class_id": class_id, "count": len(payload["students"]), "user_id": ctx.user_id},
        )
        return {"class": self.render(doc)}

    @require_role(UserRole.ADMIN)
    async def delete_class(self, ctx: CallContext, class_id: str) -> Dict[str, Any]:
        _, error = await self.load(class_id)
        if error:
            return error

        await self.store.delete_by_id(class_id)
        logger.info("Class deleted", extra={"class_id": class_id, "user_id": ctx.user_id})
        return {"message": "class deleted"}

from typing import Any, Dict, Mapping, Optional

from app.core.authz import CallContext, require_role
from app.core.logging import get_logger
from app.core.validation import validate
from app.models.enums import UserRole
from app.schemas.school import ASSIGN_CLASSES_RULES, CREATE_SCHOOL_RULES, SchoolView
from app.services.base import EntityService, not_found

logger = get_logger(__name__)


class SchoolService(EntityService):
    """Service layer for School operations"""

    entity = "school"
    view = SchoolView

    @require_role(UserRole.ADMIN)
    async def add_school(self, ctx: CallContext, payload: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        error = validate(CREATE_SCHOOL_RULES, payload)
        if error:
            return error

        doc = await self.store.create(
            {"schoolName": payload["schoolName"], "classes": payload.get("classes") or []}
        )
        logger.info("School created", extra={"school_id": doc["id"], "user_id": ctx.user_id})
        return {"school": self.render(doc)}

    async def get_all_schools(self, ctx: CallContext) -> Dict[str, Any]:
        docs = await self.store.find_all(populate=["classes"])
        return {"schools": [self.render(doc) for doc in docs]}

    async def get_school(self, ctx: CallContext, school_id: str) -> Dict[str, Any]:
        doc, error = await self.load(school_id, populate=["classes"])
        if error:
            return error
        return {"school": self.render(doc)}

    @require_role(UserRole.ADMIN)
    async def assign_classes_to_school(
        self, ctx: CallContext, school_id: str, payload: Optional[Mapping[str, Any]]
    ) -> Dict[str, Any]:
        """
        Union class ids into the school's ``classes`` set and return the
        school as re-read after the write.
        """
        _, error = await self.load(school_id)
        if error:
            return error

        error = validate(ASSIGN_CLASSES_RULES, payload)
        if error:
            return error

        if not await self.store.add_to_set(school_id, "classes", payload["classes"]):
            return not_found(self.entity)

        doc = await self.store.find_by_id(school_id)
        if doc is None:
            return not_found(self.entity)
        logger.info(
            "Classes assigned to school",
            extra={"school_id": school_id, "count": len(payload["classes"]), "user_id": ctx.user_id},
        )
        return {"school": self.render(doc)}

    @require_role(UserRole.ADMIN)
    async def delete_school(self, ctx: CallContext, school_id: str) -> Dict[str, Any]:
        _, error = await self.load(school_id)
        if error:
            return error

        await self.store.delete_by_id(school_id)
        logger.info("School deleted", extra={"school_id": school_id, "user_id": ctx.user_id})
        return {"message": "school deleted"}

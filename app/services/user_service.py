"""User Service - Business Logic Layer"""

from typing import Any, Dict, Mapping, Optional

from sqlalchemy.exc import IntegrityError

from app.core.authz import CallContext
from app.core.logging import get_logger
from app.core.security import gen_short_token, get_password_hash, verify_password
from app.core.validation import validate
from app.models.enums import UserRole
from app.schemas.user import CREATE_USER_RULES, LOGIN_RULES, TokenClaims, UserView
from app.services.base import EntityService

logger = get_logger(__name__)

USERNAME_TAKEN = {"error": "username already taken"}


class UserService(EntityService):
    """Service layer for account creation and login"""

    entity = "user"
    view = UserView

    async def create_user(
        self,
        payload: Optional[Mapping[str, Any]],
        role: int = UserRole.MEMBER,
    ) -> Dict[str, Any]:
        """
        Register an account. The password is stored as a bcrypt hash only.

        ``role`` is fixed to MEMBER for API callers; the bootstrap script
        passes ADMIN.
        """
        error = validate(CREATE_USER_RULES, payload)
        if error:
            return error

        if await self.store.find_one({"username": payload["username"]}):
            return dict(USERNAME_TAKEN)

        try:
            doc = await self.store.create(
                {
                    "name": payload["name"],
                    "username": payload["username"],
                    "email": payload["email"],
                    "password": get_password_hash(payload["password"]),
                    "role": int(role),
                }
            )
        except IntegrityError:
            # lost a race on the unique username index
            await self.stores.db.rollback()
            return dict(USERNAME_TAKEN)

        logger.info("User created", extra={"user_id": doc["id"], "role": doc["role"]})
        return {"user": self.render(doc)}

    async def login(self, payload: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        error = validate(LOGIN_RULES, payload)
        if error:
            return error

        doc = await self.store.find_one({"username": payload["username"]})
        if doc is None:
            return {"error": "user not found"}

        if not verify_password(payload["password"], doc["password"]):
            logger.info("Login rejected", extra={"user_id": doc["id"]})
            return {"error": "wrong password"}

        claims = TokenClaims(user_id=doc["id"], user_role=doc["role"])
        return {"token": gen_short_token(claims.model_dump(by_alias=True))}

    async def get_me(self, ctx: CallContext) -> Dict[str, Any]:
        doc, error = await self.load(ctx.user_id)
        if error:
            return error
        return {"user": self.render(doc)}

"""Shared helpers for the entity services"""

from typing import Any, Dict, Optional, Sequence, Tuple, Type

from pydantic import BaseModel

from app.core.validation import is_valid_id
from app.store import EntityStore, Stores


def invalid_id(entity: str) -> Dict[str, str]:
    return {"error": f"invalid {entity} id"}


def not_found(entity: str) -> Dict[str, str]:
    return {"error": f"{entity} not found"}


class EntityService:
    """
    Base for the per-entity managers.

    Subclasses set ``entity`` (the collection name, also used in error
    messages) and ``view`` (the public projection).
    """

    entity: str
    view: Type[BaseModel]

    def __init__(self, stores: Stores):
        self.stores = stores

    @property
    def store(self) -> EntityStore:
        return self.stores.get(self.entity)

    def render(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        return self.view.model_validate(doc).model_dump(by_alias=True, mode="json")

    async def load(
        self, entity_id: Any, populate: Sequence[str] = ()
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, str]]]:
        """
        Fetch one document by id.

        Returns:
            ``(doc, None)`` on success, ``(None, error)`` for a malformed or
            unknown id. The shape check runs before any store access.
        """
        if not is_valid_id(entity_id):
            return None, invalid_id(self.entity)
        doc = await self.store.find_by_id(entity_id, populate=populate)
        if doc is None:
            return None, not_found(self.entity)
        return doc, None

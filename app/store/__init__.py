"""Entity store package"""

from app.store.entity_store import EntityStore, InvalidIdError, Stores, parse_id

__all__ = ["EntityStore", "InvalidIdError", "Stores", "parse_id"]

"""
Document-style store over the SQLAlchemy tables.

``EntityStore`` exposes create / find / update / add-to-set / delete for one
collection and returns plain dict documents. Reference fields hold id strings;
``populate`` swaps them for the referenced documents in read results only.
"""

import logging
import time
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, insert, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.validation import is_valid_id
from app.store.collections import COLLECTIONS, Collection, ReferenceSet

logger = logging.getLogger(__name__)

# Dialects offering INSERT ... ON CONFLICT DO NOTHING
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class InvalidIdError(ValueError):
    """Raised when an identifier does not have the id shape"""

    def __init__(self, collection: str, value: Any):
        self.collection = collection
        self.value = value
        super().__init__(f"invalid {collection} id: {value!r}")


def parse_id(collection: str, value: Any) -> UUID:
    if not is_valid_id(value):
        raise InvalidIdError(collection, value)
    return UUID(value)


def _unique(values: Iterable[Any]) -> List[Any]:
    seen = set()
    out = []
    for value in values:
        if value not in seen:
            seen.add(value)
            out.append(value)
    return out


class EntityStore:
    """CRUD plus set-add for a single collection"""

    def __init__(self, collection: Collection, db: AsyncSession, stores: "Stores"):
        self.collection = collection
        self.model = collection.model
        self.db = db
        self._stores = stores

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, doc: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert a document (set fields deduplicated) and return it as stored"""
        start = time.perf_counter()
        self._check_known(doc)

        row = self.model(**self._row_values(doc))
        self.db.add(row)
        await self.db.flush()

        for doc_field, ref_set in self.collection.sets.items():
            members = _unique(parse_id(ref_set.target, m) for m in doc.get(doc_field) or [])
            if members:
                await self.db.execute(
                    insert(ref_set.table).values(
                        [{ref_set.owner_column: row.id, ref_set.member_column: m} for m in members]
                    )
                )
        await self.db.commit()

        logger.info(
            "store.create.success",
            extra={
                "collection": self.collection.name,
                "id": str(row.id),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        docs = await self._find([self.model.id == row.id])
        return docs[0]

    async def update_by_id(self, entity_id: str, patch: Mapping[str, Any]) -> bool:
        """
        Overwrite scalar fields in one statement.

        Returns:
            False when no document has this id
        """
        key = parse_id(self.collection.name, entity_id)
        self._check_known(patch)
        append_only = sorted(set(patch) & set(self.collection.sets))
        if append_only:
            raise ValueError(f"set fields are append-only, use add_to_set: {', '.join(append_only)}")

        values = self._row_values(patch)
        if not values:
            return await self._exists(key)

        result = await self.db.execute(
            update(self.model).where(self.model.id == key).values(**values)
        )
        await self.db.commit()
        logger.info(
            "store.update",
            extra={"collection": self.collection.name, "id": entity_id, "fields": sorted(patch)},
        )
        return result.rowcount > 0

    async def add_to_set(self, entity_id: str, field: str, values: Sequence[str]) -> bool:
        """
        Union ``values`` into the set ``field``.

        A single INSERT ... ON CONFLICT DO NOTHING: existing members are
        skipped and concurrent adders cannot drop each other's members.

        Returns:
            False when no document has this id
        """
        key = parse_id(self.collection.name, entity_id)
        ref_set = self._set(field)
        members = _unique(parse_id(ref_set.target, v) for v in values)

        if not await self._exists(key):
            return False

        if members:
            stmt = self._upsert_insert(ref_set.table).values(
                [{ref_set.owner_column: key, ref_set.member_column: m} for m in members]
            ).on_conflict_do_nothing()
            await self.db.execute(stmt)
        await self.db.commit()

        logger.info(
            "store.add_to_set",
            extra={"collection": self.collection.name, "id": entity_id, "field": field, "count": len(members)},
        )
        return True

    async def delete_by_id(self, entity_id: str) -> bool:
        """
        Hard delete. The document's own set rows go with it; documents in
        other collections that reference it are left untouched.
        """
        key = parse_id(self.collection.name, entity_id)
        for ref_set in self.collection.sets.values():
            await self.db.execute(
                delete(ref_set.table).where(ref_set.table.c[ref_set.owner_column] == key)
            )
        result = await self.db.execute(delete(self.model).where(self.model.id == key))
        await self.db.commit()

        deleted = result.rowcount > 0
        logger.info(
            "store.delete",
            extra={"collection": self.collection.name, "id": entity_id, "deleted": deleted},
        )
        return deleted

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def find_all(
        self,
        filter: Optional[Mapping[str, Any]] = None,
        populate: Sequence[str] = (),
    ) -> List[Dict[str, Any]]:
        docs = await self._find(self._where(filter or {}))
        await self._populate(docs, populate)
        return docs

    async def find_one(
        self,
        filter: Mapping[str, Any],
        populate: Sequence[str] = (),
    ) -> Optional[Dict[str, Any]]:
        docs = await self._find(self._where(filter), limit=1)
        await self._populate(docs, populate)
        return docs[0] if docs else None

    async def find_by_id(self, entity_id: str, populate: Sequence[str] = ()) -> Optional[Dict[str, Any]]:
        key = parse_id(self.collection.name, entity_id)
        docs = await self._find([self.model.id == key])
        await self._populate(docs, populate)
        return docs[0] if docs else None

    async def by_ids(self, ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """Unpopulated documents keyed by id; missing ids are simply absent"""
        keys = [UUID(i) for i in ids if is_valid_id(i)]
        if not keys:
            return {}
        docs = await self._find([self.model.id.in_(keys)])
        return {doc["id"]: doc for doc in docs}

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _set(self, field: str) -> ReferenceSet:
        try:
            return self.collection.sets[field]
        except KeyError:
            raise KeyError(f"{self.collection.name} has no set field {field!r}") from None

    def _check_known(self, doc: Mapping[str, Any]) -> None:
        known = set(self.collection.fields) | set(self.collection.references) | set(self.collection.sets)
        unknown = sorted(set(doc) - known)
        if unknown:
            raise ValueError(f"Unknown field(s) for {self.collection.name}: {', '.join(unknown)}")

    def _row_values(self, doc: Mapping[str, Any]) -> Dict[str, Any]:
        values = {}
        for doc_field, attr in self.collection.fields.items():
            if doc_field in doc:
                values[attr] = doc[doc_field]
        for doc_field, ref in self.collection.references.items():
            if doc_field in doc:
                raw = doc[doc_field]
                values[ref.column] = None if raw is None else parse_id(ref.target, raw)
        return values

    def _where(self, filter: Mapping[str, Any]) -> list:
        clauses = []
        for doc_field, value in filter.items():
            if doc_field == "id":
                clauses.append(self.model.id == parse_id(self.collection.name, value))
            elif doc_field in self.collection.references:
                target = self.collection.references[doc_field].target
                clauses.append(getattr(self.model, self.collection.column_for(doc_field)) == parse_id(target, value))
            else:
                clauses.append(getattr(self.model, self.collection.column_for(doc_field)) == value)
        return clauses

    async def _exists(self, key: UUID) -> bool:
        result = await self.db.execute(select(self.model.id).where(self.model.id == key))
        return result.scalar_one_or_none() is not None

    async def _find(self, where: list, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        stmt = (
            select(self.model)
            .where(*where)
            .order_by(self.model.created_at, self.model.id)
            .execution_options(populate_existing=True)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return await self._documents(result.scalars().all())

    async def _documents(self, rows: Sequence[Any]) -> List[Dict[str, Any]]:
        docs = []
        for row in rows:
            doc: Dict[str, Any] = {"id": str(row.id)}
            for doc_field, attr in self.collection.fields.items():
                doc[doc_field] = getattr(row, attr)
            for doc_field, ref in self.collection.references.items():
                value = getattr(row, ref.column)
                doc[doc_field] = str(value) if value is not None else None
            doc["createdAt"] = row.created_at
            doc["updatedAt"] = row.updated_at
            docs.append(doc)

        owner_ids = [row.id for row in rows]
        for doc_field, ref_set in self.collection.sets.items():
            members = await self._members(ref_set, owner_ids)
            for doc in docs:
                doc[doc_field] = members.get(doc["id"], [])
        return docs

    async def _members(self, ref_set: ReferenceSet, owner_ids: List[UUID]) -> Dict[str, List[str]]:
        if not owner_ids:
            return {}
        owner = ref_set.table.c[ref_set.owner_column]
        member = ref_set.table.c[ref_set.member_column]
        result = await self.db.execute(
            select(owner, member).where(owner.in_(owner_ids)).order_by(owner, member)
        )
        grouped: Dict[str, List[str]] = defaultdict(list)
        for owner_id, member_id in result.all():
            grouped[str(owner_id)].append(str(member_id))
        return grouped

    async def _populate(self, docs: List[Dict[str, Any]], populate: Sequence[str]) -> None:
        for doc_field in populate:
            if doc_field in self.collection.references:
                target = self._stores.get(self.collection.references[doc_field].target)
                found = await target.by_ids({doc[doc_field] for doc in docs if doc[doc_field]})
                for doc in docs:
                    # dangling reference populates to None
                    doc[doc_field] = found.get(doc[doc_field]) if doc[doc_field] else None
            elif doc_field in self.collection.sets:
                target = self._stores.get(self.collection.sets[doc_field].target)
                found = await target.by_ids({m for doc in docs for m in doc[doc_field]})
                for doc in docs:
                    # dangling members are dropped
                    doc[doc_field] = [found[m] for m in doc[doc_field] if m in found]
            else:
                raise KeyError(f"{self.collection.name} has no reference field {doc_field!r}")

    def _upsert_insert(self, table):
        dialect = self.db.get_bind().dialect.name
        try:
            return _UPSERT_INSERTS[dialect](table)
        except KeyError:
            raise NotImplementedError(f"add_to_set is not supported on {dialect}") from None


class Stores:
    """The four collection stores sharing one session"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self._stores = {
            name: EntityStore(collection, db, self) for name, collection in COLLECTIONS.items()
        }

    def get(self, name: str) -> EntityStore:
        return self._stores[name]

    @property
    def schools(self) -> EntityStore:
        return self._stores["school"]

    @property
    def classes(self) -> EntityStore:
        return self._stores["class"]

    @property
    def students(self) -> EntityStore:
        return self._stores["student"]

    @property
    def users(self) -> EntityStore:
        return self._stores["user"]

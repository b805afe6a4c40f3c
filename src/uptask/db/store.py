"""Document store — the persistence collaborator for services.

Learn: Services never build SQL themselves. They talk to a small,
document-style API (find / find_by_id / insert / update_by_id /
delete_by_id), one DocumentStore per model class. Each write commits
on its own: an operation issues at most one write, so there is nothing
to group in a transaction.

Every SQLAlchemy failure is logged, rolled back and re-raised as a
StorageError. A failed write is never reported as success.
"""

from typing import Any, Generic, TypeVar

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from uptask.db.models import Base
from uptask.errors import DuplicateDocumentError, StorageError

logger = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=Base)

# Fields that identify or own a document; merges never touch them.
IMMUTABLE_FIELDS = frozenset({"id", "creator_id", "created_at"})


class DocumentStore(Generic[ModelT]):
    """Async CRUD over one collection."""

    def __init__(self, db: AsyncSession, model: type[ModelT]):
        self.db = db
        self.model = model

    @property
    def collection(self) -> str:
        return self.model.__tablename__

    # ─── Reads ──────────────────────────────────────────

    async def find(self, **filters: Any) -> list[ModelT]:
        """All documents whose fields equal the given values."""
        q = select(self.model).filter_by(**filters)
        try:
            result = await self.db.execute(q)
        except SQLAlchemyError as e:
            logger.error("store.read_failed", collection=self.collection, error=str(e))
            raise StorageError(f"Failed to read {self.collection}") from e
        return list(result.scalars().all())

    async def find_one(self, **filters: Any) -> ModelT | None:
        docs = await self.find(**filters)
        return docs[0] if docs else None

    async def find_by_id(self, doc_id: str) -> ModelT | None:
        try:
            return await self.db.get(self.model, str(doc_id))
        except SQLAlchemyError as e:
            logger.error(
                "store.read_failed",
                collection=self.collection,
                doc_id=doc_id,
                error=str(e),
            )
            raise StorageError(f"Failed to read {self.collection}") from e

    # ─── Writes ─────────────────────────────────────────

    async def insert(self, doc: ModelT) -> ModelT:
        """Persist a new document and return it with its generated id."""
        self.db.add(doc)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning("store.duplicate", collection=self.collection, error=str(e))
            raise DuplicateDocumentError(
                f"Duplicate document in {self.collection}"
            ) from e
        except SQLAlchemyError as e:
            await self._write_failed("insert", e)
        return doc

    async def update_by_id(
        self, doc_id: str, changes: dict[str, Any]
    ) -> ModelT | None:
        """Merge `changes` into a document. Returns None if it doesn't exist.

        Only the supplied keys are written; everything else keeps its
        stored value.
        """
        doc = await self.find_by_id(doc_id)
        if doc is None:
            return None

        unknown = [f for f in changes if not hasattr(self.model, f)]
        if unknown:
            raise StorageError(f"Unknown fields for {self.collection}: {unknown}")

        for field, value in changes.items():
            if field not in IMMUTABLE_FIELDS:
                setattr(doc, field, value)

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._write_failed("update", e, doc_id)
        return doc

    async def delete_by_id(self, doc_id: str) -> bool:
        doc = await self.find_by_id(doc_id)
        if doc is None:
            return False
        try:
            await self.db.delete(doc)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._write_failed("delete", e, doc_id)
        return True

    async def _write_failed(
        self, op: str, error: SQLAlchemyError, doc_id: str | None = None
    ):
        await self.db.rollback()
        logger.error(
            "store.write_failed",
            collection=self.collection,
            op=op,
            doc_id=doc_id,
            error=str(error),
        )
        raise StorageError(f"Failed to {op} {self.collection}") from error

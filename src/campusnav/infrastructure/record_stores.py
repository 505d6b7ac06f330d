"""
campusnav.infrastructure.record_stores - Image and Classroom Stores
=====================================================================

Typed views over one collection each of the document store:

    ImageStore      → ImageRecord      (collection "images" by default)
    ClassroomStore  → ClassroomRecord  (collection "classrooms" by default)

Both support exactly two operations: replace everything, and read
everything. There is no update or delete by key.

Validation:
    ``replace_all`` validates the whole record set before the collection is
    touched. A record with an empty name, or two records with the same name,
    rejects the entire set with PersistenceError and leaves the previous
    contents in place. ``validate`` exposes the same check on its own so the
    directory can stage both record sets before writing either.

Error Translation:
    Backend failures surface as PersistenceError, whatever the backend
    raised. The original exception is chained as ``__cause__``.

Usage:
    >>> images = ImageStore(document_store, collection="images")
    >>> await images.replace_all([ImageRecord(name="a.png", payload="...")])
    >>> records = await images.list_all()
"""

from __future__ import annotations

from collections import Counter
from typing import Generic, Sequence, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from campusnav.core.exceptions import ConnectivityError, PersistenceError
from campusnav.core.models import ClassroomRecord, ImageRecord
from campusnav.infrastructure.document_store import Document, DocumentStore


logger = structlog.get_logger()

RecordT = TypeVar("RecordT", ImageRecord, ClassroomRecord)


# =============================================================================
# Base Class: RecordStore
# =============================================================================
class RecordStore(Generic[RecordT]):
    """Whole-collection access to records of one type.

    Subclasses set ``record_type``; everything else is shared.

    Attributes:
        record_type: The pydantic model stored in this collection.
    """

    record_type: type[BaseModel]

    def __init__(self, document_store: DocumentStore, collection: str) -> None:
        self._document_store = document_store
        self._collection = collection
        self._logger = logger.bind(component=type(self).__name__, collection=collection)

    @property
    def collection(self) -> str:
        """Name of the backing collection."""
        return self._collection

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------
    def validate(self, records: Sequence[RecordT]) -> None:
        """Check that every record has a non-empty, unique name.

        Args:
            records: The candidate contents of the store.

        Raises:
            PersistenceError: EMPTY_KEY if a name is empty or blank,
                DUPLICATE_KEY if a name occurs more than once.
        """
        for position, record in enumerate(records):
            if not record.name or not record.name.strip():
                raise PersistenceError(
                    message=f"Record at position {position} has an empty name",
                    collection=self._collection,
                    error_code="EMPTY_KEY",
                    details={"position": position},
                )

        counts = Counter(record.name for record in records)
        duplicates = sorted(name for name, count in counts.items() if count > 1)
        if duplicates:
            raise PersistenceError(
                message=f"Duplicate record names: {', '.join(duplicates)}",
                collection=self._collection,
                error_code="DUPLICATE_KEY",
                details={"duplicates": duplicates},
            )

    # -------------------------------------------------------------------------
    # Whole-Store Operations
    # -------------------------------------------------------------------------
    async def replace_all(self, records: Sequence[RecordT]) -> None:
        """Drop every stored record and insert ``records`` in order.

        Args:
            records: The complete new contents of the store.

        Raises:
            PersistenceError: If validation fails (store untouched) or the
                backend write fails.
        """
        self.validate(records)
        documents: list[Document] = [
            record.model_dump(by_alias=True, mode="json") for record in records
        ]

        try:
            await self._document_store.replace_collection(self._collection, documents)
        except ConnectivityError as exc:
            raise PersistenceError(
                message=f"Store unavailable while replacing '{self._collection}': {exc.message}",
                collection=self._collection,
                error_code="STORE_UNAVAILABLE",
            ) from exc
        except Exception as exc:
            raise PersistenceError(
                message=f"Failed to replace '{self._collection}': {exc}",
                collection=self._collection,
                error_code="WRITE_FAILED",
            ) from exc

        self._logger.info("records_replaced", record_count=len(documents))

    async def list_all(self) -> list[RecordT]:
        """Return every stored record, in store-iteration order.

        Raises:
            PersistenceError: If the backend read fails or a stored document
                no longer matches the record shape.
        """
        try:
            documents = await self._document_store.find_all(self._collection)
        except ConnectivityError as exc:
            raise PersistenceError(
                message=f"Store unavailable while reading '{self._collection}': {exc.message}",
                collection=self._collection,
                error_code="STORE_UNAVAILABLE",
            ) from exc
        except Exception as exc:
            raise PersistenceError(
                message=f"Failed to read '{self._collection}': {exc}",
                collection=self._collection,
                error_code="READ_FAILED",
            ) from exc

        records: list[RecordT] = []
        for position, document in enumerate(documents):
            try:
                records.append(self.record_type.model_validate(document))  # type: ignore[arg-type]
            except ValidationError as exc:
                raise PersistenceError(
                    message=f"Stored document at position {position} is not a valid record",
                    collection=self._collection,
                    error_code="CORRUPT_RECORD",
                    details={"position": position, "errors": [e["msg"] for e in exc.errors()]},
                ) from exc
        return records


# =============================================================================
# Concrete Stores
# =============================================================================
class ImageStore(RecordStore[ImageRecord]):
    """Campus images, keyed by image name."""

    record_type = ImageRecord


class ClassroomStore(RecordStore[ClassroomRecord]):
    """Classroom records, keyed by classroom name."""

    record_type = ClassroomRecord

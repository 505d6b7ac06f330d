"""
campusnav.infrastructure.document_store - Document Store Backend
==================================================================

The storage engine behind the image and classroom stores. campusnav treats
it as an opaque document store: a set of named collections, each an ordered
list of JSON-like documents.

Architecture:
    ┌──────────────────┐   find_all / replace_collection   ┌─────────────────┐
    │  ImageStore       │ ────────────────────────────────→ │                 │
    │  ClassroomStore   │                                   │  DocumentStore  │
    │                   │ ←──────────────────────────────── │                 │
    └──────────────────┘          list[dict]               └─────────────────┘

Only whole-collection operations exist. Nothing in campusnav updates or
deletes a single document.

Implementations:
    - DocumentStore (ABC):        Abstract interface
    - InMemoryDocumentStore:      Dict-based, used for dev/testing and by default
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Any

import structlog

from campusnav.core.config import StoreConfig
from campusnav.core.exceptions import ConnectivityError


logger = structlog.get_logger()

Document = dict[str, Any]


# =============================================================================
# Abstract Base Class: DocumentStore
# =============================================================================
class DocumentStore(ABC):
    """Abstract base class for document store backends.

    Every operation other than ``connect`` raises ConnectivityError when the
    backend cannot be reached. Documents passed in or returned are copies;
    callers never share mutable state with the store.

    Example:
        >>> store = InMemoryDocumentStore()
        >>> await store.connect()
        >>> await store.ping()
        >>> await store.replace_collection("images", [{"image_name": "a", "image": "..."}])
        >>> docs = await store.find_all("images")
    """

    # -------------------------------------------------------------------------
    # Connection Lifecycle
    # -------------------------------------------------------------------------
    @abstractmethod
    async def connect(self) -> None:
        """Establish the connection to the backend.

        Raises:
            ConnectivityError: If the backend cannot be reached.
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the connection to the backend."""

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether ``connect()`` has succeeded and ``disconnect()`` has not run since."""

    @abstractmethod
    async def ping(self) -> None:
        """Liveness probe.

        Raises:
            ConnectivityError: If the backend does not answer.
        """

    # -------------------------------------------------------------------------
    # Collection Operations
    # -------------------------------------------------------------------------
    @abstractmethod
    async def find_all(self, collection: str) -> list[Document]:
        """Return every document of a collection.

        Unknown collections are empty, not an error.

        Args:
            collection: Collection name.

        Returns:
            Copies of the stored documents, in insertion order.

        Raises:
            ConnectivityError: If the backend cannot be reached.
        """

    @abstractmethod
    async def replace_collection(self, collection: str, documents: list[Document]) -> None:
        """Drop a collection and insert the given documents in order.

        Args:
            collection: Collection name.
            documents: The complete new contents of the collection.

        Raises:
            ConnectivityError: If the backend cannot be reached.
        """


# =============================================================================
# InMemoryDocumentStore Implementation
# =============================================================================
# Key Data Structures:
#   _collections: dict[collection_name, list[document]]
#
# replace_collection builds the new list completely before binding it, so a
# reader never sees a half-written collection.
# =============================================================================
class InMemoryDocumentStore(DocumentStore):
    """In-memory document store.

    Stores collections in a Python dict. Data is lost when the process ends
    and on ``disconnect()``; since every process start reloads both
    collections from the startup payloads, that is all the directory needs.

    Attributes:
        database_name: Label used in log output.
    """

    def __init__(self, database_name: str = "navigation_data") -> None:
        self.database_name = database_name
        self._collections: dict[str, list[Document]] = {}
        self._connected: bool = False
        self._logger = logger.bind(component="in_memory_document_store", database=database_name)

    # -------------------------------------------------------------------------
    # Connection Lifecycle
    # -------------------------------------------------------------------------
    async def connect(self) -> None:
        """Mark the store as connected."""
        self._connected = True
        self._logger.info("document_store_connected")

    async def disconnect(self) -> None:
        """Drop all collections and mark the store as disconnected."""
        self._collections.clear()
        self._connected = False
        self._logger.info("document_store_disconnected")

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def ping(self) -> None:
        self._ensure_connected()

    # -------------------------------------------------------------------------
    # Collection Operations
    # -------------------------------------------------------------------------
    async def find_all(self, collection: str) -> list[Document]:
        self._ensure_connected()
        return copy.deepcopy(self._collections.get(collection, []))

    async def replace_collection(self, collection: str, documents: list[Document]) -> None:
        self._ensure_connected()
        staged = copy.deepcopy(list(documents))
        self._collections[collection] = staged
        self._logger.debug(
            "collection_replaced",
            collection=collection,
            document_count=len(staged),
        )

    def collection_names(self) -> list[str]:
        """Names of the collections currently held."""
        return list(self._collections)

    # -------------------------------------------------------------------------
    # Internal Helpers
    # -------------------------------------------------------------------------
    def _ensure_connected(self) -> None:
        if not self._connected:
            raise ConnectivityError(
                message=f"Document store '{self.database_name}' is not connected",
                details={"database": self.database_name},
            )


# =============================================================================
# Factory
# =============================================================================
def create_document_store(config: StoreConfig) -> DocumentStore:
    """Create the document store backend described by ``config``.

    Only the in-memory backend ships with campusnav; ``username``,
    ``password``, ``host`` and ``port`` are carried for backends that need
    them and are not used by InMemoryDocumentStore.

    Args:
        config: Store configuration.

    Returns:
        A disconnected DocumentStore; call ``connect()`` before use.
    """
    return InMemoryDocumentStore(database_name=config.database_name)

"""
Tests for campusnav.infrastructure.document_store
===================================================

    - Connection lifecycle and the liveness probe
    - Whole-collection replace and read
    - Copy semantics (callers never share state with the store)
    - Factory
"""

import pytest

from campusnav.core.config import StoreConfig
from campusnav.core.exceptions import ConnectivityError
from campusnav.infrastructure.document_store import (
    DocumentStore,
    InMemoryDocumentStore,
    create_document_store,
)


class TestInMemoryDocumentStore:

    def test_is_document_store(self) -> None:
        assert isinstance(InMemoryDocumentStore(), DocumentStore)

    # -------------------------------------------------------------------------
    # Connection Lifecycle
    # -------------------------------------------------------------------------

    async def test_ping_fails_before_connect(self) -> None:
        store = InMemoryDocumentStore()
        assert store.is_connected is False
        with pytest.raises(ConnectivityError):
            await store.ping()

    async def test_ping_succeeds_after_connect(self) -> None:
        store = InMemoryDocumentStore()
        await store.connect()
        await store.ping()
        assert store.is_connected is True

    async def test_operations_fail_after_disconnect(self) -> None:
        store = InMemoryDocumentStore()
        await store.connect()
        await store.disconnect()

        with pytest.raises(ConnectivityError):
            await store.find_all("images")
        with pytest.raises(ConnectivityError):
            await store.replace_collection("images", [])

    async def test_disconnect_drops_data(self) -> None:
        store = InMemoryDocumentStore()
        await store.connect()
        await store.replace_collection("images", [{"image_name": "a", "image": "x"}])

        await store.disconnect()
        await store.connect()

        assert await store.find_all("images") == []

    # -------------------------------------------------------------------------
    # Collection Operations
    # -------------------------------------------------------------------------

    async def test_unknown_collection_is_empty(self, document_store: InMemoryDocumentStore) -> None:
        assert await document_store.find_all("nothing-here") == []

    async def test_replace_then_find_keeps_order(
        self, document_store: InMemoryDocumentStore
    ) -> None:
        docs = [{"n": 3}, {"n": 1}, {"n": 2}]
        await document_store.replace_collection("c", docs)
        assert await document_store.find_all("c") == docs

    async def test_replace_discards_previous_contents(
        self, document_store: InMemoryDocumentStore
    ) -> None:
        await document_store.replace_collection("c", [{"n": 1}, {"n": 2}])
        await document_store.replace_collection("c", [{"n": 9}])
        assert await document_store.find_all("c") == [{"n": 9}]

    async def test_collections_are_independent(
        self, document_store: InMemoryDocumentStore
    ) -> None:
        await document_store.replace_collection("a", [{"n": 1}])
        await document_store.replace_collection("b", [{"n": 2}])
        await document_store.replace_collection("a", [])

        assert await document_store.find_all("a") == []
        assert await document_store.find_all("b") == [{"n": 2}]
        assert sorted(document_store.collection_names()) == ["a", "b"]

    async def test_documents_are_copied_in_and_out(
        self, document_store: InMemoryDocumentStore
    ) -> None:
        docs = [{"images": ["x"]}]
        await document_store.replace_collection("c", docs)
        docs[0]["images"].append("mutated-input")

        read = await document_store.find_all("c")
        read[0]["images"].append("mutated-output")

        assert await document_store.find_all("c") == [{"images": ["x"]}]


class TestFactory:

    def test_creates_in_memory_store(self) -> None:
        store = create_document_store(StoreConfig(database_name="campus"))
        assert isinstance(store, InMemoryDocumentStore)
        assert store.database_name == "campus"
        assert store.is_connected is False

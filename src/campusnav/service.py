"""
campusnav.service - Directory Service Facade
==============================================

DirectoryService is the one handle request handlers get. It owns the
document store connection and the NavigationDirectory, and puts every
directory call behind a single ``asyncio.Lock``:

    ┌───────────────┐
    │ request A     │──┐
    ├───────────────┤  │   ┌──────────────────────────────────────────┐
    │ request B     │──┼──→│ DirectoryService (asyncio.Lock)           │
    ├───────────────┤  │   │   NavigationDirectory → Image/Classroom   │
    │ reload        │──┘   │   stores → DocumentStore                  │
    └───────────────┘      └──────────────────────────────────────────┘

The lock is held for the full call, store round-trips included, and is
released on return or on error. Reads therefore never interleave with a
reload: a caller sees either everything before the reload or everything
after it. Reads are serialized against each other too; reloads are rare and
reads are cheap, so one coarse lock is enough.

Usage:
    >>> async with DirectoryService(config) as service:
    ...     await service.initialize(classrooms_json, images_json)
    ...     names = await service.list_classrooms()
    ...     resolved = await service.get_classroom(names[0])
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional, Union

import structlog

from campusnav.core.config import NavigatorConfig
from campusnav.core.enums import DirectoryState
from campusnav.core.models import ResolvedClassroom
from campusnav.directory.navigation_directory import NavigationDirectory
from campusnav.infrastructure.document_store import DocumentStore, create_document_store


logger = structlog.get_logger()


class DirectoryService:
    """Concurrency-safe facade over one NavigationDirectory.

    Lifecycle:
        1. ``DirectoryService(config)`` - build the store and directory
        2. ``await start()`` - connect the document store
        3. ``await initialize(...)`` - load classrooms and images
        4. ``await list_classrooms()`` / ``await get_classroom(name)``
        5. ``await shutdown()`` - disconnect the document store

    Errors from the directory propagate unchanged; the service adds no
    retries and no translation.

    Attributes:
        _config: campusnav configuration.
        _document_store: The store connection, owned by this service.
        _directory: The directory all calls are forwarded to.
        _lock: Serializes every directory call.
        _started: Whether start() has run without a matching shutdown().
    """

    def __init__(
        self,
        config: Optional[NavigatorConfig] = None,
        *,
        document_store: Optional[DocumentStore] = None,
    ) -> None:
        """Build the service.

        Args:
            config: Configuration. Defaults to NavigatorConfig(), which reads
                CAMPUSNAV_* environment variables.
            document_store: Optional backend. Defaults to the one built by
                ``create_document_store(config.store)``.
        """
        self._config = config or NavigatorConfig()
        self._document_store = document_store or create_document_store(self._config.store)
        self._directory = NavigationDirectory(self._document_store, self._config.store)
        self._lock: asyncio.Lock = asyncio.Lock()
        self._started = False
        self._logger = logger.bind(component="directory_service")

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def config(self) -> NavigatorConfig:
        return self._config

    @property
    def directory(self) -> NavigationDirectory:
        """The wrapped directory. Calling it directly bypasses the lock."""
        return self._directory

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def is_ready(self) -> bool:
        """Whether the directory has been initialized successfully."""
        return self._directory.is_ready

    @property
    def state(self) -> DirectoryState:
        return self._directory.state

    # =========================================================================
    # Lifecycle Management
    # =========================================================================

    async def start(self) -> None:
        """Connect the document store. Idempotent."""
        if self._started:
            self._logger.debug("directory_service_already_started")
            return

        await self._document_store.connect()
        self._started = True
        self._logger.info("directory_service_started")

    async def shutdown(self) -> None:
        """Disconnect the document store. Idempotent."""
        if not self._started:
            self._logger.debug("directory_service_not_started_skipping_shutdown")
            return

        async with self._lock:
            await self._document_store.disconnect()
            self._started = False
        self._logger.info("directory_service_shutdown_complete")

    async def __aenter__(self) -> DirectoryService:
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.shutdown()

    # =========================================================================
    # Directory Operations
    # =========================================================================

    async def initialize(
        self, classroom_payload: Union[str, bytes], image_payload: Union[str, bytes]
    ) -> NavigationDirectory:
        """Load (or reload) both stores. See NavigationDirectory.initialize."""
        async with self._lock:
            return await self._directory.initialize(classroom_payload, image_payload)

    async def list_classrooms(self) -> list[str]:
        """All classroom names. See NavigationDirectory.list_classrooms."""
        async with self._lock:
            return await self._directory.list_classrooms()

    async def get_classroom(self, name: str) -> ResolvedClassroom:
        """One resolved classroom. See NavigationDirectory.get_classroom."""
        async with self._lock:
            return await self._directory.get_classroom(name)

    def __repr__(self) -> str:
        return (
            f"DirectoryService("
            f"started={self._started}, "
            f"state={self._directory.state.value})"
        )

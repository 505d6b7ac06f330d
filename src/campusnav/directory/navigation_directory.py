"""
campusnav.directory.navigation_directory - The Navigation Directory
=====================================================================

The NavigationDirectory owns the image store and the classroom store. It
loads both from the startup payloads and joins them at read time:

    initialize(classrooms_json, images_json)
        parse both ──→ validate both ──→ ping ──→ replace images ──→ replace classrooms

    get_classroom(name)
        classroom store ──→ find name ──→ image store ──→ resolve image_refs in order

State Machine:
    UNINITIALIZED ──initialize()──→ READY ──initialize()──→ READY

    Reads on an UNINITIALIZED directory raise NotInitializedError. A failed
    first initialize leaves the directory UNINITIALIZED; a failed reload
    leaves it READY.

Reload Semantics:
    A reload always replaces the full contents of both stores; nothing from a
    previous load survives. Both payloads are parsed and validated before any
    write, so a bad payload never leaves the stores half-replaced. If the
    classroom write fails after the image write succeeded, the previous
    images are written back. If that restore also fails, the stores are left
    mixed (old classrooms, new images) and the failure is logged at error
    level; the original error is still the one raised.

Image Resolution Policy:
    - ``image_refs`` empty          → empty image list
    - some refs resolve             → resolved payloads only, in ref order
    - refs non-empty, none resolve  → NotFoundError(subject="images")

    Tolerating partial resolution keeps a classroom reachable while the image
    set is stale or only partly provisioned.

Concurrency:
    The directory itself takes no locks. Concurrent callers must go through
    campusnav.service.DirectoryService, which serializes every call.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from campusnav.core.config import StoreConfig
from campusnav.core.enums import DirectoryState, PayloadKind
from campusnav.core.exceptions import (
    ConnectivityError,
    NotFoundError,
    NotInitializedError,
    ParseError,
    PersistenceError,
)
from campusnav.core.models import ClassroomRecord, ImageRecord, ResolvedClassroom
from campusnav.infrastructure.document_store import DocumentStore
from campusnav.infrastructure.record_stores import ClassroomStore, ImageStore


logger = structlog.get_logger()

_CLASSROOM_PAYLOAD = TypeAdapter(list[ClassroomRecord])
_IMAGE_PAYLOAD = TypeAdapter(list[ImageRecord])


# =============================================================================
# Payload Parsing
# =============================================================================
def _describe_errors(exc: ValidationError) -> list[str]:
    """Flatten pydantic errors into "loc: message" strings."""
    described = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        described.append(f"{location}: {error['msg']}" if location else error["msg"])
    return described


def parse_payload(
    payload: Union[str, bytes], adapter: TypeAdapter, kind: PayloadKind
) -> list[BaseModel]:
    """Parse a JSON array payload into records.

    Args:
        payload: JSON text holding an array of record objects.
        adapter: TypeAdapter for ``list[<record model>]``.
        kind: Which payload this is, reported in the error.

    Returns:
        The parsed records, in payload order.

    Raises:
        ParseError: If the text is not JSON, is not an array, or any record
            is missing a field or has a field of the wrong type.
    """
    try:
        return adapter.validate_json(payload)
    except ValidationError as exc:
        errors = _describe_errors(exc)
        raise ParseError(
            message=f"Malformed {kind.value} payload: {errors[0]}",
            payload=kind.value,
            details={"errors": errors},
        ) from exc


# =============================================================================
# NavigationDirectory
# =============================================================================
class NavigationDirectory:
    """Loads classroom and image records and joins them at read time.

    Args:
        document_store: The backend both stores live in. The directory does
            not connect or disconnect it; whoever owns the directory does.
        config: Collection names. Defaults to StoreConfig().

    Example:
        >>> directory = NavigationDirectory(store)
        >>> await directory.initialize(classrooms_json, images_json)
        >>> await directory.list_classrooms()
        ['UK3 104', 'UK3 205']
        >>> resolved = await directory.get_classroom("UK3 104")
        >>> resolved.to_json()
        '{"classroom":"UK3 104","description":"...","images":["...","..."]}'
    """

    def __init__(
        self,
        document_store: DocumentStore,
        config: Optional[StoreConfig] = None,
    ) -> None:
        config = config or StoreConfig()
        self._document_store = document_store
        self._images = ImageStore(document_store, config.image_collection)
        self._classrooms = ClassroomStore(document_store, config.classroom_collection)
        self._state = DirectoryState.UNINITIALIZED
        self._logger = logger.bind(component="navigation_directory")

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def state(self) -> DirectoryState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is DirectoryState.READY

    @property
    def image_store(self) -> ImageStore:
        return self._images

    @property
    def classroom_store(self) -> ClassroomStore:
        return self._classrooms

    # =========================================================================
    # Loading
    # =========================================================================

    async def initialize(
        self, classroom_payload: Union[str, bytes], image_payload: Union[str, bytes]
    ) -> NavigationDirectory:
        """Replace both stores with the records in the given payloads.

        Args:
            classroom_payload: JSON array of ``{"classroom", "description",
                "images"}`` objects.
            image_payload: JSON array of ``{"image_name", "image"}`` objects.

        Returns:
            This directory, now READY.

        Raises:
            ParseError: If either payload is malformed. Nothing is written.
            PersistenceError: If a record set has empty or duplicate names
                (nothing is written), or a store write fails.
            ConnectivityError: If the liveness probe fails. Nothing is written.
        """
        classrooms: Sequence[ClassroomRecord] = parse_payload(
            classroom_payload, _CLASSROOM_PAYLOAD, PayloadKind.CLASSROOMS
        )
        images: Sequence[ImageRecord] = parse_payload(
            image_payload, _IMAGE_PAYLOAD, PayloadKind.IMAGES
        )

        self._images.validate(images)
        self._classrooms.validate(classrooms)

        await self._probe()

        previous_images = await self._images.list_all() if self.is_ready else None

        await self._images.replace_all(images)
        try:
            await self._classrooms.replace_all(classrooms)
        except PersistenceError:
            await self._restore_images(previous_images)
            raise

        self._state = DirectoryState.READY
        self._logger.info(
            "directory_initialized",
            classroom_count=len(classrooms),
            image_count=len(images),
        )
        return self

    async def _probe(self) -> None:
        try:
            await self._document_store.ping()
        except ConnectivityError:
            self._logger.error("document_store_unreachable")
            raise
        except Exception as exc:
            self._logger.error("document_store_unreachable", error=str(exc))
            raise ConnectivityError(
                message=f"Document store liveness probe failed: {exc}",
            ) from exc

    async def _restore_images(self, previous: Optional[list[ImageRecord]]) -> None:
        if previous is None:
            # First load: reads stay rejected, nothing to restore.
            return
        try:
            await self._images.replace_all(previous)
        except PersistenceError as exc:
            self._logger.error(
                "image_store_restore_failed",
                error=exc.message,
                error_code=exc.error_code,
            )
            return
        self._logger.warning("image_store_restored", image_count=len(previous))

    # =========================================================================
    # Reads
    # =========================================================================

    async def list_classrooms(self) -> list[str]:
        """Return every classroom name, in store-iteration order.

        Raises:
            NotInitializedError: Before the first successful initialize.
            PersistenceError: If the classroom store read fails.
        """
        self._ensure_ready()
        records = await self._classrooms.list_all()
        return [record.name for record in records]

    async def get_classroom(self, name: str) -> ResolvedClassroom:
        """Return a classroom with its image references resolved to payloads.

        Args:
            name: Exact, case-sensitive classroom name.

        Returns:
            The ResolvedClassroom, images in ``image_refs`` order.

        Raises:
            NotInitializedError: Before the first successful initialize.
            NotFoundError: subject "classroom" if no classroom has this name;
                subject "images" if it references images and none exist.
            PersistenceError: If a store read fails.
        """
        self._ensure_ready()

        classrooms = await self._classrooms.list_all()
        classroom = next((c for c in classrooms if c.name == name), None)
        if classroom is None:
            raise NotFoundError(subject="classroom", details={"name": name})

        images = await self._images.list_all()
        payload_by_name = {image.name: image.payload for image in images}

        resolved = [payload_by_name[ref] for ref in classroom.image_refs if ref in payload_by_name]
        missing = list(dict.fromkeys(ref for ref in classroom.image_refs if ref not in payload_by_name))

        if classroom.image_refs and not resolved:
            raise NotFoundError(
                subject="images",
                details={"classroom": name, "missing": missing},
            )
        if missing:
            self._logger.warning(
                "classroom_images_partially_resolved",
                classroom=name,
                missing=missing,
                resolved_count=len(resolved),
            )

        return ResolvedClassroom(
            name=classroom.name,
            description=classroom.description,
            images=resolved,
        )

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _ensure_ready(self) -> None:
        if self._state is not DirectoryState.READY:
            raise NotInitializedError()

    def __repr__(self) -> str:
        return (
            f"NavigationDirectory("
            f"state={self._state.value}, "
            f"classrooms={self._classrooms.collection!r}, "
            f"images={self._images.collection!r})"
        )

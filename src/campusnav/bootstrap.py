"""
campusnav.bootstrap - Startup Wiring
======================================

Turns a NavigatorConfig into a started, initialized DirectoryService:

    NavigatorConfig.server ──load_payloads()──→ (classrooms_json, images_json)
                                                  │
    DirectoryService(config) ──start()──→ initialize(classrooms_json, images_json)

Any failure here is fatal: the caller must not serve requests from a
service that did not initialize.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import structlog

from campusnav.core.config import NavigatorConfig, ServerConfig
from campusnav.core.exceptions import ConfigurationError, NavigatorError
from campusnav.infrastructure.document_store import DocumentStore
from campusnav.service import DirectoryService


logger = structlog.get_logger()


def _read_payload_file(path: str, kind: str) -> str:
    file_path = Path(path)
    if not file_path.is_file():
        raise ConfigurationError(
            message=f"{kind.capitalize()} data file not found: {path}",
            error_code="PAYLOAD_FILE_MISSING",
            details={"path": path, "payload": kind},
        )
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(
            message=f"Cannot read {kind} data file {path}: {exc}",
            error_code="PAYLOAD_FILE_UNREADABLE",
            details={"path": path, "payload": kind},
        ) from exc


def load_payloads(server: ServerConfig) -> tuple[str, str]:
    """Resolve the classroom and image payload texts.

    A configured file path wins over the inline payload of the same kind.

    Args:
        server: Server configuration holding paths and inline payloads.

    Returns:
        ``(classroom_payload, image_payload)`` as JSON text.

    Raises:
        ConfigurationError: If a configured file is missing or unreadable.
    """
    if server.classroom_data_path:
        classrooms = _read_payload_file(server.classroom_data_path, "classroom")
    else:
        classrooms = server.classroom_payload

    if server.image_data_path:
        images = _read_payload_file(server.image_data_path, "image")
    else:
        images = server.image_payload

    return classrooms, images


async def start_service(
    config: NavigatorConfig,
    *,
    document_store: Optional[DocumentStore] = None,
) -> DirectoryService:
    """Build, start and initialize a DirectoryService.

    Args:
        config: campusnav configuration.
        document_store: Optional backend override (tests).

    Returns:
        A started service whose directory is READY.

    Raises:
        NavigatorError: Any configuration, parse, connectivity or persistence
            failure. The service is shut down before the error propagates.
    """
    classroom_payload, image_payload = load_payloads(config.server)

    service = DirectoryService(config, document_store=document_store)
    await service.start()
    try:
        await service.initialize(classroom_payload, image_payload)
    except NavigatorError as exc:
        logger.error("startup_failed", **exc.to_dict())
        await service.shutdown()
        raise
    return service

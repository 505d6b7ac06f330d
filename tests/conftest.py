"""
Shared Test Fixtures for campusnav
====================================

Fixtures are organized by layer:

    1. Payload fixtures (classroom and image JSON text)
    2. Configuration fixtures
    3. Infrastructure fixtures (DocumentStore)
    4. Directory and service fixtures

Everything runs on InMemoryDocumentStore; no external services needed.
"""

from __future__ import annotations

import json
import os

import pytest

from campusnav.core.config import NavigatorConfig
from campusnav.directory.navigation_directory import NavigationDirectory
from campusnav.infrastructure.document_store import InMemoryDocumentStore
from campusnav.service import DirectoryService


# =============================================================================
# Payloads
# =============================================================================

@pytest.fixture
def classroom_payload() -> str:
    """Two classrooms sharing the same pair of route images."""
    return json.dumps(
        [
            {
                "classroom": "УК3 104",
                "description": "Крутая аудитория",
                "images": ["UK3-left.png", "UK3-right.png"],
            },
            {
                "classroom": "УК3 205",
                "description": "Менее крутая аудитория",
                "images": ["UK3-left.png", "UK3-right.png"],
            },
        ],
        ensure_ascii=False,
    )


@pytest.fixture
def image_payload() -> str:
    return json.dumps(
        [
            {"image_name": "UK3-left.png", "image": "bibabob"},
            {"image_name": "UK3-right.png", "image": "pipupap"},
        ]
    )


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture
def config(monkeypatch: pytest.MonkeyPatch) -> NavigatorConfig:
    """NavigatorConfig with defaults, isolated from CAMPUSNAV_* variables."""
    for key in list(_campusnav_env()):
        monkeypatch.delenv(key, raising=False)
    return NavigatorConfig()


def _campusnav_env() -> list[str]:
    return [key for key in os.environ if key.upper().startswith("CAMPUSNAV_")]


# =============================================================================
# Infrastructure
# =============================================================================

@pytest.fixture
async def document_store():
    """Connected InMemoryDocumentStore, disconnected after the test."""
    store = InMemoryDocumentStore()
    await store.connect()
    yield store
    await store.disconnect()


# =============================================================================
# Directory and Service
# =============================================================================

@pytest.fixture
def directory(document_store: InMemoryDocumentStore) -> NavigationDirectory:
    """Uninitialized NavigationDirectory over a connected store."""
    return NavigationDirectory(document_store)


@pytest.fixture
async def ready_directory(
    directory: NavigationDirectory, classroom_payload: str, image_payload: str
) -> NavigationDirectory:
    """NavigationDirectory loaded with the standard payloads."""
    return await directory.initialize(classroom_payload, image_payload)


@pytest.fixture
async def service(config: NavigatorConfig):
    """Started DirectoryService (not yet initialized)."""
    async with DirectoryService(config) as svc:
        yield svc

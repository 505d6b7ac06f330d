"""
Tests for campusnav.api.app
=============================

What's Being Tested:
    - GET /classroomlist and GET /classroom?name= bodies on success
    - Every directory failure becomes a 404 with {"error", "reason"}
    - GET /health
    - Lifespan: the app builds, initializes and shuts down its own service

Injected-service tests drive the app through httpx.ASGITransport on the
test's own event loop. Lifespan tests use starlette's TestClient, which
runs startup and shutdown.
"""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from campusnav.api.app import create_app
from campusnav.core.config import NavigatorConfig
from campusnav.core.exceptions import ConfigurationError, ParseError
from campusnav.service import DirectoryService


@pytest.fixture
async def ready_service(
    service: DirectoryService, classroom_payload: str, image_payload: str
) -> DirectoryService:
    await service.initialize(classroom_payload, image_payload)
    return service


def _client(service: DirectoryService | None) -> httpx.AsyncClient:
    app = create_app(service=service)
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


# =============================================================================
# GET /classroomlist
# =============================================================================
class TestClassroomList:

    async def test_returns_names(self, ready_service: DirectoryService) -> None:
        async with _client(ready_service) as client:
            response = await client.get("/classroomlist")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == ["УК3 104", "УК3 205"]

    async def test_empty_directory(self, service: DirectoryService) -> None:
        await service.initialize("[]", "[]")
        async with _client(service) as client:
            response = await client.get("/classroomlist")

        assert response.status_code == 200
        assert response.json() == []

    async def test_not_initialized(self, service: DirectoryService) -> None:
        async with _client(service) as client:
            response = await client.get("/classroomlist")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "classroom list not available"
        assert body["reason"]["error_code"] == "NOT_INITIALIZED"
        assert body["reason"]["error_type"] == "NotInitializedError"


# =============================================================================
# GET /classroom?name=
# =============================================================================
class TestClassroomData:

    async def test_returns_resolved_classroom(self, ready_service: DirectoryService) -> None:
        async with _client(ready_service) as client:
            response = await client.get("/classroom", params={"name": "УК3 104"})

        assert response.status_code == 200
        assert response.json() == {
            "classroom": "УК3 104",
            "description": "Крутая аудитория",
            "images": ["bibabob", "pipupap"],
        }

    async def test_body_is_compact_json(self, service: DirectoryService) -> None:
        await service.initialize(
            '[{"classroom":"R1","description":"d","images":["x"]}]',
            '[{"image_name":"x","image":"enc"}]',
        )
        async with _client(service) as client:
            response = await client.get("/classroom", params={"name": "R1"})

        assert response.text == '{"classroom":"R1","description":"d","images":["enc"]}'

    async def test_unknown_classroom(self, ready_service: DirectoryService) -> None:
        async with _client(ready_service) as client:
            response = await client.get("/classroom", params={"name": "nonexistent"})

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "classroom data not available"
        assert body["reason"]["error_code"] == "NOT_FOUND"
        assert body["reason"]["details"]["subject"] == "classroom"

    async def test_no_resolvable_images(self, service: DirectoryService) -> None:
        await service.initialize(
            json.dumps([{"classroom": "A", "description": "d", "images": ["gone"]}]),
            "[]",
        )
        async with _client(service) as client:
            response = await client.get("/classroom", params={"name": "A"})

        assert response.status_code == 404
        reason = response.json()["reason"]
        assert reason["details"]["subject"] == "images"
        assert reason["details"]["missing"] == ["gone"]

    async def test_missing_name_parameter(self, ready_service: DirectoryService) -> None:
        async with _client(ready_service) as client:
            response = await client.get("/classroom")
        assert response.status_code == 422

    async def test_not_initialized(self, service: DirectoryService) -> None:
        async with _client(service) as client:
            response = await client.get("/classroom", params={"name": "A"})

        assert response.status_code == 404
        assert response.json()["reason"]["error_code"] == "NOT_INITIALIZED"


# =============================================================================
# No Service / Health
# =============================================================================
class TestWithoutService:

    async def test_routes_report_directory_unavailable(self) -> None:
        async with _client(None) as client:
            response = await client.get("/classroomlist")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "directory not available"
        assert body["reason"]["message"] == "Directory service is not running"

    async def test_health_without_service(self) -> None:
        async with _client(None) as client:
            response = await client.get("/health")
        assert response.json() == {"status": "ok", "directory": "uninitialized"}


class TestHealth:

    async def test_reports_ready(self, ready_service: DirectoryService) -> None:
        async with _client(ready_service) as client:
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "directory": "ready"}


# =============================================================================
# Lifespan
# =============================================================================
class TestLifespan:

    def test_startup_loads_inline_payloads(
        self, config: NavigatorConfig, classroom_payload: str, image_payload: str
    ) -> None:
        config.server.classroom_payload = classroom_payload
        config.server.image_payload = image_payload
        app = create_app(config=config)

        with TestClient(app) as client:
            assert client.get("/classroomlist").json() == ["УК3 104", "УК3 205"]
            response = client.get("/classroom", params={"name": "УК3 205"})
            assert response.json()["images"] == ["bibabob", "pipupap"]
            service = app.state.service
            assert service.is_started is True

        assert service.is_started is False
        assert app.state.service is None

    def test_startup_loads_data_files(
        self, config: NavigatorConfig, tmp_path: Path, classroom_payload: str, image_payload: str
    ) -> None:
        classrooms_file = tmp_path / "classrooms.json"
        images_file = tmp_path / "images.json"
        classrooms_file.write_text(classroom_payload, encoding="utf-8")
        images_file.write_text(image_payload, encoding="utf-8")
        config.server.classroom_data_path = str(classrooms_file)
        config.server.image_data_path = str(images_file)

        with TestClient(create_app(config=config)) as client:
            assert client.get("/classroomlist").json() == ["УК3 104", "УК3 205"]

    def test_startup_fails_on_malformed_payload(self, config: NavigatorConfig) -> None:
        config.server.classroom_payload = "not json"
        app = create_app(config=config)

        with pytest.raises(ParseError):
            with TestClient(app):
                pass

    def test_startup_fails_on_missing_data_file(
        self, config: NavigatorConfig, tmp_path: Path
    ) -> None:
        config.server.image_data_path = str(tmp_path / "missing.json")

        with pytest.raises(ConfigurationError):
            with TestClient(create_app(config=config)):
                pass

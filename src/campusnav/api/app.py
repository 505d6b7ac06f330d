"""
campusnav.api.app - HTTP Transport
====================================

A thin FastAPI layer over DirectoryService. No business logic lives here:
routes forward to the service, serialize the result, and map every
NavigatorError to a 404 carrying the error's ``to_dict()`` as the reason.

Endpoints:
    GET /classroomlist          → 200 ["name", ...]               | 404 error body
    GET /classroom?name=<str>   → 200 {"classroom", "description", "images"} | 404 error body
    GET /health                 → 200 {"status": "ok", "directory": "<state>"}

Error Body:
    {"error": "classroom data not available", "reason": {"error_type": ..., "message": ..., ...}}

Service Ownership:
    ``create_app(service)`` uses a service the caller already started and
    initialized, and leaves its lifecycle to the caller. ``create_app()``
    with no service builds one during the FastAPI lifespan from
    ``config`` (startup fails if initialization fails) and shuts it down on
    exit. Either way handlers receive the service through ``get_service``,
    never from a module global.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import structlog
from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse, Response

from campusnav import __version__
from campusnav.bootstrap import start_service
from campusnav.core.config import NavigatorConfig
from campusnav.core.exceptions import NavigatorError, NotInitializedError
from campusnav.core.models import serialize_classroom_list
from campusnav.service import DirectoryService


logger = structlog.get_logger()

router = APIRouter()


# =============================================================================
# Dependencies and Helpers
# =============================================================================
def get_service(request: Request) -> DirectoryService:
    """Return the DirectoryService attached to the running app."""
    service: Optional[DirectoryService] = request.app.state.service
    if service is None:
        raise NotInitializedError(message="Directory service is not running")
    return service


def _error_response(what: str, exc: NavigatorError) -> JSONResponse:
    logger.warning("request_failed", what=what, error_code=exc.error_code, reason=exc.message)
    return JSONResponse(
        status_code=404,
        content={"error": what, "reason": exc.to_dict()},
    )


def _json(body: str) -> Response:
    return Response(content=body, media_type="application/json")


# =============================================================================
# Routes
# =============================================================================
@router.get("/classroomlist")
async def classroom_list(service: DirectoryService = Depends(get_service)) -> Response:
    try:
        names = await service.list_classrooms()
    except NavigatorError as exc:
        return _error_response("classroom list not available", exc)
    return _json(serialize_classroom_list(names))


@router.get("/classroom")
async def classroom_data(
    name: str = Query(...),
    service: DirectoryService = Depends(get_service),
) -> Response:
    """Return one classroom with its route images resolved to payloads."""
    try:
        resolved = await service.get_classroom(name)
    except NavigatorError as exc:
        return _error_response("classroom data not available", exc)
    return _json(resolved.to_json())


@router.get("/health")
async def health(request: Request) -> dict[str, str]:
    service: Optional[DirectoryService] = request.app.state.service
    state = service.state.value if service is not None else "uninitialized"
    return {"status": "ok", "directory": state}


# =============================================================================
# App Factory
# =============================================================================
def create_app(
    service: Optional[DirectoryService] = None,
    config: Optional[NavigatorConfig] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        service: A started, initialized service to serve from. When None,
            one is created from ``config`` at startup.
        config: Configuration for the service created at startup. Defaults
            to NavigatorConfig(). Ignored when ``service`` is given.

    Returns:
        The FastAPI app.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = app.state.service is None
        if owned:
            app.state.service = await start_service(app.state.config)
        try:
            yield
        finally:
            if owned:
                await app.state.service.shutdown()
                app.state.service = None

    app = FastAPI(title="Campus Navigation Directory", version=__version__, lifespan=lifespan)
    app.state.service = service
    app.state.config = config or (service.config if service is not None else NavigatorConfig())
    app.include_router(router)

    @app.exception_handler(NavigatorError)
    async def navigator_error_handler(request: Request, exc: NavigatorError) -> JSONResponse:
        return _error_response("directory not available", exc)

    return app

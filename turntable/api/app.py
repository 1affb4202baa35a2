# turntable/api/app.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
HTTP surface. Each route is a thin binding onto one machine operation; all
legality decisions are made by the machine.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from turntable.api.models import EntryPointModel, ErrorModel, ResourceModel
from turntable.config import Settings, configure_logging
from turntable.core.actions import RESOURCE_PATH
from turntable.core.errors import TurntableError
from turntable.core.hooks import LoggingHook
from turntable.core.state_machine import TurntableMachine
from turntable.runtime.catalog import JsonCatalog

__all__ = ["create_app", "build_machine"]

logger = logging.getLogger(__name__)

_ERROR_RESPONSES = {
    409: {"model": ErrorModel, "description": "Action not allowed in the current state"},
    500: {"model": ErrorModel, "description": "Catalog unavailable"},
}


def build_machine(settings: Settings) -> TurntableMachine:
    """Create a machine backed by the JSON catalog named in ``settings``."""
    catalog = JsonCatalog(settings.catalog_path)
    return TurntableMachine(catalog, hooks=[LoggingHook()], catalog_timeout=settings.catalog_timeout)


def create_app(machine: Optional[TurntableMachine] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application around ``machine``. When no machine is
    given, one is created from ``settings`` (or the environment) and logging
    is configured to the requested level.
    """
    if machine is None:
        settings = settings or Settings.from_env()
        configure_logging(settings.log_level)
        machine = build_machine(settings)

    app = FastAPI(title="Turntable", description="Self-describing turntable resource")
    app.state.machine = machine

    @app.exception_handler(TurntableError)
    async def turntable_error(request: Request, exc: TurntableError) -> JSONResponse:
        if exc.status >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status, content=exc.to_dict())

    @app.get("/", response_model=EntryPointModel)
    def entry_point() -> Dict[str, Any]:
        return {
            "links": {
                "self": {"href": "/", "method": "GET"},
                "resource": {"href": RESOURCE_PATH, "method": "GET"},
            }
        }

    @app.get(RESOURCE_PATH, response_model=ResourceModel)
    def get_resource() -> Dict[str, Any]:
        return machine.snapshot().to_dict()

    @app.post(f"{RESOURCE_PATH}/power/on", response_model=ResourceModel, responses=_ERROR_RESPONSES)
    def power_on() -> Dict[str, Any]:
        return machine.power_on().to_dict()

    @app.post(f"{RESOURCE_PATH}/power/off", response_model=ResourceModel, responses=_ERROR_RESPONSES)
    def power_off() -> Dict[str, Any]:
        return machine.power_off().to_dict()

    @app.put(f"{RESOURCE_PATH}/item", response_model=ResourceModel, responses=_ERROR_RESPONSES)
    def put_item() -> Dict[str, Any]:
        # no body: the item is always picked at random from the catalog
        return machine.load_item().to_dict()

    @app.delete(f"{RESOURCE_PATH}/item", response_model=ResourceModel, responses=_ERROR_RESPONSES)
    def remove_item() -> Dict[str, Any]:
        return machine.remove_item().to_dict()

    @app.post(f"{RESOURCE_PATH}/play", response_model=ResourceModel, responses=_ERROR_RESPONSES)
    def play() -> Dict[str, Any]:
        return machine.play().to_dict()

    @app.post(f"{RESOURCE_PATH}/stop", response_model=ResourceModel, responses=_ERROR_RESPONSES)
    def stop() -> Dict[str, Any]:
        return machine.stop().to_dict()

    return app

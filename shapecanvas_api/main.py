from __future__ import annotations

import os
from typing import Any, Dict

from fastapi import FastAPI
from fastapi.routing import APIRoute

from shapecanvas_core.log import setup_logging

from .adapters import canvas as canvas_adapter
from .routers import canvases as canvases_router

setup_logging(os.getenv("SHAPECANVAS_LOG_LEVEL", "INFO"), os.getenv("SHAPECANVAS_LOG_DIR"))

app = FastAPI(
    title="Shape Canvas API",
    version="0.1.0",
    description="Create, transform and measure 2D canvas shapes",
)

app.include_router(canvases_router.router)


@app.get("/")
async def index() -> Dict[str, Any]:
    calibration = canvas_adapter.get_store().calibration
    return {
        "name": "shapecanvas-api",
        "version": app.version,
        "routes": [
            {"path": route.path, "methods": sorted(route.methods)}
            for route in app.routes
            if isinstance(route, APIRoute)
        ],
        "calibration": calibration.to_json(),
        "canvas_count": len(canvas_adapter.list_canvases()),
    }

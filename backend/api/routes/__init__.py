"""API route modules."""

from fastapi import FastAPI

from . import layout, roadmap, settings, tutor
from ..state import GenerationRunState, init_api_state


def register_routes(app: FastAPI, sio, roadmap_store, generation_state: GenerationRunState):
    """Register all API routers. Call after app, sio, roadmap_store are created."""
    init_api_state(sio, roadmap_store, generation_state)

    app.include_router(roadmap.router, prefix="/api/roadmap", tags=["roadmap"])
    app.include_router(layout.router, prefix="/api/layout", tags=["layout"])
    app.include_router(tutor.router, prefix="/api/tutor", tags=["tutor"])
    app.include_router(settings.router, prefix="/api/settings", tags=["settings"])

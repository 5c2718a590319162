"""
DevPath Backend - FastAPI + Socket.io entry point.
Serves the learning roadmap (tree layout, progress), AI generation and the AI tutor.
"""

import argparse
import asyncio
import sys
from pathlib import Path

import socketio
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from api import GenerationRunState, register_routes
from api.routes.roadmap import roadmap_payload
from roadmap.store import RoadmapStore

# Socket.io
sio = socketio.AsyncServer(async_mode="asgi", cors_allowed_origins="*")
app = FastAPI(title="DevPath Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Disable cache for static files (dev: always fetch latest)
NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


class NoCacheMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        path = request.url.path
        if path == "/" or path.endswith((".html", ".css", ".js")):
            for k, v in NO_CACHE_HEADERS.items():
                response.headers[k] = v
        return response


app.add_middleware(NoCacheMiddleware)

# One generation at a time; a second request while one runs gets 409
generation_state = GenerationRunState()
generation_state.lock = asyncio.Lock()

roadmap_store = RoadmapStore()

register_routes(app, sio, roadmap_store, generation_state)


@app.get("/api/health")
async def health():
    return {"status": "ok"}


# Frontend static files - MUST come after all API routes
FRONTEND_DIR = Path(__file__).parent.parent / "frontend"
if FRONTEND_DIR.exists():
    app.mount("/", StaticFiles(directory=str(FRONTEND_DIR), html=True), name="static")


# Socket.io events
@sio.event
async def connect(sid, environ, auth):
    logger.info("Client connected: {}", sid)
    await sio.emit("roadmap-state", roadmap_payload(roadmap_store.get()), to=sid)


@sio.event
def disconnect(sid):
    logger.info("Client disconnected: {}", sid)


# ASGI app for uvicorn (Socket.io + FastAPI)
asgi_app = socketio.ASGIApp(sio, app)


def configure_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def run() -> None:
    parser = argparse.ArgumentParser(description="DevPath backend server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=3001)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    configure_logging(args.log_level)
    uvicorn.run(asgi_app, host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    run()

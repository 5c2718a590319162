"""Roadmap API - get, generate, stop, reset, node status, selection."""

import asyncio

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from loguru import logger

from db import get_effective_config
from generator import generate_roadmap
from roadmap.progress import progress_summary

from ..schemas import GenerateRequest, NodeStatusRequest, SelectNodeRequest
from .. import state as api_state

router = APIRouter()


def roadmap_payload(roadmap):
    """Roadmap (camelCase, React Flow shaped) + progress summary."""
    return {
        "roadmap": roadmap.model_dump(by_alias=True, exclude_none=True),
        "progress": progress_summary(roadmap),
    }


@router.get("")
async def get_roadmap_route():
    return roadmap_payload(api_state.roadmap_store.get())


@router.post("/reset")
async def reset_roadmap():
    """Restore the bundled sample roadmap."""
    roadmap = await api_state.roadmap_store.reset()
    return {"success": True, **roadmap_payload(roadmap)}


@router.patch("/nodes/{node_id}")
async def update_node_status(node_id: str, body: NodeStatusRequest):
    try:
        node = await api_state.roadmap_store.update_status(node_id, body.status)
    except KeyError:
        return JSONResponse(status_code=404, content={"error": f"Node '{node_id}' not found"})
    except ValueError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    return {
        "success": True,
        "node": node.model_dump(by_alias=True, exclude_none=True),
        "progress": progress_summary(api_state.roadmap_store.get()),
    }


@router.post("/nodes/{node_id}/complete")
async def complete_node(node_id: str):
    return await update_node_status(node_id, NodeStatusRequest(status="completed"))


@router.post("/select")
async def select_node(body: SelectNodeRequest):
    try:
        node = await api_state.roadmap_store.select(body.node_id)
    except KeyError:
        return JSONResponse(status_code=404, content={"error": f"Node '{body.node_id}' not found"})
    return {"success": True, "node": node.model_dump(by_alias=True, exclude_none=True) if node else None}


@router.post("/stop")
async def stop_generation():
    """Stop generation: signal abort, cancel task."""
    state = api_state.generation_state
    if state and state.abort_event:
        state.abort_event.set()
    if state and state.run_task and not state.run_task.done():
        state.run_task.cancel()
    return {"success": True}


async def _generate_inner(body: GenerateRequest):
    """Inner generation logic. Runs in a cancellable task."""
    state = api_state.generation_state
    async with state.lock:
        state.abort_event = asyncio.Event()
        abort_event = state.abort_event

    try:
        api_config = await get_effective_config()
        use_mock = body.use_mock if body.use_mock is not None else api_config.get("useMock", True)

        await api_state.sio.emit("roadmap-start", {"topic": body.topic})

        def on_thinking(chunk):
            if abort_event.is_set():
                return
            asyncio.create_task(api_state.sio.emit("roadmap-thinking", {"chunk": chunk}))

        roadmap = await generate_roadmap(
            body.topic,
            api_config=api_config,
            use_mock=use_mock,
            on_thinking=on_thinking,
            abort_event=abort_event,
            strict=body.strict,
        )
        # Only a successful generation replaces what the user is looking at
        await api_state.roadmap_store.replace(roadmap)
        payload = roadmap_payload(roadmap)
        await api_state.sio.emit("roadmap-complete", payload)
        return {"success": True, **payload}
    finally:
        async with state.lock:
            if state.abort_event is abort_event:
                state.abort_event = None


@router.post("/generate")
async def generate_roadmap_route(body: GenerateRequest):
    state = api_state.generation_state
    if state is None:
        return JSONResponse(status_code=503, content={"error": "API not initialized"})
    if state.run_task and not state.run_task.done():
        return JSONResponse(status_code=409, content={"error": "Roadmap generation already in progress"})
    state.run_task = asyncio.create_task(_generate_inner(body))
    try:
        return await state.run_task
    except asyncio.CancelledError:
        await api_state.sio.emit("roadmap-error", {"error": "Roadmap generation stopped by user"})
        return JSONResponse(status_code=499, content={"error": "Roadmap generation stopped by user"})
    except ValueError as e:
        logger.warning("Roadmap generation rejected: {}", e)
        await api_state.sio.emit("roadmap-error", {"error": str(e)})
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        logger.exception("Roadmap generation failed")
        err_msg = str(e) or "Failed to generate roadmap"
        await api_state.sio.emit("roadmap-error", {"error": err_msg})
        return JSONResponse(status_code=500, content={"error": err_msg})
    finally:
        state.run_task = None

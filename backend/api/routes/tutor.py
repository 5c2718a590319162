"""Tutor API - chat with streamed chunks over Socket.io."""

import asyncio

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from loguru import logger

from db import get_effective_config
from tutor import chat_with_tutor

from ..schemas import TutorChatRequest
from .. import state as api_state

router = APIRouter()


@router.post("/chat")
async def tutor_chat(body: TutorChatRequest):
    store = api_state.roadmap_store
    if body.node_id:
        context_node = store.get().find_node(body.node_id)
        if context_node is None:
            return JSONResponse(status_code=404, content={"error": f"Node '{body.node_id}' not found"})
    else:
        context_node = store.selected_node()

    api_config = await get_effective_config()
    use_mock = body.use_mock if body.use_mock is not None else api_config.get("useMock", True)

    def on_chunk(chunk):
        asyncio.create_task(api_state.sio.emit("tutor-chunk", {"chunk": chunk}))

    try:
        content = await chat_with_tutor(
            body.history,
            body.message,
            context_node=context_node,
            api_config=api_config,
            on_chunk=on_chunk,
            use_mock=use_mock,
        )
    except ValueError as e:
        await api_state.sio.emit("tutor-error", {"error": str(e)})
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        logger.exception("Tutor chat failed")
        await api_state.sio.emit("tutor-error", {"error": str(e)})
        return JSONResponse(status_code=500, content={"error": str(e) or "Failed to chat with tutor"})

    await api_state.sio.emit("tutor-complete", {"content": content})
    return {"content": content, "nodeId": context_node.id if context_node else None}

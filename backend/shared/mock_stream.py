"""
Mock AI streaming simulation.
Replays canned content as timed chunks so generation and tutor work without an API key.
"""

import asyncio
import os
from typing import Any, Callable, Optional

from .utils import chunk_string


def _default_delay_ms() -> int:
    v = os.environ.get("DEVPATH_MOCK_CHUNK_DELAY_MS")
    return int(v) if v is not None else 30


async def simulate_stream(
    text: str,
    on_chunk: Callable[[str], Any],
    chunk_size: int = 8,
    delay_ms: Optional[int] = None,
    abort_event: Optional[asyncio.Event] = None,
) -> None:
    """Feed text to on_chunk in fixed-size pieces."""
    if not text or not isinstance(text, str):
        return
    if not callable(on_chunk):
        return
    delay = _default_delay_ms() if delay_ms is None else delay_ms

    for chunk in chunk_string(text, chunk_size):
        if abort_event and abort_event.is_set():
            raise asyncio.CancelledError("Aborted")
        r = on_chunk(chunk)
        if asyncio.iscoroutine(r):
            await r
        if delay > 0:
            await asyncio.sleep(delay / 1000.0)


async def mock_chat_completion(
    content: str,
    on_chunk: Optional[Callable[[str], Any]] = None,
    chunk_size: int = 8,
    delay_ms: Optional[int] = None,
    abort_event: Optional[asyncio.Event] = None,
    stream: bool = True,
) -> str:
    """Run mock chat completion: optionally stream content, then return it whole."""
    if abort_event and abort_event.is_set():
        raise asyncio.CancelledError("Aborted")
    if stream and callable(on_chunk):
        await simulate_stream(content or "", on_chunk, chunk_size, delay_ms, abort_event)
    return content or ""

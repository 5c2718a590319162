"""
LLM client for roadmap generation and the tutor. Uses Google GenAI SDK (Gemini API only).
"""

import asyncio
import os
from typing import Any, Callable, List, Optional

from google import genai
from google.genai import errors, types
from loguru import logger
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

DEFAULT_MODEL = os.environ.get("DEVPATH_DEFAULT_MODEL") or "gemini-2.5-flash"


def resolve_api_key(api_config: Optional[dict]) -> str:
    """apiKey from config, else GEMINI_API_KEY / API_KEY from the environment."""
    cfg = api_config or {}
    return (
        cfg.get("apiKey")
        or cfg.get("api_key")
        or os.environ.get("GEMINI_API_KEY")
        or os.environ.get("API_KEY")
        or ""
    )


def _messages_to_gemini_contents(messages: list[dict]) -> tuple[List[Any], Optional[str]]:
    """
    Convert OpenAI-style messages to Google contents. Returns (contents, system_instruction).
    Roles: system -> system_instruction, user -> user, assistant/model -> model.
    """
    contents: List[Any] = []
    system_instruction: Optional[str] = None

    for m in messages:
        role = (m.get("role") or "").lower()
        text = m.get("content") or ""

        if role == "system":
            system_instruction = text
            continue
        if not text:
            continue
        if role == "user":
            contents.append(types.Content(role="user", parts=[types.Part.from_text(text=text)]))
        elif role in ("assistant", "model"):
            contents.append(types.Content(role="model", parts=[types.Part.from_text(text=text)]))

    return contents, system_instruction


def _build_config(
    system_instruction: Optional[str],
    temperature: Optional[float],
    response_format: Optional[dict],
    response_schema: Optional[dict],
) -> Optional[types.GenerateContentConfig]:
    config_kw: dict = {}
    if system_instruction:
        config_kw["system_instruction"] = system_instruction
    if temperature is not None:
        config_kw["temperature"] = temperature
    if response_format and response_format.get("type") == "json_object":
        config_kw["response_mime_type"] = "application/json"
    if response_schema:
        config_kw["response_mime_type"] = "application/json"
        config_kw["response_json_schema"] = response_schema
    return types.GenerateContentConfig(**config_kw) if config_kw else None


_retry_server_errors = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type(errors.ServerError),
    reraise=True,
)


@_retry_server_errors
async def _generate_once(aclient, model: str, contents, config) -> str:
    resp = await aclient.models.generate_content(model=model, contents=contents, config=config)
    return resp.text or ""


@_retry_server_errors
async def _open_stream(aclient, model: str, contents, config):
    """Start a stream and pull its first chunk. Nothing has reached on_chunk yet, so retrying is safe."""
    iterator = (await aclient.models.generate_content_stream(
        model=model,
        contents=contents,
        config=config,
    )).__aiter__()
    try:
        first = await iterator.__anext__()
    except StopAsyncIteration:
        return None, None
    return first, iterator


async def _stream(aclient, model: str, contents, config, on_chunk, abort_event) -> str:
    full_content = []

    async def _emit(chunk):
        if abort_event and abort_event.is_set():
            raise asyncio.CancelledError("Aborted")
        text = chunk.text or ""
        if text and on_chunk:
            r = on_chunk(text)
            if asyncio.iscoroutine(r):
                await r
        full_content.append(text)

    first, iterator = await _open_stream(aclient, model, contents, config)
    if iterator is None:
        return ""
    await _emit(first)
    async for chunk in iterator:
        await _emit(chunk)
    return "".join(full_content)


async def chat_completion(
    messages: list[dict],
    api_config: dict,
    on_chunk: Optional[Callable[[str], Any]] = None,
    abort_event: Optional[Any] = None,
    stream: bool = True,
    temperature: Optional[float] = None,
    response_format: Optional[dict] = None,
    response_schema: Optional[dict] = None,
) -> str:
    """
    Call Gemini generate_content. Streams text chunks to on_chunk when stream=True
    and returns the full text. Server errors are retried until the first chunk arrives.
    """
    cfg = dict(api_config or {})
    model = cfg.get("model") or DEFAULT_MODEL
    temp = temperature if temperature is not None else cfg.get("temperature")
    api_key = resolve_api_key(cfg)
    if not api_key:
        raise ValueError("Gemini API key is not configured.")

    client = genai.Client(api_key=api_key)
    contents, system_instruction = _messages_to_gemini_contents(messages)
    config = _build_config(system_instruction, temp, response_format, response_schema)
    logger.debug("Gemini call model={} stream={} messages={}", model, stream, len(contents))

    try:
        aclient = client.aio
        try:
            if abort_event and abort_event.is_set():
                raise asyncio.CancelledError("Aborted")
            if stream:
                text = await _stream(aclient, model, contents, config, on_chunk, abort_event)
            else:
                text = await _generate_once(aclient, model, contents, config)
        finally:
            await aclient.aclose()
    except Exception as e:
        raise RuntimeError(f"Gemini API error: {e}") from e

    if abort_event and abort_event.is_set():
        raise asyncio.CancelledError("Aborted")
    return text

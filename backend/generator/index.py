"""
Generator module - topic -> Gemini roadmap JSON -> laid-out RoadmapData.
Uses real LLM by default; canned mock response when use_mock=True.
"""

import asyncio
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import orjson
from loguru import logger
from pydantic import ValidationError

from layout import compute_roadmap_layout
from roadmap.models import GeneratedRoadmapResponse, RoadmapData
from shared.llm_client import chat_completion as real_chat_completion
from shared.mock_stream import mock_chat_completion
from shared.utils import parse_json_response

GENERATOR_DIR = Path(__file__).parent
MOCK_AI_DIR = GENERATOR_DIR / "mock-ai"

# Mirrors GeneratedRoadmapResponse; sent to Gemini as the structured output schema
ROADMAP_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "nodes": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "id": {"type": "string"},
                    "label": {"type": "string"},
                    "description": {"type": "string"},
                    "parentId": {"type": ["string", "null"]},
                    "resources": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "title": {"type": "string"},
                                "url": {"type": "string"},
                                "type": {"type": "string", "enum": ["article", "video", "documentation"]},
                            },
                        },
                    },
                },
                "required": ["id", "label", "description", "resources"],
            },
        },
    },
}

# Caches
_prompt_cache: Dict[str, str] = {}
_mock_cache: Dict[str, Dict] = {}


def _get_prompt_cached(filename: str) -> str:
    if filename not in _prompt_cache:
        path = GENERATOR_DIR / "prompts" / filename
        _prompt_cache[filename] = path.read_text(encoding="utf-8").strip()
    return _prompt_cache[filename]


def _get_mock_cached(response_type: str) -> Dict:
    if response_type not in _mock_cache:
        path = MOCK_AI_DIR / f"{response_type}.json"
        try:
            _mock_cache[response_type] = orjson.loads(path.read_bytes())
        except (FileNotFoundError, orjson.JSONDecodeError):
            _mock_cache[response_type] = {}
    return _mock_cache[response_type]


def _load_mock_response(topic: str) -> Optional[Dict]:
    data = _get_mock_cached("roadmap")
    entry = data.get(topic.strip().lower()) or data.get("_default")
    if not entry:
        return None
    content = entry.get("content")
    if isinstance(content, str):
        content_str = content
    else:
        content_str = orjson.dumps(content).decode("utf-8")
    return {"content": content_str, "reasoning": entry.get("reasoning", "")}


def build_roadmap_prompt(topic: str) -> str:
    return _get_prompt_cached("roadmap.txt").format(topic=topic)


def parse_generated_roadmap(text: str) -> GeneratedRoadmapResponse:
    """Parse and validate the producer's JSON. Raises ValueError on empty or malformed output."""
    if not text or not text.strip():
        raise ValueError("No response from AI")
    data = parse_json_response(text)
    if isinstance(data, list):
        data = {"nodes": data}
    if not isinstance(data, dict):
        raise ValueError("Failed to parse roadmap: expected a JSON object with 'nodes'")
    try:
        return GeneratedRoadmapResponse.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Failed to parse roadmap: {e.error_count()} invalid field(s)") from e


async def _request_roadmap_text(
    topic: str,
    api_config: Optional[dict],
    use_mock: bool,
    on_thinking: Optional[Callable[[str], Any]],
    abort_event: Optional[asyncio.Event],
) -> str:
    if use_mock:
        mock = _load_mock_response(topic)
        if not mock:
            raise ValueError("No mock roadmap available")
        await mock_chat_completion(mock["reasoning"], on_thinking, abort_event=abort_event, stream=bool(on_thinking))
        return mock["content"]

    messages = [{"role": "user", "content": build_roadmap_prompt(topic)}]
    return await real_chat_completion(
        messages,
        api_config or {},
        on_chunk=on_thinking,
        abort_event=abort_event,
        stream=on_thinking is not None,
        response_schema=ROADMAP_RESPONSE_SCHEMA,
    )


async def generate_roadmap(
    topic: str,
    api_config: Optional[dict] = None,
    use_mock: bool = False,
    on_thinking: Optional[Callable[[str], Any]] = None,
    abort_event: Optional[asyncio.Event] = None,
    strict: bool = False,
) -> RoadmapData:
    """
    Generate a fresh roadmap for topic. The result is a full replacement:
    every node starts pending and is flagged isAI.
    """
    if not topic or not isinstance(topic, str) or not topic.strip():
        raise ValueError("Topic is required for roadmap generation.")
    topic = topic.strip()

    logger.info("Generating roadmap for '{}' (mock={})", topic, use_mock)
    text = await _request_roadmap_text(topic, api_config, use_mock, on_thinking, abort_event)
    if abort_event and abort_event.is_set():
        raise asyncio.CancelledError("Aborted")

    response = parse_generated_roadmap(text)
    result = compute_roadmap_layout(response.nodes, strict=strict)
    if not result.diagnostics.ok:
        logger.warning("Generated roadmap for '{}' is not a clean tree: {}", topic, result.diagnostics.summary())

    for node in result.nodes:
        node.data.is_ai = True

    roadmap = RoadmapData(
        id=str(int(time.time() * 1000)),
        title=response.title.strip() or topic,
        nodes=result.nodes,
        edges=result.edges,
    )
    logger.info("Generated roadmap {} with {} nodes, {} edges", roadmap.id, len(roadmap.nodes), len(roadmap.edges))
    return roadmap

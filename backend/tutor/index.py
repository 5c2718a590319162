"""
Tutor module - chat with an AI tutor about the selected roadmap topic.
Only reads a node's label/description; never touches layout or progress state.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from loguru import logger

from roadmap.models import ChatMessage, LayoutNode
from shared.llm_client import chat_completion as real_chat_completion
from shared.mock_stream import mock_chat_completion

TUTOR_DIR = Path(__file__).parent
TUTOR_TEMPERATURE = 0.7

_prompt_cache: Dict[str, str] = {}


def _get_prompt_cached(filename: str) -> str:
    if filename not in _prompt_cache:
        path = TUTOR_DIR / "prompts" / filename
        _prompt_cache[filename] = path.read_text(encoding="utf-8").strip()
    return _prompt_cache[filename]


def build_system_instruction(context_node: Optional[LayoutNode] = None) -> str:
    system = _get_prompt_cached("system.txt")
    if context_node is not None:
        system += (
            f'\nThe user is currently viewing the node: "{context_node.data.label}". '
            f'Description: "{context_node.data.description}". '
            "Focus answers on this context if the query is ambiguous."
        )
    return system


def build_messages(
    history: Sequence[ChatMessage],
    message: str,
    context_node: Optional[LayoutNode] = None,
) -> List[dict]:
    """System instruction, prior transcript, then the new user message."""
    messages = [{"role": "system", "content": build_system_instruction(context_node)}]
    for h in history or []:
        role = "assistant" if h.role == "model" else "user"
        messages.append({"role": role, "content": h.content})
    messages.append({"role": "user", "content": message})
    return messages


def _mock_answer(message: str, context_node: Optional[LayoutNode]) -> str:
    topic = context_node.data.label if context_node is not None else "your roadmap"
    return (
        f"(mock tutor) Good question about {topic}. "
        f"You asked: \"{message.strip()}\". Start with the official docs, "
        "build a tiny example, then explain it back in your own words."
    )


async def chat_with_tutor(
    history: Sequence[ChatMessage],
    message: str,
    context_node: Optional[LayoutNode] = None,
    api_config: Optional[dict] = None,
    on_chunk: Optional[Callable[[str], Any]] = None,
    use_mock: bool = False,
    abort_event: Optional[Any] = None,
) -> str:
    """Stream the tutor's reply to on_chunk and return the full text."""
    if not message or not isinstance(message, str) or not message.strip():
        raise ValueError("Message is required.")

    if use_mock:
        return await mock_chat_completion(
            _mock_answer(message, context_node), on_chunk, abort_event=abort_event, stream=on_chunk is not None,
        )

    cfg = dict(api_config or {})
    temperature = cfg.get("tutorTemperature", TUTOR_TEMPERATURE)
    logger.debug("Tutor chat: history={} context={}", len(history or []), context_node.id if context_node else None)
    return await real_chat_completion(
        build_messages(history, message, context_node),
        cfg,
        on_chunk=on_chunk,
        abort_event=abort_event,
        stream=True,
        temperature=temperature,
    )

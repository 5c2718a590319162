"""
Database Module
File-based settings storage: db/settings.json holds the user's AI configuration.
Roadmaps themselves are kept in memory only (see roadmap.store).
Uses orjson for faster JSON parsing.
"""

import os
from pathlib import Path

import aiofiles
import orjson
from loguru import logger

DB_DIR = Path(os.environ.get("DEVPATH_DB_DIR") or Path(__file__).parent)
SETTINGS_FILE = "settings.json"

AI_MODES = ("mock", "llm")
TEMPERATURE_KEYS = ("temperature", "tutorTemperature")


async def get_settings() -> dict:
    """Get full settings from db/settings.json. Missing or corrupt file reads as {}."""
    file_path = DB_DIR / SETTINGS_FILE
    try:
        async with aiofiles.open(file_path, "rb") as f:
            data = await f.read()
            settings = orjson.loads(data)
    except FileNotFoundError:
        return {}
    except orjson.JSONDecodeError as e:
        logger.warning("Invalid JSON in {}: {}", file_path, e)
        return {}
    return settings if isinstance(settings, dict) else {}


async def save_settings(settings: dict) -> dict:
    """Save settings to db/settings.json. Atomic write to avoid corruption."""
    DB_DIR.mkdir(parents=True, exist_ok=True)
    file_path = DB_DIR / SETTINGS_FILE
    tmp_path = file_path.with_suffix(file_path.suffix + ".tmp")
    content = orjson.dumps(settings or {}, option=orjson.OPT_INDENT_2).decode("utf-8")
    async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
        await f.write(content)
    tmp_path.replace(file_path)
    return {"success": True}


def _resolve_config(raw: dict) -> dict:
    """Resolve raw settings to effective config for generator/tutor. aiMode: mock|llm."""
    raw = raw or {}
    ai_mode = raw.get("aiMode") or "mock"
    if ai_mode not in AI_MODES:
        logger.warning("Unknown aiMode '{}', falling back to mock", ai_mode)
        ai_mode = "mock"

    cfg: dict = {"aiMode": ai_mode, "useMock": ai_mode == "mock"}
    api_key = raw.get("apiKey") or raw.get("api_key")
    if api_key:
        cfg["apiKey"] = api_key
    if raw.get("model"):
        cfg["model"] = raw["model"]
    for key in TEMPERATURE_KEYS:
        v = raw.get(key)
        if v is None:
            continue
        try:
            cfg[key] = float(v)
        except (TypeError, ValueError):
            logger.warning("Ignoring non-numeric {} {!r} in settings", key, v)
    return cfg


async def get_effective_config() -> dict:
    """Get effective config for LLM calls (settings.json resolved; env key fallback is in llm_client)."""
    raw = await get_settings()
    return _resolve_config(raw)

"""Settings API routes. Backend maintains settings.json; frontend fetches and overwrites on save."""

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from db import AI_MODES, TEMPERATURE_KEYS, get_effective_config, get_settings, save_settings

router = APIRouter()


def _mask(settings: dict) -> dict:
    out = dict(settings or {})
    key = out.get("apiKey")
    if key:
        out["apiKey"] = f"...{key[-4:]}" if len(key) > 4 else "****"
    return out


@router.get("")
async def get_settings_route():
    """Return settings.json contents (API key masked) and the resolved mode."""
    settings = await get_settings()
    effective = await get_effective_config()
    return {"settings": _mask(settings), "aiMode": effective["aiMode"], "useMock": effective["useMock"]}


@router.post("")
async def save_settings_route(body: dict = Body(...)):
    """Overwrite settings.json with request body."""
    ai_mode = body.get("aiMode")
    if ai_mode is not None and ai_mode not in AI_MODES:
        return JSONResponse(status_code=400, content={"error": f"aiMode must be one of: {', '.join(AI_MODES)}"})
    for key in TEMPERATURE_KEYS:
        v = body.get(key)
        if v is None:
            continue
        try:
            float(v)
        except (TypeError, ValueError):
            return JSONResponse(status_code=400, content={"error": f"{key} must be a number"})
    await save_settings(body)
    return {"success": True}

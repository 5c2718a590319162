"""Layout API - run the tree layout engine on a raw node list."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from layout import LayoutValidationError, compute_roadmap_layout

from ..schemas import LayoutRequest

router = APIRouter()


@router.post("")
async def layout_route(body: LayoutRequest):
    try:
        result = compute_roadmap_layout(body.nodes, strict=body.strict)
    except LayoutValidationError as e:
        return JSONResponse(status_code=422, content={
            "error": str(e),
            "diagnostics": e.diagnostics.model_dump(by_alias=True),
        })
    return {
        "nodes": [n.model_dump(by_alias=True, exclude_none=True) for n in result.nodes],
        "edges": [e.model_dump(by_alias=True) for e in result.edges],
        "diagnostics": result.diagnostics.model_dump(by_alias=True),
    }

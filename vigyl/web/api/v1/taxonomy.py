"""Industry taxonomy endpoints."""

from typing import List

from fastapi import APIRouter, HTTPException, Query, Request

from vigyl.web.api.v1.models import UntappedRequest, VerticalListResponse

router = APIRouter()


def _index(request: Request):
    return request.app.state.workspace.index


@router.get("/taxonomy/sectors", response_model=List[dict])
async def list_sectors(request: Request):
    """Sector summary with vertical and company counts."""
    return _index(request).sector_summary()


@router.get("/taxonomy/search", response_model=VerticalListResponse)
async def search_verticals(request: Request, q: str = Query(default="")):
    """Keyword search across verticals."""
    results = [v.to_dict() for v in _index(request).search(q)]
    return VerticalListResponse(count=len(results), results=results)


@router.post("/taxonomy/untapped", response_model=VerticalListResponse)
async def untapped_verticals(body: UntappedRequest, request: Request):
    """Verticals not covered by the tracked industry names."""
    results = [v.to_dict() for v in _index(request).untapped(body.tracked)]
    return VerticalListResponse(count=len(results), results=results)


@router.get("/taxonomy/verticals/{vertical_id}")
async def get_vertical(vertical_id: str, request: Request):
    """Single vertical by id."""
    vertical = _index(request).get(vertical_id)
    if vertical is None:
        raise HTTPException(status_code=404, detail=f"Unknown vertical: {vertical_id}")
    return vertical.to_dict()

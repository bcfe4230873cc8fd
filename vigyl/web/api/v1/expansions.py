"""Prospect expansion endpoints."""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Request

from vigyl.expansion import ExpansionError
from vigyl.models import ExpandRequest
from vigyl.web.api.v1.models import ExpansionRequestModel

logger = logging.getLogger(__name__)

router = APIRouter()


def _build_request(body: ExpansionRequestModel, index) -> ExpandRequest:
    """Resolve the vertical from the catalog; explicit fields win."""
    vertical = index.get(body.vertical_id)

    if vertical is None and not body.vertical_name:
        raise HTTPException(status_code=404, detail=f"Unknown vertical: {body.vertical_id}")

    if vertical is not None:
        request = ExpandRequest.for_vertical(vertical, body.scope)
    else:
        request = ExpandRequest(
            vertical_id=body.vertical_id,
            vertical_name=body.vertical_name,
            sector_name=body.sector_name or "",
            scope=body.scope,
        )

    if body.vertical_name:
        request.vertical_name = body.vertical_name
    if body.sector_name:
        request.sector_name = body.sector_name
    if body.example_entities is not None:
        request.example_entities = list(body.example_entities)
    return request


@router.post("/expansions")
async def create_expansion(body: ExpansionRequestModel, request: Request):
    """
    Generate more prospects for one vertical.

    Runs to completion before responding. A second request while one is in
    flight is rejected with 409.
    """
    workspace = request.app.state.workspace
    orchestrator = workspace.orchestrator

    if orchestrator.is_expanding:
        raise HTTPException(
            status_code=409,
            detail=f"Expansion of '{orchestrator.expanding}' already in progress",
        )

    expand_request = _build_request(body, workspace.index)

    try:
        new_records = await orchestrator.expand_vertical(expand_request)
    except ExpansionError as e:
        raise HTTPException(status_code=502, detail=str(e))

    classified = workspace.classifier.classify_all(new_records, orchestrator.locale)
    return {
        "vertical_id": expand_request.vertical_id,
        "scope": expand_request.scope,
        "added": len(classified),
        "results": [c.to_dict() for c in classified],
        "counts": orchestrator.scope_counts(),
    }


@router.get("/expansions/explored", response_model=List[dict])
async def explored_verticals(request: Request):
    """Explored-vertical ledger, most recent first."""
    return request.app.state.workspace.orchestrator.ledger.to_list()


@router.get("/expansions/status")
async def expansion_status(request: Request):
    """In-flight marker and the last failure message."""
    orchestrator = request.app.state.workspace.orchestrator
    return {
        "expanding": orchestrator.expanding,
        "scope": orchestrator.expanding_scope,
        "last_error": orchestrator.last_error,
    }

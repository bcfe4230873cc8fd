"""Prospect classification endpoints."""

from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Query, Request

from vigyl.models import ProspectRecord
from vigyl.scope import filter_by_scope, scope_counts
from vigyl.web.api.v1.models import ClassifyRequest, LocaleModel, ProspectListResponse

router = APIRouter()

ScopeFilter = Literal["local", "national", "international", "all"]


@router.post("/prospects/classify", response_model=ProspectListResponse)
async def classify(body: ClassifyRequest, request: Request):
    """Classify an arbitrary record set for the given locale. Nothing is stored."""
    classifier = request.app.state.workspace.classifier
    try:
        records = [ProspectRecord.from_dict(p) for p in body.prospects]
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Invalid prospect: {e}")
    classified = classifier.classify_all(records, body.locale.to_locale())

    return ProspectListResponse(
        count=len(classified),
        counts=scope_counts(classified),
        results=[c.to_dict() for c in classified],
    )


@router.get("/prospects", response_model=ProspectListResponse)
async def list_prospects(
    request: Request,
    scope: Optional[ScopeFilter] = Query(default=None),
):
    """Merged prospect set, classified against the workspace locale."""
    orchestrator = request.app.state.workspace.orchestrator
    classified = orchestrator.all_records()
    counts = scope_counts(classified)
    results = filter_by_scope(classified, scope)

    return ProspectListResponse(
        count=len(results),
        counts=counts,
        results=[c.to_dict() for c in results],
    )


@router.get("/locale", response_model=LocaleModel)
async def get_locale(request: Request):
    """Current workspace locale."""
    return LocaleModel(**request.app.state.workspace.orchestrator.locale.to_dict())


@router.put("/locale", response_model=LocaleModel)
async def set_locale(body: LocaleModel, request: Request):
    """Change viewer location or radius; later reads are reclassified."""
    request.app.state.workspace.orchestrator.set_locale(body.to_locale())
    return body


@router.delete("/prospects/{record_id}")
async def remove_prospect(record_id: str, request: Request):
    """Remove an expanded prospect. Core prospects cannot be removed."""
    orchestrator = request.app.state.workspace.orchestrator
    if not orchestrator.remove_expanded(record_id):
        raise HTTPException(status_code=404, detail=f"No expanded prospect with id {record_id}")
    return {"removed": record_id}

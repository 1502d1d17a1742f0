"""Fleet summary and availability API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from shared.models import FleetSummary, SummaryCounters, TitleSummary
from shared.observability import get_logger

from ..schemas.fleet import AvailabilityResponse, ClusterStatusResponse, DismissRequest
from ..services.poller import FleetPoller

logger = get_logger(__name__)

router = APIRouter()


def _poller(request: Request) -> FleetPoller:
    return request.app.state.poller


@router.get(
    "/summary",
    response_model=FleetSummary,
    summary="Get fleet summary",
    description="Total, per-cluster, per-build and per-title projections.",
)
async def get_summary(request: Request):
    return _poller(request).summary


@router.get("/summary/total", response_model=SummaryCounters)
async def get_total(request: Request):
    return _poller(request).summary.total


@router.get("/summary/clusters", response_model=dict[str, SummaryCounters])
async def get_per_cluster(request: Request):
    return _poller(request).summary.per_cluster


@router.get("/summary/clusters/{name}", response_model=SummaryCounters)
async def get_cluster_summary(request: Request, name: str):
    summary = _poller(request).summary.per_cluster.get(name)
    if summary is None:
        raise HTTPException(status_code=404, detail="Cluster not found")
    return summary


@router.get("/summary/builds", response_model=dict[str, SummaryCounters])
async def get_per_build(request: Request):
    return _poller(request).summary.per_build


@router.get("/summary/builds/{name}", response_model=SummaryCounters)
async def get_build_summary(request: Request, name: str):
    summary = _poller(request).summary.per_build.get(name)
    if summary is None:
        raise HTTPException(status_code=404, detail="Build not found")
    return summary


@router.get("/summary/titles", response_model=dict[str, TitleSummary])
async def get_per_title(request: Request):
    return _poller(request).summary.per_title


@router.get("/summary/titles/{title_id}", response_model=TitleSummary)
async def get_title_summary(request: Request, title_id: str):
    summary = _poller(request).summary.per_title.get(title_id)
    if summary is None:
        raise HTTPException(status_code=404, detail="Title not found")
    return summary


@router.get(
    "/clusters",
    response_model=list[ClusterStatusResponse],
    summary="List configured clusters",
)
async def list_clusters(request: Request):
    """Configured clusters with their most recent poll outcome."""
    return [
        ClusterStatusResponse(
            name=state.cluster,
            api=state.api_url,
            url=state.url,
            build_count=state.build_count,
            last_status=state.last_status,
            last_polled_at=state.last_polled_at,
        )
        for state in _poller(request).cluster_states()
    ]


@router.get("/availability", response_model=AvailabilityResponse)
async def list_availability(request: Request):
    """Messages for clusters that could not be reached, sorted."""
    messages = list(_poller(request).failures())
    return AvailabilityResponse(messages=messages, total=len(messages))


@router.delete("/availability", status_code=204)
async def dismiss_availability(request: Request, payload: DismissRequest):
    """Dismiss a failure message. Unknown messages are accepted."""
    removed = _poller(request).dismiss(payload.message)
    logger.debug("Dismiss requested", message=payload.message, removed=removed)
    return Response(status_code=204)


@router.post(
    "/refresh",
    response_model=FleetSummary,
    summary="Poll all clusters now",
)
async def refresh(request: Request):
    """Poll every cluster once and return the updated summary."""
    return await _poller(request).poll_once()

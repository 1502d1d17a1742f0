"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

router = APIRouter()


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "fleet-monitor"}


@router.get("/ready")
async def readiness_check(request: Request) -> dict:
    """Readiness check - every configured cluster has been polled once."""
    poller = request.app.state.poller

    if not poller.is_ready:
        raise HTTPException(
            status_code=503,
            detail={"status": "not_ready", "clusters": len(poller.clusters)},
        )

    return {"status": "ready", "clusters": len(poller.clusters)}
